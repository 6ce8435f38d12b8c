"""Modulo engine — inicializacao singleton da engine de traducao."""

import threading
from typing import Optional

from transfill import config
from transfill.config import log
from transfill.engine.base import TranslationProvider
from transfill.engine.engine import TranslationEngine

_engine: Optional[TranslationEngine] = None
_engine_lock = threading.Lock()

PROVIDERS = ('google_free', 'mymemory', 'deepl_free')


def build_provider(name: Optional[str] = None) -> TranslationProvider:
    """Instancia o provider configurado (TRANSFILL_PROVIDER)."""
    name = name or config.TRANSLATE_PROVIDER

    if name == 'google_free':
        from transfill.engine.providers.google_free import GoogleFreeProvider
        return GoogleFreeProvider(timeout=config.PROVIDER_TIMEOUT)

    if name == 'mymemory':
        from transfill.engine.providers.mymemory import MyMemoryProvider
        return MyMemoryProvider(email=config.MYMEMORY_EMAIL, timeout=config.PROVIDER_TIMEOUT)

    if name == 'deepl_free':
        from transfill.engine.providers.deepl_free import DeepLFreeProvider
        return DeepLFreeProvider(api_key=config.DEEPL_API_KEY, timeout=config.PROVIDER_TIMEOUT)

    raise ValueError(f'Provider desconhecido: {name} (opcoes: {", ".join(PROVIDERS)})')


def get_engine(provider: Optional[str] = None) -> TranslationEngine:
    """Retorna singleton da engine de traducao (thread-safe, double-checked locking)."""
    global _engine
    if _engine is not None and (provider is None or _engine.provider.name == provider):
        return _engine

    with _engine_lock:
        if _engine is not None and (provider is None or _engine.provider.name == provider):
            return _engine

        instance = build_provider(provider)
        if not instance.is_available():
            log.warning(f'[ENGINE] Provider {instance.name} indisponivel (verifique a configuracao)')

        _engine = TranslationEngine(instance, encoding=config.PLACEHOLDER_ENCODING)
        return _engine
