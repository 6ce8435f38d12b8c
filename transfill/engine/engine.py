"""TranslationEngine — traducao por segmento com protecao de placeholders."""

import re
from dataclasses import dataclass
from typing import Dict, Optional

from transfill.config import log
from transfill.engine.base import ProviderError, TranslationProvider
from transfill.engine.placeholders import PlaceholderCheck, check_placeholders, protect, restore

PLURAL_SEPARATOR = '|'

_EDGES_RE = re.compile(r'^(\s*)(.*?)(\s*)$', re.DOTALL)


@dataclass
class TranslationOutcome:
    text: str
    check: PlaceholderCheck

    @property
    def placeholders_ok(self) -> bool:
        return self.check.ok


class TranslationEngine:
    """
    Traduz strings com variantes de pluralizacao separadas por '|'.

    Cada variante vai ao provider isoladamente (o tradutor externo mistura
    variantes traduzidas em bloco). Dentro de cada variante os placeholders
    sao trocados por tokens opacos antes da chamada e restaurados depois.
    """

    def __init__(self, provider: TranslationProvider,
                 encoding: Optional[Dict[str, str]] = None):
        self.provider = provider
        self.encoding = encoding

        log.info(f'[ENGINE] Inicializado com provider: {provider.name}')

    def translate(self, language: str, source_language: str, text: str) -> str:
        return self.translate_checked(language, source_language, text).text

    def translate_checked(self, language: str, source_language: str,
                          text: str) -> TranslationOutcome:
        """
        Traduz `text` de `source_language` para `language`.
        Divergencia na contagem de placeholders e logada, nunca levantada.
        """
        segments = text.split(PLURAL_SEPARATOR)
        translated = [
            self._translate_segment(language, source_language, segment)
            for segment in segments
        ]
        result = PLURAL_SEPARATOR.join(translated)

        check = check_placeholders(text, result)
        if not check.ok:
            log.warning(
                f'[ENGINE] Divergencia de placeholders ao traduzir '
                f'{source_language} -> {language}. '
                f'Original: {text!r} Traduzido: {result!r} '
                f'Esperados: {check.expected} Encontrados: {check.actual}'
            )

        return TranslationOutcome(text=result, check=check)

    def _translate_segment(self, language: str, source_language: str, segment: str) -> str:
        lead, core, trail = _EDGES_RE.match(segment).groups()
        if not core:
            return segment

        masked, pairs = protect(core, language, self.encoding)

        log.debug(f'[ENGINE] {self.provider.name} {source_language}->{language}: {masked[:50]}')
        result = self.provider.translate(masked, source_language, language)
        if result is None:
            raise ProviderError(
                f'{self.provider.name} falhou ao traduzir para {language}: {core[:60]}'
            )

        # Um '|' vindo do provider criaria uma variante a mais
        if PLURAL_SEPARATOR in result:
            log.debug(f'[ENGINE] Separador removido da resposta do provider: {result[:50]}')
            result = result.replace(PLURAL_SEPARATOR, ' ')

        return lead + restore(result, pairs) + trail

    def get_stats(self) -> dict:
        """Retorna metricas da engine."""
        return {
            'provider': self.provider.name,
            'providers': {self.provider.name: self.provider.get_stats()},
        }
