"""Provider MyMemory (api.mymemory.translated.net)."""

import json
import urllib.parse
import urllib.request
from typing import Optional

from transfill.engine.base import TranslationProvider

API_URL = "https://api.mymemory.translated.net/get"


def build_query(text: str, source_lang: str, target_lang: str, email: Optional[str] = None) -> str:
    """Monta a URL de consulta; `de` (email) aumenta a cota diaria."""
    params = {'q': text, 'langpair': f'{source_lang}|{target_lang}'}
    if email:
        params['de'] = email
    return f'{API_URL}?{urllib.parse.urlencode(params)}'


def parse_response(payload: dict) -> str:
    """
    Extrai o texto traduzido. ValueError se a API sinalizar erro, inclusive
    quando responde 200 no HTTP mas com responseStatus de cota estourada.
    """
    status = payload.get('responseStatus')
    if str(status) != '200':
        raise ValueError(f'responseStatus={status}')

    text = (payload.get('responseData') or {}).get('translatedText') or ''
    if not text:
        raise ValueError('Resposta vazia')
    return text


class MyMemoryProvider(TranslationProvider):
    """Gratuito, sem chave. Email opcional via MYMEMORY_EMAIL."""

    def __init__(self, email: Optional[str] = None, timeout: float = 15.0):
        super().__init__(name='mymemory', timeout=timeout)
        self.email = email

    def is_available(self) -> bool:
        return True

    def translate(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        if not text.strip():
            return text

        request = urllib.request.Request(
            build_query(text, source_lang, target_lang, self.email),
            headers={'User-Agent': 'transfill/1.0'},
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as resp:
                translated = parse_response(json.loads(resp.read().decode('utf-8')))
        except Exception as e:
            self.record_failure(str(e))
            return None

        self.record_success()
        return translated
