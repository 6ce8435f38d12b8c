"""Provider DeepL Free API (500k chars/mes, requer API key gratuita)."""

import json
import urllib.parse
import urllib.request
from typing import Optional

from transfill.engine.base import TranslationProvider


class DeepLFreeProvider(TranslationProvider):
    """
    DeepL Free API — 500.000 chars/mes com API key gratuita.
    Codigos de idioma sao enviados em maiusculas (pt-br -> PT-BR).
    """

    API_URL = "https://api-free.deepl.com/v2/translate"

    def __init__(self, api_key: str = '', timeout: float = 15.0):
        super().__init__(name='deepl_free', timeout=timeout)
        self.api_key = api_key

    def is_available(self) -> bool:
        return bool(self.api_key)

    def translate(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        if not text.strip():
            return text
        if not self.api_key:
            self.record_failure("DEEPL_API_KEY nao configurada")
            return None

        try:
            data = urllib.parse.urlencode({
                'text': text,
                # DeepL nao aceita variante regional no idioma de origem
                'source_lang': source_lang.split('-')[0].split('_')[0].upper(),
                'target_lang': target_lang.replace('_', '-').upper(),
            }).encode('utf-8')

            req = urllib.request.Request(self.API_URL, data=data, method='POST')
            req.add_header('Content-Type', 'application/x-www-form-urlencoded')
            req.add_header('Authorization', f'DeepL-Auth-Key {self.api_key}')

            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                result = json.loads(resp.read().decode('utf-8'))

            translations = result.get('translations', [])
            if not translations:
                self.record_failure("Resposta vazia da API")
                return None

            translated = translations[0].get('text', '')
            if not translated:
                self.record_failure("Traducao vazia")
                return None

            self.record_success()
            return translated

        except Exception as e:
            self.record_failure(str(e))
            return None
