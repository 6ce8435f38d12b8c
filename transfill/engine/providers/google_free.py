"""Provider Google Translate gratuito via HTTP direto (sem dependencias externas)."""

import json
import urllib.parse
import urllib.request
from typing import Optional

from transfill.engine.base import TranslationProvider


class GoogleFreeProvider(TranslationProvider):
    """
    Google Translate via HTTP direto ao endpoint gtx.
    Uma request por segmento, sem batch e sem retry.
    """

    TRANSLATE_URL = "https://translate.googleapis.com/translate_a/single"

    def __init__(self, timeout: float = 8.0):
        super().__init__(name='google_free', timeout=timeout)

    def is_available(self) -> bool:
        return True

    def translate(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        if not text.strip():
            return text

        try:
            params = urllib.parse.urlencode({
                'client': 'gtx',
                'sl': source_lang,
                'tl': target_lang,
                'dt': 't',
                'q': text,
            })
            url = f"{self.TRANSLATE_URL}?{params}"
            req = urllib.request.Request(url, headers={
                'User-Agent': 'Mozilla/5.0',
            })

            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                data = json.loads(resp.read().decode('utf-8'))

            # Resposta do Google: [[["traducao","original",...],...],...]
            translated = ''.join(
                part[0] for part in (data[0] or []) if part and part[0]
            )

            if not translated:
                self.record_failure("Resposta vazia")
                return None

            self.record_success()
            return translated

        except Exception as e:
            self.record_failure(str(e))
            return None
