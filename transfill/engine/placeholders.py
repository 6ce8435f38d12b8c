"""
Protecao de placeholders (:name) durante a traducao externa.

Cada placeholder e trocado por uma URL falsa (https://t.co/<codigo>), que os
tradutores automaticos tendem a deixar intacta, e restaurado depois.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from transfill import config

PLACEHOLDER_RE = re.compile(r':([a-zA-Z0-9_]+)')
SUBSTITUTE_PREFIX = 'https://t.co/'

DIGITS = 'digits'
LETTERS = 'letters'

_BASE36 = '0123456789abcdefghijklmnopqrstuvwxyz'

# (substituto, placeholder original), um par por ocorrencia
PlaceholderPairs = List[Tuple[str, str]]


@dataclass
class PlaceholderCheck:
    """Resultado da verificacao pos-restauracao."""

    expected: List[str] = field(default_factory=list)
    actual: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.expected) == len(self.actual)


def _base36(number: int) -> str:
    if number == 0:
        return '0'
    out = ''
    while number:
        number, rem = divmod(number, 36)
        out = _BASE36[rem] + out
    return out


def encoding_for(language: str, encoding: Optional[Dict[str, str]] = None) -> str:
    """Estilo de codigo do substituto para o idioma ('digits' se nao configurado)."""
    table = config.PLACEHOLDER_ENCODING if encoding is None else encoding
    return table.get(language, DIGITS)


def substitute_token(index: int, style: str = DIGITS) -> str:
    if style == LETTERS:
        # 0 -> A, 1 -> B, ... (digitos so aparecem a partir do indice 26)
        return SUBSTITUTE_PREFIX + _base36(index + 10).upper()
    if style != DIGITS:
        raise ValueError(f'Estilo de placeholder desconhecido: {style}')
    return SUBSTITUTE_PREFIX + str(index)


def find_placeholders(text: str) -> List[str]:
    return [m.group(0) for m in PLACEHOLDER_RE.finditer(text)]


def protect(text: str, language: str = '',
            encoding: Optional[Dict[str, str]] = None) -> Tuple[str, PlaceholderPairs]:
    """Substitui cada :placeholder por um token opaco. Duplicatas geram pares distintos."""
    style = encoding_for(language, encoding)
    pairs = []

    def replacer(match):
        token = substitute_token(len(pairs), style)
        pairs.append((token, match.group(0)))
        return token

    masked = PLACEHOLDER_RE.sub(replacer, text)
    return masked, pairs


def restore(text: str, pairs: PlaceholderPairs) -> str:
    """
    Restaura os tokens opacos. Case-insensitive, pois o tradutor pode mudar a
    caixa do token; https://t.co/1 nunca casa com o prefixo de https://t.co/10.
    """
    for token, placeholder in pairs:
        pattern = re.compile(re.escape(token) + r'(?![0-9a-zA-Z])', re.IGNORECASE)
        text = pattern.sub(lambda _m, ph=placeholder: ph, text)
    return text


def check_placeholders(original: str, restored: str) -> PlaceholderCheck:
    return PlaceholderCheck(
        expected=find_placeholders(original),
        actual=find_placeholders(restored),
    )
