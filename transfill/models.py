"""Tipos compartilhados: conjuntos de traducao, visao mesclada e eventos."""

from dataclasses import dataclass
from typing import Dict, Optional

# type ('single' | 'group') -> group -> key -> value
TranslationSet = Dict[str, Dict[str, Dict[str, Optional[str]]]]

# type -> group -> key -> {language: value}
MergedView = Dict[str, Dict[str, Dict[str, Dict[str, Optional[str]]]]]

SINGLE = 'single'
GROUP = 'group'


@dataclass(frozen=True)
class TranslationAdded:
    """Evento disparado apos uma traducao ser persistida."""

    language: str
    group: str
    key: str
    value: str


def is_single_group(group: str) -> bool:
    """Grupos de traducoes avulsas contem 'single' no nome (ex: 'vendor::single')."""
    return SINGLE in group


def is_empty(value: Optional[str]) -> bool:
    return value is None or value == ''
