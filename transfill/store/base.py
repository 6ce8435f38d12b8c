"""Interface de armazenamento de traducoes (arquivo ou banco)."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from transfill.models import TranslationSet


class TranslationStore(ABC):
    """
    Unico caminho de escrita das traducoes.
    Adicionar traducao a um idioma inexistente cria o idioma.
    """

    @abstractmethod
    def all_languages(self) -> Dict[str, str]:
        """Mapa ordenado codigo -> nome de exibicao."""
        ...

    @abstractmethod
    def add_language(self, language: str, name: Optional[str] = None):
        """Cria um idioma. ValueError se ja existir."""
        ...

    @abstractmethod
    def all_translations_for(self, language: str) -> TranslationSet:
        """Traducoes do idioma: {'group': {...}, 'single': {...}}."""
        ...

    @abstractmethod
    def add_group_translation(self, language: str, group: str, key: str, value: str = ''):
        ...

    @abstractmethod
    def add_single_translation(self, language: str, group: str, key: str, value: str = ''):
        ...

    def language_exists(self, language: str) -> bool:
        return language in self.all_languages()
