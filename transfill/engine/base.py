"""Classe base abstrata para provedores de traducao."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class ProviderError(RuntimeError):
    """O provider nao devolveu traducao para um segmento."""


@dataclass
class ProviderStats:
    """Estatisticas de uso de um provider."""

    name: str
    total_requests: int = 0
    successful: int = 0
    failed: int = 0
    last_request_at: float = 0.0
    last_error_at: float = 0.0
    last_error_msg: str = ""


class TranslationProvider(ABC):
    """Interface abstrata para provedores de traducao."""

    def __init__(self, name: str, timeout: float = 15.0):
        self.name = name
        self.timeout = timeout
        self.stats = ProviderStats(name=name)

    @abstractmethod
    def translate(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        """Traduz texto. Retorna string traduzida ou None em caso de falha."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Verifica se o provider esta disponivel."""
        ...

    def record_success(self):
        """Registra traducao bem-sucedida."""
        self.stats.total_requests += 1
        self.stats.successful += 1
        self.stats.last_request_at = time.time()

    def record_failure(self, error_msg: str = ""):
        """Registra falha."""
        now = time.time()
        self.stats.total_requests += 1
        self.stats.failed += 1
        self.stats.last_request_at = now
        self.stats.last_error_at = now
        self.stats.last_error_msg = error_msg

    def get_stats(self) -> dict:
        total = self.stats.total_requests or 1
        return {
            'available': self.is_available(),
            'total_requests': self.stats.total_requests,
            'successful': self.stats.successful,
            'failed': self.stats.failed,
            'last_error': self.stats.last_error_msg,
            'success_rate': f'{(self.stats.successful / total) * 100:.1f}%',
        }
