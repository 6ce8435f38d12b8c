"""Drivers de armazenamento de traducoes."""

from typing import Optional

from transfill import config
from transfill.store.base import TranslationStore


def get_store(driver: Optional[str] = None, lang_path: Optional[str] = None,
              db_path: Optional[str] = None) -> TranslationStore:
    """Instancia o driver configurado (TRANSFILL_DRIVER: 'file' ou 'database')."""
    driver = driver or config.DRIVER

    if driver == 'file':
        from transfill.store.file import FileStore
        return FileStore(lang_path)

    if driver == 'database':
        from transfill.store.database import DatabaseStore
        return DatabaseStore(db_path)

    raise ValueError(f'Driver desconhecido: {driver} (opcoes: file, database)')
