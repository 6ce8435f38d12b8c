"""Driver SQLite: tabelas languages + translations."""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Optional

from transfill import config
from transfill.config import log
from transfill.models import GROUP, SINGLE, TranslationSet, is_single_group
from transfill.store.base import TranslationStore


class DatabaseStore(TranslationStore):
    """Traducoes avulsas ficam na mesma tabela, com grupo contendo 'single'."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or config.DB_PATH
        self._db_lock = threading.Lock()
        self.init_db()

    @contextmanager
    def _db_conn(self):
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self):
        """Cria tabelas SQLite se nao existirem."""
        with self._db_conn() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS languages (
                    id         INTEGER PRIMARY KEY AUTOINCREMENT,
                    language   TEXT    UNIQUE NOT NULL,
                    name       TEXT,
                    created_at TEXT    NOT NULL
                );

                CREATE TABLE IF NOT EXISTS translations (
                    id          INTEGER PRIMARY KEY AUTOINCREMENT,
                    language_id INTEGER NOT NULL REFERENCES languages(id),
                    "group"     TEXT    NOT NULL,
                    key         TEXT    NOT NULL,
                    value       TEXT    NOT NULL DEFAULT '',
                    created_at  TEXT    NOT NULL,
                    updated_at  TEXT    NOT NULL,
                    UNIQUE (language_id, "group", key)
                );
            """)
        log.debug(f'[STORE] Banco de dados inicializado: {self.db_path}')

    # ------------------------------------------------------------------
    # Idiomas
    # ------------------------------------------------------------------

    def all_languages(self) -> Dict[str, str]:
        with self._db_conn() as conn:
            rows = conn.execute(
                "SELECT language, name FROM languages ORDER BY id"
            ).fetchall()
        return {row['language']: row['name'] or row['language'] for row in rows}

    def add_language(self, language: str, name: Optional[str] = None):
        now = datetime.now().isoformat()
        with self._db_lock:
            with self._db_conn() as conn:
                try:
                    conn.execute(
                        "INSERT INTO languages (language, name, created_at) VALUES (?, ?, ?)",
                        (language, name, now),
                    )
                except sqlite3.IntegrityError:
                    raise ValueError(f'Idioma ja existe: {language}')
        log.info(f'[STORE] Idioma criado: {language}')

    @staticmethod
    def _language_id(conn, language: str) -> int:
        now = datetime.now().isoformat()
        conn.execute(
            "INSERT OR IGNORE INTO languages (language, created_at) VALUES (?, ?)",
            (language, now),
        )
        row = conn.execute(
            "SELECT id FROM languages WHERE language = ?", (language,)
        ).fetchone()
        return row['id']

    # ------------------------------------------------------------------
    # Traducoes
    # ------------------------------------------------------------------

    def all_translations_for(self, language: str) -> TranslationSet:
        with self._db_conn() as conn:
            rows = conn.execute(
                """
                SELECT t."group" AS grp, t.key, t.value
                FROM translations t
                JOIN languages l ON l.id = t.language_id
                WHERE l.language = ?
                ORDER BY t.id
                """,
                (language,),
            ).fetchall()

        translations = {GROUP: {}, SINGLE: {}}
        for row in rows:
            type_ = SINGLE if is_single_group(row['grp']) else GROUP
            translations[type_].setdefault(row['grp'], {})[row['key']] = row['value']
        return translations

    def _upsert(self, language: str, group: str, key: str, value: str):
        now = datetime.now().isoformat()
        with self._db_lock:
            with self._db_conn() as conn:
                language_id = self._language_id(conn, language)
                conn.execute(
                    """
                    INSERT INTO translations
                        (language_id, "group", key, value, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    ON CONFLICT(language_id, "group", key) DO UPDATE SET
                        value      = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (language_id, group, key, value or '', now, now),
                )

    def add_group_translation(self, language: str, group: str, key: str, value: str = ''):
        self._upsert(language, group, key, value)

    def add_single_translation(self, language: str, group: str, key: str, value: str = ''):
        self._upsert(language, group, key, value)
