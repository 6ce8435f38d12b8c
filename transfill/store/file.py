"""
Driver de arquivos JSON.

Layout em LANG_PATH:
  <lang>.json                          traducoes avulsas (single)
  <lang>/<grupo>.json                  traducoes de grupo
  vendor/<ns>/<lang>/<grupo>.json      grupos com namespace (ns::grupo)
  vendor/<ns>/<lang>.json              avulsas com namespace (ns::single)
"""

import json
import os
import threading
from typing import Dict, Optional

from transfill import config
from transfill.config import log
from transfill.models import GROUP, SINGLE, TranslationSet
from transfill.store.base import TranslationStore

VENDOR_DIR = 'vendor'
NAMESPACE_SEPARATOR = '::'


def _flatten(data: dict, prefix: str = '') -> Dict[str, str]:
    """{'a': {'b': 'x'}} -> {'a.b': 'x'}"""
    flat = {}
    for key, value in data.items():
        full_key = f'{prefix}{key}'
        if isinstance(value, dict):
            flat.update(_flatten(value, f'{full_key}.'))
        else:
            flat[full_key] = value
    return flat


def _set_dotted(data: dict, key: str, value: str):
    """
    Grava `key` mantendo a estrutura que o arquivo ja tem: 'a.b' entra em
    data['a']['b'] quando data['a'] ja e um objeto, senao fica como chave plana.
    """
    if key in data or '.' not in key:
        data[key] = value
        return

    head, rest = key.split('.', 1)
    node = data.get(head)
    if isinstance(node, dict):
        _set_dotted(node, rest, value)
    else:
        data[key] = value


class FileStore(TranslationStore):

    def __init__(self, lang_path: Optional[str] = None):
        self.lang_path = os.path.abspath(os.path.expanduser(lang_path or config.LANG_PATH))
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Caminhos
    # ------------------------------------------------------------------

    def _safe_path(self, *parts) -> str:
        """Monta caminho dentro de lang_path, rejeitando path traversal."""
        path = os.path.realpath(os.path.join(self.lang_path, *parts))
        root = os.path.realpath(self.lang_path)
        if not path.startswith(root + os.sep):
            raise ValueError(f"Caminho invalido: {os.path.join(*parts)}")
        return path

    def _group_path(self, language: str, group: str) -> str:
        if NAMESPACE_SEPARATOR in group:
            namespace, name = group.split(NAMESPACE_SEPARATOR, 1)
            return self._safe_path(VENDOR_DIR, namespace, language, f'{name}.json')
        return self._safe_path(language, f'{group}.json')

    def _single_path(self, language: str, group: str = SINGLE) -> str:
        if NAMESPACE_SEPARATOR in group:
            namespace = group.split(NAMESPACE_SEPARATOR, 1)[0]
            return self._safe_path(VENDOR_DIR, namespace, f'{language}.json')
        return self._safe_path(f'{language}.json')

    @staticmethod
    def _read_json(path: str) -> dict:
        if not os.path.exists(path):
            return {}
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read().strip()
        return json.loads(content) if content else {}

    @staticmethod
    def _write_json(path: str, data: dict):
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
            f.write('\n')

    def _json_files(self, directory: str):
        if not os.path.isdir(directory):
            return []
        return sorted(
            f for f in os.listdir(directory)
            if f.endswith('.json') and os.path.isfile(os.path.join(directory, f))
        )

    def _namespaces(self):
        vendor = os.path.join(self.lang_path, VENDOR_DIR)
        if not os.path.isdir(vendor):
            return []
        return sorted(
            d for d in os.listdir(vendor) if os.path.isdir(os.path.join(vendor, d))
        )

    # ------------------------------------------------------------------
    # Idiomas
    # ------------------------------------------------------------------

    def all_languages(self) -> Dict[str, str]:
        if not os.path.isdir(self.lang_path):
            return {}

        codes = set()
        for entry in os.listdir(self.lang_path):
            if entry == VENDOR_DIR:
                continue
            full = os.path.join(self.lang_path, entry)
            if os.path.isdir(full):
                codes.add(entry)
            elif entry.endswith('.json'):
                codes.add(entry[:-len('.json')])

        return {code: code for code in sorted(codes)}

    def add_language(self, language: str, name: Optional[str] = None):
        with self._lock:
            if self.language_exists(language):
                raise ValueError(f'Idioma ja existe: {language}')
            self._create_language(language)

    def _ensure_language(self, language: str):
        """Cria o idioma se ainda nao existir. Chamar com self._lock adquirido."""
        if not self.language_exists(language):
            self._create_language(language)

    def _create_language(self, language: str):
        os.makedirs(self._safe_path(language), exist_ok=True)
        single = self._single_path(language)
        if not os.path.exists(single):
            self._write_json(single, {})
        log.info(f'[STORE] Idioma criado: {language}')

    # ------------------------------------------------------------------
    # Traducoes
    # ------------------------------------------------------------------

    def all_translations_for(self, language: str) -> TranslationSet:
        return {
            GROUP: self._group_translations_for(language),
            SINGLE: self._single_translations_for(language),
        }

    def _group_translations_for(self, language: str):
        groups = {}

        lang_dir = self._safe_path(language)
        for filename in self._json_files(lang_dir):
            groups[filename[:-len('.json')]] = _flatten(
                self._read_json(os.path.join(lang_dir, filename))
            )

        for namespace in self._namespaces():
            ns_dir = os.path.join(self.lang_path, VENDOR_DIR, namespace, language)
            for filename in self._json_files(ns_dir):
                group = f'{namespace}{NAMESPACE_SEPARATOR}{filename[:-len(".json")]}'
                groups[group] = _flatten(self._read_json(os.path.join(ns_dir, filename)))

        return groups

    def _single_translations_for(self, language: str):
        singles = {}

        path = self._single_path(language)
        if os.path.exists(path):
            singles[SINGLE] = self._read_json(path)

        for namespace in self._namespaces():
            group = f'{namespace}{NAMESPACE_SEPARATOR}{SINGLE}'
            path = self._single_path(language, group)
            if os.path.exists(path):
                singles[group] = self._read_json(path)

        return singles

    def add_group_translation(self, language: str, group: str, key: str, value: str = ''):
        path = self._group_path(language, group)
        with self._lock:
            self._ensure_language(language)
            translations = self._read_json(path)
            _set_dotted(translations, key, value)
            self._write_json(path, translations)

    def add_single_translation(self, language: str, group: str, key: str, value: str = ''):
        path = self._single_path(language, group)
        with self._lock:
            self._ensure_language(language)
            translations = self._read_json(path)
            translations[key] = value
            self._write_json(path, translations)
