"""
Scanner de codigo-fonte: encontra chaves de traducao usadas na aplicacao.

Reconhece chamadas como __('Texto'), trans('grupo.chave'), @lang('ns::grupo.chave').
Chaves no formato [namespace::]grupo.item viram traducoes de grupo; o resto
vira traducao avulsa (single).
"""

import os
import re
from typing import Iterable, Optional

from transfill import config
from transfill.config import log
from transfill.models import GROUP, SINGLE, TranslationSet

GROUP_KEY_RE = re.compile(r'^[a-zA-Z0-9:_-]+(?:\.[^\x01) ]+)+$')


def build_call_pattern(methods: Iterable[str]):
    """Regex para chamadas de traducao com primeiro argumento entre aspas."""
    alternatives = '|'.join(
        re.escape(m) for m in sorted(methods, key=len, reverse=True)
    )
    return re.compile(
        r'[^\w$.@]'             # nao pode ser parte de outro identificador
        r'(?<!->)'              # nem chamada de metodo ($obj->trans)
        rf'({alternatives})'
        r'\(\s*'
        r'([\'"])'              # aspas de abertura
        r'(.+?)'
        r'(?<!\\)\2'            # mesma aspa, nao escapada
        r'\s*[),]',
        re.DOTALL,
    )


class Scanner:
    """Varre os diretorios configurados em busca de chaves de traducao."""

    def __init__(self, paths: Optional[Iterable[str]] = None,
                 extensions: Optional[Iterable[str]] = None,
                 methods: Optional[Iterable[str]] = None,
                 ignored_dirs: Optional[Iterable[str]] = None):
        self.paths = list(paths if paths is not None else config.SCAN_PATHS)
        self.extensions = tuple(extensions or config.SCAN_EXTENSIONS)
        self.ignored_dirs = set(ignored_dirs or config.SCAN_IGNORED_DIRS)
        self.pattern = build_call_pattern(methods or config.TRANSLATION_METHODS)

    def iter_files(self):
        for root_path in self.paths:
            root_path = os.path.abspath(os.path.expanduser(root_path))
            if os.path.isfile(root_path):
                yield root_path
                continue
            if not os.path.isdir(root_path):
                log.debug(f'[SCAN] Caminho inexistente, ignorado: {root_path}')
                continue

            for dirpath, dirnames, filenames in os.walk(root_path):
                dirnames[:] = sorted(d for d in dirnames if d not in self.ignored_dirs)
                for filename in sorted(filenames):
                    if filename.endswith(self.extensions):
                        yield os.path.join(dirpath, filename)

    def find_translations(self) -> TranslationSet:
        """Retorna {'single': {'single': {...}}, 'group': {grupo: {...}}} com valores vazios."""
        results = {SINGLE: {}, GROUP: {}}
        file_count = 0

        for file_path in self.iter_files():
            file_count += 1
            with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
                # Espaco inicial garante match de chamadas no inicio do arquivo
                content = ' ' + f.read()

            for match in self.pattern.finditer(content):
                key = match.group(3)
                if GROUP_KEY_RE.match(key):
                    group, item = key.split('.', 1)
                    results[GROUP].setdefault(group, {})[item] = ''
                else:
                    results[SINGLE].setdefault(SINGLE, {})[key] = ''

        log.debug(
            f'[SCAN] {file_count} arquivos, '
            f'{len(results[SINGLE].get(SINGLE, {}))} chaves single, '
            f'{len(results[GROUP])} grupos'
        )
        return results
