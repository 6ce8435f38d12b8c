"""
Diferenca entre as chaves encontradas no codigo e as traducoes armazenadas.

Os dois conjuntos tem sempre 3 niveis: type -> group -> key.
"""

from transfill.models import TranslationSet, is_empty


def diff_missing(expected: TranslationSet, actual: TranslationSet) -> TranslationSet:
    """
    Retorna as chaves de `expected` que nao existem em `actual`.

    Apenas a presenca da chave conta: um valor vazio ('') em `actual`
    suprime a chave. `None` e tratado como ausente. Tipos ou grupos
    inteiros ausentes em `actual` reportam todas as suas chaves.
    A ordem de `expected` e preservada.
    """
    missing = {}

    for type_, groups in expected.items():
        actual_groups = actual.get(type_) or {}

        for group, keys in groups.items():
            actual_keys = actual_groups.get(group) or {}

            for key, value in keys.items():
                if actual_keys.get(key) is not None:
                    continue
                missing.setdefault(type_, {}).setdefault(group, {})[key] = value

    return missing


def diff_untranslated(expected: TranslationSet, actual: TranslationSet) -> TranslationSet:
    """Como diff_missing, mas valores vazios em `actual` tambem contam como faltando."""
    untranslated = {}

    for type_, groups in expected.items():
        actual_groups = actual.get(type_) or {}

        for group, keys in groups.items():
            actual_keys = actual_groups.get(group) or {}

            for key, value in keys.items():
                if not is_empty(actual_keys.get(key)):
                    continue
                untranslated.setdefault(type_, {}).setdefault(group, {})[key] = value

    return untranslated


def count_keys(translations: TranslationSet) -> int:
    return sum(len(keys) for groups in translations.values() for keys in groups.values())
