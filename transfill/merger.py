"""Mescla o idioma de origem com um idioma alvo e filtra o resultado."""

from typing import Iterable, Optional

from transfill.models import MergedView, TranslationSet


def merge_with_source(source: TranslationSet, target: TranslationSet,
                      source_language: str, language: str) -> MergedView:
    """
    Monta type -> group -> key -> {source_language: valor, language: valor}.

    A estrutura segue `source`; chaves que so existem em `target` nao aparecem.
    """
    merged = {}

    for type_, groups in source.items():
        target_groups = target.get(type_) or {}
        merged[type_] = {}

        for group, keys in groups.items():
            target_keys = target_groups.get(group) or {}
            merged[type_][group] = {
                key: {
                    source_language: value,
                    language: target_keys.get(key),
                }
                for key, value in keys.items()
            }

    return merged


def strs_contain(haystacks: Iterable[Optional[str]], needle: str) -> bool:
    """True se algum dos textos contem `needle` (case-insensitive, ignora None)."""
    needle = needle.lower()
    for haystack in haystacks:
        if haystack is not None and needle in str(haystack).lower():
            return True
    return False


def filter_merged(merged: MergedView, source_language: str, language: str,
                  needle: Optional[str]) -> MergedView:
    """
    Filtra a visao mesclada por grupo, chave, valor traduzido ou valor de origem.
    Grupos sem nenhuma chave restante sao removidos.
    """
    if not needle:
        return merged

    filtered = {}
    for type_, groups in merged.items():
        filtered[type_] = {}
        for group, keys in groups.items():
            kept = {
                key: values
                for key, values in keys.items()
                if strs_contain(
                    [group, key, values.get(language), values.get(source_language)],
                    needle,
                )
            }
            if kept:
                filtered[type_][group] = kept

    return filtered
