"""
Servico de traducao: encontra chaves sem traducao, cria entradas vazias e
preenche os valores vazios via tradutor externo.

Todo o processamento e sequencial: idiomas, grupos e chaves um de cada vez.
A unidade de isolamento de falhas e uma chave em um idioma.
"""

from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from transfill import config
from transfill.config import log
from transfill.differ import count_keys, diff_missing, diff_untranslated
from transfill.engine.engine import TranslationEngine
from transfill.merger import filter_merged, merge_with_source
from transfill.models import (
    SINGLE, MergedView, TranslationAdded, TranslationSet, is_empty, is_single_group,
)
from transfill.scanner import Scanner
from transfill.store.base import TranslationStore

Listener = Callable[[TranslationAdded], None]
ProgressCallback = Callable[[int, int], None]


@dataclass
class TranslationReport:
    """Resumo de uma passada de traducao em um idioma."""

    language: str
    translated: int = 0
    skipped: bool = False
    failures: List[dict] = field(default_factory=list)
    mismatches: List[dict] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


class TranslationService:

    def __init__(self, store: TranslationStore, scanner: Scanner,
                 engine: TranslationEngine, source_language: Optional[str] = None,
                 listeners: Optional[Iterable[Listener]] = None):
        self.store = store
        self.scanner = scanner
        self.engine = engine
        self.source_language = source_language or config.SOURCE_LANG
        self.listeners = list(listeners or [])

    # ------------------------------------------------------------------
    # Observadores
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener):
        self.listeners.append(listener)

    def _dispatch(self, event: TranslationAdded):
        for listener in self.listeners:
            try:
                listener(event)
            except Exception as e:
                log.warning(f'[SERVICE] Listener falhou para {event.language}/{event.key}: {e}')

    # ------------------------------------------------------------------
    # Idiomas
    # ------------------------------------------------------------------

    def all_languages(self) -> Dict[str, str]:
        return self.store.all_languages()

    def add_language(self, language: str, name: Optional[str] = None):
        self.store.add_language(language, name)

    def _languages(self, language: Optional[str]) -> Dict[str, str]:
        # Idioma explicito nao e validado contra o registro
        return {language: language} if language else self.store.all_languages()

    # ------------------------------------------------------------------
    # Chaves faltando
    # ------------------------------------------------------------------

    def find_missing_translations(self, language: str) -> TranslationSet:
        """Chaves do codigo que nao existem no idioma (valor vazio conta como existente)."""
        return diff_missing(
            self.scanner.find_translations(),
            self.store.all_translations_for(language),
        )

    def find_untranslated_translations(self, language: str) -> TranslationSet:
        """Chaves do codigo ausentes ou vazias no idioma."""
        return diff_untranslated(
            self.scanner.find_translations(),
            self.store.all_translations_for(language),
        )

    def save_missing_translations(self, language: Optional[str] = None) -> int:
        """Cria entradas vazias para cada chave faltando. Retorna quantas foram criadas."""
        saved = 0

        for code in self._languages(language):
            missing = self.find_missing_translations(code)

            for type_, groups in missing.items():
                for group, keys in groups.items():
                    for key in keys:
                        self._persist(code, group, key, '', notify=False)

            count = count_keys(missing)
            saved += count
            if count:
                log.info(f'[SERVICE] {count} chaves faltando salvas em {code}')

        return saved

    def _persist(self, language: str, group: str, key: str, value: str, notify: bool = True):
        if is_single_group(group):
            self.store.add_single_translation(language, group, key, value)
        else:
            self.store.add_group_translation(language, group, key, value)

        if notify:
            self._dispatch(TranslationAdded(language, group, key, value))

    # ------------------------------------------------------------------
    # Visao mesclada
    # ------------------------------------------------------------------

    def _source_translations(self) -> TranslationSet:
        """
        Traducoes do idioma de origem. Chaves que so existem no codigo (ou
        estao vazias no idioma de origem) entram com o texto padrao do scanner.
        """
        stored = self.store.all_translations_for(self.source_language)
        translations = {
            type_: {group: dict(keys) for group, keys in groups.items()}
            for type_, groups in stored.items()
        }

        for type_, groups in self.scanner.find_translations().items():
            for group, keys in groups.items():
                current = translations.setdefault(type_, {}).setdefault(group, {})
                for key, default in keys.items():
                    if key not in current:
                        current[key] = default
                    elif is_empty(current[key]) and not is_empty(default):
                        current[key] = default

        return translations

    def get_source_language_translations_with(self, language: str) -> MergedView:
        return merge_with_source(
            self._source_translations(),
            self.store.all_translations_for(language),
            self.source_language,
            language,
        )

    def filter_translations_for(self, language: str, needle: Optional[str]) -> MergedView:
        return filter_merged(
            self.get_source_language_translations_with(language),
            self.source_language,
            language,
            needle,
        )

    # ------------------------------------------------------------------
    # Traducao automatica
    # ------------------------------------------------------------------

    def translate_language(self, language: str,
                           progress: Optional[ProgressCallback] = None) -> TranslationReport:
        """Traduz todos os valores vazios do idioma a partir do idioma de origem."""
        report = TranslationReport(language=language)

        # Nada a fazer de en para en
        if language == self.source_language:
            report.skipped = True
            return report

        merged = self.get_source_language_translations_with(language)
        pending = [
            (group, key, values)
            for groups in merged.values()
            for group, keys in groups.items()
            for key, values in keys.items()
            if is_empty(values.get(language))
        ]
        total = len(pending)
        log.info(f'[SERVICE] {total} chaves para traduzir em {language}')

        for done, (group, key, values) in enumerate(pending, 1):
            # Valor vazio na origem: a chave serve de texto
            source_value = values.get(self.source_language)
            seed = key if is_empty(source_value) else source_value

            try:
                outcome = self.engine.translate_checked(language, self.source_language, seed)
            except Exception as e:
                log.warning(f'[SERVICE] Falha ao traduzir {group}/{key} para {language}: {e}')
                report.failures.append({'group': group, 'key': key, 'error': str(e)})
            else:
                if not outcome.placeholders_ok:
                    report.mismatches.append({
                        'group': group,
                        'key': key,
                        'text': outcome.text,
                        'expected': outcome.check.expected,
                        'actual': outcome.check.actual,
                    })
                self._persist(language, group, key, outcome.text)
                report.translated += 1

            if progress:
                progress(done, total)

        log.info(
            f'[SERVICE] {language}: {report.translated} traduzidas, '
            f'{len(report.failures)} falhas, {len(report.mismatches)} divergencias'
        )
        return report

    def auto_translate(self, language: Optional[str] = None,
                       notify: Optional[Callable[[str, TranslationReport], None]] = None,
                       progress: Optional[Callable[[str, int, int], None]] = None,
                       ) -> Dict[str, TranslationReport]:
        """Salva as chaves faltando e traduz, idioma por idioma."""
        reports = {}

        for code in self._languages(language):
            self.save_missing_translations(code)
            reports[code] = self.translate_language(
                code,
                progress=(lambda done, total, c=code: progress(c, done, total)) if progress else None,
            )
            log.info(f'[SERVICE] Traducao automatica concluida: {code}')
            if notify:
                notify(code, reports[code])

        return reports

    # ------------------------------------------------------------------
    # Escrita explicita
    # ------------------------------------------------------------------

    def add_translation(self, language: str, key: str, value: str = '',
                        group: Optional[str] = None,
                        namespace: Optional[str] = None) -> TranslationAdded:
        """Traducao de grupo se `group` for informado, senao traducao avulsa."""
        if not key:
            raise ValueError('Chave obrigatoria')

        prefix = f'{namespace}::' if namespace else ''
        value = value or ''

        if group:
            group = prefix + group
            self.store.add_group_translation(language, group, key, value)
        else:
            group = prefix + SINGLE
            self.store.add_single_translation(language, group, key, value)

        event = TranslationAdded(language, group, key, value)
        self._dispatch(event)
        return event


def create_service(driver: Optional[str] = None, lang_path: Optional[str] = None,
                   db_path: Optional[str] = None, source_language: Optional[str] = None,
                   provider: Optional[str] = None,
                   scan_paths: Optional[List[str]] = None) -> TranslationService:
    """Monta o servico a partir da configuracao (argumentos sobrescrevem o ambiente)."""
    from transfill.engine import get_engine
    from transfill.store import get_store

    return TranslationService(
        store=get_store(driver, lang_path=lang_path, db_path=db_path),
        scanner=Scanner(scan_paths or None),
        engine=get_engine(provider),
        source_language=source_language,
    )
