import copy
import os
import tempfile

os.environ.setdefault(
    'TRANSFILL_LOG_FILE', os.path.join(tempfile.gettempdir(), 'transfill-tests.log')
)

import pytest  # noqa: E402

from transfill.engine.base import TranslationProvider  # noqa: E402
from transfill.engine.engine import TranslationEngine  # noqa: E402
from transfill.service import TranslationService  # noqa: E402
from transfill.store.file import FileStore  # noqa: E402


class EchoProvider(TranslationProvider):
    """Devolve '[<idioma>] <texto>' e guarda as chamadas."""

    def __init__(self, transform=None):
        super().__init__(name='echo')
        self.calls = []
        self.transform = transform

    def is_available(self):
        return True

    def translate(self, text, source_lang, target_lang):
        self.calls.append((source_lang, target_lang, text))
        if self.transform is not None:
            result = self.transform(text, source_lang, target_lang)
        else:
            result = f'[{target_lang}] {text}'
        if result is None:
            self.record_failure('stub')
        else:
            self.record_success()
        return result


class StaticScanner:
    def __init__(self, translations):
        self.translations = translations

    def find_translations(self):
        return copy.deepcopy(self.translations)


@pytest.fixture
def provider():
    return EchoProvider()


@pytest.fixture
def make_provider():
    return EchoProvider


@pytest.fixture
def engine(provider):
    return TranslationEngine(provider, encoding={'new': 'letters'})


@pytest.fixture
def store(tmp_path):
    return FileStore(str(tmp_path / 'lang'))


@pytest.fixture
def scanned():
    return {
        'single': {},
        'group': {'messages': {'welcome': 'Hello :name'}},
    }


@pytest.fixture
def scanner(scanned):
    return StaticScanner(scanned)


@pytest.fixture
def make_scanner():
    return StaticScanner


@pytest.fixture
def service(store, scanner, engine):
    return TranslationService(store, scanner, engine, source_language='en')
