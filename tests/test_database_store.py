import pytest

from transfill.store import get_store
from transfill.store.database import DatabaseStore


@pytest.fixture
def db_store(tmp_path):
    return DatabaseStore(str(tmp_path / 'translations.db'))


def test_languages(db_store):
    db_store.add_language('en', 'English')
    db_store.add_language('fr')

    assert db_store.all_languages() == {'en': 'English', 'fr': 'fr'}
    with pytest.raises(ValueError):
        db_store.add_language('fr')


def test_translations_are_split_by_group_name(db_store):
    db_store.add_group_translation('fr', 'messages', 'welcome', 'Bienvenue')
    db_store.add_single_translation('fr', 'single', 'Hello', 'Bonjour')
    db_store.add_single_translation('fr', 'auth::single', 'Log in', '')

    assert db_store.all_translations_for('fr') == {
        'group': {'messages': {'welcome': 'Bienvenue'}},
        'single': {'single': {'Hello': 'Bonjour'}, 'auth::single': {'Log in': ''}},
    }
    # idioma criado implicitamente
    assert 'fr' in db_store.all_languages()


def test_upsert_overwrites_value(db_store):
    db_store.add_group_translation('fr', 'messages', 'welcome', '')
    db_store.add_group_translation('fr', 'messages', 'welcome', 'Bienvenue')

    assert db_store.all_translations_for('fr')['group']['messages'] == {'welcome': 'Bienvenue'}


def test_languages_are_isolated(db_store):
    db_store.add_group_translation('en', 'messages', 'welcome', 'Welcome')

    assert db_store.all_translations_for('fr') == {'group': {}, 'single': {}}


def test_service_flow_on_database(tmp_path, scanner, engine):
    from transfill.service import TranslationService

    store = get_store('database', db_path=str(tmp_path / 'flow.db'))
    service = TranslationService(store, scanner, engine, source_language='en')

    service.auto_translate('fr')
    service.save_missing_translations('fr')

    assert store.all_translations_for('fr')['group']['messages'] == {'welcome': '[fr] Hello :name'}
