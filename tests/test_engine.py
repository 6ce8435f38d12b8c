import logging

import pytest

from transfill.engine.base import ProviderError
from transfill.engine.engine import TranslationEngine


def test_placeholders_survive_translation(engine, provider):
    result = engine.translate('fr', 'en', 'Hello :name')

    assert result == '[fr] Hello :name'
    assert provider.calls == [('en', 'fr', 'Hello https://t.co/0')]


def test_each_plural_variant_is_translated_separately(engine, provider):
    result = engine.translate('fr', 'en', 'one|many|few')

    assert result == '[fr] one|[fr] many|[fr] few'
    assert [call[2] for call in provider.calls] == ['one', 'many', 'few']


def test_segment_count_is_invariant(make_provider):
    # o provider tenta juntar as variantes
    provider = make_provider(lambda text, s, t: 'a|b')
    engine = TranslationEngine(provider, encoding={})

    result = engine.translate('fr', 'en', 'one|many|few')

    assert result.split('|') == ['a b', 'a b', 'a b']
    assert len(provider.calls) == 3


def test_segment_whitespace_is_kept(engine):
    result = engine.translate('fr', 'en', '{0} none | {1} one')

    assert result == '[fr] {0} none | [fr] {1} one'


def test_blank_segments_are_not_sent(engine, provider):
    result = engine.translate('fr', 'en', 'a|| |b')

    assert result == '[fr] a|| |[fr] b'
    assert len(provider.calls) == 2


def test_letter_encoding_for_configured_language(engine, provider):
    result = engine.translate('new', 'en', ':count apples')

    assert provider.calls[0][2] == 'https://t.co/A apples'
    assert result == '[new] :count apples'


def test_uppercased_substitute_is_restored(make_provider):
    engine = TranslationEngine(make_provider(lambda text, s, t: text.upper()), encoding={})

    assert engine.translate('de', 'en', 'hi :name') == 'HI :name'


def test_placeholder_mismatch_is_reported_not_raised(make_provider, caplog):
    # o provider "come" o segundo token
    provider = make_provider(lambda text, s, t: text.replace(' https://t.co/1', ''))
    engine = TranslationEngine(provider, encoding={})

    with caplog.at_level(logging.WARNING, logger='transfill'):
        outcome = engine.translate_checked('fr', 'en', 'Hello :name, you have :count')

    assert outcome.text == 'Hello :name, you have'
    assert not outcome.placeholders_ok
    assert outcome.check.expected == [':name', ':count']
    assert outcome.check.actual == [':name']
    assert any('placeholders' in r.getMessage() for r in caplog.records)


def test_provider_failure_raises_provider_error(make_provider):
    engine = TranslationEngine(make_provider(lambda text, s, t: None), encoding={})

    with pytest.raises(ProviderError):
        engine.translate('fr', 'en', 'Hello')


def test_stats_expose_provider(engine):
    engine.translate('fr', 'en', 'Hello')

    stats = engine.get_stats()
    assert stats['provider'] == 'echo'
    assert stats['providers']['echo']['successful'] == 1
