import pytest

from transfill.engine.placeholders import (
    LETTERS, check_placeholders, encoding_for, find_placeholders, protect, restore,
    substitute_token,
)


def test_round_trip_with_duplicates():
    text = 'Hi :a, meet :b and :a again'
    masked, pairs = protect(text, 'fr', {})

    assert ':a' not in masked and ':b' not in masked
    assert len(pairs) == 3
    assert restore(masked, pairs) == text


def test_digit_substitutes_by_position():
    masked, pairs = protect(':count items for :user_name', 'fr', {})

    assert masked == 'https://t.co/0 items for https://t.co/1'
    assert pairs == [('https://t.co/0', ':count'), ('https://t.co/1', ':user_name')]


def test_letter_substitutes_for_configured_language():
    masked, pairs = protect(':a :b', 'new', {'new': LETTERS})

    assert masked == 'https://t.co/A https://t.co/B'
    assert substitute_token(26, LETTERS) == 'https://t.co/10'


def test_encoding_table_lookup():
    assert encoding_for('fr', {'new': LETTERS}) == 'digits'
    assert encoding_for('new', {'new': LETTERS}) == LETTERS


def test_unknown_style_raises():
    with pytest.raises(ValueError):
        substitute_token(0, 'roman')


def test_restore_is_case_insensitive():
    _, pairs = protect('Hello :name', 'new', {'new': LETTERS})

    assert restore('Bonjour HTTPS://T.CO/a', pairs) == 'Bonjour :name'


def test_restore_does_not_match_longer_substitute():
    text = ' '.join(f':p{i}' for i in range(12))
    masked, pairs = protect(text, 'fr', {})

    assert 'https://t.co/11' in masked
    assert restore(masked, pairs) == text


def test_text_without_placeholders_is_untouched():
    masked, pairs = protect('No tokens here', 'fr', {})

    assert masked == 'No tokens here'
    assert pairs == []


def test_check_reports_count_mismatch():
    check = check_placeholders('Hello :name, you have :count', 'Bonjour :name')

    assert not check.ok
    assert check.expected == [':name', ':count']
    assert check.actual == [':name']
    assert check_placeholders(':a :a', ':a :a').ok


def test_find_placeholders_keeps_order_and_duplicates():
    assert find_placeholders(':b :a :b') == [':b', ':a', ':b']
