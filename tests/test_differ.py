from transfill.differ import count_keys, diff_missing, diff_untranslated


def test_reports_keys_absent_from_actual():
    expected = {'group': {'messages': {'welcome': 'Hello :name', 'bye': 'Bye'}}}
    actual = {'group': {'messages': {'bye': 'Au revoir'}}}

    assert diff_missing(expected, actual) == {'group': {'messages': {'welcome': 'Hello :name'}}}


def test_empty_stored_value_counts_as_present():
    expected = {'group': {'messages': {'welcome': 'Hello'}}}
    actual = {'group': {'messages': {'welcome': ''}}}

    assert diff_missing(expected, actual) == {}


def test_different_value_does_not_matter():
    expected = {'single': {'single': {'Hello': 'Hello'}}}
    actual = {'single': {'single': {'Hello': 'Bonjour'}}}

    assert diff_missing(expected, actual) == {}


def test_none_value_counts_as_absent():
    expected = {'group': {'messages': {'welcome': ''}}}
    actual = {'group': {'messages': {'welcome': None}}}

    assert diff_missing(expected, actual) == {'group': {'messages': {'welcome': ''}}}


def test_missing_type_and_group_report_every_key():
    expected = {
        'single': {'single': {'Hello': '', 'Bye': ''}},
        'group': {'auth': {'failed': '', 'throttle': ''}},
    }
    actual = {'group': {}}

    assert diff_missing(expected, actual) == expected


def test_output_mirrors_expected_shape_and_order():
    expected = {'group': {'b': {'z': '', 'a': ''}, 'a': {'k': ''}}}
    actual = {'group': {'extra': {'x': 'y'}}}

    result = diff_missing(expected, actual)

    assert list(result['group']) == ['b', 'a']
    assert list(result['group']['b']) == ['z', 'a']
    assert 'extra' not in result['group']


def test_no_empty_groups_in_output():
    expected = {'group': {'messages': {'welcome': ''}}, 'single': {'single': {}}}
    actual = {'group': {'messages': {'welcome': 'Bonjour'}}}

    assert diff_missing(expected, actual) == {}


def test_untranslated_treats_empty_values_as_missing():
    expected = {'group': {'messages': {'welcome': 'Hello', 'bye': 'Bye', 'ok': 'OK'}}}
    actual = {'group': {'messages': {'welcome': '', 'ok': 'Ok'}}}

    assert diff_untranslated(expected, actual) == {
        'group': {'messages': {'welcome': 'Hello', 'bye': 'Bye'}}
    }
    # a diferenca bruta so enxerga a chave ausente
    assert diff_missing(expected, actual) == {'group': {'messages': {'bye': 'Bye'}}}


def test_count_keys():
    assert count_keys({}) == 0
    assert count_keys({'group': {'a': {'x': '', 'y': ''}}, 'single': {'single': {'z': ''}}}) == 3
