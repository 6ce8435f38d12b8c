from transfill.scanner import Scanner


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')


def test_find_translations(tmp_path):
    _write(tmp_path / 'app' / 'Http' / 'Controller.php',
           "__('First line');\n"
           "return redirect()->with('status', __(\"Hello, :name\"));\n"
           "$translator->trans('ignored.key');\n")
    _write(tmp_path / 'resources' / 'views' / 'welcome.blade.php',
           "<h1>{{ __('Welcome to our app') }}</h1>\n"
           "<p>@lang('auth::passwords.reset')</p>\n"
           "<p>{{ trans_choice('messages.apples', $count) }}</p>\n")
    _write(tmp_path / 'resources' / 'js' / 'Nav.vue',
           "<a>{{ $t('nav.home') }}</a>\n")
    _write(tmp_path / 'node_modules' / 'lib' / 'index.js', "__('Should be ignored')\n")
    _write(tmp_path / 'README.md', "__('Not a source file')\n")

    result = Scanner(paths=[str(tmp_path)]).find_translations()

    assert result['single'] == {
        'single': {'First line': '', 'Hello, :name': '', 'Welcome to our app': ''},
    }
    assert result['group'] == {
        'auth::passwords': {'reset': ''},
        'messages': {'apples': ''},
        'nav': {'home': ''},
    }


def test_empty_scan_returns_both_types(tmp_path):
    result = Scanner(paths=[str(tmp_path / 'missing')]).find_translations()

    assert result == {'single': {}, 'group': {}}


def test_custom_methods_and_single_file(tmp_path):
    source = tmp_path / 'view.py'
    _write(source, "label = gettext('Sign in')\nother = __('Skipped')\n")

    result = Scanner(paths=[str(source)], methods=['gettext']).find_translations()

    assert result == {'single': {'single': {'Sign in': ''}}, 'group': {}}


def test_dotted_sentences_stay_single(tmp_path):
    _write(tmp_path / 'page.php', "echo __('Done.'); echo __('Read the docs. Then ask.');\n")

    result = Scanner(paths=[str(tmp_path)]).find_translations()

    assert result['single']['single'] == {'Done.': '', 'Read the docs. Then ask.': ''}
    assert result['group'] == {}
