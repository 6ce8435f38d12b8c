import pytest

from transfill.app import create_app


@pytest.fixture
def client(service):
    app = create_app(service, background_jobs=False)
    app.config['TESTING'] = True
    return app.test_client()


def test_health_and_security_headers(client):
    resp = client.get('/api/health')

    assert resp.status_code == 200
    assert resp.get_json() == {'status': 'ok', 'service': 'transfill'}
    assert resp.headers['X-Frame-Options'] == 'DENY'


def test_languages(client):
    assert client.post('/api/languages', json={'language': 'fr', 'name': 'French'}).status_code == 201
    assert client.post('/api/languages', json={'language': 'fr'}).status_code == 409
    assert client.post('/api/languages', json={'language': '../etc'}).status_code == 400

    data = client.get('/api/languages').get_json()
    assert data['source_language'] == 'en'
    assert 'fr' in data['languages']


def test_missing_and_save_missing(client):
    data = client.get('/api/languages/fr/missing').get_json()
    assert data['count'] == 1
    assert data['missing'] == {'group': {'messages': {'welcome': 'Hello :name'}}}

    assert client.post('/api/languages/fr/missing').get_json()['saved'] == 1

    assert client.get('/api/languages/fr/missing').get_json()['count'] == 0
    assert client.get('/api/languages/fr/missing?include_empty=1').get_json()['count'] == 1


def test_add_and_filter_translations(client):
    resp = client.post('/api/languages/fr/translations', json={'key': 'Hello', 'value': 'Bonjour'})
    assert resp.status_code == 201
    assert resp.get_json()['translation'] == {
        'language': 'fr', 'group': 'single', 'key': 'Hello', 'value': 'Bonjour',
    }

    resp = client.post('/api/languages/fr/translations',
                       json={'key': 'welcome', 'value': 'Salut :name', 'group': 'messages'})
    assert resp.get_json()['translation']['group'] == 'messages'

    assert client.post('/api/languages/fr/translations', json={'value': 'x'}).status_code == 400

    data = client.get('/api/languages/fr/translations?filter=salut').get_json()
    assert data['translations']['group'] == {
        'messages': {'welcome': {'en': 'Hello :name', 'fr': 'Salut :name'}},
    }


def test_auto_translate_job(client, store):
    resp = client.post('/api/auto-translate', json={'language': 'fr'})

    assert resp.status_code == 202
    job_id = resp.get_json()['job_id']

    job = client.get(f'/api/jobs/{job_id}').get_json()
    assert job['status'] == 'completed'
    assert job['reports']['fr']['translated'] == 1
    assert store.all_translations_for('fr')['group']['messages']['welcome'] == '[fr] Hello :name'

    assert any(j['job_id'] == job_id for j in client.get('/api/jobs').get_json()['jobs'])


def test_job_lookup_errors(client):
    assert client.get('/api/jobs/not-a-job').status_code == 400
    assert client.get('/api/jobs/abcdef12').status_code == 404


def test_stats(client):
    data = client.get('/api/stats').get_json()

    assert data['engine']['provider'] == 'echo'
