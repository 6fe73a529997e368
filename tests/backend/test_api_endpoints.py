import json

import pytest
from fastapi.testclient import TestClient

from quickdata_lib.main import create_app, create_store, Config
from quickdata_lib.quickdata import ManualScheduler, NAMESPACE
from quickdata_lib.services import ServiceContainer
from tests.helpers import register_service_on_client


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def store(scheduler):
    return create_store(Config(storage_backend='memory'), scheduler=scheduler)


@pytest.fixture
def client(store):
    app = create_app(Config(storage_backend='memory'), store=store)
    with TestClient(app) as c:
        yield c


def test_put_then_get_int(client, scheduler, store):
    r = client.put('/api/quickdata/int/a_b_c', json={'value': 42})
    assert r.status_code == 200
    assert r.json() == {'kind': 'int', 'key': 'a_b_c', 'status': 'found', 'value': 42}
    assert scheduler.pending == 1

    r = client.get('/api/quickdata/int/a_b_c')
    assert r.status_code == 200
    assert r.json()['value'] == 42
    assert store.get_int('a_b_c', -1) == 42


def test_get_missing_is_404(client):
    r = client.get('/api/quickdata/string/missing')
    assert r.status_code == 404
    assert r.json()['detail']['error'] == 'not_found'


def test_unknown_kind_is_404(client):
    r = client.get('/api/quickdata/decimal/x')
    assert r.status_code == 404
    assert r.json()['detail']['error'] == 'unknown_kind'


@pytest.mark.parametrize('kind, value', [
    ('int', 'forty-two'),
    ('int', 2 ** 40),
    ('bool', 1),
    ('string', 5),
])
def test_invalid_value_is_422(client, kind, value):
    r = client.put(f'/api/quickdata/{kind}/k', json={'value': value})
    assert r.status_code == 422
    assert r.json()['detail']['error'] == 'invalid_value'


def test_list_keys_per_kind(client):
    client.put('/api/quickdata/bool/b', json={'value': True})
    client.put('/api/quickdata/bool/a', json={'value': False})
    client.put('/api/quickdata/double/a', json={'value': 1.5})
    r = client.get('/api/quickdata/bool')
    assert r.json() == {'kind': 'bool', 'keys': ['a', 'b']}


def test_info_plain_and_encrypted(client, store):
    client.put('/api/quickdata/string/name', json={'value': 'Zoë'})
    plain = client.get('/api/quickdata/info', params={'decrypt': 'true'}).json()['info']
    assert json.loads(plain)['allString'] == {'name': 'Zoë'}
    encrypted = client.get('/api/quickdata/info').json()['info']
    assert store.serializer.decrypt(encrypted) == plain


def test_health_reports_store(client, store):
    r = client.get('/api/health')
    assert r.status_code == 200
    body = r.json()
    assert body['status'] == 'ok'
    assert body['store_path'] == store.path
    assert body['save_queued'] is False


def test_shutdown_flushes_pending_changes(store, scheduler):
    app = create_app(Config(storage_backend='memory'), store=store)
    with TestClient(app) as c:
        c.put('/api/quickdata/long/big', json={'value': 2 ** 40})
        assert store.storage.write_count == 0
    assert store.storage.write_count == 1
    saved = json.loads(store.serializer.decrypt(store.storage.load(NAMESPACE, store.name)))
    assert saved['allLong'] == {'big': 2 ** 40}


def test_health_resolves_store_from_container(client):
    class FakeStore:
        path = 'fake://store'
        save_queued = True
        load_error = None

    register_service_on_client(client, 'quickdata_store', FakeStore())
    body = client.get('/api/health').json()
    assert body['store_path'] == 'fake://store'
    assert body['save_queued'] is True


def test_unregistered_store_is_500(client):
    client.app.state.container = ServiceContainer()
    r = client.get('/api/quickdata/int/a')
    assert r.status_code == 500


def test_create_app_builds_store_from_config(tmp_path):
    cfg = Config(data_dir=str(tmp_path), scheduler='manual', store_name='AppData')
    app = create_app(cfg)
    with TestClient(app) as c:
        r = c.put('/api/quickdata/float/volume', json={'value': 0.5})
        assert r.status_code == 200
    # flushed on shutdown
    assert (tmp_path / 'QuickData' / 'AppData').read_text(encoding='utf-8') != ''
