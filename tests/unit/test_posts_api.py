import json

from bson import ObjectId
from fastapi.testclient import TestClient

from postdir_lib.main import create_app, Config
from postdir_lib.storage.base import StorageError
from tests.helpers import RecordingStore, TrackingCursor, make_doc, register_service_on_client


def _lines(r):
    return [json.loads(line) for line in r.text.splitlines() if line.strip()]


def test_stream_all_posts(client, store):
    a = store.insert_one(make_doc('u1', 'A', 'a'))
    b = store.insert_one(make_doc('u2', 'B', 'b'))
    r = client.get('/api/posts')
    assert r.status_code == 200
    assert r.headers['content-type'].startswith('application/x-ndjson')
    items = _lines(r)
    assert {p['id'] for p in items} == {str(a), str(b)}
    assert all(set(p) == {'id', 'owner_id', 'title', 'body'} for p in items)


def test_stream_empty(client):
    r = client.get('/api/posts')
    assert r.status_code == 200
    assert r.text == ''


def test_stream_open_failure_is_500(client, store, monkeypatch):
    def boom():
        raise StorageError('no primary')

    monkeypatch.setattr(store, 'find_all', boom)
    r = client.get('/api/posts')
    assert r.status_code == 500
    assert r.json()['error'] == 'internal'


def test_stream_decode_failure_terminates_with_error_line(tmp_path):
    rstore = RecordingStore()
    cursor = TrackingCursor([make_doc('u1'), {'_id': ObjectId(), 'user_id': None}, make_doc('u3')])
    rstore.next_cursor = cursor
    app = create_app(Config(config_path=str(tmp_path / 'none.yml'), store=rstore))
    with TestClient(app) as c:
        r = c.get('/api/posts')
    assert r.status_code == 200
    items = _lines(r)
    assert len(items) == 2
    assert items[0]['owner_id'] == 'u1'
    assert items[1]['error'] == 'internal'
    assert cursor.close_calls == 1


def test_read_post(client, store):
    oid = store.insert_one(make_doc('u1', 'hello', 'world'))
    r = client.get(f'/api/posts/{oid}')
    assert r.status_code == 200
    assert r.json() == {'id': str(oid), 'owner_id': 'u1', 'title': 'hello', 'body': 'world'}


def test_read_invalid_id_is_400_without_store_access(tmp_path):
    rstore = RecordingStore()
    app = create_app(Config(config_path=str(tmp_path / 'none.yml'), store=rstore))
    with TestClient(app) as c:
        r = c.get('/api/posts/not-a-valid-id')
    assert r.status_code == 400
    assert r.json() == {'error': 'invalid_argument', 'message': 'Cannot parse ID'}
    assert rstore.calls == []


def test_read_absent_is_404(client):
    r = client.get(f'/api/posts/{ObjectId()}')
    assert r.status_code == 404
    assert r.json()['error'] == 'not_found'


def test_update_then_read(client, store):
    oid = store.insert_one(make_doc('u1', 'old', 'old'))
    r = client.put(f'/api/posts/{oid}', json={'owner_id': 'u9', 'title': 't', 'body': 'b'})
    assert r.status_code == 200
    assert r.json() == {'id': str(oid), 'owner_id': 'u9', 'title': 't', 'body': 'b'}
    assert client.get(f'/api/posts/{oid}').json()['owner_id'] == 'u9'


def test_update_errors(client):
    body = {'owner_id': 'u', 'title': 't', 'body': 'b'}
    assert client.put('/api/posts/bad', json=body).status_code == 400
    assert client.put(f'/api/posts/{ObjectId()}', json=body).status_code == 404
    # Missing fields are rejected by request validation
    assert client.put(f'/api/posts/{ObjectId()}', json={'title': 't'}).status_code == 422


def test_delete_twice(client, store):
    oid = store.insert_one(make_doc('u1'))
    r = client.delete(f'/api/posts/{oid}')
    assert r.status_code == 200
    assert r.json() == {'post_id': str(oid)}
    r2 = client.delete(f'/api/posts/{oid}')
    assert r2.status_code == 404
    assert client.get(f'/api/posts/{oid}').status_code == 404


def test_delete_invalid_id(client):
    r = client.delete('/api/posts/123')
    assert r.status_code == 400


def test_delete_store_failure_is_500(client, store, monkeypatch):
    def boom(oid):
        raise StorageError('down')

    monkeypatch.setattr(store, 'delete_one', boom)
    r = client.delete(f'/api/posts/{ObjectId()}')
    assert r.status_code == 500
    assert r.json()['error'] == 'internal'


def test_routes_resolve_service_from_container(client):
    class FakePostSvc:
        def read_post(self, post_id):
            return {'id': post_id, 'owner_id': 'fake', 'title': '', 'body': ''}

    register_service_on_client(client, 'post_service', FakePostSvc())
    oid = str(ObjectId())
    r = client.get(f'/api/posts/{oid}')
    assert r.json()['owner_id'] == 'fake'


def test_missing_service_is_500(client):
    del client.app.state.container._singletons['post_service']
    c = TestClient(client.app, raise_server_exceptions=False)
    r = c.get(f'/api/posts/{ObjectId()}')
    assert r.status_code == 500
    assert r.json() == {'error': 'internal', 'message': "Service 'post_service' not configured"}


def test_client_disconnect_releases_cursor(tmp_path):
    import anyio

    rstore = RecordingStore()
    cursor = TrackingCursor([make_doc('u1'), make_doc('u2'), make_doc('u3')])
    rstore.next_cursor = cursor
    app = create_app(Config(config_path=str(tmp_path / 'none.yml'), store=rstore))
    sent = []

    scope = {
        'type': 'http',
        'asgi': {'version': '3.0', 'spec_version': '2.3'},
        'http_version': '1.1',
        'method': 'GET',
        'scheme': 'http',
        'path': '/api/posts',
        'raw_path': b'/api/posts',
        'root_path': '',
        'query_string': b'',
        'headers': [(b'host', b'testserver')],
        'client': ('testclient', 50000),
        'server': ('testserver', 80),
    }

    async def receive():
        # The client has already gone away
        return {'type': 'http.disconnect'}

    async def send(message):
        sent.append(message)

    anyio.run(app, scope, receive, send)

    assert rstore.calls == ['find_all']
    assert cursor.close_calls == 1
