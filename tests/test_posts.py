from contextlib import contextmanager

import pytest
from sqlalchemy import delete, event
from sqlalchemy.exc import OperationalError

import minicms.admin.routes as admin_routes
import minicms.services.posts as post_storage
from minicms.extensions import db
from minicms.models import Post


@contextmanager
def posts_statements(app):
    """Collect every SQL statement touching the posts table."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if 'posts' in statement:
            statements.append(statement)

    with app.app_context():
        engine = db.engine
    event.listen(engine, 'before_cursor_execute', record)
    try:
        yield statements
    finally:
        event.remove(engine, 'before_cursor_execute', record)


def test_admin_routes_require_session(client):
    for method, path in [
        ('get', '/api/posts'),
        ('get', '/api/posts/1'),
        ('post', '/api/posts'),
        ('put', '/api/posts/1'),
        ('delete', '/api/posts/1'),
        ('post', '/api/posts/1/publish'),
    ]:
        r = getattr(client, method)(path, json={})
        assert r.status_code == 401, path
        assert r.get_json() == {'ok': False, 'error': 'Unauthorized'}


def test_protected_handler_is_not_invoked_without_session(client, monkeypatch):
    calls = []
    monkeypatch.setattr(admin_routes, 'list_posts', lambda: calls.append(1) or [])

    assert client.get('/api/posts').status_code == 401
    assert calls == []


def test_login_list_and_delete_missing(client):
    r = client.post('/api/login', json={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 200
    assert r.get_json() == {'ok': True, 'user': {'username': 'admin', 'role': 'admin'}}

    r = client.get('/api/posts')
    assert r.status_code == 200
    assert r.get_json() == {'ok': True, 'items': []}

    r = client.delete('/api/posts/999999')
    assert r.status_code == 404
    assert r.get_json() == {'ok': False, 'error': 'Nicht gefunden'}


def test_create_then_fetch(admin_client):
    payload = {
        'title': 'Erster Eintrag',
        'category': 'Allgemein',
        'post_date': '2024-05-17',
        'body': 'Hallo Welt',
        'status': 'published',
    }
    r = admin_client.post('/api/posts', json=payload)
    assert r.status_code == 200
    created = r.get_json()['item']

    assert isinstance(created['id'], int) and created['id'] > 0
    assert created['created_at'] == created['updated_at']
    for key, value in payload.items():
        assert created[key] == value

    r = admin_client.get(f"/api/posts/{created['id']}")
    assert r.status_code == 200
    assert r.get_json() == {'ok': True, 'item': created}


def test_create_normalizes_fields(make_post):
    item = make_post(title='  Titel  ', category=None, body=' Text ', status='archived')
    assert item['title'] == 'Titel'
    assert item['category'] == ''
    assert item['body'] == 'Text'
    assert item['status'] == 'draft'


def test_create_defaults_to_draft(make_post):
    item = make_post()
    assert item['status'] == 'draft'


def test_create_with_empty_title(admin_client):
    r = admin_client.post('/api/posts', json={'title': '', 'post_date': '2024-01-01', 'body': 'x'})
    assert r.status_code == 400
    assert r.get_json() == {'ok': False, 'error': 'Titel fehlt', 'field': 'title'}
    assert admin_client.get('/api/posts').get_json()['items'] == []


def test_create_with_missing_body(admin_client):
    r = admin_client.post('/api/posts', json={'title': 'a', 'post_date': '2024-01-01'})
    assert r.status_code == 400
    assert r.get_json()['field'] == 'body'


def test_create_with_invalid_date(admin_client):
    r = admin_client.post('/api/posts', json={'title': 'a', 'post_date': '17.05.2024', 'body': 'x'})
    assert r.status_code == 400
    assert r.get_json()['ok'] is False
    assert '17.05.2024' in r.get_json()['error']


@pytest.mark.parametrize('raw', ['abc', '0', '-1', '1.5', '1e3', '١', '٣٤', '²'])
def test_invalid_id_does_not_touch_storage(admin_client, monkeypatch, raw):
    calls = []
    monkeypatch.setattr(admin_routes, 'get_post', lambda *a, **kw: calls.append(a))
    monkeypatch.setattr(admin_routes, 'delete_post', lambda *a, **kw: calls.append(a))
    monkeypatch.setattr(admin_routes, 'update_post', lambda *a, **kw: calls.append(a))

    for method in ('get', 'delete', 'put'):
        r = getattr(admin_client, method)(f'/api/posts/{raw}', json={'title': 'a', 'post_date': '2024-01-01', 'body': 'b'})
        assert r.status_code == 400
        assert r.get_json() == {'ok': False, 'error': 'Ungültige ID'}
    assert calls == []


def test_get_missing_post(admin_client):
    r = admin_client.get('/api/posts/42')
    assert r.status_code == 404
    assert r.get_json() == {'ok': False, 'error': 'Nicht gefunden'}


def test_admin_sees_drafts(admin_client, make_post):
    draft = make_post(status='draft')
    r = admin_client.get(f"/api/posts/{draft['id']}")
    assert r.status_code == 200
    assert r.get_json()['item']['status'] == 'draft'


def test_update_replaces_all_fields(admin_client, make_post):
    original = make_post(title='Alt', category='A', post_date='2024-01-01', body='alt')
    payload = {'title': 'Neu', 'category': '', 'post_date': '2024-02-02', 'body': 'neu', 'status': 'published'}

    r = admin_client.put(f"/api/posts/{original['id']}", json=payload)
    assert r.status_code == 200
    updated = r.get_json()['item']

    assert updated['id'] == original['id']
    assert updated['created_at'] == original['created_at']
    assert updated['updated_at'] != original['updated_at']
    for key, value in payload.items():
        assert updated[key] == value

    assert admin_client.get(f"/api/posts/{original['id']}").get_json()['item'] == updated


def test_repeated_update_is_idempotent(admin_client, make_post):
    post = make_post()
    payload = {'title': 'Gleich', 'category': 'x', 'post_date': '2024-03-03', 'body': 'gleich', 'status': 'published'}

    first = admin_client.put(f"/api/posts/{post['id']}", json=payload).get_json()['item']
    second = admin_client.put(f"/api/posts/{post['id']}", json=payload).get_json()['item']

    fields = ('id', 'title', 'category', 'post_date', 'body', 'status', 'created_at')
    assert {k: first[k] for k in fields} == {k: second[k] for k in fields}
    assert second['updated_at'] >= first['updated_at']


def test_update_requires_every_field(admin_client, make_post):
    post = make_post(title='Bleibt', body='bleibt')

    r = admin_client.put(f"/api/posts/{post['id']}", json={'title': 'Nur Titel'})
    assert r.status_code == 400
    assert r.get_json()['field'] == 'post_date'

    stored = admin_client.get(f"/api/posts/{post['id']}").get_json()['item']
    assert stored == post


def test_update_missing_post(admin_client):
    r = admin_client.put('/api/posts/999', json={'title': 'a', 'post_date': '2024-01-01', 'body': 'b'})
    assert r.status_code == 404
    assert r.get_json() == {'ok': False, 'error': 'Nicht gefunden'}


def test_update_coerces_status(admin_client, make_post):
    post = make_post(status='published')
    r = admin_client.put(
        f"/api/posts/{post['id']}",
        json={'title': 'a', 'post_date': '2024-01-01', 'body': 'b', 'status': 'hidden'},
    )
    assert r.get_json()['item']['status'] == 'draft'


def test_delete_post(admin_client, make_post):
    post = make_post()
    r = admin_client.delete(f"/api/posts/{post['id']}")
    assert r.status_code == 200
    assert r.get_json() == {'ok': True, 'deletedId': post['id']}

    assert admin_client.get(f"/api/posts/{post['id']}").status_code == 404
    assert admin_client.delete(f"/api/posts/{post['id']}").status_code == 404


def test_publish_post(admin_client, make_post):
    post = make_post(status='draft')
    r = admin_client.post(f"/api/posts/{post['id']}/publish")
    assert r.status_code == 200
    item = r.get_json()['item']
    assert item['status'] == 'published'
    assert item['title'] == post['title']
    assert item['updated_at'] != post['updated_at']

    assert admin_client.post('/api/posts/999/publish').status_code == 404
    assert admin_client.post('/api/posts/x/publish').status_code == 400


def test_listing_order(admin_client, make_post):
    a = make_post(title='a', post_date='2024-01-01')
    b = make_post(title='b', post_date='2024-03-01')
    c = make_post(title='c', post_date='2024-01-01')
    d = make_post(title='d', post_date='2023-12-31', status='published')

    items = admin_client.get('/api/posts').get_json()['items']
    assert [i['id'] for i in items] == [b['id'], c['id'], a['id'], d['id']]
    assert all('status' in i for i in items)


def test_storage_failure_is_server_error(admin_client, monkeypatch):
    def broken(query):
        raise OperationalError('SELECT', {}, Exception('connection refused'))

    monkeypatch.setattr(post_storage, '_ordered', broken)

    r = admin_client.get('/api/posts')
    assert r.status_code == 500
    assert r.get_json() == {'ok': False, 'error': 'connection refused'}


def test_write_is_a_single_statement(app, admin_client):
    with posts_statements(app) as statements:
        r = admin_client.post('/api/posts', json={'title': 'T', 'post_date': '2024-01-01', 'body': 'B'})
    assert r.status_code == 200
    assert len(statements) == 1
    assert statements[0].lstrip().upper().startswith('INSERT')

    post_id = r.get_json()['item']['id']
    payload = {'title': 'Neu', 'post_date': '2024-02-02', 'body': 'neu', 'status': 'published'}
    with posts_statements(app) as statements:
        r = admin_client.put(f'/api/posts/{post_id}', json=payload)
    assert r.status_code == 200
    assert len(statements) == 1
    assert statements[0].lstrip().upper().startswith('UPDATE')
    assert 'RETURNING' in statements[0].upper()


def test_update_response_survives_concurrent_delete(admin_client, make_post, monkeypatch):
    post = make_post(title='Alt')
    real_update = admin_routes.update_post

    def update_then_vanish(post_id, data):
        updated = real_update(post_id, data)
        db.session.execute(
            delete(Post).where(Post.id == post_id).execution_options(synchronize_session=False)
        )
        db.session.commit()
        return updated

    monkeypatch.setattr(admin_routes, 'update_post', update_then_vanish)

    payload = {'title': 'Neu', 'post_date': '2024-02-02', 'body': 'neu', 'status': 'draft'}
    r = admin_client.put(f"/api/posts/{post['id']}", json=payload)
    assert r.status_code == 200
    item = r.get_json()['item']
    assert item['id'] == post['id']
    assert item['title'] == 'Neu'
    assert item['created_at'] == post['created_at']

    assert admin_client.get(f"/api/posts/{post['id']}").status_code == 404
