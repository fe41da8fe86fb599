import pytest

from minicms import create_app
from minicms.config import TestConfig


@pytest.fixture()
def app():
    return create_app(TestConfig)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(client):
    r = client.post('/api/login', json={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 200
    return client


@pytest.fixture()
def make_post(admin_client):
    """Create a post through the admin API and return the stored item."""
    def _make(**fields):
        payload = {'title': 'Titel', 'post_date': '2024-01-01', 'body': 'Text'}
        payload.update(fields)
        r = admin_client.post('/api/posts', json=payload)
        assert r.status_code == 200, r.get_json()
        return r.get_json()['item']
    return _make
