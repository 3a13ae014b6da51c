"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile
from datetime import timedelta

from flask.testing import FlaskClient

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'rosegarden_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH

MANAGER_PASSWORD = 'Manager123'
STAFF_PASSWORD = 'Staff1234'


class RequestContextClient(FlaskClient):
    """
    Test client that runs each request in its own app context.
    The fixture context stays open for model-level calls, so without this
    every request would share its g (cached login user, event outcomes).
    """

    def open(self, *args, **kwargs):
        with self.application.app_context():
            return super().open(*args, **kwargs)


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database after all tests
    for suffix in ('', '-wal', '-shm'):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app():
    """Create test application with a freshly initialized database."""
    from app import create_app
    from database import init_db

    os.environ['DATABASE_PATH'] = TEST_DB_PATH

    app = create_app('test')
    app.test_client_class = RequestContextClient
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def manager_user(app):
    """Active manager account; returns its user ID."""
    from models.user import create_user

    return create_user(
        username='manager',
        email='manager@rosegarden.test',
        password=MANAGER_PASSWORD,
        full_name='Ama Mensah',
        role='manager',
        created_by='test'
    )


@pytest.fixture
def staff_user(app):
    """Staff account with the default staff permissions; returns its user ID."""
    from models.user import create_user

    return create_user(
        username='staff',
        email='staff@rosegarden.test',
        password=STAFF_PASSWORD,
        full_name='Kofi Boateng',
        role='staff',
        created_by='test'
    )


def login(client, username, password):
    return client.post('/auth/login', json={'username': username, 'password': password})


@pytest.fixture
def manager_client(client, manager_user):
    """Test client signed in as the manager."""
    response = login(client, 'manager', MANAGER_PASSWORD)
    assert response.status_code == 200
    return client


@pytest.fixture
def staff_client(app, staff_user):
    """Separate test client signed in as staff."""
    client = app.test_client()
    response = login(client, 'staff', STAFF_PASSWORD)
    assert response.status_code == 200
    return client


@pytest.fixture
def tomorrow(app):
    """Tomorrow's date (YYYY-MM-DD) in the configured timezone."""
    from utils.datetime_helpers import get_today

    return (get_today() + timedelta(days=1)).isoformat()


@pytest.fixture
def reservation_data(tomorrow):
    """Valid public submission for tomorrow at 19:00."""
    return {
        'customer_name': 'Efua Owusu',
        'email': 'efua@example.com',
        'phone': '0244 123 4567',
        'date': tomorrow,
        'time': '19:00',
        'party_size': 4,
        'special_requests': 'Window table please',
        'communication_preference': 'email',
    }


@pytest.fixture
def pending_reservation(app, reservation_data):
    """A pending reservation created through the model."""
    from models.reservation import create_reservation

    return create_reservation(reservation_data)


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text

    def json(self):
        return self._payload


@pytest.fixture
def fake_post(monkeypatch):
    """
    Replace requests.post used by HTTP adapters.
    Records every call; set fake_post.response (built with
    fake_post.reply(status_code, payload)) to change the answer.
    """
    calls = []

    def _post(url, **kwargs):
        calls.append({'url': url, **kwargs})
        return _post.response

    _post.calls = calls
    _post.reply = FakeResponse
    _post.response = FakeResponse(201)
    monkeypatch.setattr('notifications.base.requests.post', _post)
    return _post
