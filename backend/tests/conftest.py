import os
import sys
import pytest

# Ensure the backend root (containing the `animalia` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from animalia import create_app, db
from animalia.services.admin import AdminService

ADMIN_PASSWORD = 'letmein'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ADMIN_PASSWORD = ADMIN_PASSWORD
    PLAY_SAMPLE_SIZE = 10
    START_PAGE_MAX_ROOM = 2
    PUBLIC_MAX_ROOM = 4
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import animalia.models  # noqa: F401
        db.create_all()
    # No app context stays pushed, so each request gets a fresh one
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def admin_client(flask_app):
    test_client = flask_app.test_client()
    res = test_client.post('/admin/login', data={'password': ADMIN_PASSWORD})
    assert res.status_code == 302
    return test_client


@pytest.fixture()
def fetch(flask_app):
    """Read a room or leaderboard back from the database as a dict."""
    def _fetch(model, room_id):
        with flask_app.app_context():
            record = db.session.get(model, room_id)
            return record.to_dict() if record else None
    return _fetch


@pytest.fixture()
def seeded(flask_app):
    """Rooms 1-4 with empty leaderboards; room 3 holds three animals."""
    with flask_app.app_context():
        service = AdminService(db.session)
        for room_id in range(1, 5):
            service.create_room(room_id, f'Szekreny {room_id}')
        service.save_room(3, {'items': [
            {'label': 'A', 'code': 1, 'image_ref': '/img/a.png'},
            {'label': 'B', 'code': 2, 'image_ref': '/img/b.png'},
            {'label': 'C', 'code': 3, 'image_ref': '/img/c.png'},
        ]})
    return flask_app
