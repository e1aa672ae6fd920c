import pytest
from portfolio.app_factory import create_app
from portfolio.config import TestingConfig
from portfolio.init_db import db
from portfolio.authentication.views import create_admin_user

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'secret123'


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'test.db'}"

    app = create_app(Config)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(app):
    with app.app_context():
        user = create_admin_user('Admin', ADMIN_EMAIL, ADMIN_PASSWORD)
        return user.id


@pytest.fixture
def token(client, admin):
    response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.get_json()['token']


@pytest.fixture
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def add(app):
    """Insert a row directly and return its id."""
    def _add(row):
        with app.app_context():
            db.session.add(row)
            db.session.commit()
            return row.id
    return _add
