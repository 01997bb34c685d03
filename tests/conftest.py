import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flashlearn_app import create_app, db
from flashlearn_app.core.config import Config

PASSWORD = 'Secret123!'


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    AUTH_REQUIRE_EMAIL_VERIFICATION = False
    DEFAULT_ADMIN_PASSWORD = None
    LOG_LEVEL = 'DEBUG'


@pytest.fixture
def app():
    # No app context is held open while tests run: Flask-Login caches the
    # resolved user on ``g``, which lives as long as the app context does.
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def register_user(client):
    def _register(username='alice', email=None, password=PASSWORD, **extra):
        payload = {
            'username': username,
            'email': email or f'{username}@example.com',
            'password': password,
        }
        payload.update(extra)
        return client.post('/api/auth/register', json=payload)

    return _register


@pytest.fixture
def user_token(register_user):
    response = register_user()
    assert response.status_code == 201
    return response.get_json()['data']['token']


@pytest.fixture
def auth_headers(user_token):
    return bearer(user_token)


@pytest.fixture
def admin_headers(app):
    from flashlearn_app.models import User
    from flashlearn_app.modules.auth.services import TokenService

    with app.app_context():
        admin = User(username='root', email='root@example.com', user_role=User.ROLE_ADMIN, is_email_verified=True)
        admin.set_password(PASSWORD)
        db.session.add(admin)
        db.session.commit()
        return bearer(TokenService.issue_token(admin))
