import os

import pytest

os.environ['FLASK_ENV'] = 'testing'

from app import create_app  # noqa: E402
from extensions import db  # noqa: E402
from models import User, Profile  # noqa: E402
from utils.security import hash_password, reset_rate_limits  # noqa: E402


PASSWORD = 'correct-horse-battery'


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config.update(STORAGE_ROOT=str(tmp_path / 'storage'))
    reset_rate_limits()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user directly in the database and return its id"""

    def _make_user(username, role='client', password=PASSWORD):
        with app.app_context():
            user = User(
                username=username,
                email=f'{username}@example.com',
                password_hash=hash_password(password),
                role=role
            )
            db.session.add(user)
            db.session.flush()
            db.session.add(Profile(id=user.id, full_name=username.title(), role=role))
            db.session.commit()
            return user.id

    return _make_user


def login(client, username, password=PASSWORD):
    response = client.post('/auth/login', json={'username': username, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def client_user(app, make_user):
    """A signed-in client as (test client, user id)"""
    user_id = make_user('alice')
    test_client = app.test_client()
    login(test_client, 'alice')
    return test_client, user_id


@pytest.fixture
def owner(app, make_user):
    """A signed-in owner as (test client, user id)"""
    user_id = make_user('owner', role='owner')
    test_client = app.test_client()
    login(test_client, 'owner')
    return test_client, user_id
