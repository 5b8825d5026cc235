import os

# Fast hashing and the development config for the whole test session
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ.setdefault('APP_ENV', 'test')
os.environ.pop('SENDGRID_API_KEY', None)

import mongomock
import pytest

from alumni_server.security.authentication import AuthSecurity
from alumni_server.utils.security import hash_password
from alumni_server.utils.time_utils import utc_now
from server import create_app

PASSWORD = 'password123'


@pytest.fixture
def db():
    return mongomock.MongoClient().alumni_test


@pytest.fixture
def app(db, tmp_path):
    app = create_app(db=db, UPLOAD_DIR=str(tmp_path / 'uploads'), TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socketio(app):
    return app.extensions['socketio']


@pytest.fixture
def repos(app):
    return app.extensions['alumni_repositories']


@pytest.fixture
def services(app):
    return app.extensions['alumni_services']


@pytest.fixture
def make_user(repos):
    """Insert a user directly, verified by default."""
    def _make(username, name=None, verified=True, class_of='2015', clan='Blue', **extra):
        doc = {
            'name': name or username.capitalize(),
            'username': username,
            'email': f'{username}@example.com',
            'password': hash_password(PASSWORD),
            'class_of': class_of,
            'clan': clan,
            'profile_picture': None,
            'cover_photo': None,
            'bio': None,
            'favorite_teacher': None,
            'hobby': None,
            'is_verified': verified,
            'verification_code': None if verified else '123456',
            'reset_code': None,
            'reset_code_expires': None,
            'created_at': utc_now(),
        }
        doc.update(extra)
        doc['_id'] = repos.user.create(doc)
        return doc
    return _make


def token_for(user):
    return AuthSecurity.create_access_token(user)


def auth_headers(user):
    return {'Authorization': f'Bearer {token_for(user)}'}


def unread_count(repos, reader_id, sender_id):
    query = {'sender_id': sender_id, 'receiver_id': reader_id, 'read_at': None}
    return repos.message.collection.count_documents(query)


@pytest.fixture
def alice(make_user):
    return make_user('alice', name='Alice Wanjiru')


@pytest.fixture
def bob(make_user):
    return make_user('bob', name='Bob Otieno', class_of='2016', clan='Red')


@pytest.fixture
def carol(make_user):
    return make_user('carol', name='Carol Achieng')
