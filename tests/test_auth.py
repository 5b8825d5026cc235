from datetime import timedelta

import pytest

from alumni_server.security.authentication import AuthSecurity
from alumni_server.utils.time_utils import utc_now
from conftest import PASSWORD

REGISTRATION = {
    'name': 'Dan Kamau',
    'username': 'dan',
    'email': 'Dan@Example.com',
    'password': 'supersecret',
    'classOf': '2012',
    'clan': 'Green',
}


@pytest.fixture
def registered(client, repos):
    resp = client.post('/api/auth/register', json=REGISTRATION)
    assert resp.status_code == 201
    return repos.user.get_by_email('dan@example.com')


def test_register_stores_hash_and_sends_code(client, repos, services, registered):
    assert registered['password'] != REGISTRATION['password']
    assert registered['is_verified'] is False
    assert len(registered['verification_code']) == 6
    outbox = services['email'].outbox
    assert outbox[-1]['to'] == 'dan@example.com'
    assert registered['verification_code'] in outbox[-1]['html']


def test_register_rejects_duplicates(client, registered):
    resp = client.post('/api/auth/register', json=REGISTRATION)
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'User already exists with this email'

    resp = client.post('/api/auth/register', json={**REGISTRATION, 'email': 'other@example.com'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Username already taken'


def test_register_validates_fields(client):
    resp = client.post('/api/auth/register', json={**REGISTRATION, 'password': 'short', 'classOf': '12'})
    assert resp.status_code == 400
    errors = resp.get_json()['errors']
    assert set(errors) == {'password', 'classOf'}


def test_login_requires_verification(client, registered):
    resp = client.post('/api/auth/login', json={'identifier': 'dan', 'password': 'supersecret'})
    assert resp.status_code == 401
    assert resp.get_json()['error'] == 'Please verify your email first'


def test_verify_email_returns_token(client, registered):
    wrong_code = '111111' if registered['verification_code'] == '000000' else '000000'
    resp = client.post('/api/auth/verify-email', json={'email': 'dan@example.com', 'code': wrong_code})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Invalid verification code'

    resp = client.post('/api/auth/verify-email',
                       json={'email': 'dan@example.com', 'code': registered['verification_code']})
    assert resp.status_code == 200
    body = resp.get_json()
    payload = AuthSecurity.decode_token(body['token'])
    assert payload['user_id'] == str(registered['_id'])
    assert payload['type'] == 'access'
    assert body['user']['isVerified'] is True
    assert 'password' not in body['user']


def test_resend_code(client, repos, registered):
    resp = client.post('/api/auth/resend-code', json={'email': 'nobody@example.com'})
    assert resp.status_code == 404

    resp = client.post('/api/auth/resend-code', json={'email': 'dan@example.com'})
    assert resp.status_code == 200

    repos.user.update({'_id': registered['_id']}, {'is_verified': True})
    resp = client.post('/api/auth/resend-code', json={'email': 'dan@example.com'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Email is already verified'


def test_login_with_email_or_username(client, alice):
    for identifier in ('alice', 'alice@example.com'):
        resp = client.post('/api/auth/login', json={'identifier': identifier, 'password': PASSWORD})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['user']['username'] == 'alice'
        assert AuthSecurity.decode_token(body['token'])['user_id'] == str(alice['_id'])


def test_login_bad_credentials(client, alice):
    resp = client.post('/api/auth/login', json={'identifier': 'alice', 'password': 'wrong-password'})
    assert resp.status_code == 401
    assert resp.get_json()['error'] == 'Invalid credentials'
    resp = client.post('/api/auth/login', json={'identifier': 'ghost', 'password': PASSWORD})
    assert resp.status_code == 401


def test_forgot_and_reset_password(client, repos, alice):
    resp = client.post('/api/auth/forgot-password', json={'email': 'ghost@example.com'})
    assert resp.status_code == 404

    resp = client.post('/api/auth/forgot-password', json={'email': 'alice@example.com'})
    assert resp.status_code == 200
    code = repos.user.get_by_id(alice['_id'])['reset_code']

    resp = client.post('/api/auth/reset-password',
                       json={'email': 'alice@example.com', 'code': code, 'newPassword': 'brand-new-pass'})
    assert resp.status_code == 200
    assert repos.user.get_by_id(alice['_id'])['reset_code'] is None

    resp = client.post('/api/auth/login', json={'identifier': 'alice', 'password': 'brand-new-pass'})
    assert resp.status_code == 200
    # the code is single use
    resp = client.post('/api/auth/reset-password',
                       json={'email': 'alice@example.com', 'code': code, 'newPassword': 'another-pass'})
    assert resp.status_code == 400


def test_expired_reset_code_is_rejected(client, repos, alice):
    repos.user.set_reset_code(alice['_id'], '654321', utc_now() - timedelta(minutes=1))
    resp = client.post('/api/auth/reset-password',
                       json={'email': 'alice@example.com', 'code': '654321', 'newPassword': 'brand-new-pass'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Invalid or expired reset code'
