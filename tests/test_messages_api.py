import io

import pytest
from pymongo.errors import PyMongoError

from conftest import auth_headers


def test_send_and_fetch_messages(client, alice, bob):
    resp = client.post('/api/messages', json={'receiverId': str(bob['_id']), 'content': 'hi'},
                       headers=auth_headers(alice))
    assert resp.status_code == 201
    message = resp.get_json()['message']
    assert message['content'] == 'hi'
    assert message['senderName'] == 'Alice Wanjiru'

    resp = client.get(f"/api/messages/{alice['_id']}", headers=auth_headers(bob))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['success'] is True
    assert [m['id'] for m in body['messages']] == [message['id']]


def test_conversations_scenario(client, alice, bob):
    client.post('/api/messages', json={'receiverId': str(bob['_id']), 'content': 'hi'},
                headers=auth_headers(alice))

    resp = client.get('/api/conversations', headers=auth_headers(bob))
    assert resp.status_code == 200
    conversations = resp.get_json()['conversations']
    assert conversations[0]['userId'] == str(alice['_id'])
    assert conversations[0]['lastMessage']['content'] == 'hi'
    assert conversations[0]['unreadCount'] == 1


def test_send_without_content_or_media_is_rejected(client, repos, alice, bob):
    resp = client.post('/api/messages', json={'receiverId': str(bob['_id'])}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert resp.get_json()['success'] is False
    assert repos.message.collection.count_documents({}) == 0


def test_send_without_receiver_is_rejected(client, alice):
    resp = client.post('/api/messages', json={'content': 'hi'}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert 'receiverId' in resp.get_json()['errors']


@pytest.mark.parametrize('content', [['hi'], 0, 7, False, True])
def test_send_with_non_text_content_is_rejected(client, repos, alice, bob, content):
    resp = client.post('/api/messages', json={'receiverId': str(bob['_id']), 'content': content},
                       headers=auth_headers(alice))
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == {'content': 'content must be a string'}
    assert repos.message.collection.count_documents({}) == 0


def test_json_media_reference_is_not_an_attachment(client, repos, alice, bob):
    body = {'receiverId': str(bob['_id']), 'mediaUrl': 'javascript:alert(1)', 'mediaType': 'x' * 500}
    resp = client.post('/api/messages', json=body, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert repos.message.collection.count_documents({}) == 0

    body['content'] = 'with text'
    message = client.post('/api/messages', json=body, headers=auth_headers(alice)).get_json()['message']
    assert message['mediaUrl'] is None
    assert message['mediaType'] is None


def test_send_to_unknown_user_is_not_found(client, alice):
    resp = client.post('/api/messages', json={'receiverId': '5f0000000000000000000000', 'content': 'hi'},
                       headers=auth_headers(alice))
    assert resp.status_code == 404


def test_send_with_uploaded_media(client, app, alice, bob):
    data = {
        'receiverId': str(bob['_id']),
        'media': (io.BytesIO(b'\x89PNG fake image'), 'class photo.png', 'image/png'),
    }
    resp = client.post('/api/messages', data=data, content_type='multipart/form-data',
                       headers=auth_headers(alice))
    assert resp.status_code == 201
    message = resp.get_json()['message']
    assert message['content'] is None
    assert message['mediaType'] == 'image'
    assert message['fileName'] == 'class photo.png'
    assert message['mediaUrl'].startswith('/uploads/')

    served = client.get(message['mediaUrl'])
    assert served.status_code == 200
    assert served.data == b'\x89PNG fake image'


def test_mark_read_endpoint(client, alice, bob):
    for text in ('one', 'two'):
        client.post('/api/messages', json={'receiverId': str(alice['_id']), 'content': text},
                    headers=auth_headers(bob))

    resp = client.post(f"/api/messages/{bob['_id']}/read", headers=auth_headers(alice))
    assert resp.status_code == 200
    assert resp.get_json()['count'] == 2

    resp = client.post(f"/api/messages/{bob['_id']}/read", headers=auth_headers(alice))
    assert resp.get_json()['count'] == 0

    inbox = client.get('/api/conversations', headers=auth_headers(alice)).get_json()['conversations']
    assert inbox[0]['unreadCount'] == 0
    history = client.get(f"/api/messages/{bob['_id']}", headers=auth_headers(alice)).get_json()['messages']
    assert all(m['readAt'].endswith('+00:00') for m in history)


def test_messages_require_token(client, bob):
    resp = client.get(f"/api/messages/{bob['_id']}")
    assert resp.status_code == 401
    assert resp.get_json()['error'] == 'Access token required'


def test_invalid_token_is_forbidden(client, bob):
    resp = client.get('/api/conversations', headers={'Authorization': 'Bearer not.a.token'})
    assert resp.status_code == 403


def test_history_with_unknown_user_is_not_found(client, alice):
    resp = client.get('/api/messages/5f0000000000000000000000', headers=auth_headers(alice))
    assert resp.status_code == 404


def test_storage_failure_is_a_server_error(client, repos, alice, monkeypatch):
    def broken_aggregate(*args, **kwargs):
        raise PyMongoError('connection reset')

    monkeypatch.setattr(repos.message.collection, 'aggregate', broken_aggregate)
    resp = client.get('/api/conversations', headers=auth_headers(alice))
    assert resp.status_code == 500
    assert resp.get_json() == {'success': False, 'error': 'Storage error'}
