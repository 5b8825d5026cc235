import io

import pytest

from conftest import auth_headers


@pytest.fixture
def post(client, alice):
    resp = client.post('/api/posts', json={'content': 'Reunion on Saturday!'}, headers=auth_headers(alice))
    assert resp.status_code == 201
    return resp.get_json()['post']


def test_create_post(post, alice):
    assert post['content'] == 'Reunion on Saturday!'
    assert post['user']['username'] == 'alice'
    assert post['reactions'] == []
    assert post['comments'] == []


def test_create_post_requires_content_or_media(client, repos, alice):
    resp = client.post('/api/posts', json={'content': '  '}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert repos.post.find({}) == []


@pytest.mark.parametrize('content', [5, ['text'], True])
def test_create_post_rejects_non_text_content(client, repos, alice, content):
    resp = client.post('/api/posts', json={'content': content}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == {'content': 'content must be a string'}
    assert repos.post.find({}) == []


def test_create_post_with_media(client, alice):
    data = {'media': (io.BytesIO(b'video bytes'), 'clip.mp4', 'video/mp4')}
    resp = client.post('/api/posts', data=data, content_type='multipart/form-data', headers=auth_headers(alice))
    assert resp.status_code == 201
    post = resp.get_json()['post']
    assert post['mediaType'] == 'video'
    assert post['fileName'] == 'clip.mp4'


def test_feed_is_newest_first(client, alice, bob, post):
    client.post('/api/posts', json={'content': 'Second'}, headers=auth_headers(bob))
    resp = client.get('/api/posts', headers=auth_headers(alice))
    assert [p['content'] for p in resp.get_json()['posts']] == ['Second', 'Reunion on Saturday!']


def test_get_single_post(client, alice, post):
    resp = client.get(f"/api/posts/{post['id']}", headers=auth_headers(alice))
    assert resp.status_code == 200
    assert resp.get_json()['post']['id'] == post['id']
    assert client.get('/api/posts/5f0000000000000000000000', headers=auth_headers(alice)).status_code == 404
    assert client.get('/api/posts/garbage', headers=auth_headers(alice)).status_code == 404


def test_reaction_replaces_previous(client, bob, post):
    url = f"/api/posts/{post['id']}/reactions"
    assert client.post(url, json={'type': 'like'}, headers=auth_headers(bob)).status_code == 201
    resp = client.post(url, json={'type': 'love'}, headers=auth_headers(bob))
    assert resp.status_code == 201
    assert resp.get_json()['reaction']['type'] == 'love'

    reactions = client.get(f"/api/posts/{post['id']}", headers=auth_headers(bob)).get_json()['post']['reactions']
    assert [(r['userId'], r['type']) for r in reactions] == [(str(bob['_id']), 'love')]


def test_invalid_reaction_type(client, bob, post):
    resp = client.post(f"/api/posts/{post['id']}/reactions", json={'type': 'angry'}, headers=auth_headers(bob))
    assert resp.status_code == 400
    assert 'type' in resp.get_json()['errors']


def test_remove_reaction(client, bob, post):
    url = f"/api/posts/{post['id']}/reactions"
    client.post(url, json={'type': 'laugh'}, headers=auth_headers(bob))
    assert client.delete(url, headers=auth_headers(bob)).status_code == 200
    assert client.delete(url, headers=auth_headers(bob)).status_code == 404


def test_comments_are_newest_first(client, alice, bob, post):
    url = f"/api/posts/{post['id']}/comments"
    resp = client.post(url, json={'content': 'Count me in'}, headers=auth_headers(bob))
    assert resp.status_code == 201
    comment = resp.get_json()['comment']
    assert comment['user']['username'] == 'bob'
    client.post(url, json={'content': 'See you there'}, headers=auth_headers(alice))

    comments = client.get(f"/api/posts/{post['id']}", headers=auth_headers(alice)).get_json()['post']['comments']
    assert [c['content'] for c in comments] == ['See you there', 'Count me in']


def test_comment_length_is_limited(client, bob, post):
    resp = client.post(f"/api/posts/{post['id']}/comments", json={'content': 'x' * 501}, headers=auth_headers(bob))
    assert resp.status_code == 400


def test_comment_must_be_text(client, bob, post):
    resp = client.post(f"/api/posts/{post['id']}/comments", json={'content': ['x']}, headers=auth_headers(bob))
    assert resp.status_code == 400
    assert 'content' in resp.get_json()['errors']
