import io

from conftest import auth_headers


def test_get_own_profile(client, alice):
    resp = client.get('/api/profile/me', headers=auth_headers(alice))
    assert resp.status_code == 200
    user = resp.get_json()['user']
    assert user['id'] == str(alice['_id'])
    assert user['classOf'] == '2015'
    assert 'password' not in user
    assert 'verificationCode' not in user


def test_update_profile_fields(client, alice):
    resp = client.post('/api/profile/update', json={'bio': 'Engineer', 'favoriteTeacher': 'Mr. Omondi'},
                       headers=auth_headers(alice))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['message'] == 'Profile updated successfully'
    assert body['user']['bio'] == 'Engineer'
    assert body['user']['favoriteTeacher'] == 'Mr. Omondi'


def test_update_profile_without_changes(client, alice):
    resp = client.post('/api/profile/update', json={}, headers=auth_headers(alice))
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'No changes to update'


def test_update_profile_rejects_bad_class_of(client, alice):
    resp = client.post('/api/profile/update', json={'classOf': 'twenty'}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert 'classOf' in resp.get_json()['errors']


def test_update_profile_picture_upload(client, alice):
    data = {'profilePicture': (io.BytesIO(b'img'), 'me.jpg', 'image/jpeg'), 'hobby': 'Chess'}
    resp = client.post('/api/profile/update', data=data, content_type='multipart/form-data',
                       headers=auth_headers(alice))
    assert resp.status_code == 200
    user = resp.get_json()['user']
    assert user['profilePicture'].startswith('/uploads/')
    assert user['hobby'] == 'Chess'


def test_profile_picture_must_be_image(client, alice):
    data = {'profilePicture': (io.BytesIO(b'%PDF'), 'cv.pdf', 'application/pdf')}
    resp = client.post('/api/profile/update', data=data, content_type='multipart/form-data',
                       headers=auth_headers(alice))
    assert resp.status_code == 400


def test_search_directory(client, alice, bob, carol, make_user):
    make_user('ghost', name='Alice Ghost', verified=False)

    resp = client.get('/api/users/search?q=ALI', headers=auth_headers(bob))
    assert [u['username'] for u in resp.get_json()['users']] == ['alice']

    resp = client.get('/api/users/search?classOf=2016&clan=Red', headers=auth_headers(alice))
    assert [u['username'] for u in resp.get_json()['users']] == ['bob']

    resp = client.get('/api/users/search', headers=auth_headers(alice))
    assert [u['name'] for u in resp.get_json()['users']] == ['Alice Wanjiru', 'Bob Otieno', 'Carol Achieng']


def test_search_treats_query_literally(client, alice):
    resp = client.get('/api/users/search?q=.*', headers=auth_headers(alice))
    assert resp.get_json()['users'] == []


def test_public_profile_by_username(client, alice, bob, make_user):
    make_user('pending', verified=False)

    resp = client.get('/api/users/bob', headers=auth_headers(alice))
    assert resp.status_code == 200
    assert resp.get_json()['user']['name'] == 'Bob Otieno'

    assert client.get('/api/users/pending', headers=auth_headers(alice)).status_code == 404
    assert client.get('/api/users/nobody', headers=auth_headers(alice)).status_code == 404
