import pytest

from trivia.models import ROLE_ADMIN, ROLE_EDITOR


def test_register_and_login(client):
    res = client.post('/api/register', json={'username': 'alice', 'password': 'secret'})
    assert res.status_code == 201
    assert res.get_json()['message'] == 'User created successfully'

    res = client.post('/api/register', json={'username': 'alice', 'password': 'other'})
    assert res.status_code == 400
    assert client.post('/api/register', json={'username': 'bob'}).status_code == 400

    assert client.get('/api/me').status_code == 401
    assert client.post('/api/login', json={'username': 'alice', 'password': 'wrong'}).status_code == 401

    res = client.post('/api/login', json={'username': 'alice', 'password': 'secret'})
    assert res.status_code == 200
    user = client.get('/api/me').get_json()['user']
    assert user['username'] == 'alice'
    assert user['role'] == 'PLAYER'
    assert user['isGuest'] is False
    assert 'alice' in user['image']

    assert client.post('/api/logout').status_code == 200
    assert client.get('/api/me').status_code == 401


def test_guest_login(flask_app, make_user):
    first = flask_app.test_client()
    res = first.post('/api/login/guest', json={'username': 'visitor'})
    assert res.status_code == 201
    assert res.get_json()['user']['isGuest'] is True

    second = flask_app.test_client()
    res = second.post('/api/login/guest', json={'username': 'visitor'})
    assert res.status_code == 200
    # guests have no password to log in with
    assert second.post('/api/login', json={'username': 'visitor', 'password': ''}).status_code == 401

    make_user('registered')
    res = second.post('/api/login/guest', json={'username': 'registered'})
    assert res.status_code == 400
    assert res.get_json() == {'error': 'Username already taken by a registered user.'}
    assert second.post('/api/login/guest', json={}).status_code == 400


def test_players_admin_only(make_user, login, admin):
    make_user('plain')
    assert login('plain').get('/api/players').status_code == 403
    usernames = [u['username'] for u in admin.get('/api/players').get_json()]
    assert usernames == ['plain', 'root']


def test_role_updates(make_user, admin):
    plain_id = make_user('plain')
    res = admin.put(f'/api/players/{plain_id}', json={'role': ROLE_EDITOR})
    assert res.status_code == 200
    assert res.get_json()['role'] == ROLE_EDITOR
    assert admin.put(f'/api/players/{plain_id}', json={'role': 'KING'}).status_code == 400
    assert admin.put('/api/players/999', json={'role': ROLE_EDITOR}).status_code == 404

    root_id = admin.get('/api/me').get_json()['user']['id']
    res = admin.put(f'/api/players/{root_id}', json={'role': 'PLAYER'})
    assert res.status_code == 400
    assert res.get_json() == {'error': 'Cannot demote the last admin'}


def test_delete_players(make_user, login, admin, make_question):
    root_id = admin.get('/api/me').get_json()['user']['id']
    assert admin.delete(f'/api/players/{root_id}').status_code == 400

    other_admin = make_user('root2', role=ROLE_ADMIN)
    plain_id = make_user('plain')
    assert admin.delete(f'/api/players/{plain_id}').status_code == 200
    assert admin.delete(f'/api/players/{plain_id}').status_code == 404

    # root2 may delete root while another admin remains, but never the last one
    root2 = login('root2')
    assert root2.delete(f'/api/players/{root_id}').status_code == 200
    make_user('root3', role=ROLE_ADMIN)
    root3 = login('root3')
    assert root3.delete(f'/api/players/{other_admin}').status_code == 200
    assert root3.get('/api/players').get_json()[0]['role'] == ROLE_ADMIN


def test_cannot_delete_player_with_history(make_user, admin, make_question):
    player_id = make_user('veteran')
    question = make_question()
    res = admin.post('/api/games', json={
        'name': 'G', 'language': 'en', 'playerIds': [player_id], 'questionIds': [question['id']],
    })
    assert res.status_code == 201
    res = admin.delete(f'/api/players/{player_id}')
    assert res.status_code == 400


def test_last_admin_delete_guard(make_user, login):
    make_user('solo', role=ROLE_ADMIN)
    make_user('helper', role=ROLE_ADMIN)
    solo = login('solo')
    helper = login('helper')
    helper_id = helper.get('/api/me').get_json()['user']['id']
    solo_id = solo.get('/api/me').get_json()['user']['id']
    assert solo.delete(f'/api/players/{helper_id}').status_code == 200
    # solo is now the only admin and cannot remove itself either way
    assert solo.delete(f'/api/players/{solo_id}').status_code == 400
    assert solo.put(f'/api/players/{solo_id}', json={'role': 'EDITOR'}).status_code == 400


@pytest.mark.parametrize('path,body', [
    ('/api/register', {'username': ['alice'], 'password': 'secret'}),
    ('/api/register', {'username': 'alice', 'password': 12345}),
    ('/api/login', {'username': 42, 'password': 'secret'}),
    ('/api/login', {'username': 'alice', 'password': ['secret']}),
    ('/api/login/guest', {'username': {'name': 'visitor'}}),
])
def test_credentials_must_be_strings(client, path, body):
    res = client.post(path, json=body)
    assert res.status_code == 400
    assert 'error' in res.get_json()
