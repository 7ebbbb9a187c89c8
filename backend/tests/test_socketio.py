from trivia.models import ROLE_EDITOR


def _create_game(make_user, make_question, login, player_ids):
    make_user('host', role=ROLE_EDITOR)
    host = login('host')
    question = make_question()
    res = host.post('/api/games', json={
        'name': 'Live', 'language': 'en', 'playerIds': player_ids, 'questionIds': [question['id']],
    })
    assert res.status_code == 201
    return host, res.get_json()['id'], question


def test_socket_connect_and_ping(sio_client):
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_join_requires_access(sio_client, make_user, make_question, login):
    _, game_id, _ = _create_game(make_user, make_question, login, [make_user('someone')])
    sio_client.get_received('/ws')

    sio_client.emit('join_game', {'gameId': game_id}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'error' for pkt in received)

    sio_client.emit('join_game', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert received[0]['args'][0] == {'message': 'gameId is required'}


def test_players_receive_state_updates(flask_app, sio_client, make_user, make_question, login):
    listener_id = login('listener').get('/api/me').get_json()['user']['id']
    host, game_id, question = _create_game(make_user, make_question, login, [listener_id])
    sio_client.get_received('/ws')

    sio_client.emit('join_game', {'gameId': game_id}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' for pkt in received)

    assert host.post(f'/api/games/{game_id}/start').status_code == 200
    received = sio_client.get_received('/ws')
    assert {'name': 'state_update', 'args': [{'gameId': game_id}], 'namespace': '/ws'} in received

    sio_client.emit('leave_game', {'gameId': game_id}, namespace='/ws')
    sio_client.get_received('/ws')
    host.delete(f'/api/games/{game_id}')
    assert all(pkt['name'] != 'game_deleted' for pkt in sio_client.get_received('/ws'))
