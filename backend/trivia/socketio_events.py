from flask_login import current_user
from flask_socketio import emit, join_room, leave_room

from trivia import socketio
from trivia.errors import TriviaError


def _room(game_id) -> str:
    return f"game:{game_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_game(data):
    """Subscribe the socket to a game's state updates.

    Only players, the owner and admins may listen to a game.
    """
    from trivia.services.games.lifecycle import get_game_for

    game_id = (data or {}).get('gameId')
    if not isinstance(game_id, int) or isinstance(game_id, bool):
        emit('error', {'message': 'gameId is required'})
        return
    if not current_user.is_authenticated:
        emit('error', {'message': 'Authentication required'})
        return
    try:
        get_game_for(game_id, current_user)
    except TriviaError as exc:
        emit('error', {'message': exc.message})
        return
    join_room(_room(game_id))
    emit('joined', {'room': _room(game_id)})


def handle_leave_game(data):
    game_id = (data or {}).get('gameId')
    if game_id is None:
        emit('error', {'message': 'gameId is required'})
        return
    leave_room(_room(game_id))
    emit('left', {'room': _room(game_id)})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_game', handle_join_game, namespace=namespace)
        socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
