from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from trivia import socketio
from trivia.access import json_body, require_int
from trivia.services.games import lifecycle, turns

games = Blueprint('games', __name__)


def _broadcast(game_id: int, event: str = 'state_update') -> None:
    socketio.emit(event, {'gameId': game_id}, to=f"game:{game_id}", namespace='/ws')


@games.route('', methods=['GET'])
@login_required
def list_games():
    """Admins see every game; everyone else sees games they own or play in."""
    rows = lifecycle.list_games_for(current_user)
    return jsonify([g.to_dict(include_questions=False) for g in rows])


@games.route('', methods=['POST'])
@login_required
def create_game():
    data = json_body()
    game = lifecycle.create_game(
        current_user,
        data.get('name'),
        data.get('language'),
        data.get('playerIds'),
        data.get('questionIds'),
    )
    return jsonify(game.to_dict()), 201


@games.route('/<int:game_id>', methods=['GET'])
@login_required
def get_game(game_id):
    game = lifecycle.get_game_for(game_id, current_user)
    return jsonify(game.to_dict())


@games.route('/<int:game_id>', methods=['DELETE'])
@login_required
def delete_game(game_id):
    lifecycle.delete_game(game_id, current_user)
    _broadcast(game_id, 'game_deleted')
    return jsonify({'success': True})


@games.route('/<int:game_id>/duplicate', methods=['POST'])
@login_required
def duplicate_game(game_id):
    game = lifecycle.duplicate_game(game_id, current_user)
    return jsonify(game.to_dict()), 201


@games.route('/<int:game_id>/start', methods=['POST'])
@login_required
def start_game(game_id):
    game = turns.start_game(game_id, current_user)
    _broadcast(game_id)
    return jsonify(game.to_dict())


@games.route('/<int:game_id>/select-question', methods=['POST'])
@login_required
def select_question(game_id):
    data = json_body()
    question_id = require_int(data.get('questionId'), 'questionId')
    turns.select_question(game_id, current_user, question_id)
    _broadcast(game_id)
    return jsonify({'success': True})


@games.route('/<int:game_id>/answer', methods=['POST'])
@login_required
def submit_answer(game_id):
    data = json_body()
    answer_id = require_int(data.get('answerId'), 'answerId')
    outcome = turns.submit_answer(game_id, current_user, answer_id)
    _broadcast(game_id)
    return jsonify(outcome)
