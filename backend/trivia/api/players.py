from flask import Blueprint, current_app, jsonify
from flask_login import current_user

from trivia import db
from trivia.access import admin_required, json_body
from trivia.errors import NotFound, ValidationError
from trivia.models import Game, GamePlayer, PlayerAnswer, User, ROLES, ROLE_ADMIN

players = Blueprint('players', __name__)


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('Player not found')
    return user


def _is_last_admin(user):
    return user.role == ROLE_ADMIN and User.query.filter_by(role=ROLE_ADMIN).count() <= 1


def _has_game_history(user):
    return any(
        model.query.filter_by(**{column: user.id}).first() is not None
        for model, column in ((Game, 'owner_id'), (GamePlayer, 'user_id'), (PlayerAnswer, 'user_id'))
    )


@players.route('', methods=['GET'])
@admin_required
def list_players():
    users = User.query.order_by(User.username.asc()).all()
    return jsonify([u.to_dict() for u in users])


@players.route('/<int:user_id>', methods=['PUT'])
@admin_required
def update_player(user_id):
    user = _get_user(user_id)
    role = json_body().get('role')
    if role not in ROLES:
        raise ValidationError(f'role must be one of {", ".join(ROLES)}')
    if role != ROLE_ADMIN and _is_last_admin(user):
        raise ValidationError('Cannot demote the last admin')
    user.role = role
    db.session.commit()
    current_app.logger.info(f"[role] user={user.id} role={role} by={current_user.id}")
    return jsonify(user.to_dict())


@players.route('/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_player(user_id):
    if user_id == current_user.id:
        raise ValidationError('Cannot delete yourself')
    user = _get_user(user_id)
    if _is_last_admin(user):
        raise ValidationError('Cannot delete the last admin')
    if _has_game_history(user):
        raise ValidationError('Cannot delete a player with game history')
    db.session.delete(user)
    db.session.commit()
    current_app.logger.info(f"[delete-user] user={user_id} by={current_user.id}")
    return jsonify({'success': True})
