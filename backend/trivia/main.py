from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from trivia import db
from trivia.access import json_body
from trivia.errors import Unauthenticated, ValidationError
from trivia.models import User, ROLE_PLAYER

main = Blueprint('main', __name__)


@main.route('/register', methods=['POST'])
def register():
    data = json_body()
    username = data.get('username')
    password = data.get('password')
    if not username or not password:
        raise ValidationError('Username and password are required')
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError('Username and password must be strings')

    if User.query.filter_by(username=username).first():
        raise ValidationError('Username already taken')

    user = User(username=username, role=ROLE_PLAYER, is_guest=False)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return jsonify({'message': 'User created successfully', 'userId': user.id}), 201


@main.route('/login', methods=['POST'])
def login():
    data = json_body()
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError('Username and password must be strings')
    user = User.query.filter_by(username=username).first()
    # Guest and password-less accounts can never log in this way
    if user and user.check_password(password):
        login_user(user, remember=True)
        return jsonify({'user': user.to_dict()})
    raise Unauthenticated('Invalid username or password')


@main.route('/login/guest', methods=['POST'])
def login_guest():
    """Log in as a guest, creating the guest account on first use."""
    data = json_body()
    username = data.get('username')
    if not username:
        raise ValidationError('Username is required')
    if not isinstance(username, str):
        raise ValidationError('Username must be a string')

    user = User.query.filter_by(username=username).first()
    if user and not user.is_guest:
        raise ValidationError('Username already taken by a registered user.')
    created = user is None
    if created:
        user = User(username=username, role=ROLE_PLAYER, is_guest=True)
        db.session.add(user)
        db.session.commit()

    login_user(user)
    return jsonify({'user': user.to_dict()}), 201 if created else 200


@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully.'})


@main.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})
