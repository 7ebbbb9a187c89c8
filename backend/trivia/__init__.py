import logging

import click
from flask import Flask, jsonify
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_socketio import SocketIO
from flask_sqlalchemy import SQLAlchemy

from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from trivia.errors import register_error_handlers
    register_error_handlers(flask_app, db)

    from trivia.main import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from trivia.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')
    from trivia.api.topics import topics
    flask_app.register_blueprint(topics, url_prefix='/api/topics')
    from trivia.api.questions import questions
    flask_app.register_blueprint(questions, url_prefix='/api/questions')
    from trivia.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')
    from trivia.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api/leaderboard')

    from trivia.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Flask-Login user loader
    from trivia.models import User
    from trivia.errors import Unauthenticated

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated('Authentication required')

    @flask_app.route('/')
    def index():
        return jsonify({'message': 'Welcome to the trivia game server!'})

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from trivia.seed import seed_demo_data
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            seed_demo_data()
            print('Database has been reset and seeded!')

    @click.command('create-admin')
    @click.argument('username')
    @click.argument('password')
    def create_admin_command(username, password):
        """Creates an administrator account, or promotes an existing user."""
        from trivia.models import ROLE_ADMIN
        with flask_app.app_context():
            user = User.query.filter_by(username=username).first()
            if user is None:
                user = User(username=username)
                db.session.add(user)
            user.set_password(password)
            user.role = ROLE_ADMIN
            user.is_guest = False
            db.session.commit()
            print(f'Admin {username} is ready.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(create_admin_command)

    return flask_app
