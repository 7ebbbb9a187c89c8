import os
import sys
from contextlib import contextmanager

import pytest
from flask import has_app_context

# Ensure the backend root (containing the `trivia` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from trivia import create_app, db, socketio  # noqa: E402
from trivia.models import Answer, Question, Topic, User, ROLE_ADMIN, ROLE_EDITOR, ROLE_PLAYER  # noqa: E402


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = ['http://localhost:5173']
    POINTS_BY_DIFFICULTY = {1: 10, 2: 20, 3: 50, 4: 100, 5: 150}
    LEADERBOARD_LIMIT = 50
    DUPLICATE_NAME_SUFFIX = ' (Copy)'
    DEFAULT_LANGUAGE = 'en'
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def file_app(tmp_path):
    """An app backed by an SQLite file, for tests that run transitions on several threads."""
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'trivia.db'}"

    application = create_app(FileConfig)
    with application.app_context():
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture()
def app_ctx(flask_app):
    """Keep an app context open for tests that call the services directly.

    HTTP tests must not use it: requests would share its ``g`` and the
    logged-in user would leak between test clients.
    """
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@contextmanager
def _in_app(flask_app):
    if has_app_context():
        yield
    else:
        with flask_app.app_context():
            yield


@pytest.fixture()
def make_user(flask_app):
    def _make(username, role=ROLE_PLAYER, password='password'):
        with _in_app(flask_app):
            user = User(username=username, role=role)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture()
def make_question(flask_app):
    """Create a question with four answers; returns the ids the tests need."""
    def _make(difficulty=1, correct_index=0, topic='General', language='en', text=None):
        with _in_app(flask_app):
            topic_row = Topic.query.filter_by(text=topic).first()
            if topic_row is None:
                topic_row = Topic(text=topic)
                db.session.add(topic_row)
            question = Question(
                text=text or f'Question {Question.query.count() + 1}?',
                difficulty=difficulty,
                language=language,
                topic=topic_row,
            )
            question.answers = [
                Answer(text=f'Choice {i}', correct=(i == correct_index), plausibility=i)
                for i in range(4)
            ]
            db.session.add(question)
            db.session.commit()
            answer_ids = [a.id for a in question.answers]
            return {
                'id': question.id,
                'topic_id': topic_row.id,
                'answers': answer_ids,
                'correct': answer_ids[correct_index],
                'wrong': answer_ids[(correct_index + 1) % 4],
            }
    return _make


@pytest.fixture()
def login(flask_app):
    """Return a fresh test client logged in as the given user."""
    def _login(username, password='password'):
        test_client = flask_app.test_client()
        res = test_client.post('/api/login', json={'username': username, 'password': password})
        assert res.status_code == 200, res.get_json()
        return test_client
    return _login


@pytest.fixture()
def admin(make_user, login):
    make_user('root', role=ROLE_ADMIN)
    return login('root')


@pytest.fixture()
def editor(make_user, login):
    make_user('ed', role=ROLE_EDITOR)
    return login('ed')


@pytest.fixture()
def sio_client(flask_app, make_user, login):
    make_user('listener')
    http_client = login('listener')
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=http_client,
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
