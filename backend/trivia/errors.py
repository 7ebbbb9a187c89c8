"""Error types shared by the HTTP layer and the game services.

Services raise these; the handlers registered in ``register_error_handlers``
turn them into ``{"error": message}`` JSON bodies with the matching status.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException


class TriviaError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class Unauthenticated(TriviaError):
    status_code = 401


class Unauthorized(TriviaError):
    status_code = 403


class NotFound(TriviaError):
    status_code = 404


class ValidationError(TriviaError):
    status_code = 400


class InvalidState(TriviaError):
    status_code = 400


class AlreadyPlayed(InvalidState):
    pass


class Conflict(TriviaError):
    """Another request changed the game first; the client may retry."""
    status_code = 409


def register_error_handlers(flask_app, db):
    @flask_app.errorhandler(TriviaError)
    def handle_trivia_error(exc):
        flask_app.logger.info(f"[error] status={exc.status_code} message={exc.message}")
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        flask_app.logger.exception(f"[error] unhandled {type(exc).__name__}")
        return jsonify({'error': 'Internal server error'}), 500
