import threading
from contextlib import contextmanager
from typing import Dict

from sqlalchemy.orm.exc import StaleDataError

from trivia import db
from trivia.errors import Conflict, NotFound
from trivia.models import Game

_game_locks: Dict[int, threading.Lock] = {}
_registry_lock = threading.Lock()


def _lock_for(game_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _game_locks.get(game_id)
        if lock is None:
            lock = _game_locks[game_id] = threading.Lock()
        return lock


def forget_game(game_id: int) -> None:
    with _registry_lock:
        _game_locks.pop(game_id, None)


@contextmanager
def game_transition(game_id: int):
    """Run one read-modify-write of a game as a single unit.

    Holds the in-process lock for the game, reloads the row with
    SELECT ... FOR UPDATE, and commits once when the block exits. Any
    exception rolls everything back; a lost optimistic version check
    surfaces as Conflict.
    """
    with _lock_for(game_id):
        game = (
            Game.query.filter_by(id=game_id)
            .populate_existing()
            .with_for_update()
            .first()
        )
        if game is None:
            db.session.rollback()
            raise NotFound('Game not found')
        try:
            yield game
            db.session.commit()
        except StaleDataError:
            db.session.rollback()
            raise Conflict('Game was modified by another request, please retry')
        except Exception:
            db.session.rollback()
            raise
