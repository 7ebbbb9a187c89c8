"""Turn engine: the CREATED -> STARTED -> ENDED state machine.

Whose turn it is never gets stored. It is derived on every call from the
ordered roster and ``current_turn_index``, so each transition below is a
pure check of (game, caller) followed by a single committed mutation.
"""

from flask import current_app

from trivia import db
from trivia.errors import AlreadyPlayed, InvalidState, NotFound, Unauthorized, ValidationError
from trivia.models import Answer, PlayerAnswer, STATUS_CREATED, STATUS_ENDED, STATUS_STARTED
from .locking import forget_game, game_transition
from .scoring import apply_final_scores, points_for


def current_player(game):
    """The acting GamePlayer: players[current_turn_index mod len(players)]."""
    players = game.players
    if not players:
        return None
    return players[(game.current_turn_index or 0) % len(players)]


def _require_turn(game, caller):
    acting = current_player(game)
    if acting is None:
        raise InvalidState('No players in this game')
    if acting.user_id != caller.id and not caller.is_admin:
        raise Unauthorized('It is not your turn')
    return acting


def start_game(game_id: int, caller):
    with game_transition(game_id) as game:
        if game.owner_id != caller.id and not caller.is_admin:
            raise Unauthorized('Only the owner or an admin can start this game')
        if game.status != STATUS_CREATED:
            raise InvalidState('Game already started or ended')
        game.status = STATUS_STARTED
    current_app.logger.info(f"[start] game={game_id} by={caller.id}")
    return game


def select_question(game_id: int, caller, question_id):
    with game_transition(game_id) as game:
        if game.status != STATUS_STARTED:
            raise InvalidState('Game is not in STARTED state')
        if game.selected_question_id is not None:
            raise InvalidState('A question is already selected')
        acting = _require_turn(game, caller)
        game_question = game.game_question(question_id)
        if game_question is None:
            raise NotFound('Question not in this game')
        if game_question.is_played:
            raise AlreadyPlayed('Question already played')
        game.selected_question_id = game_question.question_id
    current_app.logger.info(
        f"[select] game={game_id} question={question_id} player={acting.user_id} by={caller.id}"
    )
    return game


def submit_answer(game_id: int, caller, answer_id):
    """Record an answer for the selected question and advance the turn.

    The turn index moves on whether or not the answer was correct. When the
    answered question was the last unplayed one the game ends and lifetime
    stats are updated in the same commit.
    """
    with game_transition(game_id) as game:
        if game.selected_question_id is None:
            raise InvalidState('No question selected')
        if game.status != STATUS_STARTED:
            raise InvalidState('Game is not in STARTED state')
        acting = _require_turn(game, caller)

        answer = db.session.get(Answer, answer_id)
        if answer is None:
            raise NotFound('Answer not found')
        if answer.question_id != game.selected_question_id:
            raise ValidationError('Answer does not belong to the selected question')

        question = answer.question
        db.session.add(PlayerAnswer(
            game_id=game.id,
            user_id=acting.user_id,
            question_id=question.id,
            answer_id=answer.id,
        ))

        points = 0
        if answer.correct:
            points = points_for(question.difficulty)
            acting.score += points

        game.game_question(question.id).is_played = True
        game.selected_question_id = None
        game.current_turn_index += 1

        remaining = [gq for gq in game.questions if not gq.is_played]
        if not remaining:
            game.status = STATUS_ENDED
            apply_final_scores(game)

        correct_answer = question.correct_answer
        outcome = {
            'correct': answer.correct,
            'choice': answer.text,
            'correctId': correct_answer.id if correct_answer else None,
        }
        status = game.status
        turn = game.current_turn_index
    if status == STATUS_ENDED:
        forget_game(game_id)
    current_app.logger.info(
        f"[answer] game={game_id} user={acting.user_id} correct={answer.correct} "
        f"points={points} turn={turn} status={status}"
    )
    return outcome
