from flask import current_app

from trivia import db
from trivia.errors import NotFound, Unauthorized, ValidationError
from trivia.models import Game, GamePlayer, GameQuestion, Question, User, STATUS_CREATED
from .locking import forget_game, game_transition


def parse_id_list(values, field):
    if not isinstance(values, list):
        raise ValidationError(f'{field} must be a list')
    if any(isinstance(v, bool) or not isinstance(v, int) for v in values):
        raise ValidationError(f'{field} must contain integer ids')
    if len(set(values)) != len(values):
        raise ValidationError(f'{field} contains duplicates')
    return values


def _missing_ids(model, ids):
    found = {row.id for row in model.query.filter(model.id.in_(ids)).all()}
    return [i for i in ids if i not in found]


def _build_game(name, language, owner_id, player_ids, question_ids):
    game = Game(
        name=name,
        language=language,
        owner_id=owner_id,
        status=STATUS_CREATED,
        current_turn_index=0,
    )
    game.players = [GamePlayer(user_id=uid, score=0) for uid in player_ids]
    game.questions = [GameQuestion(question_id=qid, is_played=False) for qid in question_ids]
    db.session.add(game)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return game


def create_game(owner, name, language, player_ids, question_ids):
    """Create a game in CREATED status with its fixed roster and question pool.

    Every player gets the same number of turns, so the question count must
    be a multiple of the player count. Nothing is persisted on failure.
    """
    if not owner.can_edit_content:
        raise Unauthorized('Only editors and admins can create games')
    if not name or not language or player_ids is None or question_ids is None:
        raise ValidationError('Missing required fields')
    if not isinstance(name, str) or not isinstance(language, str) or not name.strip():
        raise ValidationError('name and language must be non-empty strings')
    player_ids = parse_id_list(player_ids, 'playerIds')
    question_ids = parse_id_list(question_ids, 'questionIds')
    if not player_ids or not question_ids:
        raise ValidationError('At least one player and one question required')
    if len(question_ids) % len(player_ids) != 0:
        raise ValidationError('Number of questions must be divisible by number of players')

    unknown_players = _missing_ids(User, player_ids)
    if unknown_players:
        raise ValidationError(f'Unknown player id(s): {unknown_players}')
    unknown_questions = _missing_ids(Question, question_ids)
    if unknown_questions:
        raise ValidationError(f'Unknown question id(s): {unknown_questions}')

    game = _build_game(name.strip(), language, owner.id, player_ids, question_ids)
    current_app.logger.info(
        f"[create] game={game.id} owner={owner.id} players={len(player_ids)} questions={len(question_ids)}"
    )
    return game


def duplicate_game(game_id: int, caller):
    """Copy a game's name, language and questions into a fresh CREATED game
    whose only player is the caller."""
    if not caller.can_edit_content:
        raise Unauthorized('Only editors and admins can duplicate games')
    original = db.session.get(Game, game_id)
    if original is None:
        raise NotFound('Game not found')
    suffix = current_app.config.get('DUPLICATE_NAME_SUFFIX', ' (Copy)')
    game = _build_game(
        f'{original.name}{suffix}',
        original.language,
        caller.id,
        [caller.id],
        [gq.question_id for gq in original.questions],
    )
    current_app.logger.info(f"[duplicate] game={game_id} -> {game.id} by={caller.id}")
    return game


def get_game_for(game_id: int, caller):
    game = db.session.get(Game, game_id)
    if game is None:
        raise NotFound('Game not found')
    if not (caller.is_admin or game.owner_id == caller.id or game.has_player(caller.id)):
        raise Unauthorized('You are not part of this game')
    return game


def list_games_for(caller):
    query = Game.query
    if not caller.is_admin:
        query = query.filter(
            db.or_(
                Game.owner_id == caller.id,
                Game.players.any(GamePlayer.user_id == caller.id),
            )
        )
    return query.order_by(Game.created_at.desc(), Game.id.desc()).all()


def delete_game(game_id: int, caller) -> None:
    with game_transition(game_id) as game:
        if game.owner_id != caller.id and not caller.is_admin:
            raise Unauthorized('Only the owner or an admin can delete this game')
        db.session.delete(game)
    forget_game(game_id)
    current_app.logger.info(f"[delete] game={game_id} by={caller.id}")
