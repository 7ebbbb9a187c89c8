from flask import current_app

from trivia.models import User

DEFAULT_POINTS_BY_DIFFICULTY = {1: 10, 2: 20, 3: 50, 4: 100, 5: 150}


def points_for(difficulty) -> int:
    """Points for a correct answer at the given difficulty; 0 when unmapped."""
    table = current_app.config.get('POINTS_BY_DIFFICULTY') or DEFAULT_POINTS_BY_DIFFICULTY
    return int(table.get(difficulty, 0))


def winning_user_ids(players) -> list:
    """Every player sharing the top score wins, so ties produce several winners."""
    if not players:
        return []
    max_score = max(p.score for p in players)
    return [p.user_id for p in players if p.score == max_score]


def apply_final_scores(game) -> list:
    """Fold a finished game's scores into each user's lifetime totals.

    Not idempotent: the caller must run it exactly once, on the transition
    into ENDED. Increments are written as SQL expressions so games ending
    at the same time cannot overwrite each other's totals.
    """
    winners = set(winning_user_ids(game.players))
    final_scores = {p.user_id: p.score for p in game.players}
    for p in game.players:
        user = p.user
        user.games_played_count = User.games_played_count + 1
        user.total_points = User.total_points + p.score
        if p.user_id in winners:
            user.games_won_count = User.games_won_count + 1
    current_app.logger.info(f"[game-end] game={game.id} winners={sorted(winners)} scores={final_scores}")
    return sorted(winners)
