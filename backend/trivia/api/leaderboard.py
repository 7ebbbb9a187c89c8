from flask import Blueprint, current_app, jsonify

from trivia.models import User

leaderboard = Blueprint('leaderboard', __name__)


@leaderboard.route('', methods=['GET'])
def get_leaderboard():
    """Users with points, best lifetime total first."""
    limit = int(current_app.config.get('LEADERBOARD_LIMIT', 50))
    users = (
        User.query.filter(User.total_points > 0)
        .order_by(User.total_points.desc(), User.id.asc())
        .limit(limit)
        .all()
    )
    return jsonify([
        {
            'id': u.id,
            'username': u.username,
            'image': u.image,
            'totalPoints': u.total_points,
            'gamesPlayedCount': u.games_played_count,
            'gamesWonCount': u.games_won_count,
        }
        for u in users
    ])
