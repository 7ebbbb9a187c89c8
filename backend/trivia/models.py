from datetime import datetime, timezone

from flask_login import UserMixin

from trivia import db, bcrypt

ROLE_ADMIN = 'ADMIN'
ROLE_EDITOR = 'EDITOR'
ROLE_PLAYER = 'PLAYER'
ROLES = (ROLE_ADMIN, ROLE_EDITOR, ROLE_PLAYER)

STATUS_CREATED = 'CREATED'
STATUS_STARTED = 'STARTED'
STATUS_ENDED = 'ENDED'

AVATAR_URL = 'https://api.dicebear.com/7.x/avataaars/svg?seed={}'


def _utcnow():
    return datetime.now(timezone.utc)


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    # Guests have no password
    password_hash = db.Column(db.String(256), nullable=True)
    role = db.Column(db.String(16), nullable=False, default=ROLE_PLAYER)
    is_guest = db.Column(db.Boolean, nullable=False, default=False)
    image = db.Column(db.String(512), nullable=True)
    total_points = db.Column(db.Integer, nullable=False, default=0)
    games_played_count = db.Column(db.Integer, nullable=False, default=0)
    games_won_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def __init__(self, **kwargs):
        super(User, self).__init__(**kwargs)
        if not self.image and self.username:
            self.image = AVATAR_URL.format(self.username)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash or not password:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def can_edit_content(self):
        return self.role in (ROLE_ADMIN, ROLE_EDITOR)

    def to_summary(self):
        return {'id': self.id, 'username': self.username, 'image': self.image}

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'role': self.role,
            'isGuest': self.is_guest,
            'image': self.image,
            'totalPoints': self.total_points,
            'gamesPlayedCount': self.games_played_count,
            'gamesWonCount': self.games_won_count,
        }


class Topic(db.Model):
    __tablename__ = 'topic'
    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.String(128), nullable=False)
    image = db.Column(db.String(512), nullable=True)
    questions = db.relationship('Question', back_populates='topic', lazy='dynamic')

    def to_dict(self):
        return {'id': self.id, 'text': self.text, 'image': self.image}


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    difficulty = db.Column(db.Integer, nullable=False, default=1)  # 1..5
    language = db.Column(db.String(8), nullable=False)
    topic_id = db.Column(db.Integer, db.ForeignKey('topic.id'), nullable=False, index=True)
    topic = db.relationship('Topic', back_populates='questions')
    answers = db.relationship(
        'Answer', back_populates='question', order_by='Answer.id',
        cascade='all, delete-orphan',
    )

    @property
    def correct_answer(self):
        return next((a for a in self.answers if a.correct), None)

    def to_dict(self, reveal=True):
        return {
            'id': self.id,
            'text': self.text,
            'difficulty': self.difficulty,
            'language': self.language,
            'topicId': self.topic_id,
            'topic': self.topic.to_dict() if self.topic else None,
            'answers': [a.to_dict(reveal=reveal) for a in self.answers],
        }


class Answer(db.Model):
    __tablename__ = 'answer'
    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    text = db.Column(db.String(512), nullable=False)
    correct = db.Column(db.Boolean, nullable=False, default=False)
    # Display ranking hint only, never used for scoring
    plausibility = db.Column(db.Integer, nullable=True)
    question = db.relationship('Question', back_populates='answers')

    def to_dict(self, reveal=True):
        data = {
            'id': self.id,
            'questionId': self.question_id,
            'text': self.text,
            'plausibility': self.plausibility,
        }
        if reveal:
            data['correct'] = self.correct
        return data


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    language = db.Column(db.String(8), nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    status = db.Column(db.String(16), nullable=False, default=STATUS_CREATED)  # CREATED, STARTED, ENDED
    current_turn_index = db.Column(db.Integer, nullable=False, default=0)
    selected_question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    # Bumped on every UPDATE; a stale writer fails instead of overwriting
    version = db.Column(db.Integer, nullable=False)

    owner = db.relationship('User')
    players = db.relationship(
        'GamePlayer', back_populates='game', order_by='GamePlayer.id',
        cascade='all, delete-orphan',
    )
    questions = db.relationship(
        'GameQuestion', back_populates='game', order_by='GameQuestion.id',
        cascade='all, delete-orphan',
    )
    player_answers = db.relationship(
        'PlayerAnswer', back_populates='game', cascade='all, delete-orphan',
    )

    __mapper_args__ = {'version_id_col': version}

    def has_player(self, user_id):
        return any(p.user_id == user_id for p in self.players)

    def game_question(self, question_id):
        return next((gq for gq in self.questions if gq.question_id == question_id), None)

    def to_dict(self, include_questions=True):
        from trivia.services.games.turns import current_player

        acting = current_player(self)
        data = {
            'id': self.id,
            'name': self.name,
            'language': self.language,
            'status': self.status,
            'ownerId': self.owner_id,
            'currentTurnIndex': self.current_turn_index,
            'selectedQuestionId': self.selected_question_id,
            'currentPlayerId': acting.user_id if acting else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'players': [p.to_dict() for p in self.players],
        }
        if include_questions:
            data['questions'] = [gq.to_dict() for gq in self.questions]
        else:
            data['questions'] = [{'questionId': gq.question_id, 'isPlayed': gq.is_played} for gq in self.questions]
        return data


class GamePlayer(db.Model):
    __tablename__ = 'game_player'
    __table_args__ = (db.UniqueConstraint('game_id', 'user_id', name='uq_game_player_game_user'),)
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    game = db.relationship('Game', back_populates='players')
    user = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'score': self.score,
            'user': self.user.to_summary() if self.user else None,
        }


class GameQuestion(db.Model):
    __tablename__ = 'game_question'
    __table_args__ = (db.UniqueConstraint('game_id', 'question_id', name='uq_game_question_game_question'),)
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    is_played = db.Column(db.Boolean, nullable=False, default=False)
    game = db.relationship('Game', back_populates='questions')
    question = db.relationship('Question')

    def to_dict(self):
        return {
            'id': self.id,
            'questionId': self.question_id,
            'isPlayed': self.is_played,
            # Correct flags stay hidden until the question has been played
            'question': self.question.to_dict(reveal=self.is_played) if self.question else None,
        }


class PlayerAnswer(db.Model):
    """Append-only record of one submitted answer."""
    __tablename__ = 'player_answer'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False)
    answer_id = db.Column(db.Integer, db.ForeignKey('answer.id'), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    game = db.relationship('Game', back_populates='player_answers')
