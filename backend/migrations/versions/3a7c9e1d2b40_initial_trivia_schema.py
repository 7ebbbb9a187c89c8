"""initial trivia schema: users, topics, questions, games

Revision ID: 3a7c9e1d2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c9e1d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=True),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('is_guest', sa.Boolean(), nullable=False),
        sa.Column('image', sa.String(length=512), nullable=True),
        sa.Column('total_points', sa.Integer(), nullable=False),
        sa.Column('games_played_count', sa.Integer(), nullable=False),
        sa.Column('games_won_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'topic',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('text', sa.String(length=128), nullable=False),
        sa.Column('image', sa.String(length=512), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('difficulty', sa.Integer(), nullable=False),
        sa.Column('language', sa.String(length=8), nullable=False),
        sa.Column('topic_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['topic_id'], ['topic.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_question_topic_id', 'question', ['topic_id'])

    op.create_table(
        'answer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('text', sa.String(length=512), nullable=False),
        sa.Column('correct', sa.Boolean(), nullable=False),
        sa.Column('plausibility', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['question_id'], ['question.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_answer_question_id', 'answer', ['question_id'])

    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('language', sa.String(length=8), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('current_turn_index', sa.Integer(), nullable=False),
        sa.Column('selected_question_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['user.id']),
        sa.ForeignKeyConstraint(['selected_question_id'], ['question.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_game_owner_id', 'game', ['owner_id'])

    op.create_table(
        'game_player',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_id', 'user_id', name='uq_game_player_game_user'),
    )
    op.create_index('ix_game_player_game_id', 'game_player', ['game_id'])
    op.create_index('ix_game_player_user_id', 'game_player', ['user_id'])

    op.create_table(
        'game_question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('is_played', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['question_id'], ['question.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_id', 'question_id', name='uq_game_question_game_question'),
    )
    op.create_index('ix_game_question_game_id', 'game_question', ['game_id'])
    op.create_index('ix_game_question_question_id', 'game_question', ['question_id'])

    op.create_table(
        'player_answer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('answer_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['question_id'], ['question.id']),
        sa.ForeignKeyConstraint(['answer_id'], ['answer.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_player_answer_game_id', 'player_answer', ['game_id'])
    op.create_index('ix_player_answer_user_id', 'player_answer', ['user_id'])


def downgrade():
    op.drop_table('player_answer')
    op.drop_table('game_question')
    op.drop_table('game_player')
    op.drop_table('game')
    op.drop_table('answer')
    op.drop_table('question')
    op.drop_table('topic')
    op.drop_table('user')
