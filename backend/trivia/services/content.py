"""Topic and question editing rules."""

from flask import current_app

from trivia import db
from trivia.errors import NotFound, ValidationError
from trivia.models import Answer, GameQuestion, Question, Topic

ANSWERS_PER_QUESTION = 4
DIFFICULTY_RANGE = range(1, 6)


def get_topic(topic_id):
    topic = db.session.get(Topic, topic_id)
    if topic is None:
        raise NotFound('Topic not found')
    return topic


def get_question(question_id):
    question = db.session.get(Question, question_id)
    if question is None:
        raise NotFound('Question not found')
    return question


def save_topic(data, topic=None):
    text = data.get('text')
    if not text or not isinstance(text, str):
        raise ValidationError('Topic name is required')
    if topic is None:
        topic = Topic()
        db.session.add(topic)
    topic.text = text.strip()
    topic.image = data.get('image') or None
    db.session.commit()
    return topic


def delete_topic(topic):
    if topic.questions.count():
        raise ValidationError('Topic still has questions')
    db.session.delete(topic)
    db.session.commit()


def is_used_by_game(question):
    return db.session.query(GameQuestion.query.filter_by(question_id=question.id).exists()).scalar()


def _clean_answers(answers):
    if not isinstance(answers, list) or len(answers) != ANSWERS_PER_QUESTION:
        raise ValidationError(f'A question needs exactly {ANSWERS_PER_QUESTION} answers')
    cleaned = []
    for a in answers:
        if not isinstance(a, dict) or not a.get('text'):
            raise ValidationError('Every answer needs a text')
        plausibility = a.get('plausibility')
        if plausibility is not None and (isinstance(plausibility, bool) or not isinstance(plausibility, int)):
            raise ValidationError('plausibility must be an integer')
        cleaned.append(Answer(text=a['text'], correct=bool(a.get('correct')), plausibility=plausibility))
    if sum(1 for a in cleaned if a.correct) != 1:
        raise ValidationError('Exactly one answer must be correct')
    return cleaned


def save_question(data, question=None):
    """Create or fully replace a question and its four answers.

    Both paths enforce the same rules. Questions already used in a game
    are read-only.
    """
    text = data.get('text')
    if not text or not isinstance(text, str):
        raise ValidationError('Question text is required')
    difficulty = data.get('difficulty', 1)
    if isinstance(difficulty, bool) or not isinstance(difficulty, int) or difficulty not in DIFFICULTY_RANGE:
        raise ValidationError('difficulty must be an integer from 1 to 5')
    topic_id = data.get('topicId')
    if isinstance(topic_id, bool) or not isinstance(topic_id, int):
        raise ValidationError('topicId is required')
    topic = get_topic(topic_id)
    language = data.get('language') or current_app.config.get('DEFAULT_LANGUAGE', 'en')
    answers = _clean_answers(data.get('answers'))

    if question is None:
        question = Question()
        db.session.add(question)
    elif is_used_by_game(question):
        raise ValidationError('Question is used by a game and cannot be changed')

    question.text = text
    question.difficulty = difficulty
    question.language = language
    question.topic = topic
    question.answers = answers
    db.session.commit()
    return question


def delete_question(question):
    if is_used_by_game(question):
        raise ValidationError('Question is used by a game and cannot be deleted')
    db.session.delete(question)
    db.session.commit()
