from flask import Blueprint, jsonify, request
from flask_login import current_user

from trivia.access import editor_required, json_body
from trivia.models import Question
from trivia.services import content

questions = Blueprint('questions', __name__)


def _can_see_answers():
    return current_user.is_authenticated and current_user.can_edit_content


@questions.route('', methods=['GET'])
def list_questions():
    """List the question bank, optionally filtered by topic, language or difficulty."""
    query = Question.query
    topic_id = request.args.get('topicId', type=int)
    if topic_id is not None:
        query = query.filter_by(topic_id=topic_id)
    language = request.args.get('language')
    if language:
        query = query.filter_by(language=language)
    difficulty = request.args.get('difficulty', type=int)
    if difficulty is not None:
        query = query.filter_by(difficulty=difficulty)
    reveal = _can_see_answers()
    return jsonify([q.to_dict(reveal=reveal) for q in query.order_by(Question.text.asc()).all()])


@questions.route('/<int:question_id>', methods=['GET'])
def get_question(question_id):
    return jsonify(content.get_question(question_id).to_dict(reveal=_can_see_answers()))


@questions.route('', methods=['POST'])
@editor_required
def create_question():
    question = content.save_question(json_body())
    return jsonify(question.to_dict()), 201


@questions.route('/<int:question_id>', methods=['PUT'])
@editor_required
def update_question(question_id):
    question = content.save_question(json_body(), content.get_question(question_id))
    return jsonify(question.to_dict())


@questions.route('/<int:question_id>', methods=['DELETE'])
@editor_required
def delete_question(question_id):
    content.delete_question(content.get_question(question_id))
    return jsonify({'success': True})
