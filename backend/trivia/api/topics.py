from flask import Blueprint, jsonify

from trivia.access import editor_required, json_body
from trivia.models import Topic
from trivia.services import content

topics = Blueprint('topics', __name__)


@topics.route('', methods=['GET'])
def list_topics():
    return jsonify([t.to_dict() for t in Topic.query.order_by(Topic.text.asc()).all()])


@topics.route('', methods=['POST'])
@editor_required
def create_topic():
    topic = content.save_topic(json_body())
    return jsonify(topic.to_dict()), 201


@topics.route('/<int:topic_id>', methods=['PUT'])
@editor_required
def update_topic(topic_id):
    topic = content.save_topic(json_body(), content.get_topic(topic_id))
    return jsonify(topic.to_dict())


@topics.route('/<int:topic_id>', methods=['DELETE'])
@editor_required
def delete_topic(topic_id):
    content.delete_topic(content.get_topic(topic_id))
    return jsonify({'success': True})
