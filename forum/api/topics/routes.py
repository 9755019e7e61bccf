# forum/api/topics/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

from forum.api.topics.schemas import TopicRenameSchema, CommentCreateSchema

topics_bp = Blueprint('topics_bp', __name__)


@topics_bp.route('/', methods=['GET'])
def list_topics():
    """All topics, newest first, unpaginated."""
    topic_service = current_app.services['topics']
    return jsonify(topic_service.list_topics()), 200


@topics_bp.route('/<string:topic_id>', methods=['GET'])
def get_topic_by_id(topic_id: str):
    topic_service = current_app.services['topics']
    return jsonify(topic_service.get_topic_by_id(topic_id)), 200


@topics_bp.route('/slug/<string:slug>', methods=['GET'])
def get_topic_by_slug(slug: str):
    topic_service = current_app.services['topics']
    return jsonify(topic_service.get_topic_by_slug(slug)), 200


@topics_bp.route('/<string:topic_id>', methods=['PATCH'])
@jwt_required(optional=True)
def rename_topic(topic_id: str):
    """Renames a topic (author only); the slug follows the new title."""
    topic_service = current_app.services['topics']
    data = TopicRenameSchema().load(request.get_json(silent=True) or {})
    return jsonify(topic_service.rename_topic(get_jwt_identity(), topic_id, data['title'])), 200


@topics_bp.route('/<string:topic_id>/views', methods=['POST'])
def increment_topic_views(topic_id: str):
    """Anonymous callers may count a view."""
    topic_service = current_app.services['topics']
    return jsonify(topic_service.increment_views(topic_id)), 200


@topics_bp.route('/<string:topic_id>/comments', methods=['GET'])
def get_comments_by_topic(topic_id: str):
    comment_service = current_app.services['comments']
    return jsonify(comment_service.get_comments_by_topic(topic_id)), 200


@topics_bp.route('/<string:topic_id>/comments', methods=['POST'])
@jwt_required(optional=True)
def create_comment(topic_id: str):
    comment_service = current_app.services['comments']
    data = CommentCreateSchema().load(request.get_json(silent=True) or {})
    comment = comment_service.create_comment(get_jwt_identity(), topic_id, data['text'])
    return jsonify(comment), 201
