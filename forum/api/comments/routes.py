# forum/api/comments/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

from forum.api.comments.schemas import ReplyCreateSchema

comments_bp = Blueprint('comments_bp', __name__)


@comments_bp.route('/<string:comment_id>/replies', methods=['GET'])
def get_replies_by_comment(comment_id: str):
    reply_service = current_app.services['replies']
    return jsonify(reply_service.get_replies_by_comment(comment_id)), 200


@comments_bp.route('/<string:comment_id>/replies', methods=['POST'])
@jwt_required(optional=True)
def create_reply(comment_id: str):
    reply_service = current_app.services['replies']
    data = ReplyCreateSchema().load(request.get_json(silent=True) or {})
    reply = reply_service.create_reply(get_jwt_identity(), comment_id, data['text'])
    return jsonify(reply), 201


@comments_bp.route('/<string:comment_id>/like', methods=['POST'])
@jwt_required(optional=True)
def like_comment(comment_id: str):
    """
    Adds the caller to the comment's likes.
    - liking a comment twice answers 409 ALREADY_LIKED.
    """
    comment_service = current_app.services['comments']
    return jsonify(comment_service.like_comment(get_jwt_identity(), comment_id)), 200


@comments_bp.route('/<string:comment_id>/like', methods=['DELETE'])
@jwt_required(optional=True)
def unlike_comment(comment_id: str):
    """Removes the caller from the comment's likes (no-op if they never liked it)."""
    comment_service = current_app.services['comments']
    return jsonify(comment_service.unlike_comment(get_jwt_identity(), comment_id)), 200
