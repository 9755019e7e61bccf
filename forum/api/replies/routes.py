# forum/api/replies/routes.py
from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

replies_bp = Blueprint('replies_bp', __name__)


@replies_bp.route('/<string:reply_id>/like', methods=['POST'])
@jwt_required(optional=True)
def like_reply(reply_id: str):
    reply_service = current_app.services['replies']
    return jsonify(reply_service.like_reply(get_jwt_identity(), reply_id)), 200


@replies_bp.route('/<string:reply_id>/like', methods=['DELETE'])
@jwt_required(optional=True)
def unlike_reply(reply_id: str):
    reply_service = current_app.services['replies']
    return jsonify(reply_service.unlike_reply(get_jwt_identity(), reply_id)), 200
