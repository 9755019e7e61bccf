# forum/api/users/routes.py
from flask import Blueprint, jsonify, current_app

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/', methods=['GET'])
def get_all_users():
    user_service = current_app.services['users']
    return jsonify(user_service.get_all_users()), 200


@users_bp.route('/<string:user_id>', methods=['GET'])
def get_user_profile(user_id: str):
    """Public profile of a single user (no password or reset fields)."""
    user_service = current_app.services['users']
    return jsonify(user_service.get_user_profile(user_id)), 200
