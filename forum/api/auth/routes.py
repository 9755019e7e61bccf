# forum/api/auth/routes.py

from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token

from forum.api.auth.schemas import (
    RegisterSchema,
    LoginSchema,
    PasswordResetRequestSchema,
    PasswordResetSchema
)

auth_bp = Blueprint('auth_bp', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """Creates an account and returns an access token together with the public user view."""
    user_service = current_app.services['users']
    data = RegisterSchema().load(request.get_json(silent=True) or {})
    user = user_service.register(
        first_name=data['first_name'],
        last_name=data['last_name'],
        username=data['username'],
        email=data['email'],
        password=data['password']
    )
    return jsonify({"token": create_access_token(identity=user['id']), "user": user}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    user_service = current_app.services['users']
    data = LoginSchema().load(request.get_json(silent=True) or {})
    user = user_service.authenticate(data['email'], data['password'])
    return jsonify({"token": create_access_token(identity=user['id']), "user": user}), 200


@auth_bp.route('/password-reset', methods=['POST'])
def request_password_reset():
    """Issues a reset token and hands it to the configured mailer."""
    user_service = current_app.services['users']
    data = PasswordResetRequestSchema().load(request.get_json(silent=True) or {})
    return jsonify(user_service.request_password_reset(data['email'])), 200


@auth_bp.route('/password-reset/confirm', methods=['POST'])
def reset_password():
    user_service = current_app.services['users']
    data = PasswordResetSchema().load(request.get_json(silent=True) or {})
    return jsonify(user_service.reset_password(data['token'], data['new_password'])), 200
