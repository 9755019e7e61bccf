# forum/api/auth/schemas.py
from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """POST /api/auth/register"""
    first_name = fields.Str(required=True, data_key='firstName', validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, data_key='lastName', validate=validate.Length(min=1, max=100))
    username = fields.Str(required=True, validate=validate.Length(min=3, max=50))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6, max=128))


class LoginSchema(Schema):
    """POST /api/auth/login"""
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class PasswordResetRequestSchema(Schema):
    email = fields.Email(required=True)


class PasswordResetSchema(Schema):
    token = fields.Str(required=True, validate=validate.Length(min=1))
    new_password = fields.Str(required=True, data_key='newPassword', validate=validate.Length(min=6, max=128))
