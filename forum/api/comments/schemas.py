# forum/api/comments/schemas.py
from marshmallow import Schema, fields, validate


class ReplyCreateSchema(Schema):
    """POST /api/comments/{comment_id}/replies"""
    text = fields.Str(required=True, validate=validate.Length(min=1, max=5000))
