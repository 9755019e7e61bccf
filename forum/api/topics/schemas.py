# forum/api/topics/schemas.py
from marshmallow import Schema, fields, validate


class TopicRenameSchema(Schema):
    """PATCH /api/topics/{topic_id}"""
    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))


class CommentCreateSchema(Schema):
    """POST /api/topics/{topic_id}/comments"""
    text = fields.Str(required=True, validate=validate.Length(min=1, max=5000))
