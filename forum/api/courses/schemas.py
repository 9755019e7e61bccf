# forum/api/courses/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate


class PaginationArgsSchema(Schema):
    """
    Query string of every paginated listing.
    first/after page forward, last/before page backward; first wins if both sizes are sent.
    """
    class Meta:
        unknown = EXCLUDE

    first = fields.Int(load_default=None, validate=validate.Range(min=0))
    after = fields.Str(load_default=None)
    last = fields.Int(load_default=None, validate=validate.Range(min=0))
    before = fields.Str(load_default=None)


class TopicCreateSchema(Schema):
    """POST /api/courses/{course_id}/topics"""
    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    description = fields.Str(required=True, validate=validate.Length(min=1, max=5000))
