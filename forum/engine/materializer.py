# forum/engine/materializer.py
"""
View Materializer.

One marshmallow schema per entity kind turns a populated (and aggregated)
document tree into the external, JSON-ready shape. The custom fields below
carry the null-safety rules so every schema applies them the same way:

- Id        : always a string; a populated document collapses to its id
- Timestamp : ISO-8601 'Z' string; missing -> now, or null when nullable
- Count     : int >= 0; missing/corrupt -> 0
- Author    : a user record; a missing/unresolved user -> placeholder user
- ItemList  : always a list, never null
"""

from enum import Enum
from typing import Any, Dict, Iterable, List

from marshmallow import Schema, fields

from forum.engine.aggregator import non_negative_int
from forum.utils.datetime_utils import DateTimeUtils

DELETED_USER_ID = 'deleted-user'


def deleted_user() -> Dict[str, Any]:
    """Stand-in for an author or liker whose user document no longer exists."""
    return {
        'id': DELETED_USER_ID,
        'first_name': 'Deleted',
        'last_name': 'User',
        'username': 'unknown',
        'email': '',
        'created_at': None,
    }


class Id(fields.Field):
    def __init__(self, **kwargs):
        kwargs.setdefault('dump_default', None)
        super().__init__(**kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        if isinstance(value, dict):
            value = value.get('id')
        if value is None:
            return None
        return str(value)


class Timestamp(fields.Field):
    def __init__(self, nullable: bool = False, **kwargs):
        kwargs.setdefault('dump_default', None)
        super().__init__(**kwargs)
        self.nullable = nullable

    def _serialize(self, value, attr, obj, **kwargs):
        dt = DateTimeUtils.coerce(value)
        if dt is None:
            if self.nullable:
                return None
            dt = DateTimeUtils.now()
        return DateTimeUtils.to_iso_string(dt)


class Count(fields.Field):
    def __init__(self, **kwargs):
        kwargs.setdefault('dump_default', 0)
        super().__init__(**kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        return non_negative_int(value)


class Text(fields.String):
    def __init__(self, **kwargs):
        kwargs.setdefault('dump_default', '')
        super().__init__(**kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return ''
        return super()._serialize(value, attr, obj, **kwargs)


class ItemList(fields.List):
    def __init__(self, cls_or_instance, **kwargs):
        kwargs.setdefault('dump_default', list)
        super().__init__(cls_or_instance, **kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        if not isinstance(value, list):
            return []
        return super()._serialize(value, attr, obj, **kwargs)


class UserViewSchema(Schema):
    id = Id()
    first_name = Text(data_key='firstName')
    last_name = Text(data_key='lastName')
    username = Text()
    email = Text()
    created_at = Timestamp(nullable=True, data_key='createdAt')


class Author(fields.Nested):
    def __init__(self, **kwargs):
        kwargs.setdefault('dump_default', None)
        super().__init__(UserViewSchema, **kwargs)

    def _serialize(self, nested_obj, attr, obj, **kwargs):
        if not isinstance(nested_obj, dict):
            nested_obj = deleted_user()
        return super()._serialize(nested_obj, attr, obj, **kwargs)


class ReplyViewSchema(Schema):
    id = Id()
    text = Text()
    comment = Id()
    created_by = Author(data_key='createdBy')
    likes = ItemList(Author())
    likes_count = Count(data_key='likesCount')
    created_at = Timestamp(data_key='createdAt')
    updated_at = Timestamp(data_key='updatedAt')


class CommentViewSchema(Schema):
    id = Id()
    text = Text()
    topic = Id()
    created_by = Author(data_key='createdBy')
    likes = ItemList(Author())
    likes_count = Count(data_key='likesCount')
    replies = ItemList(fields.Nested(ReplyViewSchema))
    reply_count = Count(data_key='replyCount')
    created_at = Timestamp(data_key='createdAt')
    updated_at = Timestamp(data_key='updatedAt')


class TopicViewSchema(Schema):
    id = Id()
    title = Text()
    slug = Text()
    description = Text()
    course = Id()
    created_by = Author(data_key='createdBy')
    comments = ItemList(fields.Nested(CommentViewSchema))
    comment_count = Count(data_key='commentCount')
    likes_count = Count(data_key='likesCount')
    reply_count = Count(data_key='replyCount')
    views = Count()
    created_at = Timestamp(data_key='createdAt')
    updated_at = Timestamp(data_key='updatedAt')


class CourseViewSchema(Schema):
    id = Id()
    title = Text()
    slug = Text()
    description = Text()
    created_at = Timestamp(data_key='createdAt')
    updated_at = Timestamp(data_key='updatedAt')


class CourseDetailViewSchema(CourseViewSchema):
    """Course plus live topic statistics (getCourseById / getCourseBySlug)."""
    topic_count = Count(data_key='topicCount')
    latest_topic = fields.Nested(TopicViewSchema, dump_default=None, data_key='latestTopic')


class EntityKind(str, Enum):
    USER = 'user'
    COURSE = 'course'
    COURSE_DETAIL = 'course_detail'
    TOPIC = 'topic'
    COMMENT = 'comment'
    REPLY = 'reply'


VIEW_SCHEMAS = {
    EntityKind.USER: UserViewSchema,
    EntityKind.COURSE: CourseViewSchema,
    EntityKind.COURSE_DETAIL: CourseDetailViewSchema,
    EntityKind.TOPIC: TopicViewSchema,
    EntityKind.COMMENT: CommentViewSchema,
    EntityKind.REPLY: ReplyViewSchema,
}


def materialize(kind: EntityKind, doc: Dict[str, Any]) -> Dict[str, Any]:
    return VIEW_SCHEMAS[kind]().dump(doc)


def materialize_many(kind: EntityKind, docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return VIEW_SCHEMAS[kind](many=True).dump(list(docs))
