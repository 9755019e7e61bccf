# forum/models/topic.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import new_id


@dataclass
class Topic:
    """
    Document structure of the 'topics' collection.
    """
    title: str
    slug: str
    description: str
    course: str         # course id
    created_by: str     # user id
    id: str = field(default_factory=new_id)
    comments: List[str] = field(default_factory=list)  # comment ids, oldest first
    views: int = 0
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
