# forum/models/course.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import new_id


@dataclass
class Course:
    """
    Document structure of the 'courses' collection.
    `topics` keeps topic ids in creation order; it is appended to after the
    topic itself is saved and may lag behind the 'topics' collection.
    """
    title: str
    slug: str
    description: str
    id: str = field(default_factory=new_id)
    topics: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
