# forum/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import new_id


@dataclass
class Comment:
    """
    Document structure of the 'comments' collection.
    """
    text: str
    topic: str          # topic id
    created_by: str     # user id
    id: str = field(default_factory=new_id)
    likes: List[str] = field(default_factory=list)    # user ids, treated as a set
    replies: List[str] = field(default_factory=list)  # reply ids, oldest first
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
