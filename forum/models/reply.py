# forum/models/reply.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import new_id


@dataclass
class Reply:
    """
    Document structure of the 'replies' collection.
    """
    text: str
    comment: str        # comment id
    created_by: str     # user id
    id: str = field(default_factory=new_id)
    likes: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
