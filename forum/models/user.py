# forum/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import new_id


@dataclass
class User:
    """
    Document structure of the 'users' collection.
    """
    first_name: str
    last_name: str
    username: str   # unique
    email: str      # unique
    password: str   # werkzeug hash, never emitted
    id: str = field(default_factory=new_id)
    reset_password_token: Optional[str] = None      # sha256 of the emailed token
    reset_password_expires: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
