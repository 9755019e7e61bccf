# forum/engine/plans.py
"""Population plans for every read model the forum serves."""

from forum.engine.population import Populate
from forum.models import USERS, COMMENTS, REPLIES

AUTHOR = Populate('created_by', USERS)
LIKES = Populate('likes', USERS, many=True)

REPLY_PLAN = (AUTHOR, LIKES)

COMMENT_PLAN = (
    AUTHOR,
    LIKES,
    Populate('replies', REPLIES, many=True, nested=REPLY_PLAN),
)

TOPIC_PLAN = (
    AUTHOR,
    Populate('comments', COMMENTS, many=True, nested=COMMENT_PLAN),
)

COURSE_PLAN = ()

USER_PLAN = ()
