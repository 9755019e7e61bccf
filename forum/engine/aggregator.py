# forum/engine/aggregator.py
"""
Derived counts for the read models.

Counts are always recomputed from the populated reference lists; whatever
counters a stored document might carry are overwritten here.

    commentCount(topic) = |topic.comments|
    likesCount(topic)   = sum(|c.likes| for c in topic.comments)   (reply likes excluded)
    replyCount(topic)   = sum(|c.replies| for c in topic.comments)
"""

from typing import Any, Dict


def size_of(value: Any) -> int:
    return len(value) if isinstance(value, list) else 0


def non_negative_int(value: Any) -> int:
    """Numeric counter as a non-negative int; absent, corrupt or negative values become 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        # NaN/inf are not counters
        if value != value or value in (float('inf'), float('-inf')):
            return 0
        return max(int(value), 0)
    return 0


def annotate_reply(reply: Dict[str, Any]) -> Dict[str, Any]:
    reply['likes_count'] = size_of(reply.get('likes'))
    return reply


def annotate_comment(comment: Dict[str, Any]) -> Dict[str, Any]:
    for reply in comment.get('replies') or []:
        annotate_reply(reply)
    comment['likes_count'] = size_of(comment.get('likes'))
    comment['reply_count'] = size_of(comment.get('replies'))
    return comment


def annotate_topic(topic: Dict[str, Any]) -> Dict[str, Any]:
    comments = topic.get('comments')
    comments = comments if isinstance(comments, list) else []
    for comment in comments:
        annotate_comment(comment)
    topic['comment_count'] = len(comments)
    topic['likes_count'] = sum(size_of(c.get('likes')) for c in comments)
    topic['reply_count'] = sum(size_of(c.get('replies')) for c in comments)
    topic['views'] = non_negative_int(topic.get('views'))
    return topic


def annotate_course(course: Dict[str, Any]) -> Dict[str, Any]:
    return course


def annotate_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return user
