# forum/api/comments/services.py

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from forum.engine import EntityKind
from forum.models import COMMENTS, TOPICS, Comment
from forum.services.base import BaseForumService

logger = logging.getLogger(__name__)


class CommentService(BaseForumService):
    """
    Comment business logic: listing a topic's comments, creation and likes.
    - `likes` is a set of user ids: liking twice is a conflict, unliking a comment
      you never liked changes nothing.
    """

    def get_comments_by_topic(self, topic_id: str) -> List[Dict[str, Any]]:
        """A topic's comments in conversation order (oldest first), each with its replies."""
        topic = self._get_or_404(TOPICS, topic_id, "Topic")
        docs = self.store.find(COMMENTS, [('topic', '==', topic['id'])], order_by='created_at')
        return self.reader.render_many(EntityKind.COMMENT, docs)

    def create_comment(self, user_id: Optional[str], topic_id: str, text: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        topic = self._get_or_404(TOPICS, topic_id, "Topic")
        text = self._require_text(text, 'text')

        now = self.clock()
        comment = Comment(text=text, topic=topic['id'], created_by=user_id, created_at=now, updated_at=now)
        saved = self.store.create(COMMENTS, asdict(comment))
        logger.info(f"Comment created: {saved['id']} on topic {topic['id']} by {user_id}")

        self._append_child(TOPICS, topic['id'], 'comments', saved['id'])
        return self.reader.render(EntityKind.COMMENT, saved)

    def like_comment(self, user_id: Optional[str], comment_id: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        comment = self._get_or_404(COMMENTS, comment_id, "Comment")
        self._add_like(COMMENTS, comment, user_id, "Comment")
        return self.reader.render(EntityKind.COMMENT, self.store.get(COMMENTS, comment['id']))

    def unlike_comment(self, user_id: Optional[str], comment_id: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        comment = self._get_or_404(COMMENTS, comment_id, "Comment")
        self._remove_like(COMMENTS, comment, user_id, "Comment")
        return self.reader.render(EntityKind.COMMENT, self.store.get(COMMENTS, comment['id']))
