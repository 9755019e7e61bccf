# forum/api/replies/services.py

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from forum.engine import EntityKind
from forum.models import COMMENTS, REPLIES, Reply
from forum.services.base import BaseForumService

logger = logging.getLogger(__name__)


class ReplyService(BaseForumService):
    """Replies to comments: listing, creation and likes (same set rules as comment likes)."""

    def get_replies_by_comment(self, comment_id: str) -> List[Dict[str, Any]]:
        comment = self._get_or_404(COMMENTS, comment_id, "Comment")
        docs = self.store.find(REPLIES, [('comment', '==', comment['id'])], order_by='created_at')
        return self.reader.render_many(EntityKind.REPLY, docs)

    def create_reply(self, user_id: Optional[str], comment_id: str, text: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        comment = self._get_or_404(COMMENTS, comment_id, "Comment")
        text = self._require_text(text, 'text')

        now = self.clock()
        reply = Reply(text=text, comment=comment['id'], created_by=user_id, created_at=now, updated_at=now)
        saved = self.store.create(REPLIES, asdict(reply))
        logger.info(f"Reply created: {saved['id']} on comment {comment['id']} by {user_id}")

        self._append_child(COMMENTS, comment['id'], 'replies', saved['id'])
        return self.reader.render(EntityKind.REPLY, saved)

    def like_reply(self, user_id: Optional[str], reply_id: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        reply = self._get_or_404(REPLIES, reply_id, "Reply")
        self._add_like(REPLIES, reply, user_id, "Reply")
        return self.reader.render(EntityKind.REPLY, self.store.get(REPLIES, reply['id']))

    def unlike_reply(self, user_id: Optional[str], reply_id: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        reply = self._get_or_404(REPLIES, reply_id, "Reply")
        self._remove_like(REPLIES, reply, user_id, "Reply")
        return self.reader.render(EntityKind.REPLY, self.store.get(REPLIES, reply['id']))

    def backfill_updated_at(self) -> int:
        """Gives replies written without `updated_at` one (their created_at, else now)."""
        updated = 0
        for doc in self.store.find(REPLIES):
            if doc.get('updated_at') is None:
                self.store.update(REPLIES, doc['id'], {'updated_at': doc.get('created_at') or self.clock()})
                updated += 1
        logger.info(f"Reply updated_at backfill finished: {updated} updated")
        return updated
