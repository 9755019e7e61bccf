# forum/services/base.py
"""
Base class for the forum domain services.
Holds the injected collaborators and the helpers every service repeats
(auth guard, id checks, existence checks, like-set updates, child-array appends).
"""

import logging
from typing import Any, Callable, Dict, Optional

from forum.core.errors import Conflict, NotFound, StoreError, Unauthenticated, ValidationFailure
from forum.engine import CursorPaginator, ReadPipeline
from forum.store.base import DocumentStore
from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import require_id
from forum.utils.slug import derive_slug

logger = logging.getLogger(__name__)


class BaseForumService:

    def __init__(self, store: DocumentStore,
                 slugger: Optional[Callable[[str], str]] = None,
                 clock: Optional[Callable] = None,
                 default_page_size: Optional[int] = None,
                 max_page_size: Optional[int] = None):
        self.store = store
        self.slugger = slugger or derive_slug
        self.clock = clock or DateTimeUtils.now
        self.reader = ReadPipeline(store)
        self.paginator = CursorPaginator(store, default_page_size=default_page_size, max_page_size=max_page_size)

    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        if not user_id:
            raise Unauthenticated("Not authenticated")
        return user_id

    @staticmethod
    def _require_text(value: Any, label: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationFailure(f"'{label}' is required")
        return value.strip()

    def _get_or_404(self, collection: str, raw_id: Any, label: str) -> Dict[str, Any]:
        doc_id = require_id(raw_id, f"{label.lower()} id")
        doc = self.store.get(collection, doc_id)
        if doc is None:
            raise NotFound(f"{label} not found")
        return doc

    def _append_child(self, collection: str, parent_id: str, field: str, child_id: str) -> None:
        """
        Records a new child on its parent. Runs after the child is saved and is
        not atomic with it: on failure the child stays saved (reads query the
        child collection directly) and the error is only logged.
        """
        try:
            self.store.array_union(collection, parent_id, field, [child_id])
        except StoreError as e:
            logger.warning(f"Could not append {child_id} to {collection}/{parent_id}.{field}: {e}", exc_info=True)
        except NotFound:
            logger.warning(f"Parent {collection}/{parent_id} vanished before {child_id} could be appended")

    def _add_like(self, collection: str, doc: Dict[str, Any], user_id: str, label: str) -> None:
        likes = doc.get('likes') if isinstance(doc.get('likes'), list) else []
        # read-then-write: two simultaneous likes by the same user may both pass this check
        if user_id in likes:
            raise Conflict(f"You have already liked this {label.lower()}", error_code="ALREADY_LIKED")
        self.store.array_union(collection, doc['id'], 'likes', [user_id])
        logger.info(f"{label} liked: {doc['id']} by {user_id}")

    def _remove_like(self, collection: str, doc: Dict[str, Any], user_id: str, label: str) -> None:
        self.store.array_remove(collection, doc['id'], 'likes', [user_id])
        logger.info(f"{label} unliked: {doc['id']} by {user_id}")
