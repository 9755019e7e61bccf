# forum/store/base.py
"""
Document store contract used by the forum engine.

The engine never talks to Firestore directly; it goes through a
`DocumentStore`, which makes the storage backend an explicit dependency of
every service instead of process-wide state.

Documents are plain dicts. Every document returned by a store carries its
identifier under the 'id' key.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

# (field, op, value)
Filter = Tuple[str, str, Any]

SUPPORTED_OPERATORS = ('==', '!=', '<', '<=', '>', '>=', 'in', 'array_contains')


class DocumentStore(ABC):

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Returns the document or None when it does not exist."""

    @abstractmethod
    def get_many(self, collection: str, doc_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Fetches several documents in one round-trip.
        Only live documents appear in the result (id -> document).
        """

    @abstractmethod
    def find(self, collection: str, filters: Sequence[Filter] = (),
             order_by: Optional[str] = None, descending: bool = False,
             limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Filtered, sorted and limited query."""

    @abstractmethod
    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        """Number of documents matching `filters`."""

    @abstractmethod
    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Stores a new document (data['id'] is used, or one is generated) and returns it."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """Partial update. Raises NotFound when the document does not exist."""

    @abstractmethod
    def array_union(self, collection: str, doc_id: str, field: str, values: Sequence[Any]) -> None:
        """Appends values missing from an array field."""

    @abstractmethod
    def array_remove(self, collection: str, doc_id: str, field: str, values: Sequence[Any]) -> None:
        """Removes every occurrence of values from an array field."""

    @abstractmethod
    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        """Atomic numeric increment of a single field."""

    def find_one(self, collection: str, filters: Sequence[Filter]) -> Optional[Dict[str, Any]]:
        docs = self.find(collection, filters, limit=1)
        return docs[0] if docs else None

    def exists(self, collection: str, filters: Sequence[Filter]) -> bool:
        return self.find_one(collection, filters) is not None


def check_filters(filters: Sequence[Filter]) -> None:
    for field, op, _ in filters:
        if op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported filter operator '{op}' on field '{field}'")
