# forum/store/memory_store.py
"""
In-process DocumentStore used by the testing config and for local runs
without Firebase (FORUM_STORE=memory).

It follows Firestore's query semantics where they matter to the engine:
documents missing an ordered or range-filtered field are left out of the
result, and array updates behave like ArrayUnion/ArrayRemove.
"""

import copy
import logging
import operator
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

from forum.core.errors import NotFound
from forum.store.base import DocumentStore, Filter, check_filters
from forum.utils.ids import new_id

logger = logging.getLogger(__name__)

_MISSING = object()

_COMPARATORS = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}


def _matches(doc: Dict[str, Any], flt: Filter) -> bool:
    field, op, expected = flt
    actual = doc.get(field, _MISSING)
    if actual is _MISSING:
        return False
    try:
        if op in _COMPARATORS:
            return bool(_COMPARATORS[op](actual, expected))
        if op == 'in':
            return actual in expected
        if op == 'array_contains':
            return isinstance(actual, list) and expected in actual
    except TypeError:
        # Firestore never matches values of a different type
        return False
    return False


class MemoryStore(DocumentStore):

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()
        # round-trip counter, handy for asserting batching behaviour
        self.calls = 0

    def _docs(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def _require(self, collection: str, doc_id: str) -> Dict[str, Any]:
        doc = self._docs(collection).get(doc_id)
        if doc is None:
            raise NotFound(f"Document '{doc_id}' not found in '{collection}'")
        return doc

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            self.calls += 1
            doc = self._docs(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def get_many(self, collection: str, doc_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            self.calls += 1
            docs = self._docs(collection)
            return {doc_id: copy.deepcopy(docs[doc_id]) for doc_id in set(doc_ids) if doc_id in docs}

    def find(self, collection: str, filters: Sequence[Filter] = (),
             order_by: Optional[str] = None, descending: bool = False,
             limit: Optional[int] = None) -> List[Dict[str, Any]]:
        check_filters(filters)
        with self._lock:
            self.calls += 1
            results = [doc for doc in self._docs(collection).values()
                       if all(_matches(doc, flt) for flt in filters)]
            if order_by:
                results = [doc for doc in results if doc.get(order_by) is not None]
                results.sort(key=lambda doc: doc[order_by], reverse=descending)
            if limit is not None:
                results = results[:limit]
            return copy.deepcopy(results)

    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        check_filters(filters)
        with self._lock:
            self.calls += 1
            return sum(1 for doc in self._docs(collection).values()
                       if all(_matches(doc, flt) for flt in filters))

    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self.calls += 1
            doc = copy.deepcopy(data)
            doc['id'] = doc.get('id') or new_id()
            self._docs(collection)[doc['id']] = doc
            logger.debug(f"memory store: created {collection}/{doc['id']}")
            return copy.deepcopy(doc)

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        with self._lock:
            self.calls += 1
            self._require(collection, doc_id).update(copy.deepcopy(fields))

    def array_union(self, collection: str, doc_id: str, field: str, values: Sequence[Any]) -> None:
        with self._lock:
            self.calls += 1
            doc = self._require(collection, doc_id)
            current = doc.get(field)
            if not isinstance(current, list):
                current = []
            for value in values:
                if value not in current:
                    current.append(value)
            doc[field] = current

    def array_remove(self, collection: str, doc_id: str, field: str, values: Sequence[Any]) -> None:
        with self._lock:
            self.calls += 1
            doc = self._require(collection, doc_id)
            current = doc.get(field)
            if isinstance(current, list):
                doc[field] = [item for item in current if item not in values]

    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        with self._lock:
            self.calls += 1
            doc = self._require(collection, doc_id)
            current = doc.get(field)
            # Firestore's Increment treats a non-numeric field as 0
            if isinstance(current, bool) or not isinstance(current, (int, float)):
                current = 0
            doc[field] = current + amount

    def delete(self, collection: str, doc_id: str) -> None:
        """Hard delete. No forum operation calls this; it exists to simulate dangling references."""
        with self._lock:
            self.calls += 1
            self._docs(collection).pop(doc_id, None)
