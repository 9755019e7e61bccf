# forum/store/firestore_store.py
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence

from firebase_admin import firestore
from google.api_core import exceptions as gcp_exceptions

from forum.core.errors import NotFound, StoreError, TransientStoreError
from forum.store.base import DocumentStore, Filter, check_filters
from forum.utils.datetime_utils import DateTimeUtils
from forum.utils.ids import new_id

logger = logging.getLogger(__name__)

# Firestore caps `get_all` batches; stay well below the limit.
GET_ALL_CHUNK = 100


@contextmanager
def _translate_errors(action: str):
    """Maps Google API errors onto the forum taxonomy. Nothing is retried here."""
    try:
        yield
    except (gcp_exceptions.DeadlineExceeded, gcp_exceptions.ServiceUnavailable) as e:
        logger.warning(f"Firestore {action} timed out or is unavailable: {e}")
        raise TransientStoreError(f"Document store unavailable during {action}") from e
    except gcp_exceptions.NotFound as e:
        raise NotFound(f"Document not found during {action}") from e
    except gcp_exceptions.GoogleAPICallError as e:
        logger.error(f"Firestore {action} failed: {e}", exc_info=True)
        raise StoreError(f"Document store error during {action}") from e


def _snapshot_to_dict(snapshot) -> Dict[str, Any]:
    data = snapshot.to_dict() or {}
    data['id'] = snapshot.id
    return data


class FirestoreStore(DocumentStore):
    """
    DocumentStore backed by `firebase_admin.firestore`.
    Every call is bounded by `timeout` seconds and runs with automatic retry disabled.
    """

    def __init__(self, client=None, timeout: Optional[float] = None):
        self.db = client or firestore.client()
        self.timeout = timeout

    def _opts(self) -> Dict[str, Any]:
        return {'timeout': self.timeout, 'retry': None}

    def _query(self, collection: str, filters: Sequence[Filter]):
        check_filters(filters)
        query = self.db.collection(collection)
        for field, op, value in filters:
            query = query.where(field, op, value)
        return query

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with _translate_errors(f"get {collection}/{doc_id}"):
            snapshot = self.db.collection(collection).document(doc_id).get(**self._opts())
        if not snapshot.exists:
            return None
        return _snapshot_to_dict(snapshot)

    def get_many(self, collection: str, doc_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        unique_ids = list(dict.fromkeys(doc_ids))
        found = {}
        collection_ref = self.db.collection(collection)
        for i in range(0, len(unique_ids), GET_ALL_CHUNK):
            refs = [collection_ref.document(doc_id) for doc_id in unique_ids[i:i + GET_ALL_CHUNK]]
            with _translate_errors(f"get_all {collection}"):
                for snapshot in self.db.get_all(refs, **self._opts()):
                    if snapshot.exists:
                        found[snapshot.id] = _snapshot_to_dict(snapshot)
        return found

    def find(self, collection: str, filters: Sequence[Filter] = (),
             order_by: Optional[str] = None, descending: bool = False,
             limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = self._query(collection, filters)
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)
        with _translate_errors(f"query {collection}"):
            return [_snapshot_to_dict(doc) for doc in query.stream(**self._opts())]

    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        query = self._query(collection, filters)
        with _translate_errors(f"count {collection}"):
            result = query.count().get(**self._opts())
        return int(result[0][0].value)

    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(data)
        doc['id'] = doc.get('id') or new_id()
        doc = DateTimeUtils.for_firestore(doc)
        with _translate_errors(f"create {collection}"):
            self.db.collection(collection).document(doc['id']).create(doc, **self._opts())
        logger.info(f"Firestore document created: {collection}/{doc['id']}")
        return doc

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        with _translate_errors(f"update {collection}/{doc_id}"):
            self.db.collection(collection).document(doc_id).update(
                DateTimeUtils.for_firestore(fields), **self._opts())

    def array_union(self, collection: str, doc_id: str, field: str, values: Sequence[Any]) -> None:
        with _translate_errors(f"array_union {collection}/{doc_id}.{field}"):
            self.db.collection(collection).document(doc_id).update(
                {field: firestore.ArrayUnion(list(values))}, **self._opts())

    def array_remove(self, collection: str, doc_id: str, field: str, values: Sequence[Any]) -> None:
        with _translate_errors(f"array_remove {collection}/{doc_id}.{field}"):
            self.db.collection(collection).document(doc_id).update(
                {field: firestore.ArrayRemove(list(values))}, **self._opts())

    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        with _translate_errors(f"increment {collection}/{doc_id}.{field}"):
            self.db.collection(collection).document(doc_id).update(
                {field: firestore.Increment(amount)}, **self._opts())
