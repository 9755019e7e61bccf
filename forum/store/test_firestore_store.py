# forum/store/test_firestore_store.py
"""FirestoreStore against a mocked Firestore client (no network)."""

from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as gcp_exceptions

from forum.core.errors import InvalidReference, NotFound, StoreError, TransientStoreError
from forum.engine import CursorPaginator, PageRequest
from forum.store.firestore_store import FirestoreStore


def _snapshot(doc_id, data, exists=True):
    snap = MagicMock()
    snap.id = doc_id
    snap.exists = exists
    snap.to_dict.return_value = dict(data) if exists else None
    return snap


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def fs(client):
    return FirestoreStore(client=client, timeout=2.5)


def test_get_injects_id_and_passes_deadline(fs, client):
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.get.return_value = _snapshot('t1', {'title': 'Hello'})

    doc = fs.get('topics', 't1')

    assert doc == {'title': 'Hello', 'id': 't1'}
    doc_ref.get.assert_called_once_with(timeout=2.5, retry=None)


def test_get_missing_document_returns_none(fs, client):
    client.collection.return_value.document.return_value.get.return_value = _snapshot('x', {}, exists=False)
    assert fs.get('topics', 'x') is None


def test_get_many_skips_missing_snapshots(fs, client):
    client.get_all.return_value = [_snapshot('u1', {'username': 'a'}), _snapshot('u2', {}, exists=False)]
    found = fs.get_many('users', ['u1', 'u2', 'u1'])
    assert list(found) == ['u1']
    refs = client.get_all.call_args[0][0]
    assert len(refs) == 2


def test_find_chains_filters_order_and_limit(fs, client):
    query = client.collection.return_value
    query.where.return_value = query
    query.order_by.return_value = query
    query.limit.return_value = query
    query.stream.return_value = [_snapshot('t2', {'course': 'c'})]

    docs = fs.find('topics', [('course', '==', 'c')], order_by='created_at', descending=True, limit=3)

    assert docs == [{'course': 'c', 'id': 't2'}]
    query.where.assert_called_once_with('course', '==', 'c')
    query.limit.assert_called_once_with(3)
    assert query.order_by.call_args[0][0] == 'created_at'


def test_deadline_exceeded_becomes_transient_error(fs, client):
    client.collection.return_value.document.return_value.get.side_effect = gcp_exceptions.DeadlineExceeded('slow')
    with pytest.raises(TransientStoreError):
        fs.get('topics', 't1')


def test_update_on_missing_document_raises_not_found(fs, client):
    client.collection.return_value.document.return_value.update.side_effect = gcp_exceptions.NotFound('gone')
    with pytest.raises(NotFound):
        fs.update('topics', 't1', {'title': 'x'})


def test_other_api_errors_become_store_errors(fs, client):
    client.collection.return_value.document.return_value.update.side_effect = gcp_exceptions.PermissionDenied('no')
    with pytest.raises(StoreError):
        fs.increment('topics', 't1', 'views')


def test_paginator_rejects_path_like_cursor_before_querying(fs, client):
    # google-cloud-firestore raises ValueError for odd-length document paths
    client.collection.return_value.document.side_effect = ValueError("A document must have an even number of path elements")
    client.collection.return_value.where.return_value = client.collection.return_value
    client.collection.return_value.count.return_value.get.return_value = [[MagicMock(value=0)]]

    with pytest.raises(InvalidReference):
        CursorPaginator(fs).paginate('topics', PageRequest(first=2, after='a/b/c'))
    client.collection.return_value.document.assert_not_called()
