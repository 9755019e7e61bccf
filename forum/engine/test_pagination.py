# forum/engine/test_pagination.py
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from forum.core.errors import InvalidReference, ValidationFailure
from forum.engine.pagination import CursorPaginator, PageRequest
from forum.store import MemoryStore

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)
JS = [('course', '==', 'js')]


@pytest.fixture
def ids():
    """name -> document id"""
    return {name: str(uuid.uuid4()) for name in ('t1', 't2', 't3', 'other')}


@pytest.fixture
def topics_store(ids):
    store = MemoryStore()
    for n in range(1, 4):
        store.create('topics', {'id': ids[f't{n}'], 'course': 'js', 'created_at': BASE + timedelta(minutes=n)})
    store.create('topics', {'id': ids['other'], 'course': 'py', 'created_at': BASE + timedelta(minutes=10)})
    return store


@pytest.fixture
def paginator(topics_store):
    return CursorPaginator(topics_store, default_page_size=10, max_page_size=50)


@pytest.fixture
def names(ids):
    by_id = {doc_id: name for name, doc_id in ids.items()}
    return lambda page: [by_id[item['id']] for item in page.items]


def test_forward_pages_newest_first(paginator, ids, names):
    page = paginator.paginate('topics', PageRequest(first=2), JS)
    assert names(page) == ['t3', 't2']
    assert page.has_next_page is True
    assert page.has_previous_page is False
    assert page.end_cursor == ids['t2']
    assert page.total_count == 3

    page = paginator.paginate('topics', PageRequest(first=2, after=page.end_cursor), JS)
    assert names(page) == ['t1']
    assert page.has_next_page is False
    assert page.total_count == 3


def test_following_end_cursors_enumerates_everything_once(paginator, names):
    seen, after = [], None
    while True:
        page = paginator.paginate('topics', PageRequest(first=1, after=after), JS)
        seen.extend(names(page))
        if not page.has_next_page:
            break
        after = page.end_cursor
    assert seen == ['t3', 't2', 't1']


def test_backward_pages(paginator, ids, names):
    page = paginator.paginate('topics', PageRequest(last=2), JS)
    assert names(page) == ['t2', 't1']
    assert page.has_previous_page is True
    assert page.has_next_page is False

    page = paginator.paginate('topics', PageRequest(last=2, before=ids['t1']), JS)
    assert names(page) == ['t3', 't2']
    assert page.has_previous_page is False


def test_first_wins_over_last(paginator, names):
    page = paginator.paginate('topics', PageRequest(first=1, last=3), JS)
    assert names(page) == ['t3']


def test_default_page_size_applies():
    store = MemoryStore()
    created = [store.create('topics', {'created_at': BASE + timedelta(minutes=n)})['id'] for n in range(5)]
    page = CursorPaginator(store, default_page_size=2).paginate('topics', PageRequest())
    assert [item['id'] for item in page.items] == [created[4], created[3]]
    assert page.has_next_page is True


def test_zero_size_page_is_empty(paginator):
    page = paginator.paginate('topics', PageRequest(first=0), JS)
    assert page.items == []
    assert page.has_next_page is True
    assert page.start_cursor is None


def test_empty_collection_is_not_an_error():
    page = CursorPaginator(MemoryStore()).paginate('topics', PageRequest(first=5))
    assert page.items == []
    assert page.total_count == 0
    assert page.has_next_page is False


def test_total_count_matches_what_can_be_paged(topics_store, paginator):
    # a damaged document without created_at is never returned by a page
    topics_store.create('topics', {'course': 'js'})
    page = paginator.paginate('topics', PageRequest(first=10), JS)
    assert len(page.items) == 3
    assert page.total_count == 3


@pytest.mark.parametrize('request_', [PageRequest(first=-1), PageRequest(last=51), PageRequest(first=True)])
def test_bad_sizes_are_rejected(paginator, request_):
    with pytest.raises(ValidationFailure):
        paginator.paginate('topics', request_, JS)


@pytest.mark.parametrize('cursor', ['nope', 'a/b/c', '', str(uuid.uuid4())])
def test_bad_or_unknown_cursor_is_invalid_reference(paginator, cursor):
    with pytest.raises(InvalidReference):
        paginator.paginate('topics', PageRequest(first=2, after=cursor), JS)


def test_malformed_cursor_never_reaches_the_store(paginator, topics_store):
    topics_store.calls = 0
    with pytest.raises(InvalidReference):
        paginator.paginate('topics', PageRequest(first=2, before='a/b/c'), JS)
    # only the totalCount query ran
    assert topics_store.calls == 1


def test_connection_envelope(paginator, ids):
    page = paginator.paginate('topics', PageRequest(first=2), JS)
    connection = page.to_connection(lambda items: [{'id': i['id'], 'rendered': True} for i in items])

    assert [edge['cursor'] for edge in connection['edges']] == [ids['t3'], ids['t2']]
    assert connection['edges'][0]['node'] == {'id': ids['t3'], 'rendered': True}
    assert connection['pageInfo'] == {
        'hasNextPage': True, 'hasPreviousPage': False, 'startCursor': ids['t3'], 'endCursor': ids['t2'],
    }
    assert connection['totalCount'] == 3
