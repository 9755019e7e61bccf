# forum/store/test_memory_store.py
from datetime import datetime, timezone

import pytest

from forum.core.errors import NotFound
from forum.store import MemoryStore


def _ts(day):
    return datetime(2024, 1, day, tzinfo=timezone.utc)


@pytest.fixture
def mem():
    store = MemoryStore()
    for day, course in [(1, 'a'), (2, 'b'), (3, 'a'), (4, 'a')]:
        store.create('topics', {'id': f't{day}', 'course': course, 'created_at': _ts(day)})
    return store


def test_create_assigns_id_when_missing():
    store = MemoryStore()
    doc = store.create('users', {'username': 'bob'})
    assert doc['id']
    assert store.get('users', doc['id'])['username'] == 'bob'


def test_get_returns_copies():
    store = MemoryStore()
    store.create('users', {'id': 'u1', 'tags': ['x']})
    store.get('users', 'u1')['tags'].append('y')
    assert store.get('users', 'u1')['tags'] == ['x']


def test_find_filters_sorts_and_limits(mem):
    docs = mem.find('topics', [('course', '==', 'a')], order_by='created_at', descending=True, limit=2)
    assert [d['id'] for d in docs] == ['t4', 't3']


def test_find_range_filter(mem):
    docs = mem.find('topics', [('created_at', '<', _ts(3))], order_by='created_at')
    assert [d['id'] for d in docs] == ['t1', 't2']


def test_find_skips_documents_missing_the_order_field(mem):
    mem.create('topics', {'id': 'no-ts', 'course': 'a'})
    ids = [d['id'] for d in mem.find('topics', [('course', '==', 'a')], order_by='created_at')]
    assert 'no-ts' not in ids
    assert mem.count('topics', [('course', '==', 'a')]) == 4


def test_find_rejects_unknown_operator(mem):
    with pytest.raises(ValueError):
        mem.find('topics', [('course', '~', 'a')])


def test_get_many_returns_only_live_documents(mem):
    found = mem.get_many('topics', ['t1', 'ghost', 't2', 't1'])
    assert set(found) == {'t1', 't2'}


def test_array_union_and_remove_behave_like_sets():
    store = MemoryStore()
    store.create('comments', {'id': 'c1', 'likes': ['u1']})
    store.array_union('comments', 'c1', 'likes', ['u1', 'u2'])
    assert store.get('comments', 'c1')['likes'] == ['u1', 'u2']
    store.array_remove('comments', 'c1', 'likes', ['u3'])
    assert store.get('comments', 'c1')['likes'] == ['u1', 'u2']
    store.array_remove('comments', 'c1', 'likes', ['u1'])
    assert store.get('comments', 'c1')['likes'] == ['u2']


def test_increment_treats_corrupt_value_as_zero():
    store = MemoryStore()
    store.create('topics', {'id': 't', 'views': 'lots'})
    store.increment('topics', 't', 'views')
    assert store.get('topics', 't')['views'] == 1


def test_updates_on_missing_documents_raise_not_found():
    store = MemoryStore()
    with pytest.raises(NotFound):
        store.update('topics', 'missing', {'title': 'x'})
    with pytest.raises(NotFound):
        store.array_union('topics', 'missing', 'comments', ['c'])
