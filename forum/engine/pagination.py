# forum/engine/pagination.py
"""
Cursor Paginator.

Collections are ordered newest first by `created_at`. A cursor is the id of
the boundary entity; the paginator looks it up to get its timestamp and
narrows the query from there.

Forward  (first/after): created_at < after.created_at, DESC, limit first+1
Backward (last/before): created_at > before.created_at, ASC,  limit last+1,
                        then flipped back to newest first

The extra row is only used to decide hasNextPage (forward) or
hasPreviousPage (backward). When both `first` and `last` are supplied the
forward arguments win and `last`/`before` are ignored.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence

from forum.core.errors import InvalidReference, ValidationFailure
from forum.store.base import DocumentStore, Filter
from forum.utils.ids import require_id

logger = logging.getLogger(__name__)

SORT_FIELD = 'created_at'


@dataclass(frozen=True)
class PageRequest:
    first: Optional[int] = None
    after: Optional[str] = None
    last: Optional[int] = None
    before: Optional[str] = None

    @property
    def is_backward(self) -> bool:
        return self.first is None and self.last is not None


@dataclass
class Page:
    items: List[Dict[str, Any]] = field(default_factory=list)
    has_next_page: bool = False
    has_previous_page: bool = False
    total_count: int = 0

    @property
    def start_cursor(self) -> Optional[str]:
        return self.items[0]['id'] if self.items else None

    @property
    def end_cursor(self) -> Optional[str]:
        return self.items[-1]['id'] if self.items else None

    def to_connection(self, render: Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]) -> Dict[str, Any]:
        """
        Builds the Connection envelope. `render` turns the raw page items into
        nodes (populate + aggregate + materialize) and must keep their order.
        """
        nodes = render(self.items) if self.items else []
        return {
            'edges': [{'node': node, 'cursor': item['id']} for node, item in zip(nodes, self.items)],
            'pageInfo': {
                'hasNextPage': self.has_next_page,
                'hasPreviousPage': self.has_previous_page,
                'startCursor': self.start_cursor,
                'endCursor': self.end_cursor,
            },
            'totalCount': self.total_count,
        }


class CursorPaginator:

    def __init__(self, store: DocumentStore, default_page_size: Optional[int] = None,
                 max_page_size: Optional[int] = None):
        self.store = store
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def _check_size(self, name: str, value: Optional[int]) -> None:
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationFailure(f"'{name}' must be a non-negative integer")
        if self.max_page_size is not None and value > self.max_page_size:
            raise ValidationFailure(f"'{name}' must not exceed {self.max_page_size}")

    def _boundary(self, collection: str, cursor: str):
        cursor = require_id(cursor, "cursor")
        doc = self.store.get(collection, cursor)
        if doc is None or doc.get(SORT_FIELD) is None:
            raise InvalidReference(f"Cursor does not point to an existing entry: {cursor}")
        return doc[SORT_FIELD]

    def paginate(self, collection: str, page: PageRequest, filters: Sequence[Filter] = ()) -> Page:
        """Fetches one page of `collection` restricted by `filters`, newest first."""
        self._check_size('first', page.first)
        self._check_size('last', page.last)
        if page.first is not None and page.last is not None:
            logger.debug("Both 'first' and 'last' given; using forward pagination")
        if page.first is None and page.last is None and self.default_page_size is not None:
            page = replace(page, first=self.default_page_size)

        # only entries carrying the sort key can be paged through
        total_count = self.store.count(collection, list(filters) + [(SORT_FIELD, '!=', None)])

        if page.is_backward:
            return self._backward(collection, page, list(filters), total_count)
        return self._forward(collection, page, list(filters), total_count)

    def _forward(self, collection: str, page: PageRequest, filters: List[Filter], total_count: int) -> Page:
        if page.after is not None:
            filters.append((SORT_FIELD, '<', self._boundary(collection, page.after)))
        limit = page.first + 1 if page.first is not None else None
        fetched = self.store.find(collection, filters, order_by=SORT_FIELD, descending=True, limit=limit)

        has_next = page.first is not None and len(fetched) > page.first
        items = fetched[:page.first] if page.first is not None else fetched
        return Page(items=items, has_next_page=has_next, has_previous_page=False, total_count=total_count)

    def _backward(self, collection: str, page: PageRequest, filters: List[Filter], total_count: int) -> Page:
        if page.before is not None:
            filters.append((SORT_FIELD, '>', self._boundary(collection, page.before)))
        fetched = self.store.find(collection, filters, order_by=SORT_FIELD, descending=False, limit=page.last + 1)

        has_previous = len(fetched) > page.last
        # ascending -> newest first, keeping the `last` entries nearest the boundary
        items = list(reversed(fetched))[-page.last:] if page.last else []
        return Page(items=items, has_next_page=False, has_previous_page=has_previous, total_count=total_count)
