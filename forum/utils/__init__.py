# forum/utils/__init__.py
"""
Helpers shared across the forum backend (timestamps, slugs, identifiers).
"""

from .datetime_utils import DateTimeUtils, now, to_iso, for_firestore
from .slug import derive_slug
from .ids import new_id, require_id

__all__ = [
    'DateTimeUtils',
    'now', 'to_iso', 'for_firestore',
    'derive_slug',
    'new_id', 'require_id'
]
