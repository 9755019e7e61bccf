# forum/engine/__init__.py
"""
Aggregation and pagination engine.

population  -> Reference Resolver (declarative population plans)
aggregator  -> derived counts
materializer-> external views (marshmallow)
pagination  -> cursor connections
read_model  -> the pipeline tying them together
"""

from .materializer import EntityKind, DELETED_USER_ID
from .pagination import CursorPaginator, Page, PageRequest
from .population import Populate, ReferenceResolver
from .read_model import ReadPipeline

__all__ = [
    'EntityKind', 'DELETED_USER_ID',
    'CursorPaginator', 'Page', 'PageRequest',
    'Populate', 'ReferenceResolver',
    'ReadPipeline',
]
