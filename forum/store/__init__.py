# forum/store/__init__.py
from .base import DocumentStore, Filter
from .memory_store import MemoryStore

__all__ = ['DocumentStore', 'Filter', 'MemoryStore']
