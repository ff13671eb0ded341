"""
Store module for URL shortener.
Holds the single shared, lock-protected mapping of short codes.
"""

from .models import Entry
from .url_store import URLStore, CollisionPolicy

__all__ = [
    "Entry",
    "URLStore",
    "CollisionPolicy",
]
