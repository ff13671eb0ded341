"""
Database models for the SQLite persistence backend.

The in-memory store is authoritative; these rows are only a durable copy.
"""

from .url_entry import URLEntry

__all__ = ["URLEntry"]
