"""
Persistence module for URL shortener.
Implements Strategy Pattern for pluggable durable backends.
"""

from .strategies import (
    PersistenceStrategy,
    FilePersistence,
    SQLitePersistence,
    RedisPersistence,
    NullPersistence,
)
from .factory import PersistenceFactory, PersistenceBackend

__all__ = [
    "PersistenceStrategy",
    "FilePersistence",
    "SQLitePersistence",
    "RedisPersistence",
    "NullPersistence",
    "PersistenceFactory",
    "PersistenceBackend",
]
