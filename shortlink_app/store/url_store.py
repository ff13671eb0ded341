"""
Shared in-process store mapping short codes to entries.

Thread safety:
  A single threading.Lock guards the whole mapping. It is held only for
  the dict read/write; code derivation happens before acquiring it and
  callers do their I/O on snapshots after it is released.
"""

import threading
from enum import Enum
from typing import Dict, Iterable, List, Optional

from shortlink_app.exceptions import ShortCodeCollisionError
from shortlink_app.logging_config import get_logger
from shortlink_app.services.short_code_strategies import ShortCodeStrategy
from shortlink_app.store.models import Entry

logger = get_logger(__name__)


class CollisionPolicy(Enum):
    """What to do when a different URL derives an already-stored code"""
    OVERWRITE = "overwrite"
    REJECT = "reject"


class URLStore:
    """
    Concurrency-safe mapping of short_code -> Entry.
    
    Entries are never deleted and short codes never change; hit counts
    only go up. Iteration order is insertion order.
    """
    
    def __init__(
        self,
        short_code_strategy: ShortCodeStrategy,
        collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE
    ):
        self.short_code_strategy = short_code_strategy
        self.collision_policy = collision_policy
        self._entries: Dict[str, Entry] = {}
        self._lock = threading.Lock()
    
    def upsert_or_increment(self, original_url: str) -> Entry:
        """
        Create the entry for a URL with hit_count 1, or count one more hit.
        
        Returns:
            The entry as it stands after this call
        
        Raises:
            ShortCodeCollisionError: if another URL owns the code and the
                policy is REJECT
        """
        short_code = self.short_code_strategy.derive(original_url)
        
        with self._lock:
            existing = self._entries.get(short_code)
            if existing is None:
                entry = Entry(original_url=original_url, short_code=short_code, hit_count=1)
            elif existing.original_url != original_url:
                if self.collision_policy == CollisionPolicy.REJECT:
                    raise ShortCodeCollisionError(short_code, existing.original_url, original_url)
                entry = Entry(
                    original_url=original_url,
                    short_code=short_code,
                    hit_count=existing.hit_count + 1
                )
            else:
                entry = existing.incremented()
            self._entries[short_code] = entry
        
        if existing is not None and existing.original_url != original_url:
            logger.warning(
                "Short code %s remapped from %s to %s", short_code, existing.original_url, original_url
            )
        logger.debug("Upserted %s -> %s (hits=%d)", short_code, original_url, entry.hit_count)
        return entry
    
    def lookup_and_increment(self, short_code: str) -> Optional[Entry]:
        """
        Count a hit on an existing code.
        
        Returns:
            The updated entry, or None if the code is unknown
            (the store is left untouched on a miss)
        """
        with self._lock:
            existing = self._entries.get(short_code)
            if existing is None:
                return None
            entry = existing.incremented()
            self._entries[short_code] = entry
        
        logger.debug("Hit on %s (hits=%d)", short_code, entry.hit_count)
        return entry
    
    def get(self, short_code: str) -> Optional[Entry]:
        """Read an entry without counting a hit"""
        with self._lock:
            return self._entries.get(short_code)
    
    def snapshot(self) -> List[Entry]:
        """Point-in-time copy of all entries, safe to use without the lock"""
        with self._lock:
            return list(self._entries.values())
    
    def replace_all(self, entries: Iterable[Entry]) -> None:
        """Discard the current contents and load the given entries"""
        loaded = {entry.short_code: entry for entry in entries}
        with self._lock:
            self._entries = loaded
        logger.info("Store loaded with %d entries", len(loaded))
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
