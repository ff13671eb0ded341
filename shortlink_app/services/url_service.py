import threading
from typing import List, Optional, Tuple

from shortlink_app.logging_config import get_logger
from shortlink_app.persistence.strategies import PersistenceStrategy
from shortlink_app.services import metrics
from shortlink_app.store.models import Entry
from shortlink_app.store.url_store import URLStore

logger = get_logger(__name__)


class URLService:
    """
    URL Service with the store and persistence injected.
    
    One instance is built by the composition root and shared by every
    request, because the save lock below must be shared too.
    
    Request flow:
    - shorten / resolve mutate the store under its lock and return a snapshot
    - persist runs afterwards (as a background task), outside the store lock
    """
    
    def __init__(
        self,
        store: URLStore,
        persistence: PersistenceStrategy,
        metrics_top_n: int = 3
    ):
        """
        Initialize URL service with dependencies.
        
        Args:
            store: Shared store, owned by the application
            persistence: Durable backend for the store's contents
            metrics_top_n: Default size of the usage reports
        """
        self.store = store
        self.persistence = persistence
        self.metrics_top_n = metrics_top_n
        # Serializes saves; each save snapshots after acquiring it,
        # so the last save to finish holds the newest state
        self._save_lock = threading.Lock()
    
    def load(self) -> int:
        """Fill the store from persistence. Returns the number of entries loaded."""
        entries = self.persistence.load()
        self.store.replace_all(entries)
        return len(entries)
    
    def persist(self) -> bool:
        """
        Save a fresh snapshot of the store.
        
        Never raises: a failed save is logged and the in-memory
        state stays authoritative.
        """
        with self._save_lock:
            snapshot = self.store.snapshot()
            try:
                return self.persistence.save(snapshot)
            except Exception:
                logger.exception("Unexpected error while saving %d entries", len(snapshot))
                return False
    
    def shorten(self, original_url: str) -> Entry:
        """Create or re-hit the entry for a URL"""
        return self.store.upsert_or_increment(original_url)
    
    def resolve(self, short_code: str) -> Optional[Entry]:
        """Count a redirect hit. Returns None for an unknown code."""
        return self.store.lookup_and_increment(short_code)
    
    def get_url_info(self, short_code: str) -> Optional[Entry]:
        """Read an entry without counting a hit"""
        return self.store.get(short_code)
    
    def domain_report(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        """Top domains by total hits"""
        return metrics.top_domains(self.store.snapshot(), self.metrics_top_n if n is None else n)
    
    def url_report(self, n: Optional[int] = None) -> List[Entry]:
        """Top entries by hits"""
        return metrics.top_urls(self.store.snapshot(), self.metrics_top_n if n is None else n)
