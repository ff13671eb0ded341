"""
Persistence strategies using Strategy Pattern.

Durability is advisory: the in-memory store is authoritative, so every
backend turns I/O failures into "nothing loaded" / "not saved" plus a
log line instead of raising into request handling.

Backends:
- File: flat text file, one entry per line (default)
- SQLite: SQLAlchemy table, rewritten per save
- Redis: one hash, rewritten per save
- Null: durability disabled
"""

import contextlib
import json
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from shortlink_app.logging_config import get_logger
from shortlink_app.store.models import Entry

logger = get_logger(__name__)


class PersistenceStrategy(ABC):
    """
    Abstract base class for persistence strategies.
    
    Methods are synchronous: load runs once at startup and save runs
    as a background task in FastAPI's threadpool.
    """
    
    @abstractmethod
    def load(self) -> List[Entry]:
        """
        Read all persisted entries.
        
        Returns:
            Entries in their saved order, or an empty list if nothing
            could be read
        """
        pass
    
    @abstractmethod
    def save(self, entries: Iterable[Entry]) -> bool:
        """
        Replace the persisted contents with the given entries.
        
        Returns:
            True if successful, False otherwise
        """
        pass


class FilePersistence(PersistenceStrategy):
    """
    Flat-file persistence.
    
    Format: one `original_url:short_code:hit_count` line per entry,
    UTF-8, newline-terminated. The file is rewritten wholesale through a
    temp file and os.replace, so readers never see a half-written file.
    """
    
    SEPARATOR = ":"
    
    def __init__(self, path: str = "shortened_urls.txt"):
        self.path = path
    
    @classmethod
    def parse_line(cls, line: str) -> Optional[Entry]:
        """
        Parse one persisted line, or return None if it is malformed.
        
        URLs contain colons themselves, so the line is split on its
        last two separators. The URL part may be empty.
        """
        parts = line.rsplit(cls.SEPARATOR, 2)
        if len(parts) != 3:
            return None
        original_url, short_code, raw_count = parts
        if not short_code:
            return None
        try:
            hit_count = int(raw_count)
        except ValueError:
            return None
        if hit_count < 0:
            return None
        return Entry(original_url=original_url, short_code=short_code, hit_count=hit_count)
    
    @classmethod
    def format_line(cls, entry: Entry) -> str:
        return f"{entry.original_url}{cls.SEPARATOR}{entry.short_code}{cls.SEPARATOR}{entry.hit_count}\n"
    
    def load(self) -> List[Entry]:
        if not os.path.exists(self.path):
            logger.info("No persisted file at %s, starting empty", self.path)
            return []
        
        try:
            # Records end in "\n" only; newline="" turns off universal newlines
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                lines = f.read().split("\n")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            return []
        
        entries = []
        for line_number, line in enumerate(lines, start=1):
            if line.endswith("\r"):
                line = line[:-1]
            if not line:
                continue
            entry = self.parse_line(line)
            if entry is None:
                logger.warning("Skipping malformed line %d in %s: %r", line_number, self.path, line)
                continue
            entries.append(entry)
        
        logger.info("Loaded %d entries from %s", len(entries), self.path)
        return entries
    
    def save(self, entries: Iterable[Entry]) -> bool:
        lines = []
        for entry in entries:
            if "\n" in entry.original_url or "\r" in entry.original_url:
                logger.warning("Not persisting %s: URL contains a line break", entry.short_code)
                continue
            lines.append(self.format_line(entry))
        
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".shortlink-", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                    f.writelines(lines)
                os.replace(tmp_path, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error("Failed to save %d entries to %s: %s", len(lines), self.path, e)
            return False
        
        logger.debug("Saved %d entries to %s", len(lines), self.path)
        return True


class SQLitePersistence(PersistenceStrategy):
    """
    SQLAlchemy-backed persistence (SQLite by default).
    
    Same contract as the flat file, but survives URLs the line format
    cannot hold. Each save replaces every row in one transaction.
    """
    
    def __init__(self, database_url: str = "sqlite:///./shortlink.db"):
        from shortlink_app.database.connection import create_session_factory
        
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
    
    def load(self) -> List[Entry]:
        from shortlink_app.models import URLEntry
        
        try:
            with self.session_factory() as session:
                rows = session.query(URLEntry).order_by(URLEntry.position).all()
                entries = [
                    Entry(original_url=row.original_url, short_code=row.short_code, hit_count=row.hit_count)
                    for row in rows
                ]
        except (SQLAlchemyError, ValidationError) as e:
            logger.warning("Could not load entries from %s, starting empty: %s", self.database_url, e)
            return []
        
        logger.info("Loaded %d entries from %s", len(entries), self.database_url)
        return entries
    
    def save(self, entries: Iterable[Entry]) -> bool:
        from shortlink_app.models import URLEntry
        
        rows = [
            URLEntry(
                short_code=entry.short_code,
                original_url=entry.original_url,
                hit_count=entry.hit_count,
                position=position
            )
            for position, entry in enumerate(entries)
        ]
        try:
            with self.session_factory() as session:
                with session.begin():
                    session.query(URLEntry).delete()
                    session.add_all(rows)
        except SQLAlchemyError as e:
            logger.error("Failed to save %d entries to %s: %s", len(rows), self.database_url, e)
            return False
        
        logger.debug("Saved %d entries to %s", len(rows), self.database_url)
        return True


class RedisPersistence(PersistenceStrategy):
    """
    Redis persistence: one hash, field = short code,
    value = JSON {original_url, hit_count, position}.
    
    The hash is replaced inside a MULTI/EXEC pipeline so a reader
    never sees a partially written set.
    """
    
    def __init__(self, redis_client, key: str = "shortlink:entries"):
        """
        Initialize Redis persistence.
        
        Args:
            redis_client: Redis client instance (redis.Redis, decode_responses=True)
            key: Name of the hash holding all entries
        """
        self.redis = redis_client
        self.key = key
    
    def load(self) -> List[Entry]:
        import redis
        
        try:
            raw = self.redis.hgetall(self.key)
        except redis.RedisError as e:
            logger.warning("Could not load entries from Redis key %s, starting empty: %s", self.key, e)
            return []
        
        positioned = []
        for short_code, value in raw.items():
            try:
                data = json.loads(value)
                entry = Entry(
                    original_url=data["original_url"],
                    short_code=short_code,
                    hit_count=data["hit_count"]
                )
                position = int(data.get("position", 0))
            except (ValueError, KeyError, TypeError, ValidationError):
                logger.warning("Skipping malformed Redis field %s: %r", short_code, value)
                continue
            positioned.append((position, entry))
        
        positioned.sort(key=lambda item: item[0])
        entries = [entry for _, entry in positioned]
        logger.info("Loaded %d entries from Redis key %s", len(entries), self.key)
        return entries
    
    def save(self, entries: Iterable[Entry]) -> bool:
        import redis
        
        mapping = {
            entry.short_code: json.dumps({
                "original_url": entry.original_url,
                "hit_count": entry.hit_count,
                "position": position
            })
            for position, entry in enumerate(entries)
        }
        try:
            pipe = self.redis.pipeline(transaction=True)
            pipe.delete(self.key)
            if mapping:
                pipe.hset(self.key, mapping=mapping)
            pipe.execute()
        except redis.RedisError as e:
            logger.error("Failed to save %d entries to Redis key %s: %s", len(mapping), self.key, e)
            return False
        
        logger.debug("Saved %d entries to Redis key %s", len(mapping), self.key)
        return True


class NullPersistence(PersistenceStrategy):
    """
    Null Object Pattern - persistence that does nothing.
    
    Used for:
    - Testing (store contents die with the process)
    - Deployments that do not want a durable file
    """
    
    def load(self) -> List[Entry]:
        """Always starts empty"""
        return []
    
    def save(self, entries: Iterable[Entry]) -> bool:
        """Pretends to save but does nothing"""
        return True
