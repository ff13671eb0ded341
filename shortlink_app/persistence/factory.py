"""
Factory for creating persistence instances.
Gets configuration from settings, with fallback to the flat file.
"""

from enum import Enum
from typing import Optional

from shortlink_app.config import Settings, settings as default_settings
from shortlink_app.logging_config import get_logger
from .strategies import (
    PersistenceStrategy,
    FilePersistence,
    SQLitePersistence,
    RedisPersistence,
    NullPersistence
)

logger = get_logger(__name__)


class PersistenceBackend(Enum):
    """Available persistence backends"""
    FILE = "file"
    SQLITE = "sqlite"
    REDIS = "redis"
    NULL = "null"


class PersistenceFactory:
    """
    Simple factory for creating persistence instances.
    
    No instance caching here: the composition root creates one
    persistence per application and owns it.
    """
    
    @classmethod
    def create(
        cls,
        backend: PersistenceBackend,
        settings: Optional[Settings] = None
    ) -> PersistenceStrategy:
        """
        Create a persistence instance.
        
        If a database or Redis backend cannot be reached at startup, the
        flat file is used instead so the service still starts.
        
        Args:
            backend: Type of persistence backend (from enum)
            settings: Settings to read paths/URLs from (module settings by default)
            
        Returns:
            Persistence instance
        """
        settings = settings or default_settings
        
        if backend == PersistenceBackend.FILE:
            instance = FilePersistence(path=settings.storage_file_path)
            
        elif backend == PersistenceBackend.SQLITE:
            from sqlalchemy.exc import SQLAlchemyError
            
            try:
                instance = SQLitePersistence(database_url=settings.database_url)
            except SQLAlchemyError as e:
                logger.warning("Database %s unavailable (%s), falling back to file persistence",
                               settings.database_url, e)
                instance = FilePersistence(path=settings.storage_file_path)
            
        elif backend == PersistenceBackend.REDIS:
            import redis
            
            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                
                # Test connection immediately
                redis_client.ping()
                
                instance = RedisPersistence(redis_client, key=settings.redis_key)
                
            except redis.RedisError as e:
                logger.warning("Redis connection failed (%s), falling back to file persistence", e)
                instance = FilePersistence(path=settings.storage_file_path)
            
        elif backend == PersistenceBackend.NULL:
            instance = NullPersistence()
            
        else:
            raise ValueError(f"Unknown persistence backend: {backend}")
        
        logger.info("%s initialized", type(instance).__name__)
        return instance
