"""
Factory for creating URL store instances.
"""

from enum import Enum
from typing import Optional
import logging

from shortlink_app.config import settings
from shortlink_app.exceptions import BackendUnavailableError
from .strategies import URLStoreStrategy, InMemoryURLStore, RedisURLStore

logger = logging.getLogger(__name__)


class StorageBackend(Enum):
    """Available storage backends (shared by URL and click stores)"""
    MEMORY = "memory"
    REDIS = "redis"


class URLStoreFactory:
    """
    Simple factory for creating URL stores.
    
    Builds a new store on every call; the caller owns the result and passes
    it to whatever needs it. Redis settings default to the values in settings.
    """
    
    @classmethod
    def create(
        cls,
        backend: StorageBackend,
        redis_url: Optional[str] = None,
        socket_timeout: Optional[float] = None
    ) -> URLStoreStrategy:
        """
        Create a URL store.
        
        A Redis backend that cannot be reached falls back to the in-memory
        store. The decision is made once here and never revisited.
        
        Args:
            backend: Type of storage backend (from enum)
            redis_url: Override for settings.redis_url
            socket_timeout: Override for settings.redis_socket_timeout
            
        Returns:
            URL store instance
        """
        if backend == StorageBackend.REDIS:
            redis_url = redis_url or settings.redis_url
            logger.info("Initializing Redis URL store at %s", redis_url)
            try:
                store = RedisURLStore.from_url(
                    redis_url,
                    socket_timeout=socket_timeout or settings.redis_socket_timeout
                )
            except BackendUnavailableError as e:
                logger.warning("%s; falling back to in-memory URL store", e)
                return InMemoryURLStore()
            logger.info("Redis URL store initialized")
            return store
        
        if backend == StorageBackend.MEMORY:
            logger.info("Using in-memory URL store")
            return InMemoryURLStore()
        
        raise ValueError(f"Unknown storage backend: {backend}")
