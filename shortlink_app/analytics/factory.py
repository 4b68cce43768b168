"""
Factory for creating click store instances.
"""

from typing import Optional
import logging

from shortlink_app.config import settings
from shortlink_app.exceptions import BackendUnavailableError
from shortlink_app.storage.factory import StorageBackend
from .strategies import ClickStoreStrategy, InMemoryClickStore, RedisClickStore

logger = logging.getLogger(__name__)


class ClickStoreFactory:
    """
    Simple factory for creating click stores.
    
    Same backend choice and fallback rule as URLStoreFactory.
    """
    
    @classmethod
    def create(
        cls,
        backend: StorageBackend,
        redis_url: Optional[str] = None,
        socket_timeout: Optional[float] = None
    ) -> ClickStoreStrategy:
        """
        Create a click store, falling back to memory if Redis is unreachable.
        
        Args:
            backend: Type of storage backend (from enum)
            redis_url: Override for settings.redis_url
            socket_timeout: Override for settings.redis_socket_timeout
            
        Returns:
            Click store instance
        """
        if backend == StorageBackend.REDIS:
            redis_url = redis_url or settings.redis_url
            logger.info("Initializing Redis click store at %s", redis_url)
            try:
                store = RedisClickStore.from_url(
                    redis_url,
                    socket_timeout=socket_timeout or settings.redis_socket_timeout
                )
            except BackendUnavailableError as e:
                logger.warning("%s; falling back to in-memory click store", e)
                return InMemoryClickStore()
            logger.info("Redis click store initialized")
            return store
        
        if backend == StorageBackend.MEMORY:
            logger.info("Using in-memory click store")
            return InMemoryClickStore()
        
        raise ValueError(f"Unknown storage backend: {backend}")
