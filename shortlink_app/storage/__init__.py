"""
URL storage module.

Implements the Strategy Pattern for pluggable URL stores (in-memory, Redis).
"""

from .strategies import URLStoreStrategy, InMemoryURLStore, RedisURLStore
from .factory import URLStoreFactory, StorageBackend

__all__ = [
    "URLStoreStrategy",
    "InMemoryURLStore",
    "RedisURLStore",
    "URLStoreFactory",
    "StorageBackend",
]
