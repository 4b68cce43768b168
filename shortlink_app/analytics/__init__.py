"""
Click analytics module.

Implements the Strategy Pattern for pluggable click stores (in-memory, Redis).
"""

from .strategies import ClickStoreStrategy, InMemoryClickStore, RedisClickStore
from .factory import ClickStoreFactory

__all__ = [
    "ClickStoreStrategy",
    "InMemoryClickStore",
    "RedisClickStore",
    "ClickStoreFactory",
]
