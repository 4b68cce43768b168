"""
Click store strategies using Strategy Pattern.

Click events are append-only and grouped by short code. Stats are folded
from the events on every read; nothing aggregated is persisted.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List
import asyncio
import logging
import uuid

import redis
from pydantic import ValidationError

from shortlink_app.exceptions import StorageError
from shortlink_app.models.click import ClickEvent, Stats
from shortlink_app.storage.locks import ReadWriteLock
from shortlink_app.storage.redis_client import connect_redis

logger = logging.getLogger(__name__)

CLICK_KEY_PREFIX = "clicks:"
STATS_LIST_KEY = "stats:list"


class ClickStoreStrategy(ABC):
    """
    Abstract base class for click stores.

    The click store knows nothing about URL records: an event for a code that
    was never shortened is accepted like any other.
    """

    @abstractmethod
    async def save(self, event: ClickEvent) -> ClickEvent:
        """
        Append a click event to its code's event list.

        Args:
            event: Event to store; `id` and `timestamp` are assigned if unset

        Returns:
            The event as stored

        Raises:
            StorageError: If the backend write fails
        """
        pass

    @abstractmethod
    async def stats_by_code(self, short_code: str) -> Stats:
        """
        Get click stats (with the ordered events) for one code.

        A code without clicks yields total_clicks=0 and an empty event list.
        """
        pass

    @abstractmethod
    async def stats_all(self) -> List[Stats]:
        """Get count-only stats for every code that has been clicked"""
        pass

    async def close(self) -> None:
        """Release backend resources"""
        return None


def _stamp(event: ClickEvent) -> ClickEvent:
    update = {}
    if not event.id:
        update["id"] = str(uuid.uuid4())
    if event.timestamp is None:
        update["timestamp"] = datetime.now(timezone.utc)
    return event.model_copy(update=update) if update else event


class InMemoryClickStore(ClickStoreStrategy):
    """
    In-memory click store: short code -> list of events in insertion order.

    Guarded by one reader/writer lock; lost on restart.
    """

    def __init__(self):
        self._clicks: Dict[str, List[ClickEvent]] = {}
        self._lock = ReadWriteLock()

    async def save(self, event: ClickEvent) -> ClickEvent:
        event = _stamp(event)
        with self._lock.write_locked():
            self._clicks.setdefault(event.short_code, []).append(event)
        return event

    async def stats_by_code(self, short_code: str) -> Stats:
        with self._lock.read_locked():
            clicks = list(self._clicks.get(short_code, []))
        return Stats(short_code=short_code, total_clicks=len(clicks), clicks=clicks)

    async def stats_all(self) -> List[Stats]:
        with self._lock.read_locked():
            return [
                Stats(short_code=short_code, total_clicks=len(clicks))
                for short_code, clicks in self._clicks.items()
            ]


class RedisClickStore(ClickStoreStrategy):
    """
    Redis click store.

    Layout:
    - clicks:<code> -> list of JSON click events (RPUSH, so list order is click order)
    - stats:list    -> set of every code that has at least one click

    As with the URL store, the list push and the set add are not atomic.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis click store.

        Args:
            redis_client: Connected Redis client (decode_responses=True)
        """
        self.redis = redis_client

    @classmethod
    def from_url(cls, redis_url: str, socket_timeout: float = 2.0) -> "RedisClickStore":
        """
        Connect and validate, failing fast.

        Raises:
            BackendUnavailableError: If Redis cannot be reached
        """
        return cls(connect_redis(redis_url, socket_timeout=socket_timeout))

    async def save(self, event: ClickEvent) -> ClickEvent:
        event = _stamp(event)
        key = CLICK_KEY_PREFIX + event.short_code
        try:
            await asyncio.to_thread(self.redis.rpush, key, event.model_dump_json())
            await asyncio.to_thread(self.redis.sadd, STATS_LIST_KEY, event.short_code)
        except redis.RedisError as e:
            raise StorageError(f"Failed to append to {key}: {e}") from e
        return event

    async def stats_by_code(self, short_code: str) -> Stats:
        key = CLICK_KEY_PREFIX + short_code
        try:
            raw_clicks = await asyncio.to_thread(self.redis.lrange, key, 0, -1)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

        clicks = []
        for data in raw_clicks:
            try:
                clicks.append(ClickEvent.model_validate_json(data))
            except ValidationError as e:
                logger.warning("Skipping unreadable click in %s: %s", key, e)

        return Stats(short_code=short_code, total_clicks=len(clicks), clicks=clicks)

    async def stats_all(self) -> List[Stats]:
        try:
            short_codes = await asyncio.to_thread(self.redis.smembers, STATS_LIST_KEY)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read {STATS_LIST_KEY}: {e}") from e

        stats = []
        for short_code in short_codes:
            try:
                count = await asyncio.to_thread(self.redis.llen, CLICK_KEY_PREFIX + short_code)
            except redis.RedisError as e:
                logger.warning("Skipping %s while listing stats: %s", short_code, e)
                continue
            stats.append(Stats(short_code=short_code, total_clicks=count))

        return stats

    async def close(self) -> None:
        await asyncio.to_thread(self.redis.close)
