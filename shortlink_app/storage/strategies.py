"""
URL store strategies using Strategy Pattern.

Allows switching between URL storage backends:
- In-memory: single process, lost on restart
- Redis: durable, shared by every service instance
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List
import asyncio
import logging

import redis
from pydantic import ValidationError

from shortlink_app.exceptions import StorageError, URLNotFoundError
from shortlink_app.models.url import URLRecord
from .locks import ReadWriteLock
from .redis_client import connect_redis

logger = logging.getLogger(__name__)

URL_KEY_PREFIX = "url:"
URL_LIST_KEY = "urls:list"


class URLStoreStrategy(ABC):
    """
    Abstract base class for URL stores.

    This is the Strategy Pattern interface - the service layer talks to this
    contract only, so backends can be swapped through configuration.

    All methods are async because the Redis backend does network I/O.
    """

    @abstractmethod
    async def save(self, record: URLRecord) -> URLRecord:
        """
        Upsert a record by its short code.

        Args:
            record: Record to store; `created_at` is assigned if unset

        Returns:
            The record as stored

        Raises:
            StorageError: If the backend write fails
        """
        pass

    @abstractmethod
    async def find_by_code(self, short_code: str) -> URLRecord:
        """
        Get the record for a short code.

        Raises:
            URLNotFoundError: If no record exists for the code
            StorageError: If the backend read fails
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[URLRecord]:
        """Return every stored record (order unspecified)"""
        pass

    @abstractmethod
    async def exists(self, short_code: str) -> bool:
        """Check whether a record exists for the code (used for collision checks)"""
        pass

    async def close(self) -> None:
        """Release backend resources"""
        return None


def _stamp(record: URLRecord) -> URLRecord:
    if record.created_at is not None:
        return record
    return record.model_copy(update={"created_at": datetime.now(timezone.utc)})


class InMemoryURLStore(URLStoreStrategy):
    """
    In-memory URL store backed by a dict.

    Reads take the shared side of one reader/writer lock, saves take the
    exclusive side, so the store is safe to use from several threads.
    State is lost when the process exits.

    Used by default and as the fallback when Redis is unreachable at startup.
    """

    def __init__(self):
        self._urls: Dict[str, URLRecord] = {}
        self._lock = ReadWriteLock()

    async def save(self, record: URLRecord) -> URLRecord:
        record = _stamp(record)
        with self._lock.write_locked():
            self._urls[record.short_code] = record
        return record

    async def find_by_code(self, short_code: str) -> URLRecord:
        with self._lock.read_locked():
            record = self._urls.get(short_code)
        if record is None:
            raise URLNotFoundError(short_code)
        return record

    async def find_all(self) -> List[URLRecord]:
        # Snapshot: later saves are not reflected in the returned list
        with self._lock.read_locked():
            return list(self._urls.values())

    async def exists(self, short_code: str) -> bool:
        with self._lock.read_locked():
            return short_code in self._urls


class RedisURLStore(URLStoreStrategy):
    """
    Redis URL store.

    Layout:
    - url:<code>  -> JSON document of the record
    - urls:list   -> set of every saved code, so listing never scans the keyspace

    The record write and the set write are separate commands. A crash between
    them leaves a record that resolves by code but is missing from listings;
    that gap is accepted instead of using MULTI/EXEC.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis URL store.

        Args:
            redis_client: Connected Redis client (decode_responses=True)
        """
        self.redis = redis_client

    @classmethod
    def from_url(cls, redis_url: str, socket_timeout: float = 2.0) -> "RedisURLStore":
        """
        Connect and validate, failing fast.

        Raises:
            BackendUnavailableError: If Redis cannot be reached
        """
        return cls(connect_redis(redis_url, socket_timeout=socket_timeout))

    async def save(self, record: URLRecord) -> URLRecord:
        record = _stamp(record)
        key = URL_KEY_PREFIX + record.short_code
        try:
            await asyncio.to_thread(self.redis.set, key, record.model_dump_json())
            await asyncio.to_thread(self.redis.sadd, URL_LIST_KEY, record.short_code)
        except redis.RedisError as e:
            raise StorageError(f"Failed to save {key}: {e}") from e
        return record

    async def find_by_code(self, short_code: str) -> URLRecord:
        key = URL_KEY_PREFIX + short_code
        try:
            data = await asyncio.to_thread(self.redis.get, key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

        if data is None:
            raise URLNotFoundError(short_code)

        try:
            return URLRecord.model_validate_json(data)
        except ValidationError as e:
            raise StorageError(f"Corrupt record at {key}: {e}") from e

    async def find_all(self) -> List[URLRecord]:
        try:
            short_codes = await asyncio.to_thread(self.redis.smembers, URL_LIST_KEY)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read {URL_LIST_KEY}: {e}") from e

        records = []
        for short_code in short_codes:
            # A tracked code whose record is gone or unreadable is skipped
            try:
                records.append(await self.find_by_code(short_code))
            except (URLNotFoundError, StorageError) as e:
                logger.warning("Skipping %s while listing URLs: %s", short_code, e)

        return records

    async def exists(self, short_code: str) -> bool:
        key = URL_KEY_PREFIX + short_code
        try:
            return (await asyncio.to_thread(self.redis.exists, key)) > 0
        except redis.RedisError as e:
            raise StorageError(f"Failed to check {key}: {e}") from e

    async def close(self) -> None:
        await asyncio.to_thread(self.redis.close)
