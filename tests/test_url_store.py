"""
Contract tests for URL stores (run against in-memory and Redis backends).
"""

import asyncio
import time
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from shortlink_app.exceptions import StorageError, URLNotFoundError
from shortlink_app.models.url import URLRecord
from shortlink_app.storage.strategies import RedisURLStore


def make_record(code: str, url: str = "https://example.com") -> URLRecord:
    return URLRecord(id=code, short_code=code, original_url=url)


class TestURLStoreContract:
    """Behaviour every URL store must share"""

    def test_save_then_find(self, url_store):
        """Saved record is returned by its short code"""
        asyncio.run(url_store.save(make_record("aZ3kQ9")))

        found = asyncio.run(url_store.find_by_code("aZ3kQ9"))

        assert found.short_code == "aZ3kQ9"
        assert found.id == "aZ3kQ9"
        assert found.original_url == "https://example.com"

    def test_save_assigns_created_at(self, url_store):
        """created_at is filled in when the caller leaves it empty"""
        saved = asyncio.run(url_store.save(make_record("abc123")))
        assert saved.created_at is not None

        found = asyncio.run(url_store.find_by_code("abc123"))
        assert found.created_at is not None

    def test_save_keeps_given_created_at(self, url_store):
        """An explicit created_at is stored unchanged"""
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        record = make_record("keep01").model_copy(update={"created_at": created})

        asyncio.run(url_store.save(record))

        assert asyncio.run(url_store.find_by_code("keep01")).created_at == created

    def test_find_missing_code(self, url_store):
        """Unknown code is a not-found outcome, not a storage failure"""
        with pytest.raises(URLNotFoundError) as exc_info:
            asyncio.run(url_store.find_by_code("nope00"))

        assert exc_info.value.short_code == "nope00"

    def test_exists(self, url_store):
        """exists flips from False to True once the code is saved"""
        assert asyncio.run(url_store.exists("xyz789")) is False

        asyncio.run(url_store.save(make_record("xyz789")))

        assert asyncio.run(url_store.exists("xyz789")) is True

    def test_find_all(self, url_store):
        """find_all returns every saved record"""
        for code in ("aaaaaa", "bbbbbb", "cccccc"):
            asyncio.run(url_store.save(make_record(code, f"https://{code}.com")))

        records = asyncio.run(url_store.find_all())

        assert {r.short_code for r in records} == {"aaaaaa", "bbbbbb", "cccccc"}

    def test_find_all_empty(self, url_store):
        assert asyncio.run(url_store.find_all()) == []

    def test_save_same_code_overwrites(self, url_store):
        """Last write wins for one code"""
        asyncio.run(url_store.save(make_record("dup001", "https://first.com")))
        asyncio.run(url_store.save(make_record("dup001", "https://second.com")))

        assert asyncio.run(url_store.find_by_code("dup001")).original_url == "https://second.com"
        assert len(asyncio.run(url_store.find_all())) == 1

    def test_returned_record_is_read_only(self, url_store):
        """A caller cannot change a stored record through the object it got back"""
        asyncio.run(url_store.save(make_record("abc123")))
        found = asyncio.run(url_store.find_by_code("abc123"))

        with pytest.raises(ValidationError):
            found.original_url = "https://elsewhere.example"

        assert asyncio.run(url_store.find_by_code("abc123")).original_url == "https://example.com"

    def test_saved_record_is_read_only(self, url_store):
        saved = asyncio.run(url_store.save(make_record("abc123")))

        with pytest.raises(ValidationError):
            saved.short_code = "zzz999"

        assert [r.short_code for r in asyncio.run(url_store.find_all())] == ["abc123"]


class TestRedisURLStore:
    """Redis-specific layout and failure handling"""

    def test_key_layout(self, fake_redis):
        """Record lives under url:<code> and the code joins urls:list"""
        store = RedisURLStore(fake_redis)

        asyncio.run(store.save(make_record("lay001")))

        assert "url:lay001" in fake_redis.strings
        assert fake_redis.sets["urls:list"] == {"lay001"}
        stored = URLRecord.model_validate_json(fake_redis.strings["url:lay001"])
        assert stored.original_url == "https://example.com"

    def test_exists_ignores_tracking_set(self, fake_redis):
        """exists checks the record key, not urls:list"""
        store = RedisURLStore(fake_redis)
        fake_redis.sets["urls:list"] = {"ghost1"}

        assert asyncio.run(store.exists("ghost1")) is False

    def test_find_all_skips_tracked_but_missing(self, fake_redis):
        """A code in urls:list without a record is skipped, not fatal"""
        store = RedisURLStore(fake_redis)
        asyncio.run(store.save(make_record("real01")))
        fake_redis.sets["urls:list"].add("ghost1")

        records = asyncio.run(store.find_all())

        assert [r.short_code for r in records] == ["real01"]

    def test_find_all_skips_corrupt_record(self, fake_redis):
        store = RedisURLStore(fake_redis)
        asyncio.run(store.save(make_record("real01")))
        fake_redis.strings["url:bad001"] = "{not json"
        fake_redis.sets["urls:list"].add("bad001")

        records = asyncio.run(store.find_all())

        assert [r.short_code for r in records] == ["real01"]

    def test_corrupt_record_is_storage_error(self, fake_redis):
        """A parse failure on read is a fetch failure for that key"""
        store = RedisURLStore(fake_redis)
        fake_redis.strings["url:bad001"] = "{not json"

        with pytest.raises(StorageError):
            asyncio.run(store.find_by_code("bad001"))

    def test_save_failure_propagates(self, fake_redis):
        store = RedisURLStore(fake_redis)
        fake_redis.fail_on.add("set")

        with pytest.raises(StorageError):
            asyncio.run(store.save(make_record("fail01")))

    def test_tracking_set_failure_propagates(self, fake_redis):
        """The record write succeeded but the set write failed: caller still sees the error"""
        store = RedisURLStore(fake_redis)
        fake_redis.fail_on.add("sadd")

        with pytest.raises(StorageError):
            asyncio.run(store.save(make_record("half01")))

        # Reachable by code, absent from listings
        fake_redis.fail_on.clear()
        assert asyncio.run(store.find_by_code("half01")).short_code == "half01"
        assert asyncio.run(store.find_all()) == []

    def test_lookup_failure_propagates(self, fake_redis):
        store = RedisURLStore(fake_redis)
        fake_redis.fail_on.add("get")

        with pytest.raises(StorageError):
            asyncio.run(store.find_by_code("any001"))

    def test_listing_failure_propagates(self, fake_redis):
        store = RedisURLStore(fake_redis)
        fake_redis.fail_on.add("smembers")

        with pytest.raises(StorageError):
            asyncio.run(store.find_all())

    def test_exists_failure_propagates(self, fake_redis):
        store = RedisURLStore(fake_redis)
        fake_redis.fail_on.add("exists")

        with pytest.raises(StorageError):
            asyncio.run(store.exists("any001"))

    def test_close(self, fake_redis):
        store = RedisURLStore(fake_redis)
        asyncio.run(store.close())
        assert fake_redis.closed is True

    def test_slow_lookup_does_not_block_event_loop(self, slow_redis):
        """Concurrent lookups overlap and other tasks keep running meanwhile"""
        store = RedisURLStore(slow_redis)
        asyncio.run(store.save(make_record("slow01")))
        ticks = []

        async def ticker():
            for _ in range(4):
                await asyncio.sleep(0.05)
                ticks.append(time.perf_counter())

        async def lookups():
            started = time.perf_counter()
            results = await asyncio.gather(
                store.find_by_code("slow01"),
                store.find_by_code("slow01"),
                ticker(),
            )
            return started, time.perf_counter() - started, results

        started, elapsed, results = asyncio.run(lookups())

        assert results[0].short_code == results[1].short_code == "slow01"
        assert elapsed < 2 * slow_redis.delay
        # The ticker finished while the lookups were still waiting on Redis
        assert ticks[-1] - started < slow_redis.delay
