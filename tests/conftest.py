"""
Test configuration and fixtures for the shortlink services.
This centralizes all test setup, making individual tests clean.
"""

import time

import pytest
import redis
from fastapi.testclient import TestClient

from main import app
from shortlink_app.analytics.strategies import InMemoryClickStore, RedisClickStore
from shortlink_app.dependencies import get_analytics_service, get_url_service
from shortlink_app.notifier.strategies import LocalClickNotifier
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.strategies import InMemoryURLStore, RedisURLStore


class FakeRedis:
    """
    Dict-backed stand-in for a connected redis.Redis client
    (decode_responses=True), covering only the commands the stores use.

    Set `fail_on` to a command name to make that command raise
    redis.ConnectionError.
    """

    def __init__(self):
        self.strings = {}
        self.sets = {}
        self.lists = {}
        self.fail_on = set()
        self.closed = False

    def _check(self, command):
        if command in self.fail_on:
            raise redis.ConnectionError(f"{command} failed")

    def ping(self):
        self._check("ping")
        return True

    def set(self, key, value):
        self._check("set")
        self.strings[key] = value
        return True

    def get(self, key):
        self._check("get")
        return self.strings.get(key)

    def exists(self, *keys):
        self._check("exists")
        return sum(1 for key in keys if key in self.strings or key in self.lists or key in self.sets)

    def sadd(self, key, *members):
        self._check("sadd")
        members_set = self.sets.setdefault(key, set())
        before = len(members_set)
        members_set.update(members)
        return len(members_set) - before

    def smembers(self, key):
        self._check("smembers")
        return set(self.sets.get(key, set()))

    def rpush(self, key, *values):
        self._check("rpush")
        items = self.lists.setdefault(key, [])
        items.extend(values)
        return len(items)

    def lrange(self, key, start, end):
        self._check("lrange")
        items = self.lists.get(key, [])
        if end == -1:
            return list(items[start:])
        return list(items[start:end + 1])

    def llen(self, key):
        self._check("llen")
        return len(self.lists.get(key, []))

    def close(self):
        self.closed = True


class SlowRedis(FakeRedis):
    """FakeRedis whose reads take `delay` seconds, like a slow network round trip"""

    def __init__(self, delay=0.5):
        super().__init__()
        self.delay = delay

    def get(self, key):
        time.sleep(self.delay)
        return super().get(key)

    def lrange(self, key, start, end):
        time.sleep(self.delay)
        return super().lrange(key, start, end)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def slow_redis():
    return SlowRedis(delay=0.5)


@pytest.fixture(params=["memory", "redis"])
def url_store(request, fake_redis):
    """Every URL store backend, so contract tests run against both"""
    if request.param == "memory":
        return InMemoryURLStore()
    return RedisURLStore(fake_redis)


@pytest.fixture(params=["memory", "redis"])
def click_store(request, fake_redis):
    """Every click store backend, so contract tests run against both"""
    if request.param == "memory":
        return InMemoryClickStore()
    return RedisClickStore(fake_redis)


@pytest.fixture
def analytics_service():
    return AnalyticsService(store=InMemoryClickStore())


@pytest.fixture
def url_service(analytics_service):
    return URLService(
        store=InMemoryURLStore(),
        notifier=LocalClickNotifier(analytics_service),
    )


@pytest.fixture(scope="function")
def client(url_service, analytics_service):
    """
    Create a test client with fresh in-memory services injected.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_url_service] = lambda: url_service
    app.dependency_overrides[get_analytics_service] = lambda: analytics_service

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
