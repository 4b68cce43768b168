"""
FastAPI dependencies for dependency injection.

This module builds the stores, the notifier and the services once per
process and hands them to the routes. Each store owns exactly one backend
handle; nothing else reaches for a global connection.
"""

from functools import lru_cache

from shortlink_app.analytics.factory import ClickStoreFactory
from shortlink_app.analytics.strategies import ClickStoreStrategy
from shortlink_app.config import settings
from shortlink_app.notifier.factory import ClickNotifierFactory, NotifierBackend
from shortlink_app.notifier.strategies import ClickNotifierStrategy
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.services.short_code_strategies import RandomShortCodeStrategy
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.factory import URLStoreFactory, StorageBackend
from shortlink_app.storage.strategies import URLStoreStrategy


@lru_cache()
def get_url_store() -> URLStoreStrategy:
    """
    Get URL store instance (singleton).
    
    @lru_cache ensures the backend is chosen (and Redis fallback decided)
    exactly once.
    """
    return URLStoreFactory.create(StorageBackend(settings.storage_backend))


@lru_cache()
def get_click_store() -> ClickStoreStrategy:
    """Get click store instance (singleton)"""
    return ClickStoreFactory.create(StorageBackend(settings.storage_backend))


@lru_cache()
def get_analytics_service() -> AnalyticsService:
    """Get AnalyticsService with its click store injected"""
    return AnalyticsService(store=get_click_store())


@lru_cache()
def get_click_notifier() -> ClickNotifierStrategy:
    """Get click notifier instance (singleton)"""
    backend = NotifierBackend(settings.click_notifier)
    analytics_service = get_analytics_service() if backend == NotifierBackend.LOCAL else None
    return ClickNotifierFactory.create(backend, analytics_service=analytics_service)


@lru_cache()
def get_url_service() -> URLService:
    """
    Get URLService with all dependencies injected.
    
    - Controller depends on service
    - Service depends on infrastructure (store, generator, notifier)
    """
    return URLService(
        store=get_url_store(),
        short_code_strategy=RandomShortCodeStrategy(
            length=settings.short_code_length,
            max_retries=settings.short_code_max_retries
        ),
        notifier=get_click_notifier(),
    )


def clear_dependency_cache():
    """Drop every cached singleton (for testing)"""
    for provider in (
        get_url_store,
        get_click_store,
        get_analytics_service,
        get_click_notifier,
        get_url_service,
    ):
        provider.cache_clear()
