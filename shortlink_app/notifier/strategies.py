"""
Click notification strategies using Strategy Pattern.

The redirect path emits one notification per resolved short code. Delivery
is best-effort: the sender does not wait for it, retry it, or order it.
"""

from abc import ABC, abstractmethod
import asyncio
import logging

import requests

logger = logging.getLogger(__name__)


class ClickNotifierStrategy(ABC):
    """
    Abstract base class for click notification channels.
    
    Implementations raise on delivery failure; the caller decides whether
    that failure matters (on the redirect path it is only logged).
    """
    
    @abstractmethod
    async def notify(self, short_code: str, user_agent: str, referrer: str) -> None:
        """
        Deliver one click notification.
        
        Args:
            short_code: The short code that was resolved
            user_agent: Client user agent string
            referrer: HTTP referrer
        """
        pass


class HttpClickNotifier(ClickNotifierStrategy):
    """
    Posts the click to an analytics service over HTTP.
    
    Used when the redirect service and the analytics service run as separate
    processes. `requests` is blocking, so the call runs in a worker thread.
    """
    
    TRACK_PATH = "/api/v1/track"
    
    def __init__(self, analytics_service_url: str, timeout: float = 5.0):
        """
        Initialize HTTP notifier.
        
        Args:
            analytics_service_url: Base URL of the analytics service
            timeout: Request timeout in seconds
        """
        self.track_url = analytics_service_url.rstrip("/") + self.TRACK_PATH
        self.timeout = timeout
    
    async def notify(self, short_code: str, user_agent: str, referrer: str) -> None:
        payload = {
            "short_code": short_code,
            "user_agent": user_agent,
            "referrer": referrer,
        }
        response = await asyncio.to_thread(
            requests.post, self.track_url, json=payload, timeout=self.timeout
        )
        response.raise_for_status()


class LocalClickNotifier(ClickNotifierStrategy):
    """
    Records the click in this process's analytics service.
    
    Used when one process serves both redirects and stats.
    """
    
    def __init__(self, analytics_service):
        """
        Args:
            analytics_service: AnalyticsService that persists the click
        """
        self.analytics_service = analytics_service
    
    async def notify(self, short_code: str, user_agent: str, referrer: str) -> None:
        await self.analytics_service.track_click(short_code, user_agent, referrer)
