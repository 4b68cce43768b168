"""
Factory for creating click notifier instances.
"""

from enum import Enum
import logging

from shortlink_app.config import settings
from .strategies import ClickNotifierStrategy, HttpClickNotifier, LocalClickNotifier

logger = logging.getLogger(__name__)


class NotifierBackend(Enum):
    """Available click notification channels"""
    LOCAL = "local"
    HTTP = "http"


class ClickNotifierFactory:
    """
    Simple factory for creating click notifiers.
    
    Gets the analytics service URL and timeout from settings.
    """
    
    @classmethod
    def create(cls, backend: NotifierBackend, analytics_service=None) -> ClickNotifierStrategy:
        """
        Create a click notifier.
        
        Args:
            backend: Type of notifier (from enum)
            analytics_service: Required for the local notifier
            
        Returns:
            Click notifier instance
        """
        if backend == NotifierBackend.HTTP:
            logger.info("Click notifications go to %s", settings.analytics_service_url)
            return HttpClickNotifier(
                settings.analytics_service_url,
                timeout=settings.click_notify_timeout
            )
        
        if backend == NotifierBackend.LOCAL:
            if analytics_service is None:
                raise ValueError("Local click notifier needs an analytics service")
            logger.info("Click notifications are recorded in-process")
            return LocalClickNotifier(analytics_service)
        
        raise ValueError(f"Unknown notifier backend: {backend}")
