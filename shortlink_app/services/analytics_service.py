from typing import List
import logging

from shortlink_app.analytics.strategies import ClickStoreStrategy
from shortlink_app.exceptions import InvalidClickError
from shortlink_app.models.click import ClickEvent, Stats

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Click recording and stats, on top of an injected click store.
    
    Click events are not checked against the URL store; the two stores are
    independent and may even live in different processes.
    """
    
    def __init__(self, store: ClickStoreStrategy):
        self.store = store
    
    async def track_click(self, short_code: str, user_agent: str = "", referrer: str = "") -> ClickEvent:
        """
        Persist one click with a server-assigned id and timestamp.
        
        Raises:
            InvalidClickError: If short_code is empty
            StorageError: If the store fails
        """
        if not short_code:
            raise InvalidClickError("short_code is required")
        
        event = ClickEvent(
            short_code=short_code,
            user_agent=user_agent or "",
            referrer=referrer or "",
        )
        event = await self.store.save(event)
        logger.debug("Recorded click %s for %s", event.id, short_code)
        return event
    
    async def get_stats(self, short_code: str) -> Stats:
        """Stats with ordered click events; zero clicks is not an error"""
        return await self.store.stats_by_code(short_code)
    
    async def get_all_stats(self) -> List[Stats]:
        """Count-only stats for every clicked code"""
        return await self.store.stats_all()
