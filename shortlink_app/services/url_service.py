from datetime import datetime, timezone
from typing import List, Optional
import logging

from shortlink_app.exceptions import InvalidURLError
from shortlink_app.models.url import URLRecord
from shortlink_app.notifier.strategies import ClickNotifierStrategy
from shortlink_app.services.normalization import normalize_url
from shortlink_app.services.short_code_strategies import ShortCodeStrategy, RandomShortCodeStrategy
from shortlink_app.storage.strategies import URLStoreStrategy

logger = logging.getLogger(__name__)


class URLService:
    """
    URL Service with dependency injection for store, generator and notifier.
    
    This follows the Dependency Injection pattern:
    - The store is built once at startup and handed in (no global backend)
    - Easy to test (inject an in-memory store or a fake notifier)
    - Flexible (swap implementations without changing code)
    """
    
    def __init__(
        self,
        store: URLStoreStrategy,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        notifier: Optional[ClickNotifierStrategy] = None
    ):
        """
        Initialize URL service with dependencies.
        
        Args:
            store: URL store (in-memory or Redis)
            short_code_strategy: Code generator (defaults to 6-char random)
            notifier: Click notification channel (optional; no tracking without it)
        """
        self.store = store
        self.short_code_strategy = short_code_strategy or RandomShortCodeStrategy()
        self.notifier = notifier
    
    async def create_short_url(self, raw_url: str) -> URLRecord:
        """
        Create a new short URL.
        
        Always creates a new code, even when the same URL was shortened before.
        
        Process:
        1. Normalize the URL (trim, default scheme https)
        2. Draw a code that the store does not know yet
        3. Save the record
        
        Raises:
            InvalidURLError: If the URL is empty
            StorageError: If the store fails; nothing is retried here
        """
        if not raw_url or not raw_url.strip():
            raise InvalidURLError("URL is required")
        
        original_url = normalize_url(raw_url)
        short_code = await self.short_code_strategy.generate(self.store)
        
        record = URLRecord(
            id=short_code,
            short_code=short_code,
            original_url=original_url,
            created_at=datetime.now(timezone.utc),
        )
        record = await self.store.save(record)
        logger.info("Created %s -> %s", short_code, original_url)
        return record
    
    async def get_url(self, short_code: str) -> URLRecord:
        """
        Get URL record by short code.
        
        Raises:
            URLNotFoundError: If the code is unknown
        """
        return await self.store.find_by_code(short_code)
    
    async def list_urls(self) -> List[URLRecord]:
        """List every stored URL record"""
        return await self.store.find_all()
    
    async def get_long_url_for_redirect(self, short_code: str) -> str:
        """
        Get the destination for a redirect.
        
        This method ONLY resolves the URL. Click tracking is handed to
        notify_click, which the caller schedules in the background.
        
        Raises:
            URLNotFoundError: If the code is unknown
        """
        record = await self.store.find_by_code(short_code)
        return record.original_url
    
    async def notify_click(self, short_code: str, user_agent: str, referrer: str) -> None:
        """
        Send one click notification, logging instead of raising on failure.
        
        Runs detached from the redirect response; nothing waits on it and a
        failed notification is never retried.
        """
        if self.notifier is None:
            return
        try:
            await self.notifier.notify(short_code, user_agent or "", referrer or "")
        except Exception as e:
            logger.warning("Failed to track click for %s: %s", short_code, e)
