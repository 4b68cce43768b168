"""
Short code generation for URL shortener.
Uses Strategy Pattern so the generation algorithm can be swapped.
"""

import string
import random
from abc import ABC, abstractmethod
from typing import Optional
import logging

from shortlink_app.exceptions import ShortCodeGenerationError
from shortlink_app.storage.strategies import URLStoreStrategy

logger = logging.getLogger(__name__)


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""
    
    @abstractmethod
    async def generate(self, store: URLStoreStrategy) -> str:
        """
        Generate a short code that is not yet used in the store.
        
        Args:
            store: URL store whose exists() check guards against collisions
            
        Returns:
            A unique short code string
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation with collision checking.
    
    Every attempt draws a fresh code of `length` characters from a-z, A-Z, 0-9
    and asks the store whether it is taken. A collision discards the whole
    code and draws again.
    
    With the default length of 6 the keyspace is 62^6 (~56.8 billion), so
    max_retries defaults to None and the loop runs until a free code turns up.
    Set max_retries to bound the loop; running out raises
    ShortCodeGenerationError.
    
    The module-level random generator is seeded once per process.
    Codes are not secrets, so it is not a cryptographic source.
    """
    
    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    
    def __init__(self, length: int = 6, max_retries: Optional[int] = None):
        if length < 1:
            raise ValueError("length must be positive")
        if max_retries is not None and max_retries < 1:
            raise ValueError("max_retries must be positive or None")
        self.length = length
        self.max_retries = max_retries
    
    async def generate(self, store: URLStoreStrategy) -> str:
        """Generate random short code with collision checking"""
        attempt = 0
        while self.max_retries is None or attempt < self.max_retries:
            attempt += 1
            short_code = self._generate_random_string()
            
            if not await store.exists(short_code):
                return short_code
            
            logger.debug("Short code collision on %s (attempt %d)", short_code, attempt)
        
        raise ShortCodeGenerationError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )
    
    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(random.choice(self.ALPHABET) for _ in range(self.length))
