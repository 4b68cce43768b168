"""
Redis connection helper shared by the URL store and the click store.
"""

import logging

import redis

from shortlink_app.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


def connect_redis(redis_url: str, socket_timeout: float = 2.0) -> redis.Redis:
    """
    Build a Redis client and test the connection immediately.
    
    Args:
        redis_url: Redis connection URL (redis://host:port/db)
        socket_timeout: Connect and command timeout in seconds
        
    Returns:
        Connected client with string responses
        
    Raises:
        BackendUnavailableError: If the server cannot be reached
    """
    try:
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        client.ping()
    except (redis.RedisError, ValueError) as e:
        raise BackendUnavailableError(f"Redis unreachable at {redis_url}: {e}") from e
    
    logger.info("Connected to Redis at %s", redis_url)
    return client
