"""Logging configuration for the shortlink services."""

import logging
import sys


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure root logging once at process start.
    
    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
        
    Returns:
        The application logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    
    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    
    return logging.getLogger("shortlink_app")
