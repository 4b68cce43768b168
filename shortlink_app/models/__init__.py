"""
Records persisted by the stores.

URL records and click events live in separate stores; stats are derived
from click events on read and never persisted.
"""

from .url import URLRecord
from .click import ClickEvent, Stats

__all__ = ["URLRecord", "ClickEvent", "Stats"]
