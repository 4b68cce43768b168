"""
Click notification module (redirect path -> click recording path).
Implements Strategy Pattern for flexible delivery channels.
"""

from .strategies import ClickNotifierStrategy, HttpClickNotifier, LocalClickNotifier
from .factory import ClickNotifierFactory, NotifierBackend

__all__ = [
    "ClickNotifierStrategy",
    "HttpClickNotifier",
    "LocalClickNotifier",
    "ClickNotifierFactory",
    "NotifierBackend",
]
