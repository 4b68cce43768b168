"""
Error taxonomy shared by stores, services and routers.

- URLNotFoundError: lookup of a code with no record (an expected outcome)
- StorageError: backend call failed (network, serialization); never retried here
- BackendUnavailableError: backend unreachable at construction time
"""


class ShortlinkError(Exception):
    """Base class for all application errors"""


class URLNotFoundError(ShortlinkError, LookupError):
    """No URL record exists for the requested short code"""

    def __init__(self, short_code: str):
        super().__init__(f"url not found: {short_code}")
        self.short_code = short_code


class StorageError(ShortlinkError):
    """A backend read or write failed"""


class BackendUnavailableError(StorageError):
    """The networked backend could not be reached when the store was built"""


class ShortCodeGenerationError(ShortlinkError):
    """No free short code was found within the configured number of attempts"""


class InvalidURLError(ShortlinkError, ValueError):
    """The URL to shorten is empty"""


class InvalidClickError(ShortlinkError, ValueError):
    """A click notification arrived without a short code"""
