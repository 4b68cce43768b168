"""URL normalization applied before a URL is stored."""

_SCHEMES = ("http://", "https://")


def normalize_url(raw_url: str) -> str:
    """
    Trim whitespace and default the scheme to https.
    
    Best-effort and syntactic only: hosts and other schemes are not checked.
    Applying it twice gives the same result as applying it once.
    
    >>> normalize_url("  example.com ")
    'https://example.com'
    >>> normalize_url("http://example.com")
    'http://example.com'
    """
    url = raw_url.strip()
    if not url.startswith(_SCHEMES):
        return "https://" + url
    return url
