"""
URL safety filter.

Keeps the inspector from being pointed at loopback, link-local or
private-network hosts, and at anything that is not plain http(s).
"""

from urllib.parse import urlsplit

ALLOWED_SCHEMES = ('http', 'https')

BLOCKED_HOSTS = frozenset({'localhost', '127.0.0.1', '::1'})

# Textual prefixes only; decimal or hex encoded addresses are not caught.
BLOCKED_HOST_PREFIXES = ('10.', '127.', '192.168.', '169.254.')

BLOCKED_HOST_SUFFIXES = ('.local',)


def is_blocked_url(url: str) -> bool:
    """
    Check whether a URL must not be fetched.

    Unparsable URLs and URLs without a host are blocked.

    Args:
        url: URL string to check

    Returns:
        True if the URL is blocked, False if it may be fetched
    """
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
    except (ValueError, TypeError, AttributeError):
        return True

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return True

    if not host:
        return True

    host = host.lower()
    if host in BLOCKED_HOSTS:
        return True
    if host.endswith(BLOCKED_HOST_SUFFIXES):
        return True
    if host.startswith(BLOCKED_HOST_PREFIXES):
        return True

    return False
