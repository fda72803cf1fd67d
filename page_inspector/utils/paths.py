"""
URL utilities for the page inspector.

Provides base/relative URL resolution.
"""

from typing import Optional
from urllib.parse import urljoin, urlsplit


def resolve_url(base: str, relative: Optional[str]) -> Optional[str]:
    """
    Resolve a possibly-relative URL against a base URL.

    Args:
        base: Absolute URL the reference appeared in
        relative: Raw URL string from markup or CSS

    Returns:
        Absolute URL string, or None if the input cannot be resolved
    """
    if relative is None:
        return None

    relative = relative.strip()
    if not relative:
        return None

    try:
        resolved = urljoin(base, relative)
        parsed = urlsplit(resolved)
    except ValueError:
        return None

    if not parsed.scheme:
        return None

    # http(s) URLs need a host to be fetchable
    if parsed.scheme in ('http', 'https') and not parsed.netloc:
        return None

    return resolved

