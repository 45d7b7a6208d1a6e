"""
Locator syntax.

A locator is an absolute URL. A string counts as a locator exactly when it
parses as one; strings that merely look like URLs cannot be told apart.
"""

from typing import Any, Optional
from urllib.parse import urlparse


def parse_locator(value: Any) -> Optional[str]:
    """Return ``value`` if it is an absolute URL string, else None."""
    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        return None

    # Malformed hosts and ports fail here; such strings are left to decode inline.
    try:
        parsed = urlparse(value)
        parsed.port
    except ValueError:
        return None

    if not parsed.scheme:
        return None
    # Only fetchable URLs count: a network location, or an absolute file path.
    # Scheme-only forms such as "urn:" or "mailto:" stay inline values.
    if parsed.netloc:
        return value
    if parsed.scheme == "file" and parsed.path.startswith("/"):
        return value
    return None


def is_locator(value: Any) -> bool:
    return parse_locator(value) is not None
