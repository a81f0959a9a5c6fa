"""URL sanitization for rendered links.

Blanks out link targets that would execute script when clicked. Everything
else, including relative URLs, passes through unchanged.

Example:
    >>> sanitize_url("javascript:alert(1)")
    ''
    >>> sanitize_url("https://example.com")
    'https://example.com'
"""

import re

_DANGEROUS_SCHEMES = frozenset(("javascript:", "data:", "vbscript:"))

# Browsers drop leading C0 controls/spaces and embedded tab/CR/LF before
# reading the scheme ("java\tscript:" still executes).
_LEADING_JUNK = re.compile(r"^[\x00-\x20]+")
_EMBEDDED_WHITESPACE = re.compile(r"[\t\r\n]")


def is_dangerous_url(url: str) -> bool:
    """Check if URL uses a dangerous scheme."""
    normalized = _EMBEDDED_WHITESPACE.sub("", _LEADING_JUNK.sub("", url)).lower()
    return any(normalized.startswith(s) for s in _DANGEROUS_SCHEMES)


def sanitize_url(url: str) -> str:
    """Return ``""`` for dangerous URLs and ``url`` unchanged otherwise."""
    if is_dangerous_url(url):
        return ""
    return url
