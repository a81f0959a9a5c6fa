"""Text processing utilities for Markyfy.

Provides the canonical escaping and slug functions shared by the renderer,
the highlighter and the top-level fallback path.

Example:
    >>> from markyfy.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import html as html_module
import re

_SLUG_STRIP = re.compile(r"[^a-z0-9 -]")
_SLUG_SPACES = re.compile(r"\s+")
_SLUG_HYPHENS = re.compile(r"-+")


def slugify(text: str) -> str:
    """Convert header text to an ASCII anchor slug.

    Lowercases, drops every character outside ``[a-z0-9 -]``, turns runs of
    whitespace into single hyphens, then collapses repeated hyphens.
    Leading and trailing hyphens are kept.

    Args:
        text: Header text (raw, may still contain Markdown markers)

    Returns:
        Slug suitable for an ``id`` attribute

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("A **bold** - move")
        'a-bold-move'
        >>> slugify("Café")
        'caf'
    """
    if not text:
        return ""

    text = _SLUG_STRIP.sub("", text.lower())
    text = _SLUG_SPACES.sub("-", text)
    return _SLUG_HYPHENS.sub("-", text)


def escape_html(text: str) -> str:
    """Escape HTML special characters for text and attribute values.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Not idempotent: escaping an escaped string escapes its ampersands again.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text

    Examples:
        >>> escape_html("<script>alert('xss')</script>")
        '&lt;script&gt;alert(&#x27;xss&#x27;)&lt;/script&gt;'
        >>> escape_html("&amp;")
        '&amp;amp;'
    """
    if not text:
        return ""

    return html_module.escape(text, quote=True)
