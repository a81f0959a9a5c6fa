"""Utility modules for Markyfy.

Provides:
- text: slugify, escape_html for text processing
- logger: get_logger for logging
"""

from markyfy.utils.logger import get_logger
from markyfy.utils.text import escape_html, slugify

__all__ = [
    "escape_html",
    "get_logger",
    "slugify",
]
