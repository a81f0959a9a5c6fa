"""Logger lookup for Markyfy modules.

Every Markyfy logger lives under the ``markyfy`` namespace, so one call
controls the whole library. No handlers are installed here; output is
whatever the application configures.

Records emitted:
- ``markyfy.parsing.blocks`` WARNING: a line demoted to a plain paragraph
- ``markyfy`` ERROR: a conversion that fell back to the escaped source
- ``markyfy.renderers.html`` DEBUG: highlighter failures

Example:
    >>> import logging
    >>> logging.getLogger("markyfy").setLevel(logging.ERROR)  # hide demotions
"""

from __future__ import annotations

import logging

_NAMESPACE = "markyfy"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the markyfy namespace.

    Names already under ``markyfy`` are used as-is; anything else is
    nested beneath it.

    Example:
        >>> get_logger("highlighting").name
        'markyfy.highlighting'
        >>> get_logger("markyfy.renderers.html").name
        'markyfy.renderers.html'
    """
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
