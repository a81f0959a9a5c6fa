"""Line-oriented Markdown tokenizer producing a typed token tree.

Architecture:
The tokenizer uses a mixin-based design for separation of concerns:
- `InlineTokenizingMixin`: Inline spans within one line
- `BlockTokenizingMixin`: Line dispatch and single/multi-line blocks
- `ListTokenizingMixin`: Nested list scanning

Thread Safety:
- Tokenizer instances are single-use; create one per call
- Options are read from ContextVar (thread-local)
- The resulting tokens are immutable and safe to share

"""

from __future__ import annotations

from markyfy.config import ConvertOptions, get_convert_options
from markyfy.parsing import (
    BlockTokenizingMixin,
    InlineTokenizingMixin,
    ListTokenizingMixin,
)
from markyfy.tokens import Block


class Tokenizer(
    InlineTokenizingMixin,
    BlockTokenizingMixin,
    ListTokenizingMixin,
):
    """Markdown tokenizer.

    Usage:
        >>> tokens = Tokenizer("# Hello\\n\\nWorld").tokenize()
        >>> tokens[0]
        Header(raw='# Hello', depth=1, text='Hello', ...)

    Configuration:
        The nesting limit comes from the ConvertOptions active in the
        current context unless ``options`` is passed explicitly.

    """

    __slots__ = ("_source", "_max_depth")

    def __init__(self, source: str, options: ConvertOptions | None = None) -> None:
        """Initialize tokenizer with source text.

        Args:
            source: Markdown source text
            options: Explicit options (defaults to the context's options)
        """
        self._source = source
        self._max_depth = (options or get_convert_options()).max_nesting_depth

    def tokenize(self) -> tuple[Block, ...]:
        """Tokenize the whole source into block tokens.

        Line endings are normalized to ``\\n``; the document is trimmed once
        at its edges, never per line.
        """
        normalized = self._source.replace("\r\n", "\n").replace("\r", "\n")
        source = normalized.strip()
        if not source:
            return ()

        lines = source.split("\n")
        # Line numbers stay relative to the untrimmed input
        first = normalized[: len(normalized) - len(normalized.lstrip())].count("\n") + 1
        return tuple(self._tokenize_lines(lines, linenos=range(first, first + len(lines))))


def tokenize(source: str, *, options: ConvertOptions | None = None) -> tuple[Block, ...]:
    """Tokenize Markdown source into block tokens.

    Args:
        source: Markdown source text
        options: Explicit options (defaults to the context's options)

    Returns:
        Tuple of top-level block tokens
    """
    return Tokenizer(source, options).tokenize()
