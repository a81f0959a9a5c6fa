"""Exception classes for Markyfy.

Provides standardized exceptions for error handling throughout Markyfy.
None of these escape ``markyfy.convert()``; they surface only through the
lower-level ``tokenize()``/``render()`` APIs and in log records.
"""

from __future__ import annotations


class MarkyfyError(Exception):
    """Base exception for all Markyfy errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(MarkyfyError):
    """Error during Markdown tokenization.

    Raised (or carried in a failed parse result) when a block construct
    cannot be tokenized.
    """

    def __init__(self, message: str, lineno: int | None = None) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where the construct started (1-indexed)
        """
        self.message = message
        self.lineno = lineno

        location = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{location}{message}")


class UnclosedFenceError(ParseError):
    """A fenced code block reached end of input without a closing fence."""

    def __init__(self, lineno: int | None = None) -> None:
        super().__init__("Unclosed code block", lineno=lineno)


class NestingDepthError(ParseError):
    """Blockquote or list nesting exceeded the configured maximum depth."""

    def __init__(self, max_depth: int, lineno: int | None = None) -> None:
        """Initialize nesting error.

        Args:
            max_depth: The configured limit that was exceeded
            lineno: Line number where the too-deep construct started
        """
        self.max_depth = max_depth
        super().__init__(f"Too deeply nested (max depth {max_depth})", lineno=lineno)


class RenderError(MarkyfyError):
    """Error during HTML rendering.

    Raised when the renderer encounters an object that is not a token.
    """

    pass
