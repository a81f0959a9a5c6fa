"""
Markyfy — Markdown to HTML with built-in code highlighting

Converts Markdown text into an HTML fragment: headers, paragraphs, block
quotes, fenced code blocks, nested lists, and bold/italic/code/link spans.
Fenced code blocks in registered languages get ``token`` span markup.

Quick Start:
    >>> from markyfy import convert
    >>> convert("# Title\\n\\nSome **bold** text.")
    '<h1 id="title">Title</h1>\\n<p>Some <strong>bold</strong> text.</p>'

    >>> # Or keep a configured converter around
    >>> from markyfy import Markyfy
    >>> md = Markyfy(header_ids=False)
    >>> md("## Plain")
    '<h2>Plain</h2>'

Custom Languages:
    >>> from markyfy import LanguageDefinition, Markyfy
    >>> md = Markyfy()
    >>> md.register_language(
    ...     "python",
    ...     LanguageDefinition.from_patterns("python", [(r"\\bdef\\b", "keyword")]),
    ... )

Installation:
    pip install markyfy              # zero runtime dependencies
    pip install markyfy[test]        # + pytest, hypothesis
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from markyfy.config import (
    ConvertOptions,
    get_convert_options,
    options_context,
    reset_convert_options,
    set_convert_options,
)
from markyfy.errors import (
    MarkyfyError,
    NestingDepthError,
    ParseError,
    RenderError,
    UnclosedFenceError,
)
from markyfy.highlighting import (
    Highlighter,
    LanguageDefinition,
    LanguageRegistry,
    SyntaxHighlighter,
    SyntaxRule,
    create_default_registry,
)
from markyfy.parsing.inline import parse_inline
from markyfy.renderers.html import HtmlRenderer
from markyfy.sanitize import sanitize_url
from markyfy.tokenizer import Tokenizer
from markyfy.tokens import (
    Block,
    BlockQuote,
    Bold,
    Code,
    CodeBlock,
    Header,
    Inline,
    Italic,
    Link,
    List,
    ListItem,
    Paragraph,
    Text,
    Token,
    TokenKind,
)
from markyfy.utils.logger import get_logger
from markyfy.utils.text import escape_html, slugify

__version__ = "0.1.0"

logger = get_logger(__name__)


def _resolve_options(
    options: ConvertOptions | Mapping[str, Any] | None, overrides: Mapping[str, Any]
) -> ConvertOptions:
    """Build the effective options; invalid names or values raise here.

    A mapping goes through ConvertOptions.from_dict(), so the camelCase
    spellings (``headerIds``) work in both the mapping and the overrides.
    """
    if options is None:
        resolved = get_convert_options()
    elif isinstance(options, ConvertOptions):
        resolved = options
    elif isinstance(options, Mapping):
        resolved = ConvertOptions.from_dict(options)
    else:
        msg = f"options must be ConvertOptions or a mapping, got {type(options).__name__}"
        raise TypeError(msg)
    if overrides:
        resolved = resolved.with_overrides(**overrides)
    return resolved


def _fallback(markdown: object) -> str:
    if markdown is None:
        return ""
    return escape_html(markdown if isinstance(markdown, str) else str(markdown))


def tokenize(
    markdown: str, *, options: ConvertOptions | Mapping[str, Any] | None = None
) -> tuple[Block, ...]:
    """Tokenize Markdown source into block tokens.

    Args:
        markdown: Markdown source text
        options: Explicit options or an options mapping (defaults to the
            context's options)

    Returns:
        Tuple of top-level block tokens

    Example:
        >>> tokenize("# Hi")[0].depth
        1
    """
    return Tokenizer(markdown, _resolve_options(options, {})).tokenize()


def render(
    tokens: Iterable[Token],
    *,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    highlighter: Highlighter | None = None,
) -> str:
    """Render block tokens to an HTML fragment.

    Args:
        tokens: Tokens from tokenize()
        options: Explicit options (defaults to the context's options)
        highlighter: Code block highlighter (built-in languages if None)

    Returns:
        HTML string
    """
    return HtmlRenderer(_resolve_options(options, {}), highlighter=highlighter).render(tokens)


def convert(
    markdown: str,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    *,
    highlighter: Highlighter | None = None,
    **overrides: Any,
) -> str:
    """Convert Markdown to HTML without raising on any input.

    Malformed constructs are demoted line by line during tokenization. Any
    other failure abandons the render and returns the whole input escaped.
    Options are checked before conversion starts, so a bad option name or
    value raises instead of being mistaken for a conversion failure.

    Args:
        markdown: Markdown source text
        options: Conversion options or an options mapping such as
            ``{"headerIds": False}`` (defaults to the context's options)
        highlighter: Code block highlighter (built-in languages if None)
        **overrides: Individual option overrides, e.g. ``header_ids=False``
            or ``headerIds=False``

    Returns:
        HTML fragment, or the HTML-escaped input on failure

    Raises:
        TypeError: If an option name is unknown or ``options`` has the
            wrong type
        ValueError: If an option value is invalid

    Example:
        >>> convert("[x](javascript:alert(1))")
        '<p><a href="">x</a>)</p>'
        >>> convert("# Hi", headerIds=False)
        '<h1>Hi</h1>'
    """
    resolved = _resolve_options(options, overrides)
    try:
        tokens = Tokenizer(markdown, resolved).tokenize()
        return HtmlRenderer(resolved, highlighter=highlighter).render(tokens)
    except Exception:
        logger.exception("Markdown conversion failed; returning escaped source")
        return _fallback(markdown)


class Markyfy:
    """Configured Markdown converter.

    Usage:
        >>> md = Markyfy()
        >>> md("Some *emphasis*")
        '<p>Some <em>emphasis</em></p>'

        >>> # Access the tokens
        >>> tokens = md.tokenize("# Heading")
        >>> tokens[0].depth
        1

    Thread Safety:
        Options are frozen and the renderer keeps no per-call state, so
        one instance may convert from several threads. Register languages
        before sharing it.

    """

    __slots__ = ("_options", "_highlighter", "_renderer")

    def __init__(
        self,
        options: ConvertOptions | Mapping[str, Any] | None = None,
        *,
        highlighter: Highlighter | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize converter.

        Args:
            options: Base options or an options mapping (the context's
                options if None)
            highlighter: Code block highlighter (a private SyntaxHighlighter
                with the built-in languages if None)
            **overrides: Individual option overrides, e.g. ``sanitize=False``

        Raises:
            TypeError: If an option name is unknown
            ValueError: If an option value is invalid
        """
        self._options = _resolve_options(options, overrides)
        self._highlighter = highlighter if highlighter is not None else SyntaxHighlighter()
        self._renderer = HtmlRenderer(self._options, highlighter=self._highlighter)

    @property
    def options(self) -> ConvertOptions:
        return self._options

    @property
    def highlighter(self) -> Highlighter:
        return self._highlighter

    def __call__(self, markdown: str) -> str:
        """Convert Markdown to HTML. Never raises; see convert()."""
        return self.convert(markdown)

    def convert(self, markdown: str) -> str:
        """Convert Markdown to HTML, falling back to the escaped input."""
        try:
            with options_context(self._options):
                tokens = Tokenizer(markdown, self._options).tokenize()
                return self._renderer.render(tokens)
        except Exception:
            logger.exception("Markdown conversion failed; returning escaped source")
            return _fallback(markdown)

    # Alias kept for callers of the older method name
    parse = convert

    def tokenize(self, markdown: str) -> tuple[Block, ...]:
        """Tokenize Markdown with this converter's options."""
        return Tokenizer(markdown, self._options).tokenize()

    def render(self, tokens: Iterable[Token]) -> str:
        """Render tokens with this converter's options and highlighter."""
        return self._renderer.render(tokens)

    def register_language(self, name: str, definition: LanguageDefinition) -> None:
        """Register a highlight language on this converter's highlighter.

        Raises:
            TypeError: If a custom highlighter without registration support
                was injected
        """
        register = getattr(self._highlighter, "register_language", None)
        if register is None:
            msg = f"{type(self._highlighter).__name__} does not support language registration"
            raise TypeError(msg)
        register(name, definition)


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "convert",
    "tokenize",
    "render",
    "parse_inline",
    # High-level
    "Markyfy",
    # Tokens
    "Block",
    "BlockQuote",
    "Bold",
    "Code",
    "CodeBlock",
    "Header",
    "Inline",
    "Italic",
    "Link",
    "List",
    "ListItem",
    "Paragraph",
    "Text",
    "Token",
    "TokenKind",
    # Components
    "Tokenizer",
    "HtmlRenderer",
    # Highlighting
    "Highlighter",
    "LanguageDefinition",
    "LanguageRegistry",
    "SyntaxHighlighter",
    "SyntaxRule",
    "create_default_registry",
    # Configuration (ContextVar-based)
    "ConvertOptions",
    "get_convert_options",
    "set_convert_options",
    "reset_convert_options",
    "options_context",
    # Errors
    "MarkyfyError",
    "ParseError",
    "UnclosedFenceError",
    "NestingDepthError",
    "RenderError",
    # Utilities
    "escape_html",
    "sanitize_url",
    "slugify",
]
