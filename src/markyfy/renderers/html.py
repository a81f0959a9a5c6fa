"""HTML renderer for the Markyfy token tree.

Walks the token tree once and serializes each token to an HTML fragment.
Block fragments are joined with newlines; inline fragments are concatenated
so spans never gain stray whitespace.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from markyfy.config import ConvertOptions, get_convert_options
from markyfy.errors import RenderError
from markyfy.highlighting import Highlighter, SyntaxHighlighter
from markyfy.renderers.styles import CODE_STYLE, LIST_STYLE
from markyfy.sanitize import sanitize_url
from markyfy.tokens import (
    BlockQuote,
    Bold,
    Code,
    CodeBlock,
    Header,
    Italic,
    Link,
    List,
    ListItem,
    Paragraph,
    Text,
    Token,
)
from markyfy.utils.text import escape_html, slugify

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    HtmlRenderer instances across threads.
    """

    code_style_emitted: bool = False
    list_style_emitted: bool = False


class HtmlRenderer:
    """Render a token tree to an HTML fragment.

    Usage:
        >>> from markyfy.tokenizer import tokenize
        >>> renderer = HtmlRenderer()
        >>> renderer.render(tokenize("# Title\\n\\nSome **bold** text."))
        '<h1 id="title">Title</h1>\\n<p>Some <strong>bold</strong> text.</p>'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_options", "_highlighter")

    def __init__(
        self,
        options: ConvertOptions | None = None,
        *,
        highlighter: Highlighter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            options: Conversion options (defaults to the context's options)
            highlighter: Code block highlighter (a default SyntaxHighlighter
                with the built-in languages if None)
        """
        self._options = options or get_convert_options()
        self._highlighter = highlighter if highlighter is not None else SyntaxHighlighter()

    @property
    def options(self) -> ConvertOptions:
        return self._options

    @property
    def highlighter(self) -> Highlighter:
        return self._highlighter

    def render(self, tokens: Iterable[Token]) -> str:
        """Render tokens to HTML, one fragment per token joined by newlines.

        Args:
            tokens: Block tokens (inline tokens are accepted too)

        Returns:
            HTML fragment (no ``<html>``/``<body>`` wrapper)

        Raises:
            RenderError: If an element is not a token
        """
        ctx = RenderContext()
        return self._render_blocks(tokens, ctx)

    def render_children(self, tokens: Iterable[Token] | None) -> str:
        """Render tokens concatenated without separators (inline content)."""
        if not tokens:
            return ""
        ctx = RenderContext()
        return "".join(self._render_token(token, ctx) for token in tokens)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _render_blocks(self, tokens: Iterable[Token], ctx: RenderContext) -> str:
        return "\n".join(self._render_token(token, ctx) for token in tokens)

    def _render_inlines(self, tokens: Iterable[Token], ctx: RenderContext) -> str:
        return "".join(self._render_token(token, ctx) for token in tokens)

    def _render_token(self, token: Token, ctx: RenderContext) -> str:
        """Render any token kind."""
        match token:
            case Header():
                return self._render_header(token, ctx)
            case CodeBlock():
                return self._render_code_block(token, ctx)
            case Paragraph():
                return f"<p>{self._render_inlines(token.children, ctx)}</p>"
            case BlockQuote():
                return f"<blockquote>{self._render_blocks(token.children, ctx)}</blockquote>"
            case List():
                return self._render_list(token, ctx)
            case ListItem():
                # Should be rendered by its list, but handle standalone
                return self._render_list_item(token, ctx)
            case Bold():
                return f"<strong>{escape_html(token.text)}</strong>"
            case Italic():
                return f"<em>{escape_html(token.text)}</em>"
            case Code():
                return f"<code>{escape_html(token.text)}</code>"
            case Link():
                return self._render_link(token)
            case Text():
                return escape_html(token.text)
            case _:
                msg = f"Cannot render {type(token).__name__!r}: not a token"
                raise RenderError(msg)

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_header(self, header: Header, ctx: RenderContext) -> str:
        """Render header, with a slug id when header IDs are enabled."""
        id_attr = ""
        if self._options.header_ids:
            id_attr = f' id="{escape_html(slugify(header.text))}"'
        content = self._render_inlines(header.children, ctx)
        return f"<h{header.depth}{id_attr}>{content}</h{header.depth}>"

    def _render_code_block(self, block: CodeBlock, ctx: RenderContext) -> str:
        """Render fenced code, highlighted when the language is supported.

        Unsupported languages are escaped here; the highlighter returns
        such code untouched.
        """
        code = escape_html(block.text)

        if block.lang and self._highlighter.supports_language(block.lang):
            try:
                code = self._highlighter.highlight(block.text, block.lang)
            except Exception:
                logger.debug("Syntax highlighting failed for language %r", block.lang, exc_info=True)

        html = f'<pre><code class="language-{escape_html(block.lang)}">{code}</code></pre>'
        if self._options.embed_styles and not ctx.code_style_emitted:
            ctx.code_style_emitted = True
            html = f"{html}\n{CODE_STYLE}"
        return html

    def _render_list(self, lst: List, ctx: RenderContext) -> str:
        """Render ordered or unordered list."""
        html = self._render_item_list(lst.items, lst.ordered, ctx)
        if self._options.embed_styles and not ctx.list_style_emitted:
            ctx.list_style_emitted = True
            html = f"{html}\n{LIST_STYLE}"
        return html

    def _render_item_list(
        self, items: tuple[ListItem, ...], ordered: bool, ctx: RenderContext
    ) -> str:
        tag = "ol" if ordered else "ul"
        body = "\n".join(self._render_list_item(item, ctx) for item in items)
        return f"<{tag}>\n{body}\n</{tag}>"

    def _render_list_item(self, item: ListItem, ctx: RenderContext) -> str:
        """Render list item; a nested sub-list goes inside the ``<li>``."""
        content = self._render_inlines(item.children, ctx)
        nested = ""
        if item.items:
            nested = f"\n{self._render_item_list(item.items, item.items[0].ordered, ctx)}\n"
        return f"<li>{content}{nested}</li>"

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_link(self, link: Link) -> str:
        url = sanitize_url(link.url) if self._options.sanitize else link.url
        return f'<a href="{escape_html(url)}">{escape_html(link.text)}</a>'
