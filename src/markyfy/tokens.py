"""Typed token tree for Markyfy.

The tokenizer produces a tree of tokens that the renderer walks once.
Each token kind is its own frozen dataclass carrying only the fields that
are meaningful for it, so invalid combinations (a header with list items,
a link without a URL) cannot be constructed.

Token Hierarchy:
Token (base: raw)
├── Inline
│   ├── Text
│   ├── Bold
│   ├── Italic
│   ├── Code
│   └── Link
└── Block
    ├── Paragraph
    ├── Header
    ├── CodeBlock
    ├── BlockQuote
    ├── List
    └── ListItem

Thread Safety:
All tokens are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Literal


class TokenKind(Enum):
    """Discriminator for token variants."""

    PARAGRAPH = "paragraph"
    HEADER = "header"
    CODE_BLOCK = "code_block"
    CODE = "code"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    TEXT = "text"


# =============================================================================
# Base Token
# =============================================================================


@dataclass(frozen=True, slots=True)
class Token:
    """Base class for all tokens.

    ``raw`` is the exact source span the token was derived from. It is kept
    for diagnostics and is never used for rendering.

    """

    kind: ClassVar[TokenKind]

    raw: str


# =============================================================================
# Inline Tokens
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Token):
    """Plain text run."""

    kind: ClassVar[TokenKind] = TokenKind.TEXT

    text: str


@dataclass(frozen=True, slots=True)
class Bold(Token):
    """Bold span.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    kind: ClassVar[TokenKind] = TokenKind.BOLD

    text: str


@dataclass(frozen=True, slots=True)
class Italic(Token):
    """Italic span.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    kind: ClassVar[TokenKind] = TokenKind.ITALIC

    text: str


@dataclass(frozen=True, slots=True)
class Code(Token):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    kind: ClassVar[TokenKind] = TokenKind.CODE

    text: str


@dataclass(frozen=True, slots=True)
class Link(Token):
    """Hyperlink.

    Markdown: [text](url)
    HTML: <a href="url">text</a>

    """

    kind: ClassVar[TokenKind] = TokenKind.LINK

    text: str
    url: str


# PEP 695 type alias for inline tokens
type Inline = Text | Bold | Italic | Code | Link


# =============================================================================
# Block Tokens
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Token):
    """Single-line paragraph.

    Blank lines separate paragraphs implicitly; each non-blank line that is
    not another construct becomes its own paragraph.

    """

    kind: ClassVar[TokenKind] = TokenKind.PARAGRAPH

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Header(Token):
    """ATX header.

    Markdown: ## Title
    HTML: <h2 id="title">Title</h2>

    """

    kind: ClassVar[TokenKind] = TokenKind.HEADER

    depth: Literal[1, 2, 3, 4, 5, 6]
    text: str
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock(Token):
    """Fenced code block. ``text`` is the verbatim content between fences."""

    kind: ClassVar[TokenKind] = TokenKind.CODE_BLOCK

    text: str
    lang: str = ""


@dataclass(frozen=True, slots=True)
class BlockQuote(Token):
    """Block quote holding re-tokenized block content."""

    kind: ClassVar[TokenKind] = TokenKind.BLOCKQUOTE

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Token):
    """List item.

    ``children`` holds the item's inline content; ``items`` holds a nested
    sub-list (or None). The two slots are independent.

    """

    kind: ClassVar[TokenKind] = TokenKind.LIST_ITEM

    text: str
    ordered: bool
    children: tuple[Inline, ...]
    items: tuple[ListItem, ...] | None = None


@dataclass(frozen=True, slots=True)
class List(Token):
    """Ordered or unordered list.

    Markdown: - item or 1. item
    HTML: <ul>/<ol> with <li> children

    """

    kind: ClassVar[TokenKind] = TokenKind.LIST

    ordered: bool
    items: tuple[ListItem, ...]


# PEP 695 type alias for top-level block tokens
type Block = Paragraph | Header | CodeBlock | BlockQuote | List


__all__ = [
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
]
