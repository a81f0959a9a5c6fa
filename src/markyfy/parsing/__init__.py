"""Tokenizing mixins for Markyfy.

The Tokenizer combines these mixins:
- InlineTokenizingMixin: bold, italic, inline code, links
- BlockTokenizingMixin: line dispatch, headers, blockquotes, fenced code
- ListTokenizingMixin: stack-based nested lists

"""

from markyfy.parsing.blocks import BlockTokenizingMixin
from markyfy.parsing.inline import InlineTokenizingMixin, parse_inline
from markyfy.parsing.lists import ListTokenizingMixin
from markyfy.parsing.results import Failed, Parsed, ParseResult

__all__ = [
    "BlockTokenizingMixin",
    "Failed",
    "InlineTokenizingMixin",
    "ListTokenizingMixin",
    "ParseResult",
    "Parsed",
    "parse_inline",
]
