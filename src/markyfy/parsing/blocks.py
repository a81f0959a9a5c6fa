"""Block-level tokenization for Markyfy.

Walks the document line by line. Each line is dispatched to the first
matching sub-parser; multi-line sub-parsers report the index of the first
line they did not consume and the loop resumes there.

Dispatch order (first match wins, patterns overlap):
1. ``#``   -> header
2. ``>``   -> blockquote (recursive)
3. ```` ``` ```` -> fenced code block
4. list marker on the trimmed line -> list
5. any other non-blank line -> single-line paragraph

Thread Safety:
Methods only touch per-tokenizer state. Create one Tokenizer per call.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from markyfy.errors import NestingDepthError, UnclosedFenceError
from markyfy.parsing.results import Failed, Parsed, ParseResult
from markyfy.tokens import Block, BlockQuote, CodeBlock, Header, Paragraph, Text

logger = logging.getLogger(__name__)

_HEADER = re.compile(r"^(#{1,6})(?:\s+(.+))?$")
_LIST_START = re.compile(r"^(?:[-*+]|\d+\.)\s+.+")
_FENCE = "```"


class BlockTokenizingMixin:
    """Block tokenizing methods.

    Required Host Attributes:
        - _max_depth: int

    Required Host Methods (from other mixins):
        - _parse_inline(text) -> tuple[Inline, ...]
        - _parse_list(lines, start, linenos) -> ParseResult

    """

    def _tokenize_lines(
        self,
        lines: list[str],
        depth: int = 0,
        linenos: Sequence[int] | None = None,
    ) -> list[Block]:
        """Tokenize a sequence of lines into block tokens.

        A failed sub-parse demotes only its starting line to a paragraph
        holding the raw text (escaped at render time); tokenizing continues
        with the next line.

        Args:
            lines: Source lines, already split on newlines
            depth: Current blockquote nesting depth
            linenos: Document line number of each entry in ``lines``
                (``1..len(lines)`` if None)
        """
        if linenos is None:
            linenos = range(1, len(lines) + 1)

        blocks: list[Block] = []
        i = 0
        line_count = len(lines)

        while i < line_count:
            line = lines[i]
            result = self._dispatch_line(lines, i, depth, linenos)
            if result is None:
                i += 1
                continue

            if isinstance(result, Failed):
                logger.warning("Error parsing line %d: %s", linenos[i], result.error)
                blocks.append(Paragraph(raw=line, children=(Text(raw=line, text=line),)))
                i += 1
                continue

            blocks.append(result.token)
            i = result.next_index

        return blocks

    def _dispatch_line(
        self, lines: list[str], i: int, depth: int, linenos: Sequence[int]
    ) -> ParseResult | None:
        """Route one line to its sub-parser. Returns None for blank lines."""
        line = lines[i]

        if line.startswith("#"):
            return Parsed(self._parse_header(line), i + 1)

        if line.startswith(">"):
            return self._parse_blockquote(lines, i, depth, linenos)

        if line.startswith(_FENCE):
            return self._parse_code_block(lines, i, linenos)

        stripped = line.strip()
        if _LIST_START.match(stripped):
            return self._parse_list(lines, i, linenos)

        if stripped:
            return Parsed(Paragraph(raw=line, children=self._parse_inline(line)), i + 1)

        return None

    def _parse_header(self, line: str) -> Block:
        """Parse an ATX header line.

        More than six ``#``, a missing space after the run, or a bare run
        with no text all fall back to a paragraph of the literal line.
        """
        match = _HEADER.match(line)
        if match is None or match.group(2) is None:
            return Paragraph(raw=line, children=self._parse_inline(line))

        text = match.group(2)
        return Header(
            raw=line,
            depth=len(match.group(1)),  # type: ignore[arg-type]
            text=text,
            children=self._parse_inline(text),
        )

    def _parse_blockquote(
        self, lines: list[str], start: int, depth: int, linenos: Sequence[int]
    ) -> ParseResult:
        """Parse a blockquote and re-tokenize its content.

        Consumes contiguous lines that start with ``>`` or are blank. Each
        non-blank line loses its ``>`` and at most one following space;
        blank lines are consumed but not collected.
        """
        if depth + 1 > self._max_depth:
            return Failed(NestingDepthError(self._max_depth, lineno=linenos[start]))

        content: list[str] = []
        content_linenos: list[int] = []
        i = start
        line_count = len(lines)

        while i < line_count:
            line = lines[i]
            if line.strip() == "":
                i += 1
                continue
            if not line.startswith(">"):
                break
            inner = line[1:]
            if inner.startswith(" "):
                inner = inner[1:]
            content.append(inner)
            content_linenos.append(linenos[i])
            i += 1

        # Quote content is re-tokenized like a document: trimmed once at its edges
        while content and not content[0].strip():
            del content[0], content_linenos[0]
        while content and not content[-1].strip():
            del content[-1], content_linenos[-1]
        if content:
            content[0] = content[0].lstrip()
            content[-1] = content[-1].rstrip()

        children = self._tokenize_lines(content, depth + 1, content_linenos) if content else []
        return Parsed(
            BlockQuote(raw="\n".join(lines[start:i]), children=tuple(children)),
            i,
        )

    def _parse_code_block(
        self, lines: list[str], start: int, linenos: Sequence[int]
    ) -> ParseResult:
        """Parse a fenced code block; content lines are kept verbatim."""
        lang = lines[start][len(_FENCE) :].strip()
        i = start + 1
        line_count = len(lines)

        while i < line_count and not lines[i].startswith(_FENCE):
            i += 1

        if i >= line_count:
            return Failed(UnclosedFenceError(lineno=linenos[start]))

        return Parsed(
            CodeBlock(
                raw="\n".join(lines[start : i + 1]),
                text="\n".join(lines[start + 1 : i]),
                lang=lang,
            ),
            i + 1,
        )
