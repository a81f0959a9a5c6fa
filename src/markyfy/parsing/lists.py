"""List tokenization for Markyfy.

Lists are scanned with a stack of nesting levels keyed by indentation.
Orderedness is decided by the first line alone and applies to every item
of the scan.

Indentation rules:
- deeper than the current level: open a nested level under the last item
- shallower: pop levels until one is no deeper than the line
- non-item line deeper than the current level: lazy continuation of the
  previous item
- anything else (blank line, shallow non-item text): end of list

Each level records the indent it was opened at, so dedenting by exactly
the amount that opened a level closes that level, even for irregular
indentation.

Thread Safety:
Drafts are local to one ``_parse_list`` call and frozen before returning.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from markyfy.errors import NestingDepthError
from markyfy.parsing.results import Failed, Parsed, ParseResult
from markyfy.tokens import Inline, List, ListItem, Text

_ORDERED_ITEM = re.compile(r"^(\d+\.)\s+(.+)$")
_UNORDERED_ITEM = re.compile(r"^([-*+])\s+(.+)$")
_ORDERED_START = re.compile(r"^\d+\.\s")
_INDENT = re.compile(r"^\s*")


@dataclass(slots=True)
class _ItemDraft:
    """Mutable list item used while the scan is still appending to it."""

    raw: str
    text: str
    children: list[Inline]
    items: list[_ItemDraft] | None = None

    def freeze(self, ordered: bool) -> ListItem:
        nested = None
        if self.items is not None:
            nested = tuple(item.freeze(ordered) for item in self.items)
        return ListItem(
            raw=self.raw,
            text=self.text,
            ordered=ordered,
            children=tuple(self.children),
            items=nested,
        )


@dataclass(slots=True)
class _Level:
    """One nesting level of the list stack."""

    indent: int
    items: list[_ItemDraft] = field(default_factory=list)


class ListTokenizingMixin:
    """List tokenizing methods.

    Required Host Attributes:
        - _max_depth: int

    Required Host Methods (from other mixins):
        - _parse_inline(text) -> tuple[Inline, ...]

    """

    def _parse_list(
        self, lines: list[str], start: int, linenos: Sequence[int]
    ) -> ParseResult:
        """Parse a (possibly nested) list beginning at ``lines[start]``."""
        ordered = _ORDERED_START.match(lines[start].strip()) is not None
        item_pattern = _ORDERED_ITEM if ordered else _UNORDERED_ITEM

        root = _Level(indent=_indent_of(lines[start]))
        stack: list[_Level] = [root]
        i = start
        line_count = len(lines)

        while i < line_count:
            line = lines[i]
            stripped = line.strip()
            indent = _indent_of(line)
            match = item_pattern.match(stripped)

            if match is None:
                if stripped and indent > stack[-1].indent:
                    self._append_continuation(stack[-1], stripped)
                    i += 1
                    continue
                break

            if indent > stack[-1].indent:
                if len(stack) >= self._max_depth:
                    return Failed(NestingDepthError(self._max_depth, lineno=linenos[i]))
                level = _Level(indent=indent)
                parent = stack[-1]
                if parent.items:
                    parent.items[-1].items = level.items
                stack.append(level)
            elif indent < stack[-1].indent:
                while len(stack) > 1 and indent < stack[-1].indent:
                    stack.pop()

            content = match.group(2)
            stack[-1].items.append(
                _ItemDraft(
                    raw=line,
                    text=content,
                    children=list(self._parse_inline(content)),
                )
            )
            i += 1

        return Parsed(
            List(
                raw="\n".join(lines[start:i]),
                ordered=ordered,
                items=tuple(item.freeze(ordered) for item in root.items),
            ),
            i,
        )

    def _append_continuation(self, level: _Level, text: str) -> None:
        """Attach a lazy continuation line to the level's last item."""
        if not level.items:
            return
        last = level.items[-1]
        last.text += "\n" + text
        # Newline keeps the continuation from fusing with the previous word
        last.children.append(Text(raw=text, text="\n" + text))


def _indent_of(line: str) -> int:
    """Count leading whitespace characters (tabs count as one)."""
    match = _INDENT.match(line)
    return match.end() if match else 0
