"""Inline tokenization for Markyfy.

Scans a single line left to right and emits Text, Bold, Italic, Code and
Link tokens. Span contents are captured as raw text; nothing inside a span
is tokenized further.

Priority at each position: bold, italic, inline code, link. Bold must be
tried before italic so ``**a*b*c**`` is one bold span rather than italics.

Thread Safety:
All methods are stateless. Safe for concurrent use.

"""

from __future__ import annotations

from markyfy.tokens import Bold, Code, Inline, Italic, Link, Text

_BOLD_MARKERS = ("**", "__")
_ITALIC_MARKERS = "*_"


class InlineTokenizingMixin:
    """Inline tokenizing methods.

    Has no host requirements; mixed into Tokenizer so block parsers can
    call ``self._parse_inline()``.

    """

    def _parse_inline(self, text: str) -> tuple[Inline, ...]:
        """Tokenize one line of inline content.

        Consecutive plain characters accumulate in a pending buffer that is
        flushed into a Text token whenever a span is recognized, and once
        more at end of line. Concatenating ``raw`` over the result always
        reproduces ``text``.
        """
        if not text:
            return ()

        tokens: list[Inline] = []
        pending: list[str] = []
        pos = 0
        text_len = len(text)

        def flush() -> None:
            if pending:
                run = "".join(pending)
                tokens.append(Text(raw=run, text=run))
                pending.clear()

        while pos < text_len:
            char = text[pos]

            # Bold: **text** or __text__
            marker = text[pos : pos + 2]
            if marker in _BOLD_MARKERS:
                end = text.find(marker, pos + 2)
                if end == -1:
                    # Unclosed: both marker characters are literal
                    pending.append(marker)
                    pos += 2
                    continue
                flush()
                tokens.append(Bold(raw=text[pos : end + 2], text=text[pos + 2 : end]))
                pos = end + 2
                continue

            # Italic: *text* or _text_
            if char in _ITALIC_MARKERS:
                end = text.find(char, pos + 1)
                if end != -1:
                    flush()
                    tokens.append(Italic(raw=text[pos : end + 1], text=text[pos + 1 : end]))
                    pos = end + 1
                    continue

            # Inline code: `code`
            elif char == "`":
                end = text.find("`", pos + 1)
                if end != -1:
                    flush()
                    tokens.append(Code(raw=text[pos : end + 1], text=text[pos + 1 : end]))
                    pos = end + 1
                    continue

            # Link: [label](url)
            elif char == "[":
                link = self._try_parse_link(text, pos)
                if link is not None:
                    flush()
                    tokens.append(link)
                    pos += len(link.raw)
                    continue

            pending.append(char)
            pos += 1

        flush()
        return tuple(tokens)

    def _try_parse_link(self, text: str, pos: int) -> Link | None:
        """Try to match ``[label](url)`` starting at ``pos``.

        The first ``]`` after ``pos`` must be immediately followed by ``(``,
        and a ``)`` must exist after that. The URL runs to the first ``)``.
        """
        label_end = text.find("]", pos)
        if label_end == -1 or text[label_end + 1 : label_end + 2] != "(":
            return None

        url_end = text.find(")", label_end + 2)
        if url_end == -1:
            return None

        return Link(
            raw=text[pos : url_end + 1],
            text=text[pos + 1 : label_end],
            url=text[label_end + 2 : url_end],
        )


_INLINE = InlineTokenizingMixin()


def parse_inline(line: str) -> tuple[Inline, ...]:
    """Tokenize a single line of inline Markdown.

    Args:
        line: One line of text

    Returns:
        Tuple of inline tokens

    Example:
        >>> parse_inline("Some **bold** text")
        (Text(raw='Some ', text='Some '), Bold(raw='**bold**', text='bold'), Text(raw=' text', text=' text'))
    """
    return _INLINE._parse_inline(line)
