"""Result types returned by block sub-parsers.

Every block sub-parser returns either ``Parsed`` (the token plus the index of
the first line it did not consume) or ``Failed`` (the error that stopped it).
The block loop inspects the result and substitutes the escaped-paragraph
fallback itself; sub-parsers never raise for malformed input.

Thread Safety:
Results are frozen dataclasses, created and consumed within one tokenize call.

"""

from __future__ import annotations

from dataclasses import dataclass

from markyfy.errors import ParseError
from markyfy.tokens import Block


@dataclass(frozen=True, slots=True)
class Parsed:
    """Successful block parse.

    Attributes:
        token: The block token produced
        next_index: Index of the first line after the consumed span
    """

    token: Block
    next_index: int


@dataclass(frozen=True, slots=True)
class Failed:
    """Failed block parse; the caller demotes the starting line."""

    error: ParseError


type ParseResult = Parsed | Failed
