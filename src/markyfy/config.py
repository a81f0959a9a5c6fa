"""ContextVar-based conversion options for Markyfy.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Options are set once per Markyfy instance (or per convert() call) and read
by the tokenizer and renderer running in that context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # High-level: options are applied for you
    md = Markyfy(header_ids=False)
    html = md("# Hello")

    # Direct tokenizer usage (advanced)
    from markyfy.config import ConvertOptions, options_context

    with options_context(ConvertOptions(max_nesting_depth=8)):
        tokens = Tokenizer(source).tokenize()

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from typing import Any

# camelCase spellings accepted alongside the field names
_CAMEL_CASE_ALIASES = {
    "headerIds": "header_ids",
    "embedStyles": "embed_styles",
    "maxNestingDepth": "max_nesting_depth",
}


@dataclass(frozen=True, slots=True)
class ConvertOptions:
    """Immutable conversion options.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        gfm: GitHub Flavored Markdown switch. Accepted for compatibility;
            the tokenizer behaves the same either way.
        breaks: Line-break switch. Accepted for compatibility; every source
            line already becomes its own paragraph.
        header_ids: Emit slug ``id`` attributes on headers
        sanitize: Blank out dangerous link URLs (``javascript:`` and friends)
        embed_styles: Emit the presentation stylesheet after the first code
            block and first list of each render
        max_nesting_depth: Maximum blockquote/list nesting before the
            construct is rejected with NestingDepthError

    """

    gfm: bool = True
    breaks: bool = False
    header_ids: bool = True
    sanitize: bool = True
    embed_styles: bool = True
    max_nesting_depth: int = 32

    def __post_init__(self) -> None:
        if self.max_nesting_depth < 1:
            msg = f"max_nesting_depth must be >= 1, got {self.max_nesting_depth}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ConvertOptions":
        """Create ConvertOptions from dictionary.

        Accepts the snake_case attribute names as well as the camelCase
        spellings (``headerIds``). Unknown keys are silently ignored.

        Args:
            config_dict: Dictionary with option values

        Returns:
            New ConvertOptions instance with values from dict.

        Example:
            >>> options = ConvertOptions.from_dict({
            ...     "headerIds": False,
            ...     "sanitize": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> options.header_ids
            False

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {}
        for key, value in config_dict.items():
            key = _CAMEL_CASE_ALIASES.get(key, key)
            if key in valid_fields:
                filtered[key] = value
        return cls(**filtered)

    def with_overrides(self, **overrides: Any) -> "ConvertOptions":
        """Return a copy with individual options replaced.

        Accepts the same camelCase spellings as from_dict(). Unlike
        from_dict(), unknown names are an error.

        Raises:
            TypeError: If a name is not an option
            ValueError: If a value fails validation

        Example:
            >>> ConvertOptions().with_overrides(headerIds=False).header_ids
            False

        """
        changes = {_CAMEL_CASE_ALIASES.get(key, key): value for key, value in overrides.items()}
        return replace(self, **changes)


# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: ConvertOptions = ConvertOptions()

# Thread-local options via ContextVar
_convert_options: ContextVar[ConvertOptions] = ContextVar(
    "convert_options",
    default=_DEFAULT_OPTIONS,
)


def get_convert_options() -> ConvertOptions:
    """Get current conversion options (thread-local).

    Returns:
        The active ConvertOptions for this thread/context.

    """
    return _convert_options.get()


def set_convert_options(options: ConvertOptions) -> None:
    """Set conversion options for current context.

    Args:
        options: ConvertOptions instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _convert_options.set(options)


def reset_convert_options() -> None:
    """Reset to default options.

    Reuses the module-level _DEFAULT_OPTIONS singleton, avoiding allocation.

    """
    _convert_options.set(_DEFAULT_OPTIONS)


@contextmanager
def options_context(options: ConvertOptions) -> Iterator[None]:
    """Context manager for temporary option changes.

    Args:
        options: ConvertOptions to use within the context.

    Yields:
        None

    Example:
        >>> with options_context(ConvertOptions(header_ids=False)):
        ...     html = render(tokenize("# Hi"))
        >>> # Automatically reset to previous options

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        options even if an exception is raised.

    """
    previous = _convert_options.get()
    _convert_options.set(options)
    try:
        yield
    finally:
        _convert_options.set(previous)


__all__ = [
    "ConvertOptions",
    "get_convert_options",
    "set_convert_options",
    "reset_convert_options",
    "options_context",
]
