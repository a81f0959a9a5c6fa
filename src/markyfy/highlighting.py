"""Regex-rule syntax highlighting for fenced code blocks.

A language is an ordered list of (pattern, category) rules. Highlighting
escapes the code, then wraps each rule's matches in
``<span class="token CATEGORY">`` in registration order. Text already
inside an inserted span is never wrapped again.

Registry:
    Languages live in an explicit LanguageRegistry owned by each
    SyntaxHighlighter. ``create_default_registry()`` builds one with
    ``javascript`` and ``js`` pre-registered.

Usage:
    >>> highlighter = SyntaxHighlighter()
    >>> highlighter.highlight("const x = 1;", "js")
    '<span class="token keyword">const</span> x = <span class="token number">1</span><span class="token punctuation">;</span>'

    # Renderer injection
    renderer = HtmlRenderer(highlighter=my_highlighter)

"""

from __future__ import annotations

import logging
import re
import threading
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters accepted by HtmlRenderer.

    Thread Safety:
        Implementations must be thread-safe. highlight() may be called
        concurrently from multiple render threads.
    """

    def highlight(self, code: str, lang: str) -> str:
        """Highlight code with syntax markup.

        Contract:
            - Supported language: MUST escape HTML entities in code
            - Unsupported language: returns code unchanged
        """
        ...

    def supports_language(self, lang: str) -> bool:
        """Check if the highlighter has rules for the language.

        Contract:
            - MUST NOT raise exceptions
        """
        ...


@dataclass(frozen=True, slots=True)
class SyntaxRule:
    """One highlighting rule.

    Attributes:
        pattern: Compiled pattern to match against escaped code
        token: Category name placed in the span's class (e.g. "string")
    """

    pattern: re.Pattern[str]
    token: str


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    """Named, ordered rule set for one language."""

    name: str
    rules: tuple[SyntaxRule, ...]

    @classmethod
    def from_patterns(
        cls, name: str, patterns: Iterable[tuple[str | re.Pattern[str], str]]
    ) -> LanguageDefinition:
        """Build a definition from ``(pattern, token)`` pairs.

        String patterns are compiled with re.MULTILINE so ``$`` anchors at
        line ends.

        Example:
            >>> python = LanguageDefinition.from_patterns(
            ...     "python",
            ...     [(r"#.*$", "comment"), (r"\\b(def|return)\\b", "keyword")],
            ... )
        """
        rules = []
        for pattern, token in patterns:
            compiled = re.compile(pattern, re.MULTILINE) if isinstance(pattern, str) else pattern
            rules.append(SyntaxRule(pattern=compiled, token=token))
        return cls(name=name, rules=tuple(rules))


# =============================================================================
# Language registry
# =============================================================================


class LanguageRegistry:
    """Registry of language definitions keyed by name.

    Thread Safety:
        Registration takes a lock and publishes a fresh dict (copy-on-write).
        Lookups read the current dict without locking, so a concurrent
        highlight sees either the old or the new mapping, never a partial one.
    """

    __slots__ = ("_languages", "_lock")

    def __init__(self, languages: Mapping[str, LanguageDefinition] | None = None) -> None:
        self._languages: dict[str, LanguageDefinition] = dict(languages or {})
        self._lock = threading.Lock()

    def register(self, name: str, definition: LanguageDefinition) -> LanguageRegistry:
        """Register (or replace) a language under ``name``.

        Args:
            name: Lookup key used as the fence's language tag
            definition: Rules to apply

        Returns:
            Self for chaining
        """
        if not name:
            msg = "Language name must be a non-empty string"
            raise ValueError(msg)
        with self._lock:
            languages = dict(self._languages)
            languages[name] = definition
            self._languages = languages
        logger.debug("Registered highlight language %r (%d rules)", name, len(definition.rules))
        return self

    def get(self, name: str) -> LanguageDefinition | None:
        """Get the definition for ``name``, or None if unregistered."""
        return self._languages.get(name)

    def has(self, name: str) -> bool:
        """Check if language name is registered."""
        return name in self._languages

    @property
    def names(self) -> frozenset[str]:
        """Get all registered language names."""
        return frozenset(self._languages)

    def copy(self) -> LanguageRegistry:
        """Independent registry with the same languages."""
        return LanguageRegistry(self._languages)

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return self.has(name)

    def __len__(self) -> int:
        """Number of registered language names."""
        return len(self._languages)


# =============================================================================
# Built-in languages
# =============================================================================

_JS_KEYWORDS = (
    "function|class|extends|new|this|super|return|if|else|for|while|do|switch|"
    "case|break|continue|try|catch|throw|async|await|import|export|default|"
    "const|let|var"
)

# Patterns run against escaped code: double quotes appear as &quot; and an
# opening parenthesis may already be wrapped by the punctuation rule.
_JAVASCRIPT_PATTERNS: tuple[tuple[str, str], ...] = (
    (
        r"'(?:[^'\\\n]|\\.)*'"
        r"|&quot;(?:(?!&quot;)[^\\\n]|\\.)*&quot;"
        r"|`(?:[^`\\]|\\.)*`",
        "string",
    ),
    (r"//.*$|/\*[\s\S]*?\*/", "comment"),
    (rf"\b(?:{_JS_KEYWORDS})\b", "keyword"),
    (r"\b\d+\.?\d*\b", "number"),
    (r"[{}\[\]();,.]", "punctuation"),
    (
        r"\b[a-zA-Z_$][0-9a-zA-Z_$]*(?=\(|<span class=\"token punctuation\">\()",
        "function",
    ),
    (r"\b(?:true|false)\b", "boolean"),
)


def javascript_definition() -> LanguageDefinition:
    """Build the built-in JavaScript rule set."""
    return LanguageDefinition.from_patterns("javascript", _JAVASCRIPT_PATTERNS)


def create_default_registry() -> LanguageRegistry:
    """Create a registry with the built-in languages.

    Returns:
        Fresh registry with ``javascript`` and ``js`` registered (identical
        rule sets). Each call returns a new instance; registering on one
        never affects another.
    """
    registry = LanguageRegistry()
    registry.register("javascript", javascript_definition())
    registry.register("js", javascript_definition())
    return registry


# =============================================================================
# Highlighter
# =============================================================================

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}
_SPECIAL_CHARS = re.compile(r"[&<>\"']")
_QUOTED_SPAN = re.compile(r"(['\"`])(?:[^\\]|\\.)*?\1", re.DOTALL)
_MARKUP = re.compile(
    r"(?P<open><span\b[^>]*>)"
    r"|(?P<close></span>)"
    r"|<[^>]*>"
    r"|&(?:#\d+|#x[0-9a-fA-F]+|[a-zA-Z]+);"
)


class SyntaxHighlighter:
    """Rule-driven highlighter implementing the Highlighter protocol.

    Usage:
        >>> highlighter = SyntaxHighlighter()
        >>> highlighter.supports_language("js")
        True
        >>> highlighter.highlight("<b>", "cobol")
        '<b>'

    Thread Safety:
        highlight() only reads the registry. Register languages before
        sharing the highlighter, or rely on the registry's locked
        copy-on-write registration.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: LanguageRegistry | None = None) -> None:
        """Initialize highlighter.

        Args:
            registry: Language registry (a fresh default registry if None)
        """
        self._registry = registry if registry is not None else create_default_registry()

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    def register_language(self, name: str, definition: LanguageDefinition) -> None:
        """Register a language on this highlighter's registry."""
        self._registry.register(name, definition)

    def supports_language(self, lang: str) -> bool:
        return bool(lang) and self._registry.has(lang)

    def highlight(self, code: str, lang: str) -> str:
        """Highlight code for a registered language.

        Args:
            code: Raw source code
            lang: Language tag from the fence

        Returns:
            Escaped, span-annotated HTML for a registered language; ``code``
            unchanged (not escaped) otherwise.
        """
        language = self._registry.get(lang) if lang else None
        if language is None:
            return code

        highlighted = _escape_except_strings(code)
        for rule in language.rules:
            highlighted = _apply_rule(highlighted, rule)
        return highlighted


def _escape_except_strings(text: str) -> str:
    """Escape HTML specials, keeping single quotes that sit inside strings."""
    starts: list[int] = []
    ends: list[int] = []
    for match in _QUOTED_SPAN.finditer(text):
        starts.append(match.start())
        ends.append(match.end())

    def replace(match: re.Match[str]) -> str:
        char = match.group()
        if char == "'" and _inside(match.start(), starts, ends):
            return char
        return _ESCAPES[char]

    return _SPECIAL_CHARS.sub(replace, text)


def _inside(pos: int, starts: list[int], ends: list[int]) -> bool:
    i = bisect_right(starts, pos) - 1
    return i >= 0 and pos < ends[i]


def _protected_ranges(text: str) -> tuple[list[int], list[int]]:
    """Sorted, disjoint ranges a new match may enclose but never cut.

    Each outermost inserted span (opening tag through its closing tag) is
    one range, so text inside earlier markup is never wrapped again. Tags
    and entities outside any span are ranges of their own.
    """
    starts: list[int] = []
    ends: list[int] = []
    depth = 0
    opened_at = 0

    for match in _MARKUP.finditer(text):
        if match.group("open"):
            if depth == 0:
                opened_at = match.start()
            depth += 1
        elif match.group("close") and depth:
            depth -= 1
            if depth == 0:
                starts.append(opened_at)
                ends.append(match.end())
        elif depth == 0:
            starts.append(match.start())
            ends.append(match.end())

    if depth:
        starts.append(opened_at)
        ends.append(len(text))
    return starts, ends


def _apply_rule(text: str, rule: SyntaxRule) -> str:
    """Wrap every match of ``rule`` that leaves existing markup whole.

    A match starting inside a protected range is skipped and scanning
    resumes after that range. A match that would cut a range at its end is
    left as text.
    """
    starts, ends = _protected_ranges(text)
    open_tag = f'<span class="token {rule.token}">'
    parts: list[str] = []
    last = pos = 0
    text_len = len(text)

    while pos <= text_len:
        match = rule.pattern.search(text, pos)
        if match is None:
            break
        start, end = match.span()
        if start == end:
            pos = end + 1
            continue

        i = bisect_right(starts, start) - 1
        if i >= 0 and start < ends[i]:
            if start > starts[i]:
                pos = ends[i]
                continue
            if end < ends[i]:
                pos = end
                continue

        j = bisect_left(starts, end) - 1
        if j >= 0 and starts[j] < end < ends[j]:
            pos = end
            continue

        parts.append(text[last:start])
        parts.append(f"{open_tag}{match.group()}</span>")
        last = pos = end

    parts.append(text[last:])
    return "".join(parts)
