"""Tests for the regex-rule syntax highlighter and its language registry."""

import re
import time

import pytest

from markyfy.highlighting import (
    LanguageDefinition,
    LanguageRegistry,
    SyntaxHighlighter,
    SyntaxRule,
    create_default_registry,
)


@pytest.fixture
def highlighter() -> SyntaxHighlighter:
    return SyntaxHighlighter()


class TestJavaScript:
    """Built-in JavaScript rules."""

    def test_statement(self, highlighter: SyntaxHighlighter) -> None:
        assert highlighter.highlight("const x = 1;", "js") == (
            '<span class="token keyword">const</span> x = '
            '<span class="token number">1</span>'
            '<span class="token punctuation">;</span>'
        )

    def test_both_names_share_rules(self, highlighter: SyntaxHighlighter) -> None:
        code = "let y = true;"
        assert highlighter.highlight(code, "js") == highlighter.highlight(code, "javascript")

    def test_boolean(self, highlighter: SyntaxHighlighter) -> None:
        assert highlighter.highlight("false", "js") == '<span class="token boolean">false</span>'

    def test_function_call(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("foo(1)", "js")
        assert html.startswith('<span class="token function">foo</span>')
        assert '<span class="token punctuation">(</span>' in html

    def test_comment_contents_not_rehighlighted(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("// return 1", "js")
        assert html == '<span class="token comment">// return 1</span>'

    def test_double_quoted_string_is_escaped_and_wrapped(
        self, highlighter: SyntaxHighlighter
    ) -> None:
        html = highlighter.highlight('const s = "a<b";', "js")
        assert '<span class="token string">&quot;a&lt;b&quot;</span>' in html
        assert "<b" not in html

    def test_single_quotes_inside_strings_are_kept(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("x = 'a';", "js")
        assert "<span class=\"token string\">'a'</span>" in html

    def test_stray_apostrophe_is_escaped(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("// don't", "js")
        assert html == '<span class="token comment">// don&#x27;t</span>'

    def test_markup_in_code_is_escaped(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("a < b && c > d", "js")
        assert "&lt;" in html
        assert "&amp;&amp;" in html
        assert "&gt;" in html

    def test_entities_are_never_split(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("a && b", "js")
        # The entity's semicolon must not be wrapped as punctuation
        assert "&amp<span" not in html

    def test_multiline_comment_rule(self, highlighter: SyntaxHighlighter) -> None:
        html = highlighter.highlight("x\n// one\ny", "js")
        assert '<span class="token comment">// one</span>\ny' in html

    def test_match_inside_string_never_crosses_its_span(
        self, highlighter: SyntaxHighlighter
    ) -> None:
        html = highlighter.highlight("x = `a\n// b`; y()", "js")
        assert html == (
            'x = <span class="token string">`a\n// b`</span>'
            '<span class="token punctuation">;</span> '
            '<span class="token function">y</span>'
            '<span class="token punctuation">(</span>'
            '<span class="token punctuation">)</span>'
        )

    def test_large_input_is_linear(self, highlighter: SyntaxHighlighter) -> None:
        code = "foo(i, bar[i]); // c\n" * 4000
        started = time.perf_counter()
        html = highlighter.highlight(code, "js")
        assert time.perf_counter() - started < 5.0
        assert html.count('<span class="token comment">') == 4000
        assert html.count('<span class="token function">') == 4000


class TestUnsupportedLanguages:
    def test_unknown_language_returns_input_unchanged(
        self, highlighter: SyntaxHighlighter
    ) -> None:
        assert highlighter.highlight("<b>x</b>", "cobol") == "<b>x</b>"

    def test_empty_language_returns_input_unchanged(self, highlighter: SyntaxHighlighter) -> None:
        assert highlighter.highlight("<b>", "") == "<b>"

    def test_supports_language(self, highlighter: SyntaxHighlighter) -> None:
        assert highlighter.supports_language("js")
        assert highlighter.supports_language("javascript")
        assert not highlighter.supports_language("python")
        assert not highlighter.supports_language("")

    def test_names_are_case_sensitive(self, highlighter: SyntaxHighlighter) -> None:
        assert not highlighter.supports_language("JS")


class TestCustomLanguages:
    def test_from_patterns_compiles_multiline(self) -> None:
        definition = LanguageDefinition.from_patterns("python", [(r"#.*$", "comment")])
        (rule,) = definition.rules
        assert rule.pattern.flags & re.MULTILINE
        assert rule.token == "comment"

    def test_from_patterns_accepts_compiled(self) -> None:
        pattern = re.compile(r"\bdef\b")
        definition = LanguageDefinition.from_patterns("python", [(pattern, "keyword")])
        assert definition.rules[0].pattern is pattern

    def test_rules_compare_by_pattern_and_token(self) -> None:
        pattern = re.compile(r"x")
        assert SyntaxRule(pattern, "keyword") == SyntaxRule(pattern, "keyword")

    def test_registered_language_is_highlighted(self, highlighter: SyntaxHighlighter) -> None:
        highlighter.register_language(
            "python",
            LanguageDefinition.from_patterns(
                "python", [(r"#.*$", "comment"), (r"\bdef\b", "keyword")]
            ),
        )
        html = highlighter.highlight("# hi\ndef f", "python")
        assert html == (
            '<span class="token comment"># hi</span>\n'
            '<span class="token keyword">def</span> f'
        )

    def test_rules_apply_in_registration_order(self, highlighter: SyntaxHighlighter) -> None:
        highlighter.register_language(
            "toy",
            LanguageDefinition.from_patterns("toy", [(r"ab", "first"), (r"b", "second")]),
        )
        assert highlighter.highlight("ab", "toy") == '<span class="token first">ab</span>'


class TestLanguageRegistry:
    def test_default_registry_contents(self) -> None:
        registry = create_default_registry()
        assert registry.names == frozenset({"javascript", "js"})
        assert len(registry) == 2
        assert "js" in registry
        assert registry.get("ruby") is None

    def test_register_returns_self(self) -> None:
        registry = LanguageRegistry()
        definition = LanguageDefinition.from_patterns("x", [])
        assert registry.register("x", definition) is registry
        assert registry.get("x") is definition

    def test_register_replaces(self) -> None:
        registry = LanguageRegistry()
        first = LanguageDefinition.from_patterns("x", [])
        second = LanguageDefinition.from_patterns("x", [(r"a", "keyword")])
        registry.register("x", first).register("x", second)
        assert registry.get("x") is second
        assert len(registry) == 1

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            LanguageRegistry().register("", LanguageDefinition.from_patterns("", []))

    def test_copy_is_independent(self) -> None:
        original = create_default_registry()
        clone = original.copy()
        clone.register("toy", LanguageDefinition.from_patterns("toy", []))
        assert "toy" in clone
        assert "toy" not in original

    def test_default_registries_are_independent(self) -> None:
        a = SyntaxHighlighter()
        b = SyntaxHighlighter()
        a.register_language("toy", LanguageDefinition.from_patterns("toy", []))
        assert a.supports_language("toy")
        assert not b.supports_language("toy")

    def test_highlighter_uses_injected_registry(self) -> None:
        registry = LanguageRegistry()
        highlighter = SyntaxHighlighter(registry)
        assert highlighter.registry is registry
        assert not highlighter.supports_language("js")
