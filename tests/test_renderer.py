"""Tests for HTML rendering of the token tree."""

import pytest

from markyfy import tokenize
from markyfy.config import ConvertOptions, options_context
from markyfy.errors import RenderError
from markyfy.renderers import HtmlRenderer
from markyfy.renderers.styles import CODE_STYLE, LIST_STYLE
from markyfy.tokens import Text

PLAIN = ConvertOptions(embed_styles=False)


def _render(source: str, options: ConvertOptions = PLAIN, **kwargs) -> str:
    return HtmlRenderer(options, **kwargs).render(tokenize(source, options=options))


class RaisingHighlighter:
    def supports_language(self, lang: str) -> bool:
        return True

    def highlight(self, code: str, lang: str) -> str:
        raise RuntimeError("boom")


class UpperHighlighter:
    def supports_language(self, lang: str) -> bool:
        return lang == "shout"

    def highlight(self, code: str, lang: str) -> str:
        return code.upper()


class TestHeaders:
    def test_header_with_id(self) -> None:
        assert _render("# Hello World!") == '<h1 id="hello-world">Hello World!</h1>'

    def test_header_ids_disabled(self) -> None:
        options = ConvertOptions(header_ids=False, embed_styles=False)
        assert _render("### Hello", options) == "<h3>Hello</h3>"

    def test_header_inline_markup(self) -> None:
        html = _render("## A **b**")
        assert html == '<h2 id="a-b">A <strong>b</strong></h2>'


class TestParagraphsAndInline:
    def test_text_is_escaped(self) -> None:
        assert _render("a < b & \"c\"") == "<p>a &lt; b &amp; &quot;c&quot;</p>"

    def test_inline_spans(self) -> None:
        assert _render("**b** *i* `c`") == (
            "<p><strong>b</strong> <em>i</em> <code>c</code></p>"
        )

    def test_span_content_is_escaped(self) -> None:
        assert _render("**<x>**") == "<p><strong>&lt;x&gt;</strong></p>"
        assert _render("`<y>`") == "<p><code>&lt;y&gt;</code></p>"

    def test_blocks_join_with_newlines(self) -> None:
        assert _render("one\n\ntwo") == "<p>one</p>\n<p>two</p>"


class TestLinks:
    def test_link_href_is_escaped(self) -> None:
        html = _render("[x](https://e.com?a=1&b=2)")
        assert html == '<p><a href="https://e.com?a=1&amp;b=2">x</a></p>'

    def test_dangerous_url_blanked(self) -> None:
        assert _render("[x](javascript:alert(1))") == '<p><a href="">x</a>)</p>'

    def test_sanitize_disabled_keeps_url(self) -> None:
        options = ConvertOptions(sanitize=False, embed_styles=False)
        html = _render("[x](javascript:alert(1))", options)
        assert html == '<p><a href="javascript:alert(1">x</a>)</p>'

    def test_attribute_breakout_is_escaped(self) -> None:
        html = _render('[x](a"onmouseover="b)')
        assert 'href="a&quot;onmouseover=&quot;b"' in html


class TestCodeBlocks:
    def test_highlighted_block(self) -> None:
        html = _render("```js\nconst x = 1;\n```")
        assert html == (
            '<pre><code class="language-js">'
            '<span class="token keyword">const</span> x = '
            '<span class="token number">1</span>'
            '<span class="token punctuation">;</span>'
            "</code></pre>"
        )

    def test_unsupported_language_is_escaped(self) -> None:
        html = _render("```cobol\n<b>\n```")
        assert html == '<pre><code class="language-cobol">&lt;b&gt;</code></pre>'

    def test_no_language_keeps_empty_class(self) -> None:
        assert _render("```\nx\n```") == '<pre><code class="language-">x</code></pre>'

    def test_highlighter_failure_falls_back_to_escaped(self) -> None:
        html = _render("```js\na < b\n```", highlighter=RaisingHighlighter())
        assert html == '<pre><code class="language-js">a &lt; b</code></pre>'

    def test_custom_highlighter(self) -> None:
        html = _render("```shout\nhey\n```", highlighter=UpperHighlighter())
        assert html == '<pre><code class="language-shout">HEY</code></pre>'

    def test_code_style_follows_first_block_only(self) -> None:
        options = ConvertOptions()
        html = _render("```\na\n```\n```\nb\n```", options)
        assert html == (
            f'<pre><code class="language-">a</code></pre>\n{CODE_STYLE}\n'
            '<pre><code class="language-">b</code></pre>'
        )

    def test_style_is_emitted_per_render(self) -> None:
        options = ConvertOptions()
        renderer = HtmlRenderer(options)
        tokens = tokenize("```\na\n```")
        assert CODE_STYLE in renderer.render(tokens)
        assert CODE_STYLE in renderer.render(tokens)


class TestLists:
    def test_unordered(self) -> None:
        assert _render("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"

    def test_ordered(self) -> None:
        assert _render("1. a\n2. b") == "<ol>\n<li>a</li>\n<li>b</li>\n</ol>"

    def test_nested_list_inside_item(self) -> None:
        assert _render("- a\n  - b") == (
            "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>"
        )

    def test_item_inline_markup(self) -> None:
        assert _render("- *a*") == "<ul>\n<li><em>a</em></li>\n</ul>"

    def test_lazy_continuation(self) -> None:
        assert _render("- a\n  b") == "<ul>\n<li>a\nb</li>\n</ul>"

    def test_list_style_follows_first_list_only(self) -> None:
        options = ConvertOptions()
        html = _render("- a\n\n- b", options)
        assert html == f"<ul>\n<li>a</li>\n</ul>\n{LIST_STYLE}\n<ul>\n<li>b</li>\n</ul>"


class TestBlockQuotes:
    def test_quote(self) -> None:
        assert _render("> hi") == "<blockquote><p>hi</p></blockquote>"

    def test_quote_children_join_with_newlines(self) -> None:
        assert _render("> a\n> b") == "<blockquote><p>a</p>\n<p>b</p></blockquote>"

    def test_nested_quote(self) -> None:
        assert _render("> > x") == "<blockquote><blockquote><p>x</p></blockquote></blockquote>"


class TestRecoveryRendering:
    def test_unclosed_fence_line_is_escaped_paragraph(self) -> None:
        html = _render("```js\n<x>")
        assert html == "<p>```js</p>\n<p>&lt;x&gt;</p>"


class TestRendererApi:
    def test_non_token_raises(self) -> None:
        with pytest.raises(RenderError, match="not a token"):
            HtmlRenderer(PLAIN).render(["<script>"])  # type: ignore[list-item]

    def test_render_children_concatenates(self) -> None:
        renderer = HtmlRenderer(PLAIN)
        tokens = (Text(raw="a", text="a"), Text(raw="<", text="<"))
        assert renderer.render_children(tokens) == "a&lt;"
        assert renderer.render_children(None) == ""

    def test_options_default_to_context(self) -> None:
        with options_context(ConvertOptions(header_ids=False)):
            renderer = HtmlRenderer()
        assert renderer.options.header_ids is False
        assert renderer.render(tokenize("# T")) == "<h1>T</h1>"

    def test_empty_token_list(self) -> None:
        assert HtmlRenderer(PLAIN).render(()) == ""
