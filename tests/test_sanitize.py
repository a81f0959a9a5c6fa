"""Tests for link URL sanitization."""

import pytest

from markyfy.sanitize import is_dangerous_url, sanitize_url


class TestDangerousUrls:
    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "JavaScript:alert(1)",
            "data:text/html,<script>",
            "vbscript:msgbox",
            "  javascript:alert(1)",
            "\x00javascript:x",
            "java\tscript:alert(1)",
            "java\nscript:alert(1)",
        ],
    )
    def test_blanked(self, url: str) -> None:
        assert is_dangerous_url(url)
        assert sanitize_url(url) == ""


class TestSafeUrls:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "/relative/path",
            "#anchor",
            "mailto:a@example.com",
            "",
            "notjavascript:x",
        ],
    )
    def test_passed_through(self, url: str) -> None:
        assert not is_dangerous_url(url)
        assert sanitize_url(url) == url
