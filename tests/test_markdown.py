# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for extraction/markdown.py (markdownify wrapper)."""

from __future__ import annotations

import pytest

from webtrim.extraction import markdown as markdown_module
from webtrim.extraction.markdown import html_to_markdown


class TestConversion:
    def test_atx_headings(self):
        md = html_to_markdown("<h1>Title</h1><p>Para</p><h3>Sub</h3>")
        assert md.startswith("# Title")
        assert "### Sub" in md
        assert "Para" in md

    def test_dash_bullets(self):
        md = html_to_markdown("<ul><li>one</li><li>two</li></ul>")
        assert "- one" in md
        assert "- two" in md

    def test_fenced_code_with_language(self):
        md = html_to_markdown('<pre><code class="language-python">print(1)</code></pre>')
        assert "```python" in md
        assert "print(1)" in md

    def test_fenced_code_lang_on_pre(self):
        md = html_to_markdown('<pre class="lang-js"><code>x = 1</code></pre>')
        assert "```js" in md

    def test_fenced_code_without_hint(self):
        md = html_to_markdown("<pre><code>plain</code></pre>")
        assert md.startswith("```")
        assert "plain" in md

    def test_inline_code(self):
        assert html_to_markdown("<p>Use <code>pip</code> now</p>") == "Use `pip` now"

    def test_strong(self):
        assert html_to_markdown("<p><strong>bold</strong></p>") == "**bold**"

    def test_image_survives_empty_text(self):
        md = html_to_markdown('<p><img src="a.png" alt="pic"></p>')
        assert "a.png" in md

    def test_no_runs_of_blank_lines(self):
        md = html_to_markdown("<p>a</p><div><br><br><br></div><p>b</p>")
        assert "\n\n\n" not in md


class TestCleanup:
    def test_empty_elements_dropped(self):
        md = html_to_markdown('<p>Text</p><a href="/x"></a><ul><li></li></ul>')
        assert md == "Text"

    def test_scripts_and_styles_stripped(self):
        md = html_to_markdown("<p>a</p><script>evil()</script><style>p{}</style>")
        assert md == "a"

    def test_comments_stripped(self):
        md = html_to_markdown("<p>a<!-- secret --></p>")
        assert "secret" not in md


class TestUnavailable:
    @pytest.mark.parametrize("source", ["", "   ", "<script>x()</script>", "<div></div>"])
    def test_none_when_nothing_to_convert(self, source):
        assert html_to_markdown(source) is None

    def test_converter_failure_returns_none(self, monkeypatch, caplog):
        def boom(soup):
            raise RuntimeError("converter exploded")

        monkeypatch.setattr(markdown_module._converter, "convert_soup", boom)
        with caplog.at_level("WARNING", logger="webtrim.extraction.markdown"):
            assert html_to_markdown("<p>fine</p>") is None
        assert "Markdown conversion failed" in caplog.text
