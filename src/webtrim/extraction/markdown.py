# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""HTML → Markdown conversion for extracted content.

markdownify with ATX headings, "-" bullets and fenced code blocks. Empty
elements are dropped before conversion so they do not leave stray
markers (empty links, bare list bullets) behind.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Comment
from markdownify import ATX, MarkdownConverter

logger = logging.getLogger(__name__)

_STRIP_TAGS = ["script", "style", "noscript", "template"]

# Elements kept even without text
_VOID_KEEP = ["img", "br", "hr"]

_LANGUAGE_RE = re.compile(r"(?:^|\s)(?:language|lang)-([\w+#-]+)")
_EXCESS_BLANK_RE = re.compile(r"\n{3,}")


def _code_language(el) -> str:
    """Language hint for a <pre> block from a ``language-xxx`` class."""
    code = el.find("code")
    for node in (code, el):
        if node is None:
            continue
        classes = node.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        m = _LANGUAGE_RE.search(" ".join(classes))
        if m:
            return m.group(1)
    return ""


_converter = MarkdownConverter(
    heading_style=ATX,
    bullets="-",
    strong_em_symbol="*",
    code_language_callback=_code_language,
)


def _drop_empty_elements(soup: BeautifulSoup) -> int:
    """Decompose elements with no text and no image/line-break inside."""
    dropped = 0
    # Reverse document order: children are decided before their parents
    for tag in reversed(soup.find_all(True)):
        if tag.name in _VOID_KEEP:
            continue
        if tag.get_text(strip=True):
            continue
        if tag.find(_VOID_KEEP) is not None:
            continue
        tag.decompose()
        dropped += 1
    return dropped


def html_to_markdown(html: str) -> str | None:
    """Convert an HTML fragment to Markdown.

    Returns:
        Markdown text, or None when the input is empty, conversion fails,
        or the result is blank. Callers fall back to plain text on None.
    """
    if not html or not html.strip():
        return None
    try:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup.find_all(_STRIP_TAGS):
            tag.decompose()
        for comment in soup.find_all(string=lambda t: isinstance(t, Comment)):
            comment.extract()
        _drop_empty_elements(soup)

        markdown = _converter.convert_soup(soup)
    except Exception as e:
        logger.warning("Markdown conversion failed: %s", e, exc_info=True)
        return None

    markdown = _EXCESS_BLANK_RE.sub("\n\n", markdown).strip()
    if not markdown:
        return None
    return markdown
