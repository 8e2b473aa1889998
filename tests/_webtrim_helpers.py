# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared helper utilities for webtrim test files.

Underscore prefix prevents pytest collection.
These are plain utility functions (not fixtures; conftest.py is reserved
for fixtures).
"""

from __future__ import annotations

import lxml.html

from webtrim.truncation import Chunk, ChunkType


def make_chunk(
    content: str,
    chunk_type: ChunkType = ChunkType.PARAGRAPH,
    position: int = 0,
    score: float = 0.0,
) -> Chunk:
    """Build a Chunk for testing (length derived from content)."""
    return Chunk(content=content, type=chunk_type, position=position, score=score)


def filler(length: int, char: str = "x") -> str:
    """Keyword-free text of exactly ``length`` characters."""
    return char * length


def parse_el(html_str: str) -> lxml.html.HtmlElement:
    """Parse an HTML fragment and return the first element inside <body>."""
    doc = lxml.html.fromstring(f"<html><body>{html_str}</body></html>")
    body = doc.find(".//body")
    assert body is not None
    children = list(body)
    assert len(children) >= 1
    return children[0]


def parse_doc(html_str: str) -> lxml.html.HtmlElement:
    """Parse a full HTML document and return its root."""
    return lxml.html.document_fromstring(html_str)


def html(body: str, head: str = "") -> str:
    """Build a complete HTML document from body (and optional head) content."""
    head_section = f"<head>{head}</head>" if head else ""
    return f"<html>{head_section}<body>{body}</body></html>"
