# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Noise cleaning, text projection and markup serialization for a subtree."""

from __future__ import annotations

import html
import logging
import re

import lxml.html
from lxml import etree

logger = logging.getLogger(__name__)

# Tags removed from the chosen subtree before projection
NOISE_TAGS = frozenset({"script", "style", "noscript", "iframe", "object", "embed"})

# A line break is emitted before descending into these
_BLOCK_TAGS = frozenset({"p", "div", "br", "h1", "h2", "h3", "h4", "h5", "h6"})

_WS_RE = re.compile(r"\s+")


def _tag(el: etree._Element) -> str:
    """Lower-cased tag name, or "" for comments / processing instructions."""
    return el.tag.lower() if isinstance(el.tag, str) else ""


def class_and_id(el: etree._Element) -> tuple[str, str]:
    return el.get("class") or "", el.get("id") or ""


def clean_node(node: lxml.html.HtmlElement, noise_pattern: re.Pattern[str]) -> int:
    """Remove noise elements below ``node`` in place. Returns the removal count.

    ``node`` itself is never removed. Tail text of a removed element is kept.
    """
    targets = []
    for el in node.iterdescendants():
        tag = _tag(el)
        if not tag:
            continue
        cls, el_id = class_and_id(el)
        if tag in NOISE_TAGS or noise_pattern.search(cls) or noise_pattern.search(el_id):
            targets.append(el)

    target_set = set(targets)
    removed = 0
    for el in targets:
        # Goes away with an ancestor that is also a target
        if any(anc in target_set for anc in el.iterancestors()):
            continue
        el.drop_tree()
        removed += 1
    return removed


def project_text(node: etree._Element) -> str:
    """Flatten ``node`` to a single normalized line of text.

    Iterative so deep documents cannot exhaust the recursion limit.
    """
    parts: list[str] = []

    def emit(text: str | None) -> None:
        if text:
            stripped = text.strip()
            if stripped:
                parts.append(stripped)
                parts.append(" ")

    # Stack entries: (element, is_tail_marker)
    stack: list[tuple[etree._Element, bool]] = [(node, False)]
    while stack:
        el, tail_only = stack.pop()
        if tail_only:
            emit(el.tail)
            continue
        tag = _tag(el)
        if not tag:
            # Comment / PI: skip its text, keep its tail
            continue
        if tag in _BLOCK_TAGS:
            parts.append("\n")
        emit(el.text)
        for child in reversed(el):
            stack.append((child, True))
            stack.append((child, False))

    return _WS_RE.sub(" ", "".join(parts)).strip()


def inner_html(node: etree._Element) -> str:
    """Serialize the children of ``node`` (text included) as HTML."""
    pieces = [html.escape(node.text, quote=False)] if node.text else []
    for child in node:
        pieces.append(etree.tostring(child, encoding="unicode", method="html", with_tail=True))
    return "".join(pieces)
