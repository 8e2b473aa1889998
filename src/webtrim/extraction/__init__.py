# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Content-region extraction.

Scores content-bearing DOM subtrees, picks the content island, and projects
it to text (or hands its markup to the markdown converter).
"""

from __future__ import annotations

from dataclasses import dataclass

import lxml.html


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Output of the DOM stage."""

    title: str
    text_content: str
    content: str  # inner HTML of the chosen subtree
    length: int

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "text_content": self.text_content,
            "content": self.content,
            "length": self.length,
        }


@dataclass(frozen=True, slots=True)
class ContentCandidate:
    """A scored DOM subtree; only lives while candidates are compared."""

    element: lxml.html.HtmlElement
    score: float
