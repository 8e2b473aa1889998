# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Budget-constrained truncation engine.

Core data structures shared by the segmenter, scorer, selector and
assembler. Every value here is immutable and created fresh per call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

GAP_MARKER = "[...]"

# Charged per selected chunk on top of its length (separator + marker slack).
CHUNK_OVERHEAD = 5


class ChunkType(StrEnum):
    """Structural classification of a chunk."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    CODE = "code"
    TEXT = "text"  # sentence from plain text


@dataclass(frozen=True, slots=True)
class Chunk:
    """A contiguous, typed span of content with its salience score."""

    content: str
    type: ChunkType
    position: int
    score: float = 0.0
    length: int = -1

    def __post_init__(self) -> None:
        if self.length < 0:
            object.__setattr__(self, "length", len(self.content))

    @property
    def charge(self) -> int:
        """Budget cost of emitting this chunk."""
        return self.length + CHUNK_OVERHEAD


@dataclass(frozen=True, slots=True)
class TruncationResult:
    """Final bounded output of ``apply_smart_truncation``."""

    content: str
    truncated: bool
    original_length: int
    final_length: int
    chunks_selected: int | None = None
    chunks_total: int | None = None

    def to_dict(self) -> dict:
        data: dict = {
            "content": self.content,
            "truncated": self.truncated,
            "original_length": self.original_length,
            "final_length": self.final_length,
        }
        if self.chunks_selected is not None:
            data["chunks_selected"] = self.chunks_selected
        if self.chunks_total is not None:
            data["chunks_total"] = self.chunks_total
        return data
