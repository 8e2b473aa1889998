# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Heuristic salience scoring for chunks.

Signals, summed:
  1. Structure: headings > code > lists > prose
  2. Position: opening and closing chunks carry framing content
  3. Length: mid-sized blocks are usually substantive
  4. Keywords: summary-style vocabulary
  5. Penalty: very short fragments
"""

from __future__ import annotations

from webtrim.truncation import Chunk, ChunkType

_TYPE_BONUS = {
    ChunkType.HEADING: 20,
    ChunkType.CODE: 10,
    ChunkType.LIST: 5,
}

# ---- Position ----
_LEADING_RATIO = 0.15
_LEADING_BONUS = 15
_TRAILING_RATIO = 0.85
_TRAILING_BONUS = 12

# ---- Length ----
_MID_LENGTH_MIN = 100
_MID_LENGTH_MAX = 1000
_MID_LENGTH_BONUS = 5
_LONG_LENGTH_MIN = 300
_LONG_LENGTH_BONUS = 3
_SHORT_LENGTH_MAX = 50
_SHORT_PENALTY = 10

KEYWORDS = (
    "summary",
    "conclusion",
    "important",
    "overview",
    "introduction",
    "key",
    "main",
    "abstract",
)
_KEYWORD_BONUS = 5


def score_segment(
    content: str,
    chunk_type: ChunkType,
    position: int,
    length: int,
    total_chunks: int,
) -> float:
    """Score raw chunk fields. Used by the segmenter before a Chunk exists."""
    score = 0.0

    score += _TYPE_BONUS.get(chunk_type, 0)

    ratio = position / max(total_chunks - 1, 1)
    if ratio <= _LEADING_RATIO:
        score += _LEADING_BONUS
    elif ratio >= _TRAILING_RATIO:
        score += _TRAILING_BONUS

    if _MID_LENGTH_MIN <= length <= _MID_LENGTH_MAX:
        score += _MID_LENGTH_BONUS
    elif length > _LONG_LENGTH_MIN:
        score += _LONG_LENGTH_BONUS

    lowered = content.lower()
    score += _KEYWORD_BONUS * sum(1 for kw in KEYWORDS if kw in lowered)

    if length < _SHORT_LENGTH_MAX:
        score -= _SHORT_PENALTY

    return score


def score_chunk(chunk: Chunk, total_chunks: int) -> float:
    """Salience of ``chunk`` within a sequence of ``total_chunks``.

    Ignores any score already stored on the chunk.
    """
    return score_segment(chunk.content, chunk.type, chunk.position, chunk.length, total_chunks)
