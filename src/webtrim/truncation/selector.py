# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Greedy, order-preserving chunk selection under a character budget.

Algorithm:
  1. The first heading (document title in practice) is pinned and charged up front
  2. Remaining chunks are visited by descending score, ties in original order
  3. A chunk is taken if its charge (length + overhead) still fits; otherwise
     it is skipped and the scan continues, so smaller chunks can fill gaps
  4. The selection is returned in ascending position order
"""

from __future__ import annotations

import logging

from webtrim.truncation import Chunk, ChunkType

logger = logging.getLogger(__name__)


def first_heading(chunks: list[Chunk]) -> Chunk | None:
    """Lowest-position heading chunk, if any."""
    headings = [c for c in chunks if c.type == ChunkType.HEADING]
    if not headings:
        return None
    return min(headings, key=lambda c: c.position)


def select_chunks(chunks: list[Chunk], budget: float) -> list[Chunk]:
    """Pick the subset of ``chunks`` to emit within ``budget`` characters."""
    selected: list[Chunk] = []
    used = 0

    pinned = first_heading(chunks)
    if pinned is not None:
        selected.append(pinned)
        used += pinned.charge

    # sorted() is stable: equal scores keep their original relative order
    ranked = sorted((c for c in chunks if c is not pinned), key=lambda c: -c.score)

    skipped = 0
    for chunk in ranked:
        if used + chunk.charge <= budget:
            selected.append(chunk)
            used += chunk.charge
        else:
            skipped += 1

    logger.debug(
        "Selector: %d/%d chunks kept (budget=%s, used=%d, skipped=%d, pinned_heading=%s)",
        len(selected),
        len(chunks),
        budget,
        used,
        skipped,
        pinned is not None,
    )
    return sorted(selected, key=lambda c: c.position)
