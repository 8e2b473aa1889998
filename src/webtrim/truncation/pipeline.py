# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Truncation orchestration.

Flow:
  content
    → budget resolution (max_length, else mode table)
    → within budget? return unchanged
    → segmentation (markdown state machine | sentence split)
    → scoring (at chunk construction)
    → greedy selection
    → assembly with gap markers
    → TruncationResult
  Zero chunks, or nothing selectable, routes to balanced_truncate().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from webtrim.config import ContentFormat, TruncationOptions, parse_format
from webtrim.truncation import Chunk, TruncationResult
from webtrim.truncation.assembler import assemble_chunks, balanced_truncate
from webtrim.truncation.segmenter import parse_markdown_chunks, parse_sentences
from webtrim.truncation.selector import first_heading, select_chunks

logger = logging.getLogger(__name__)


def apply_smart_truncation(
    content: str,
    format: ContentFormat | str,
    options: TruncationOptions | Mapping[str, Any] | None = None,
) -> TruncationResult:
    """Reduce ``content`` to the budget implied by ``options``.

    Args:
        content: Markdown or plain text.
        format: "markdown" or "text"; selects the segmenter.
        options: TruncationOptions or a mapping with ``mode`` / ``max_length``.

    Returns:
        TruncationResult; ``truncated`` is False when content already fits.

    Raises:
        ConfigError: unknown format or mode, or invalid max_length.
    """
    fmt = parse_format(format)
    opts = TruncationOptions.coerce(options)
    budget = opts.budget

    if len(content) <= budget:
        return TruncationResult(
            content=content,
            truncated=False,
            original_length=len(content),
            final_length=len(content),
        )

    if fmt == ContentFormat.MARKDOWN:
        return truncate_markdown(content, int(budget))
    return truncate_text(content, int(budget))


def truncate_markdown(content: str, max_length: int) -> TruncationResult:
    """Chunk-based truncation of markdown content."""
    return _truncate_chunks(content, parse_markdown_chunks(content), max_length)


def truncate_text(content: str, max_length: int) -> TruncationResult:
    """Sentence-based truncation of plain text."""
    return _truncate_chunks(content, parse_sentences(content), max_length)


def _fallback(content: str, max_length: int, reason: str) -> TruncationResult:
    logger.debug("Balanced fallback (%s): %d chars → budget %d", reason, len(content), max_length)
    result = balanced_truncate(content, max_length)
    return TruncationResult(
        content=result,
        truncated=True,
        original_length=len(content),
        final_length=len(result),
    )


def _fit_to_budget(selected: list[Chunk], max_length: int) -> tuple[list[Chunk], str]:
    """Drop lowest-scoring chunks while gap markers push output past the budget.

    The pinned heading is dropped last. Best effort: a single chunk larger
    than the budget is left as is.
    """
    assembled = assemble_chunks(selected)
    if len(assembled) <= max_length:
        return selected, assembled

    pinned = first_heading(selected)
    kept = list(selected)
    # Lowest score first; among equals, later positions go first
    removable = sorted(
        (c for c in kept if c is not pinned),
        key=lambda c: (c.score, -c.position),
    )
    for chunk in removable:
        if len(assembled) <= max_length or len(kept) <= 1:
            break
        kept.remove(chunk)
        assembled = assemble_chunks(kept)

    logger.debug(
        "Marker overhead trim: %d → %d chunks (%d chars)",
        len(selected),
        len(kept),
        len(assembled),
    )
    return kept, assembled


def _truncate_chunks(content: str, chunks: list[Chunk], max_length: int) -> TruncationResult:
    if len(content) <= max_length:
        return TruncationResult(
            content=content,
            truncated=False,
            original_length=len(content),
            final_length=len(content),
        )

    if not chunks:
        return _fallback(content, max_length, "no chunks")

    selected = select_chunks(chunks, max_length)
    if not selected:
        return _fallback(content, max_length, "no chunk fits")

    selected, assembled = _fit_to_budget(selected, max_length)

    logger.debug(
        "Truncated %d → %d chars (%d/%d chunks)",
        len(content),
        len(assembled),
        len(selected),
        len(chunks),
    )
    return TruncationResult(
        content=assembled,
        truncated=True,
        original_length=len(content),
        final_length=len(assembled),
        chunks_selected=len(selected),
        chunks_total=len(chunks),
    )
