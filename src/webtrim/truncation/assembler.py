# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Reassemble selected chunks, and the head/middle/tail fallback."""

from __future__ import annotations

from webtrim.truncation import GAP_MARKER, Chunk

CHUNK_SEPARATOR = "\n\n"
FALLBACK_SEPARATOR = f"\n{GAP_MARKER}\n"

_HEAD_SHARE = 0.4
_MIDDLE_SHARE = 0.3
_FALLBACK_RESERVE = 2 * len(FALLBACK_SEPARATOR)


def assemble_chunks(chunks: list[Chunk]) -> str:
    """Join chunks in position order, marking elided runs with ``[...]``."""
    if not chunks:
        return ""

    parts: list[str] = []
    last_position: int | None = None
    for chunk in sorted(chunks, key=lambda c: c.position):
        if last_position is not None and chunk.position > last_position + 1:
            parts.append(GAP_MARKER)
        parts.append(chunk.content)
        last_position = chunk.position

    return CHUNK_SEPARATOR.join(parts)


def balanced_truncate(text: str, budget: int) -> str:
    """Keep the head, a centred middle window and the tail of ``text``.

    Shares: 40% head, 30% middle, the rest (minus separator overhead) tail.
    A budget too small to hold both separators and a non-empty tail gets a
    plain prefix cut instead. Output never exceeds ``budget``.
    """
    if len(text) <= budget:
        return text

    head_len = int(budget * _HEAD_SHARE)
    middle_len = int(budget * _MIDDLE_SHARE)
    tail_len = budget - head_len - middle_len - _FALLBACK_RESERVE
    if tail_len <= 0 or head_len <= 0:
        return text[:budget]

    head = text[:head_len]
    middle_start = (len(text) - middle_len) // 2
    middle = text[middle_start : middle_start + middle_len]
    tail = text[len(text) - tail_len :]

    return FALLBACK_SEPARATOR.join((head, middle, tail))
