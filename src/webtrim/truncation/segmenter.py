# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Split markdown or plain text into ordered, typed, scored chunks.

Two variants:
  - parse_markdown_chunks(): line-oriented state machine (paragraph/heading/list/code)
  - parse_sentences(): terminal-punctuation sentence split for plain text

Both collect raw (content, type) segments in one pass, then build every
Chunk fully populated (position, length, score) once the total is known.
"""

from __future__ import annotations

import logging
import re

from webtrim.truncation import Chunk, ChunkType
from webtrim.truncation.scorer import score_segment

logger = logging.getLogger(__name__)

_FENCE = "```"
_HEADING_RE = re.compile(r"^#{1,6}\s")
_BULLET_RE = re.compile(r"^\s*[-*+]\s")
_NUMBERED_RE = re.compile(r"^\s*\d+\.\s")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def _build_chunks(segments: list[tuple[str, ChunkType]]) -> list[Chunk]:
    total = len(segments)
    return [
        Chunk(
            content=content,
            type=chunk_type,
            position=position,
            score=score_segment(content, chunk_type, position, len(content), total),
            length=len(content),
        )
        for position, (content, chunk_type) in enumerate(segments)
    ]


def _is_list_item(line: str) -> bool:
    return bool(_BULLET_RE.match(line) or _NUMBERED_RE.match(line))


def parse_markdown_chunks(markdown: str) -> list[Chunk]:
    """Segment markdown into heading, paragraph, list and code chunks.

    Blank lines end a list but do not split paragraphs. An unterminated
    code fence runs to the end of input and is emitted as code.
    """
    segments: list[tuple[str, ChunkType]] = []
    buffer: list[str] = []
    state = ChunkType.PARAGRAPH
    in_code = False

    def flush() -> None:
        if buffer:
            content = "\n".join(buffer).strip()
            if content:
                segments.append((content, state))
            buffer.clear()

    for line in markdown.split("\n"):
        if line.startswith(_FENCE):
            if in_code:
                buffer.append(line)
                flush()
                in_code = False
                state = ChunkType.PARAGRAPH
            else:
                flush()
                in_code = True
                state = ChunkType.CODE
                buffer.append(line)
            continue

        if in_code:
            buffer.append(line)
            continue

        if _HEADING_RE.match(line):
            flush()
            state = ChunkType.HEADING
            buffer.append(line)
            flush()
            state = ChunkType.PARAGRAPH
        elif _is_list_item(line):
            if state != ChunkType.LIST:
                flush()
                state = ChunkType.LIST
            buffer.append(line)
        elif not line.strip():
            if state == ChunkType.LIST:
                flush()
                state = ChunkType.PARAGRAPH
        else:
            if state == ChunkType.LIST:
                flush()
                state = ChunkType.PARAGRAPH
            buffer.append(line)

    flush()

    chunks = _build_chunks(segments)
    logger.debug("Segmented markdown into %d chunks", len(chunks))
    return chunks


def parse_sentences(text: str, *, keep_trailing: bool = True) -> list[Chunk]:
    """Segment plain text into sentence chunks of type ``text``.

    A sentence is a run of non-terminator characters followed by one or
    more of ``. ! ?``. With ``keep_trailing`` (default) a final fragment
    without terminal punctuation becomes the last chunk instead of being
    dropped.
    """
    segments: list[tuple[str, ChunkType]] = []
    end = 0
    for m in _SENTENCE_RE.finditer(text):
        sentence = m.group(0).strip()
        if sentence:
            segments.append((sentence, ChunkType.TEXT))
        end = m.end()

    if keep_trailing:
        remainder = text[end:].strip()
        if remainder:
            segments.append((remainder, ChunkType.TEXT))

    return _build_chunks(segments)
