# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""webtrim: main-content extraction and budget-bounded truncation for AI agents.

Turns an arbitrary HTML page into a few thousand characters of readable
content:
- extract(): pick the content island of the DOM and project it to text
- apply_smart_truncation(): keep the most salient chunks within a budget
- digest_html(): both, plus markdown conversion, in one call
"""

from __future__ import annotations

from webtrim.config import (
    DEFAULT_EXTRACT_CONFIG,
    MODE_LIMITS,
    ContentFormat,
    ExtractConfig,
    TruncationMode,
    TruncationOptions,
)
from webtrim.digest import PageDigest, digest_html
from webtrim.errors import (
    ConfigError,
    ExtractionError,
    InputTooLargeError,
    WebTrimError,
)
from webtrim.extraction import ExtractionResult
from webtrim.extraction.markdown import html_to_markdown
from webtrim.extraction.scorer import extract
from webtrim.truncation import GAP_MARKER, Chunk, ChunkType, TruncationResult
from webtrim.truncation.pipeline import apply_smart_truncation

__all__ = [
    "DEFAULT_EXTRACT_CONFIG",
    "GAP_MARKER",
    "MODE_LIMITS",
    "Chunk",
    "ChunkType",
    "ConfigError",
    "ContentFormat",
    "ExtractConfig",
    "ExtractionError",
    "ExtractionResult",
    "InputTooLargeError",
    "PageDigest",
    "TruncationMode",
    "TruncationOptions",
    "TruncationResult",
    "WebTrimError",
    "apply_smart_truncation",
    "digest_html",
    "extract",
    "html_to_markdown",
]
