# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""End-to-end page digest: HTML in, bounded markdown or text out.

Flow:
  raw.html
    → extract()                   (content island; None on parse failure)
      ↳ None → coarse body text   (BeautifulSoup get_text)
    → html_to_markdown()          (markdown format only)
      ↳ None → projected text
    → apply_smart_truncation()
    → PageDigest

Every degradation is recorded in ``warnings``; nothing here raises for bad
markup. Only invalid configuration raises (ConfigError).
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from bs4 import BeautifulSoup, Comment

from webtrim.config import DEFAULT_EXTRACT_CONFIG, ContentFormat, ExtractConfig, TruncationOptions, parse_format
from webtrim.extraction.markdown import html_to_markdown
from webtrim.extraction.projector import NOISE_TAGS
from webtrim.extraction.scorer import extract
from webtrim.truncation import TruncationResult
from webtrim.truncation.pipeline import apply_smart_truncation

logger = logging.getLogger(__name__)

WARN_EXTRACTION_FAILED = "extraction_failed: used coarse body text"
WARN_MARKDOWN_UNAVAILABLE = "markdown_unavailable: returned plain text"

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class PageDigest:
    """Bounded, agent-ready representation of one page."""

    title: str
    content: str
    format: ContentFormat
    truncation: TruncationResult
    url: str = ""
    warnings: tuple[str, ...] = ()
    elapsed_ms: float = field(default=0.0, compare=False)

    @property
    def truncated(self) -> bool:
        return self.truncation.truncated

    def to_dict(self) -> dict:
        data = {
            "url": self.url,
            "title": self.title,
            "format": self.format.value,
            **self.truncation.to_dict(),
        }
        if self.warnings:
            data["warnings"] = list(self.warnings)
        return data


def coarse_extract(html: str | bytes) -> tuple[str, str]:
    """Whole-page (title, text) without content scoring.

    Used when the content scorer cannot parse the document.
    """
    if not html:
        return "", ""
    soup = BeautifulSoup(html, "html.parser")
    title_tag = soup.find("title")
    title = ""
    if title_tag is not None:
        title = _WS_RE.sub(" ", title_tag.get_text()).strip()
        title_tag.decompose()

    for tag in soup.find_all(list(NOISE_TAGS)):
        tag.decompose()
    for comment in soup.find_all(string=lambda t: isinstance(t, Comment)):
        comment.extract()

    root = soup.body or soup
    text = _WS_RE.sub(" ", root.get_text(" ")).strip()
    return title, text


def digest_html(
    html: str | bytes,
    *,
    url: str = "",
    format: ContentFormat | str = ContentFormat.MARKDOWN,
    options: TruncationOptions | Mapping[str, Any] | None = None,
    config: ExtractConfig = DEFAULT_EXTRACT_CONFIG,
) -> PageDigest:
    """Extract, convert and truncate one HTML page.

    Args:
        html: Raw page HTML (already fetched and size-capped by the caller).
        url: Source URL, for logging and the result only.
        format: "markdown" (default) or "text".
        options: Truncation mode / max_length.
        config: Content scorer configuration.

    Raises:
        ConfigError: invalid format or options.
    """
    fmt = parse_format(format)
    opts = TruncationOptions.coerce(options)
    start = time.monotonic()
    warnings: list[str] = []

    with structlog.contextvars.bound_contextvars(**({"url": url} if url else {})):
        extraction = extract(html, config)
        if extraction is None:
            warnings.append(WARN_EXTRACTION_FAILED)
            title, text = coarse_extract(html)
            content, out_fmt = text, ContentFormat.TEXT
        else:
            title = extraction.title
            content, out_fmt = extraction.text_content, ContentFormat.TEXT
            if fmt == ContentFormat.MARKDOWN:
                markdown = html_to_markdown(extraction.content)
                if markdown is None:
                    warnings.append(WARN_MARKDOWN_UNAVAILABLE)
                else:
                    content, out_fmt = markdown, ContentFormat.MARKDOWN
        if fmt == ContentFormat.MARKDOWN and extraction is None:
            warnings.append(WARN_MARKDOWN_UNAVAILABLE)

        truncation = apply_smart_truncation(content, out_fmt, opts)
        elapsed_ms = (time.monotonic() - start) * 1000

        logger.info(
            "Digest: %d → %d chars (format=%s, truncated=%s, warnings=%d, %.0fms)",
            truncation.original_length,
            truncation.final_length,
            out_fmt.value,
            truncation.truncated,
            len(warnings),
            elapsed_ms,
        )

    return PageDigest(
        title=title,
        content=truncation.content,
        format=out_fmt,
        truncation=truncation,
        url=url,
        warnings=tuple(warnings),
        elapsed_ms=elapsed_ms,
    )
