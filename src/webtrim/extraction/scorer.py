# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""DOM content scorer: find the content island of a page.

Algorithm:
  1. Candidates: article, section, main, div, [role=main] (document order)
  2. Score = text_length * 0.1 * tag_boost       (0 below min_text_length)
             → 0 if class/id matches ignore_pattern
             + text_length / (child_elements + 1) * 0.5
             + descendant <p> count * 5
  3. Best = first candidate with the strictly highest score
  4. No positive candidate → whole <body>
  5. Clean a copy of the winner (scripts, ads) and project its text
"""

from __future__ import annotations

import copy
import logging
import re

import lxml.html
from lxml import etree

from webtrim.config import DEFAULT_EXTRACT_CONFIG, ExtractConfig
from webtrim.errors import ExtractionError
from webtrim.extraction import ContentCandidate, ExtractionResult
from webtrim.extraction.projector import class_and_id, clean_node, inner_html, project_text

logger = logging.getLogger(__name__)

_CANDIDATE_XPATH = "//article | //section | //main | //div | //*[@role='main']"

_TEXT_WEIGHT = 0.1
_DENSITY_WEIGHT = 0.5
_PARAGRAPH_WEIGHT = 5

_WS_RE = re.compile(r"\s+")


def parse_document(document: str | bytes) -> lxml.html.HtmlElement:
    """Parse raw HTML into an lxml document root.

    Raises:
        ExtractionError: empty input or a parser failure.
    """
    if isinstance(document, str):
        if not document.strip():
            raise ExtractionError("Empty HTML input")
        raw = document.encode("utf-8")
    else:
        if not document.strip():
            raise ExtractionError("Empty HTML input")
        raw = document
    try:
        parser = lxml.html.HTMLParser(recover=True, encoding="utf-8")
        return lxml.html.document_fromstring(raw, parser=parser)
    except (etree.ParserError, ValueError) as e:
        raise ExtractionError(f"lxml parsing failed: {e}") from e


def _child_element_count(el: etree._Element) -> int:
    return sum(1 for child in el if isinstance(child.tag, str))


def score_node(el: lxml.html.HtmlElement, config: ExtractConfig = DEFAULT_EXTRACT_CONFIG) -> float:
    """Salience of a candidate subtree. 0 means "not content"."""
    text_length = len((el.text_content() or "").strip())
    if text_length < config.min_text_length:
        return 0.0

    tag = el.tag.lower() if isinstance(el.tag, str) else ""
    score = text_length * _TEXT_WEIGHT * config.boost_for(tag)

    cls, el_id = class_and_id(el)
    if config.ignore_pattern.search(cls) or config.ignore_pattern.search(el_id):
        return 0.0

    score += (text_length / (_child_element_count(el) + 1)) * _DENSITY_WEIGHT
    score += len(el.findall(".//p")) * _PARAGRAPH_WEIGHT
    return score


def find_best_candidate(
    doc: lxml.html.HtmlElement,
    config: ExtractConfig = DEFAULT_EXTRACT_CONFIG,
) -> ContentCandidate | None:
    """Highest-scoring candidate, or None when nothing scores above 0.

    Ties keep the earlier candidate in document order.
    """
    best: ContentCandidate | None = None
    count = 0
    for el in doc.xpath(_CANDIDATE_XPATH):
        count += 1
        score = score_node(el, config)
        if score > (best.score if best is not None else 0.0):
            best = ContentCandidate(element=el, score=score)

    logger.debug(
        "Scored %d candidates; best=<%s> score=%.1f",
        count,
        best.element.tag if best is not None else None,
        best.score if best is not None else 0.0,
    )
    return best


def _title_of(doc: lxml.html.HtmlElement) -> str:
    title = doc.findtext(".//title") or ""
    return _WS_RE.sub(" ", title).strip()


def _body_of(doc: lxml.html.HtmlElement) -> lxml.html.HtmlElement:
    if isinstance(doc.tag, str) and doc.tag.lower() == "body":
        return doc
    body = doc.find(".//body")
    if body is None:
        raise ExtractionError("Document has no <body>")
    return body


def _extract(
    document: str | bytes | lxml.html.HtmlElement | etree._ElementTree,
    config: ExtractConfig,
) -> ExtractionResult:
    if isinstance(document, (str, bytes)):
        doc = parse_document(document)
    elif isinstance(document, etree._Element):
        doc = document
    elif isinstance(document, etree._ElementTree):
        doc = document.getroot()
        if doc is None:
            raise ExtractionError("Parsed tree has no root element")
    else:
        raise ExtractionError(f"Unsupported document type: {type(document).__name__}")

    title = _title_of(doc)

    best = find_best_candidate(doc, config)
    if best is None:
        logger.debug("No positive candidate; falling back to <body>")
        source = _body_of(doc)
    else:
        source = best.element

    # Work on a copy so the caller's tree is left untouched
    node = copy.deepcopy(source)
    removed = clean_node(node, config.noise_pattern)
    text_content = project_text(node)

    logger.debug("Extracted %d chars from <%s> (%d noise elements removed)", len(text_content), node.tag, removed)
    return ExtractionResult(
        title=title,
        text_content=text_content,
        content=inner_html(node),
        length=len(text_content),
    )


def extract(
    document: str | bytes | lxml.html.HtmlElement | etree._ElementTree,
    config: ExtractConfig = DEFAULT_EXTRACT_CONFIG,
) -> ExtractionResult | None:
    """Extract the primary readable content of an HTML document.

    Args:
        document: Raw HTML, an lxml.html element, or the tree returned by
            lxml.html.parse(). Parsed input is not modified.
        config: Scoring configuration.

    Returns:
        ExtractionResult, or None when the document could not be parsed.
        Callers should then fall back to coarse body-text extraction.
    """
    try:
        return _extract(document, config)
    except ExtractionError as e:
        logger.warning("Content extraction failed: %s", e)
        return None
    except Exception as e:
        logger.warning("Unexpected content extraction error: %s", e, exc_info=True)
        return None
