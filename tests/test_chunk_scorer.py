# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Unit tests for truncation/scorer.py."""

from __future__ import annotations

import pytest

from webtrim.truncation import ChunkType
from webtrim.truncation.scorer import KEYWORDS, score_chunk, score_segment
from tests._webtrim_helpers import filler, make_chunk

# Mid-sequence position: ratio 0.5, no positional bonus
MID = dict(position=5)
TOTAL = 11


class TestStructuralBonus:
    def test_heading_code_paragraph_order(self):
        text = filler(120)
        heading = score_chunk(make_chunk(text, ChunkType.HEADING, **MID), TOTAL)
        code = score_chunk(make_chunk(text, ChunkType.CODE, **MID), TOTAL)
        paragraph = score_chunk(make_chunk(text, ChunkType.PARAGRAPH, **MID), TOTAL)
        assert heading > code > paragraph
        assert (heading, code, paragraph) == (25, 15, 5)

    def test_list_bonus(self):
        assert score_chunk(make_chunk(filler(120), ChunkType.LIST, **MID), TOTAL) == 10

    def test_text_type_has_no_bonus(self):
        assert score_chunk(make_chunk(filler(120), ChunkType.TEXT, **MID), TOTAL) == 5


class TestPositionalBonus:
    def test_first_chunk(self):
        assert score_chunk(make_chunk(filler(60), position=0), 10) == 15

    def test_last_chunk(self):
        assert score_chunk(make_chunk(filler(60), position=9), 10) == 12

    def test_leading_boundary_inclusive(self):
        # 3 / 20 == 0.15
        assert score_chunk(make_chunk(filler(60), position=3), 21) == 15

    def test_trailing_boundary_inclusive(self):
        # 17 / 20 == 0.85
        assert score_chunk(make_chunk(filler(60), position=17), 21) == 12

    def test_single_chunk_is_leading(self):
        assert score_chunk(make_chunk(filler(60), position=0), 1) == 15

    def test_middle_has_no_bonus(self):
        assert score_chunk(make_chunk(filler(60), position=10), 21) == 0


class TestLengthBonus:
    @pytest.mark.parametrize(
        ("length", "expected"),
        [
            (49, -10),
            (50, 0),
            (99, 0),
            (100, 5),
            (1000, 5),
            (1001, 3),
        ],
    )
    def test_length_bands(self, length, expected):
        assert score_chunk(make_chunk(filler(length), **MID), TOTAL) == expected


class TestKeywordBonus:
    def test_each_keyword_counts_once(self):
        text = "summary " * 5 + filler(20)
        # 60 chars: no length bonus, no short penalty
        assert score_chunk(make_chunk(text, **MID), TOTAL) == 5

    def test_distinct_keywords_add_up(self):
        text = "Key summary and CONCLUSION. " + filler(60)
        assert score_chunk(make_chunk(text, **MID), TOTAL) == 15

    def test_substring_match(self):
        # "domain" contains "main"
        text = "the domain " + filler(60)
        assert score_chunk(make_chunk(text, **MID), TOTAL) == 5

    def test_all_keywords(self):
        text = " ".join(KEYWORDS) + " " + filler(60)
        # length is between 100 and 1000
        assert score_chunk(make_chunk(text, **MID), TOTAL) == 5 * len(KEYWORDS) + 5


class TestCombined:
    def test_short_important_heading_first(self):
        chunk = make_chunk("# Important Heading", ChunkType.HEADING, position=0)
        # heading 20 + leading 15 + keyword 5 - short 10
        assert score_chunk(chunk, 10) == 30

    def test_stored_score_ignored(self):
        chunk = make_chunk(filler(60), position=0, score=999)
        assert score_chunk(chunk, 10) == 15

    def test_score_segment_matches_score_chunk(self):
        chunk = make_chunk("## Overview\n" + filler(200), ChunkType.HEADING, position=4)
        assert score_segment(chunk.content, chunk.type, chunk.position, chunk.length, 8) == score_chunk(chunk, 8)

    def test_pure(self):
        chunk = make_chunk(filler(120), ChunkType.CODE, position=2)
        assert score_chunk(chunk, 7) == score_chunk(chunk, 7)
        assert chunk.score == 0.0
