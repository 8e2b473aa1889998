# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Unit tests for truncation/selector.py."""

from __future__ import annotations

from webtrim.truncation import ChunkType
from webtrim.truncation.selector import first_heading, select_chunks
from tests._webtrim_helpers import filler, make_chunk


def _positions(chunks):
    return [c.position for c in chunks]


# ---------------------------------------------------------------------------
# TestFirstHeading
# ---------------------------------------------------------------------------


class TestFirstHeading:
    def test_lowest_position_wins(self):
        chunks = [
            make_chunk("## B", ChunkType.HEADING, position=4),
            make_chunk("# A", ChunkType.HEADING, position=1),
            make_chunk("p", position=0),
        ]
        assert first_heading(chunks).content == "# A"

    def test_none_without_headings(self):
        assert first_heading([make_chunk("p")]) is None
        assert first_heading([]) is None


# ---------------------------------------------------------------------------
# TestSelectChunks
# ---------------------------------------------------------------------------


class TestSelectChunks:
    def test_highest_scores_within_budget(self):
        chunks = [
            make_chunk(filler(10), position=0, score=1),
            make_chunk(filler(10), position=1, score=3),
            make_chunk(filler(10), position=2, score=2),
        ]
        # each charge is 15: two fit in 30
        assert _positions(select_chunks(chunks, 30)) == [1, 2]

    def test_output_in_position_order(self):
        chunks = [
            make_chunk(filler(10), position=0, score=1),
            make_chunk(filler(10), position=1, score=5),
            make_chunk(filler(10), position=2, score=9),
        ]
        assert _positions(select_chunks(chunks, 100)) == [0, 1, 2]

    def test_skips_oversized_and_continues(self):
        chunks = [
            make_chunk(filler(100), position=0, score=10),
            make_chunk(filler(10), position=1, score=5),
            make_chunk(filler(10), position=2, score=1),
        ]
        assert _positions(select_chunks(chunks, 40)) == [1, 2]

    def test_charge_boundary_is_inclusive(self):
        chunks = [make_chunk(filler(10), position=0)]
        assert len(select_chunks(chunks, 15)) == 1
        assert select_chunks(chunks, 14) == []

    def test_equal_scores_keep_original_order(self):
        chunks = [make_chunk(filler(10), position=i, score=1) for i in range(4)]
        assert _positions(select_chunks(chunks, 30)) == [0, 1]

    def test_empty_input(self):
        assert select_chunks([], 1000) == []

    def test_nothing_fits(self):
        chunks = [make_chunk(filler(200), position=i) for i in range(3)]
        assert select_chunks(chunks, 100) == []

    def test_infinite_budget_takes_everything(self):
        chunks = [make_chunk(filler(500), position=i) for i in range(5)]
        assert len(select_chunks(chunks, float("inf"))) == 5


# ---------------------------------------------------------------------------
# TestPinnedHeading
# ---------------------------------------------------------------------------


class TestPinnedHeading:
    def test_first_heading_always_selected(self):
        chunks = [
            make_chunk("# Title", ChunkType.HEADING, position=0, score=-50),
            make_chunk(filler(10), position=1, score=10),
        ]
        selected = select_chunks(chunks, 12)
        assert _positions(selected) == [0]

    def test_pinned_even_when_over_budget(self):
        chunks = [make_chunk("# " + filler(200), ChunkType.HEADING, position=0)]
        assert _positions(select_chunks(chunks, 50)) == [0]

    def test_pinned_heading_charge_reduces_room(self):
        chunks = [
            make_chunk("# " + filler(8), ChunkType.HEADING, position=0, score=0),
            make_chunk(filler(10), position=1, score=5),
            make_chunk(filler(10), position=2, score=4),
        ]
        # heading charge 15 leaves 15 of 30: only the best paragraph fits
        assert _positions(select_chunks(chunks, 30)) == [0, 1]

    def test_only_first_heading_pinned(self):
        chunks = [
            make_chunk("# One", ChunkType.HEADING, position=0, score=0),
            make_chunk("## Two", ChunkType.HEADING, position=5, score=0),
        ]
        # "# One" charge is 10; "## Two" (11) does not fit in the remaining 2
        assert _positions(select_chunks(chunks, 12)) == [0]

    def test_pinned_not_selected_twice(self):
        chunks = [
            make_chunk("# Title", ChunkType.HEADING, position=0, score=100),
            make_chunk(filler(10), position=1, score=1),
        ]
        selected = select_chunks(chunks, 1000)
        assert _positions(selected) == [0, 1]
