"""
Tests for highlight_segments().
"""

from pyworkbench.search import (
    MAX_HIGHLIGHT_SEGMENTS,
    Match,
    cell_match_positions,
    create_search_config,
    highlight_segments,
)


class TestHighlightSegments:

    def test_basic(self):
        assert highlight_segments("banana", [Match(1, 2)]) == [
            ("b", False), ("a", True), ("nana", False)
        ]

    def test_segments_rebuild_the_text(self):
        value = "  The cat sat on the Cat mat "
        positions = cell_match_positions(value, create_search_config("cat"))
        segments = highlight_segments(value, positions)
        assert "".join(text for text, _ in segments) == "The cat sat on the Cat mat"
        assert [text for text, marked in segments if marked] == ["cat", "Cat"]

    def test_no_matches(self):
        assert highlight_segments("abc", []) == [("abc", False)]
        assert highlight_segments(None, []) == []
        assert highlight_segments("", [Match(0, 1)]) == []

    def test_match_at_edges(self):
        assert highlight_segments("abc", [Match(0, 1), Match(2, 3)]) == [
            ("a", True), ("b", False), ("c", True)
        ]

    def test_unsorted_and_overlapping(self):
        assert highlight_segments("abcdef", [Match(3, 5), Match(0, 2), Match(1, 4)]) == [
            ("ab", True), ("cd", True), ("e", True), ("f", False)
        ]

    def test_offsets_clamped(self):
        assert highlight_segments("abc", [Match(2, 10), Match(7, 9)]) == [
            ("ab", False), ("c", True)
        ]

    def test_numbers(self):
        assert highlight_segments(12.0, [Match(0, 1)]) == [("1", True), ("2", False)]

    def test_segment_cap(self):
        text = "a" * (MAX_HIGHLIGHT_SEGMENTS + 20)
        matches = [Match(i, i + 1) for i in range(len(text))]
        segments = highlight_segments(text, matches)
        assert sum(marked for _, marked in segments) == MAX_HIGHLIGHT_SEGMENTS
        assert segments[-1] == ("a" * 20, False)
