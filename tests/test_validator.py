"""Tests for range translation through edits."""

import pytest

from anchorage.text.positions import Range
from anchorage.host.memory import MemoryDocument
from anchorage.host.protocols import TextEdit
from anchorage.annotations.validator import translate_range, translate_through


def edit(sl, sc, el, ec, text):
    return TextEdit(Range.of(sl, sc, el, ec), text)


class TestTranslateRange:
    """Tests for single edit steps."""

    def test_newlines_before_anchor_shift_lines(self):
        """Test inserting lines above moves the range down."""
        anchor = Range.of(5, 0, 5, 2)

        result = translate_range(anchor, edit(1, 0, 1, 0, "\n\n"))

        assert result == Range.of(7, 0, 7, 2)

    def test_deleting_lines_before_anchor(self):
        """Test removing lines above moves the range up."""
        anchor = Range.of(5, 1, 5, 3)

        result = translate_range(anchor, edit(1, 0, 3, 0, ""))

        assert result == Range.of(3, 1, 3, 3)

    def test_insert_on_same_line_before_anchor(self):
        """Test inserting text left of the range shifts its columns."""
        anchor = Range.of(2, 4, 2, 6)

        result = translate_range(anchor, edit(2, 1, 2, 1, "abc"))

        assert result == Range.of(2, 7, 2, 9)

    def test_delete_on_same_line_before_anchor(self):
        """Test deleting text left of the range moves it left."""
        anchor = Range.of(2, 6, 2, 8)

        result = translate_range(anchor, edit(2, 1, 2, 4, ""))

        assert result == Range.of(2, 3, 2, 5)

    def test_multiline_replacement_ending_on_anchor_line(self):
        """Test a replacement spanning lines into the anchor's line."""
        anchor = Range.of(3, 5, 3, 7)

        result = translate_range(anchor, edit(1, 2, 3, 1, "x\nyz"))

        # Line 3 col 1 becomes line 2 col 2
        assert result == Range.of(2, 6, 2, 8)

    def test_multiline_anchor_end_keeps_column(self):
        """Test only endpoints on the edit's last line move sideways."""
        anchor = Range.of(2, 4, 4, 1)

        result = translate_range(anchor, edit(2, 0, 2, 1, "abc"))

        assert result == Range.of(2, 6, 4, 1)

    def test_edit_after_anchor_is_ignored(self):
        """Test edits after the range leave it unchanged."""
        anchor = Range.of(2, 0, 2, 3)

        assert translate_range(anchor, edit(4, 0, 6, 0, "zzz")) == anchor
        assert translate_range(anchor, edit(2, 5, 2, 6, "")) == anchor

    def test_intersecting_edit_invalidates(self):
        """Test an edit overlapping the range breaks it."""
        anchor = Range.of(5, 2, 5, 4)

        assert translate_range(anchor, edit(5, 0, 5, 3, "x")) is None

    def test_insertion_inside_anchor_invalidates(self):
        """Test typing inside the range breaks it."""
        anchor = Range.of(5, 2, 5, 4)

        assert translate_range(anchor, edit(5, 3, 5, 3, "1")) is None

    @pytest.mark.parametrize("position", [(5, 2), (5, 4)])
    def test_adjacent_text_insertion_invalidates(self, position):
        """Test typing right at a boundary breaks the range."""
        anchor = Range.of(5, 2, 5, 4)
        line, col = position

        assert translate_range(anchor, edit(line, col, line, col, "x")) is None

    def test_newline_at_end_boundary_is_tolerated(self):
        """Test a newline typed right after the range keeps it."""
        anchor = Range.of(5, 2, 5, 4)

        assert translate_range(anchor, edit(5, 4, 5, 4, "\n")) == anchor

    def test_newline_at_start_boundary_is_tolerated(self):
        """Test a newline typed right before the range moves it down."""
        anchor = Range.of(5, 2, 5, 4)

        assert translate_range(anchor, edit(5, 2, 5, 2, "\n")) == Range.of(6, 0, 6, 2)

    def test_only_single_newline_is_tolerated(self):
        """Test other whitespace at the boundary still invalidates."""
        anchor = Range.of(5, 2, 5, 4)

        assert translate_range(anchor, edit(5, 4, 5, 4, "\n\n")) is None
        assert translate_range(anchor, edit(5, 4, 5, 4, " ")) is None


class TestTranslateThrough:
    """Tests for folding a batch of edits."""

    def test_edits_apply_cumulatively(self):
        """Test each edit sees the range moved by the previous ones."""
        anchor = Range.of(4, 3, 4, 5)
        edits = [
            edit(0, 0, 0, 0, "\n"),  # anchor now on line 5
            edit(5, 0, 5, 0, "ab"),  # same line, before anchor
        ]

        assert translate_through(anchor, edits) == Range.of(5, 5, 5, 7)

    def test_stops_at_first_invalidating_edit(self):
        """Test a breaking edit ends the fold."""
        anchor = Range.of(1, 0, 1, 2)
        edits = [edit(1, 1, 1, 1, "x"), edit(0, 0, 0, 0, "\n")]

        assert translate_through(anchor, edits) is None

    def test_empty_batch(self):
        """Test no edits leaves the range alone."""
        anchor = Range.of(1, 0, 1, 2)

        assert translate_through(anchor, []) == anchor


class TestContainment:
    """Translated ranges still address the same text."""

    TEXT = "first line\nsecond\n    value = 42\nlast"

    @pytest.mark.parametrize(
        "change",
        [
            edit(0, 0, 0, 0, "\n\n"),
            edit(0, 5, 1, 3, ""),
            edit(1, 0, 2, 2, "new\ntext\nhere"),
            edit(2, 0, 2, 4, ""),
            edit(2, 1, 2, 3, "tab\t"),
            edit(2, 12, 2, 12, "\n"),
            edit(3, 0, 3, 4, "tail"),
        ],
    )
    def test_text_at_translated_range_is_unchanged(self, change):
        """Test edits outside the range preserve the anchored text."""
        document = MemoryDocument("a.py", self.TEXT)
        anchor = Range.of(2, 12, 2, 14)
        assert document.text_at(anchor) == "42"

        translated = translate_range(anchor, change)
        document.apply([change])

        assert translated is not None
        assert document.text_at(translated) == "42"
