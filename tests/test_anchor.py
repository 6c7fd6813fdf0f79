"""Tests for individual anchors."""

import pytest

from anchorage.config import TrackerConfig
from anchorage.text.positions import Range, Position
from anchorage.host.memory import MemoryEditor
from anchorage.host.protocols import TextEdit, ChangeEvent
from anchorage.annotations.anchor import Anchor
from anchorage.annotations.content import Content, AnchorState, DecorationKind

SOURCE = "x = 1\ny = 2\nz = x + y\nprint(z)\n"


@pytest.fixture
def editor():
    return MemoryEditor()


@pytest.fixture
def document(editor):
    return editor.open_document("main.jl", SOURCE)


@pytest.fixture
def view(editor, document):
    return editor.show(document)


def make_anchor(editor, document, range, content=None):
    return Anchor(document, range, content or Content.text("3"), editor, editor)


class TestAnchorCreation:
    """Tests for creating and rendering anchors."""

    def test_snapshot_text(self, editor, document, view):
        """Test the anchor remembers the text under its range."""
        anchor = make_anchor(editor, document, Range.of(2, 4, 2, 9))

        assert anchor.text == "x + y"
        assert anchor.state == AnchorState.LIVE

    def test_renders_on_visible_view(self, editor, document, view):
        """Test creation draws the overlay on visible views."""
        anchor = make_anchor(editor, document, Range.of(2, 4, 2, 9))

        assert anchor.handle.applied[view.view_id][1] == anchor.decoration_range

    def test_no_views_is_not_an_error(self, editor, document):
        """Test creating an anchor with nothing visible just skips drawing."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))

        assert anchor.is_live
        assert anchor.handle.applied == {}

    def test_result_renders_past_line_end(self, editor, document, view):
        """Test result markers are pinned far past the end of the line."""
        anchor = make_anchor(editor, document, Range.of(2, 4, 2, 9))

        expected = Position(2, 9 + TrackerConfig().line_end_column)
        assert anchor.decoration_range == Range(expected, expected)
        assert anchor.handle.options.kind == DecorationKind.RESULT

    def test_error_renders_over_range(self, editor, document, view):
        """Test error markers cover the anchored range itself."""
        anchor = make_anchor(
            editor, document, Range.of(1, 0, 1, 5), Content.error("boom")
        )

        assert anchor.decoration_range == Range.of(1, 0, 1, 5)
        assert anchor.handle.options.whole_line
        assert anchor.handle.applied[view.view_id][0] == "boom"


class TestAnchorContent:
    """Tests for content updates."""

    def test_set_content_replaces_handle(self, editor, document, view):
        """Test new content disposes the old resource first."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))
        old = anchor.handle

        anchor.set_content(Content.icon("/icons/busy.svg", "running"))

        assert old.disposed
        assert anchor.handle is not old
        assert anchor.handle.options.before.icon_path == "/icons/busy.svg"
        assert anchor.handle.applied[view.view_id][0] == "running"

    def test_set_content_after_destroy_is_noop(self, editor, document, view):
        """Test a destroyed anchor ignores content updates."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))
        anchor.destroy()
        created = len(editor.overlays)

        anchor.set_content(Content.text("4"))

        assert len(editor.overlays) == created
        assert anchor.handle is None

    def test_render_reuses_handle(self, editor, document):
        """Test rendering again does not create a new resource."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))
        handle = anchor.handle
        view = editor.show(document)

        anchor.render()

        assert anchor.handle is handle
        assert view.view_id in handle.applied


class TestAnchorDestroy:
    """Tests for destroying anchors."""

    def test_destroy_is_idempotent(self, editor, document, view):
        """Test destroying twice disposes the resource once."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))

        anchor.destroy()
        anchor.destroy()

        assert anchor.state == AnchorState.DESTROYED
        assert editor.disposed_count == 1


class TestAnchorValidate:
    """Tests for validating anchors against edits."""

    def test_scenario_lines_inserted_above(self, editor):
        """Test an anchor on line 5 follows two inserted lines."""
        document = editor.open_document("lines.jl", "a\nb\nc\nd\ne\nv = 42\n")
        editor.show(document)
        anchor = make_anchor(editor, document, Range.of(5, 4, 5, 6))
        assert anchor.text == "42"

        event = editor.insert(document, Position(1, 0), "\n\n")

        assert anchor.validate(event)
        assert anchor.range == Range.of(7, 4, 7, 6)
        assert editor.text_at(document, anchor.range) == "42"

    def test_scenario_intersecting_edit(self, editor):
        """Test replacing text over the anchor destroys it."""
        document = editor.open_document("lines.jl", "a\nb\nc\nd\ne\nv = 42\n")
        anchor = make_anchor(editor, document, Range.of(5, 2, 5, 4))

        event = editor.replace(document, Range.of(5, 0, 5, 3), "x")

        assert not anchor.validate(event)
        assert anchor.state == AnchorState.DESTROYED

    def test_translation_redraws(self, editor, document, view):
        """Test a moved anchor is drawn at its new place."""
        anchor = make_anchor(editor, document, Range.of(2, 4, 2, 9))

        event = editor.insert(document, Position(0, 0), "\n")

        assert anchor.validate(event)
        assert anchor.handle.applied[view.view_id][1] == anchor.decoration_range
        assert anchor.decoration_range.start.line == 3

    def test_other_document_is_ignored(self, editor, document):
        """Test edits to a different document leave the anchor alone."""
        other = editor.open_document("other.jl", "q")
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))

        event = editor.replace(other, Range.of(0, 0, 0, 1), "w")

        assert anchor.validate(event)
        assert anchor.range == Range.of(0, 0, 0, 5)

    def test_snapshot_mismatch_invalidates(self, editor, document):
        """Test the final text comparison catches unexpected changes."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))
        # Change the text without reporting the edit that did it
        document.apply([TextEdit(Range.of(0, 4, 0, 5), "9")])

        assert not anchor.validate(ChangeEvent(document, ()))
        assert not anchor.is_live

    def test_destroyed_anchor_is_invalid(self, editor, document):
        """Test a destroyed anchor never validates."""
        anchor = make_anchor(editor, document, Range.of(0, 0, 0, 5))
        anchor.destroy()

        assert not anchor.validate(ChangeEvent(document, ()))

    def test_boundary_newline_keeps_anchor(self, editor, document, view):
        """Test pressing enter right after the anchored text keeps it."""
        anchor = make_anchor(editor, document, Range.of(2, 4, 2, 9))

        event = editor.insert(document, Position(2, 9), "\n")

        assert anchor.validate(event)
        assert anchor.range == Range.of(2, 4, 2, 9)
