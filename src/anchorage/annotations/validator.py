"""Range translation through edit batches and the invalidation sweep.

Edits arrive as rectangular replacements ``(range, text)`` in the order the
host reports them. An anchor's range is folded through them one at a time:

* an edit that intersects the range invalidates it, except for inserting the
  tolerated text (a single newline) exactly at one of its boundaries;
* an edit that ends at or before the range start shifts it by the number of
  lines the edit added or removed, and moves the columns of any endpoint that
  sits on the edit's last line;
* an edit after the range leaves it alone.

Each step works on the range produced by the previous one, so the order of
edits matters.
"""

import logging
from typing import TYPE_CHECKING
from collections.abc import Iterable, Sequence

from anchorage.text.positions import Range, Position, count_newlines, last_line_length
from anchorage.host.protocols import TextEdit, ChangeEvent

if TYPE_CHECKING:
    from anchorage.annotations.anchor import Anchor, AnchorCollection

LOGGER = logging.getLogger(__name__)

DEFAULT_TOLERATED_INSERT = "\n"


def is_tolerated(intersection: Range, edit: TextEdit, tolerated: str) -> bool:
    """Check for a boundary insertion that must not invalidate the anchor."""
    return intersection.is_empty and edit.text == tolerated


def _shift(position: Position, edit: TextEdit, line_delta: int, end_column: int) -> Position:
    if position.line == edit.range.end.line:
        return Position(
            position.line + line_delta,
            end_column + position.character - edit.range.end.character,
        )
    return position.translate(line_delta, 0)


def translate_range(
    range: Range, edit: TextEdit, tolerated: str = DEFAULT_TOLERATED_INSERT
) -> Range | None:
    """Map ``range`` through one edit, or return None if the edit breaks it."""
    intersection = edit.range.intersection(range)
    if intersection is not None and not is_tolerated(intersection, edit, tolerated):
        return None

    if edit.range.end > range.start:
        return range

    newlines = count_newlines(edit.text)
    line_delta = newlines - (edit.range.end.line - edit.range.start.line)

    # Column at which the replacement text ends
    end_column = last_line_length(edit.text)
    if newlines == 0:
        end_column += edit.range.start.character

    return Range(
        _shift(range.start, edit, line_delta, end_column),
        _shift(range.end, edit, line_delta, end_column),
    )


def translate_through(
    range: Range, edits: Iterable[TextEdit], tolerated: str = DEFAULT_TOLERATED_INSERT
) -> Range | None:
    """Fold ``range`` through a batch of edits in order."""
    current: Range | None = range
    for edit in edits:
        current = translate_range(current, edit, tolerated)
        if current is None:
            return None
    return current


class ChangeValidator:
    """Runs every document change through a set of anchor collections."""

    def __init__(self, *collections: "AnchorCollection") -> None:
        self.collections: list["AnchorCollection"] = list(collections)

    def add(self, collection: "AnchorCollection") -> None:
        self.collections.append(collection)

    def apply(self, event: ChangeEvent) -> list["Anchor"]:
        """Validate all anchors against ``event`` and return the dropped ones."""
        dropped: list["Anchor"] = []
        for collection in self.collections:
            dropped.extend(sweep(collection, event))
        return dropped


def sweep(collection: "AnchorCollection", event: ChangeEvent) -> list["Anchor"]:
    """Validate a collection in reverse insertion order, dropping broken anchors."""
    anchors: Sequence["Anchor"] = collection.anchors
    dropped: list["Anchor"] = []
    index = len(anchors) - 1
    while index >= 0:
        # A render callback may have shrunk the collection under us
        if index < len(anchors):
            anchor = anchors[index]
            if not anchor.validate(event):
                collection.discard(anchor)
                dropped.append(anchor)
        index -= 1

    if dropped:
        LOGGER.debug(
            "Dropped %d anchor(s) from %s after edit", len(dropped), type(collection).__name__
        )
    return dropped
