"""Annotations bound to a document range and the text it held."""

import logging
from typing import Any
from collections.abc import Iterator, Sequence

from anchorage.config import TrackerConfig
from anchorage.text.positions import Range
from anchorage.host.protocols import View, ChangeEvent, DocumentRef, OverlaySink, DocumentSource
from anchorage.annotations.content import Content, AnchorState, decoration_options
from anchorage.annotations.validator import sweep, translate_through

LOGGER = logging.getLogger(__name__)


class Anchor:
    """One annotation tracked on a live document.

    The anchor remembers the text under its range when it is created. Edits
    before the range move it; edits touching it, or any edit after which the
    text under the range no longer matches, destroy it.
    """

    def __init__(
        self,
        document: DocumentRef,
        range: Range,
        content: Content,
        source: DocumentSource,
        sink: OverlaySink,
        config: TrackerConfig | None = None,
    ) -> None:
        self.document = document
        self.range = range
        self.source = source
        self.sink = sink
        self.config = config or TrackerConfig()
        self.text = source.text_at(document, range)
        self.state = AnchorState.LIVE
        self.content = content
        self.handle: Any = None

        self.set_content(content)

    @property
    def is_live(self) -> bool:
        return self.state == AnchorState.LIVE

    @property
    def decoration_range(self) -> Range:
        """Where the overlay is drawn.

        Errors cover the anchored range itself; results sit at a zero-width
        position far past the end of the line so they never overlap code.
        """
        if self.content.is_error:
            return self.range
        end = self.range.end.translate(0, self.config.line_end_column)
        return Range(end, end)

    def set_content(self, content: Content) -> None:
        """Replace the content and redraw with a fresh render resource."""
        if not self.is_live:
            return

        self.content = content
        self._dispose_handle()
        self.handle = self.sink.create_overlay(decoration_options(content, self.config))
        self.render()

    def render(self) -> None:
        """Apply the current render resource to every visible view of the document."""
        if not self.is_live or self.handle is None:
            return
        for view in self._views():
            self.sink.apply_overlay(
                view.view_id, self.handle, self.content.hover, self.decoration_range
            )

    def validate(self, event: ChangeEvent) -> bool:
        """Move the anchor through an edit batch; False means it was destroyed."""
        if not self.is_live:
            return False
        if event.document != self.document:
            return True

        translated = translate_through(self.range, event.edits)
        if translated is None:
            LOGGER.debug("Edit intersects %r, destroying", self)
            self.destroy()
            return False

        if self.source.text_at(self.document, translated) != self.text:
            LOGGER.debug("Text under %r changed, destroying", self)
            self.destroy()
            return False

        if translated != self.range:
            self.range = translated
            self.render()
        return True

    def destroy(self) -> None:
        """Release the render resource; safe to call more than once."""
        if not self.is_live:
            return
        self._dispose_handle()
        self.state = AnchorState.DESTROYED

    def _dispose_handle(self) -> None:
        if self.handle is not None:
            self.sink.dispose_overlay(self.handle)
            self.handle = None

    def _views(self) -> list[View]:
        return [v for v in self.source.visible_views() if v.document == self.document]

    def __repr__(self) -> str:
        state = self.state.name.lower()
        return f"Anchor({self.range!r}, {self.text!r}, {state})"


class AnchorCollection:
    """Insertion-ordered list of live anchors."""

    def __init__(
        self,
        source: DocumentSource,
        sink: OverlaySink,
        config: TrackerConfig | None = None,
    ) -> None:
        self.source = source
        self.sink = sink
        self.config = config or TrackerConfig()
        self._anchors: list[Anchor] = []

    @property
    def anchors(self) -> list[Anchor]:
        """The backing list, in insertion order."""
        return self._anchors

    def create(self, document: DocumentRef, range: Range, content: Content) -> Anchor:
        anchor = Anchor(document, range, content, self.source, self.sink, self.config)
        self._anchors.append(anchor)
        return anchor

    def discard(self, anchor: Anchor) -> bool:
        """Destroy ``anchor`` and drop it from the collection."""
        for index, existing in enumerate(self._anchors):
            if existing is anchor:
                anchor.destroy()
                del self._anchors[index]
                return True
        return False

    def anchors_for(self, document: DocumentRef) -> list[Anchor]:
        return [a for a in self._anchors if a.document == document]

    def clear(self) -> int:
        """Destroy every anchor; returns how many were removed."""
        count = len(self._anchors)
        for anchor in self._anchors:
            anchor.destroy()
        self._anchors.clear()
        return count

    def on_document_changed(self, event: ChangeEvent) -> list[Anchor]:
        return sweep(self, event)

    def on_visibility_changed(self, views: Sequence[View]) -> None:
        """Redraw anchors on documents that have a view in ``views``."""
        documents = [view.document for view in views]
        # A render may edit the document and shrink the list underneath us
        for index in range(len(self._anchors) - 1, -1, -1):
            if index >= len(self._anchors):
                continue
            anchor = self._anchors[index]
            if anchor.is_live and anchor.document in documents:
                anchor.render()

    def __iter__(self) -> Iterator[Anchor]:
        return iter(list(self._anchors))

    def __len__(self) -> int:
        return len(self._anchors)

    def __contains__(self, anchor: object) -> bool:
        return any(a is anchor for a in self._anchors)
