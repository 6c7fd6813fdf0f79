"""Anchorage - inline result and error annotations that follow document edits."""

import logging
from collections.abc import Iterable, Sequence

from anchorage.text import Range, Position
from anchorage.config import TrackerConfig
from anchorage.host.bridge import Subscription
from anchorage.host import View, TextEdit, ChangeEvent, MemoryEditor, OverlaySink, DocumentSource
from anchorage.annotations import (
    Anchor,
    Content,
    AnchorState,
    StackFrame,
    IconPayload,
    TextPayload,
    ResultRegistry,
    ChangeValidator,
    DiagnosticOverlay,
)

__version__ = "0.1.0"
__all__ = [
    "Tracker",
    "TrackerConfig",
    "Anchor",
    "AnchorState",
    "Content",
    "IconPayload",
    "TextPayload",
    "StackFrame",
    "Position",
    "Range",
    "TextEdit",
    "ChangeEvent",
    "View",
    "DocumentSource",
    "OverlaySink",
    "MemoryEditor",
]

LOGGER = logging.getLogger(__name__)


class Tracker:
    """Main entry point: owns the result registry and the diagnostic overlay.

    A tracker is bound to one host session. Call ``open()`` before use (or use
    it as a context manager) and ``close()`` to drop every annotation.
    """

    def __init__(
        self,
        source: DocumentSource,
        sink: OverlaySink,
        config: TrackerConfig | None = None,
    ) -> None:
        self.source = source
        self.sink = sink
        self.config = config or TrackerConfig()
        self._results: ResultRegistry | None = None
        self._diagnostics: DiagnosticOverlay | None = None
        self._validator: ChangeValidator | None = None
        self._subscriptions: list[Subscription] = []

    @classmethod
    def for_editor(
        cls, editor: MemoryEditor, config: TrackerConfig | None = None
    ) -> "Tracker":
        """Open a tracker on a host that is both document source and overlay sink."""
        return cls(editor, editor, config).open()

    @property
    def is_open(self) -> bool:
        return self._validator is not None

    def open(self) -> "Tracker":
        """Start a session."""
        if self.is_open:
            return self
        self._results = ResultRegistry(self.source, self.sink, self.config)
        self._diagnostics = DiagnosticOverlay(self.source, self.sink, self.config)
        self._validator = ChangeValidator(self._results, self._diagnostics)
        LOGGER.debug("Tracker opened")
        return self

    def close(self) -> None:
        """End the session, unbinding from the host and destroying every annotation."""
        while self._subscriptions:
            self._subscriptions.pop().dispose()
        if not self.is_open:
            return
        self.results.clear()
        self.diagnostics.clear()
        self._results = self._diagnostics = self._validator = None
        LOGGER.debug("Tracker closed")

    def __enter__(self) -> "Tracker":
        return self.open()

    def __exit__(self, *args) -> None:
        self.close()

    @property
    def results(self) -> ResultRegistry:
        """Inline result annotations."""
        if self._results is None:
            raise RuntimeError("Tracker is not open")
        return self._results

    @property
    def diagnostics(self) -> DiagnosticOverlay:
        """Stack-trace annotations."""
        if self._diagnostics is None:
            raise RuntimeError("Tracker is not open")
        return self._diagnostics

    @property
    def validator(self) -> ChangeValidator:
        if self._validator is None:
            raise RuntimeError("Tracker is not open")
        return self._validator

    def add_result(self, document, range: Range, content: Content) -> Anchor:
        """Show ``content`` for ``range``, replacing overlapping results."""
        return self.results.insert(document, range, content)

    def set_stack_trace(self, error: str, frames: Iterable[StackFrame]) -> int:
        """Highlight the frames of ``error``; returns how many were drawn."""
        return self.diagnostics.set_stack_trace(error, frames)

    def remove_result(self, anchor: Anchor) -> bool:
        return self.results.remove(anchor)

    def remove_all(self, document=None) -> int:
        """Remove all results, or only those of one document."""
        return self.results.remove_all(document)

    def remove_at_selections(self, document, selections: Iterable[Range]) -> int:
        return self.results.remove_at_selections(document, selections)

    def own(self, subscription: Subscription) -> Subscription:
        """Dispose ``subscription`` when the tracker closes."""
        self._subscriptions = [s for s in self._subscriptions if s.active]
        self._subscriptions.append(subscription)
        return subscription

    def on_document_changed(self, event: ChangeEvent) -> list[Anchor]:
        """Validate every anchor against a change; returns the dropped anchors.

        Host events reaching a closed tracker are ignored.
        """
        if not self.is_open:
            return []
        return self.validator.apply(event)

    def on_visibility_changed(self, views: Sequence[View]) -> None:
        """Redraw anchors on the documents shown in ``views``."""
        if not self.is_open:
            return
        self.results.on_visibility_changed(views)
        self.diagnostics.on_visibility_changed(views)


def main() -> None:
    """Entry point for CLI."""
    from anchorage.cli import main as cli_main

    cli_main()
