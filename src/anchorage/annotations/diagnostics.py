"""Error highlights for the frames of a stack trace."""

import logging
from dataclasses import dataclass
from collections.abc import Iterable

from anchorage.config import TrackerConfig
from anchorage.text.positions import Range
from anchorage.host.protocols import DocumentRef, OverlaySink, DocumentSource
from anchorage.annotations.anchor import AnchorCollection
from anchorage.annotations.content import Content

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackFrame:
    """One frame of a stack trace."""

    path: str
    line: int  # 1-based, as reported by the evaluator

    def __repr__(self) -> str:
        return f"StackFrame({self.path}:{self.line})"


class DiagnosticOverlay(AnchorCollection):
    """Whole-line error anchors sharing one error message.

    The set is rebuilt from scratch on every new stack trace.
    """

    def __init__(
        self,
        source: DocumentSource,
        sink: OverlaySink,
        config: TrackerConfig | None = None,
    ) -> None:
        super().__init__(source, sink, config)
        self.error: str | None = None

    def set_stack_trace(self, error: str, frames: Iterable[StackFrame]) -> int:
        """Replace the current diagnostics with the frames of a new error."""
        self.clear()
        self.error = error
        frames = list(frames)

        for view in self.source.visible_views():
            document = view.document
            path = self.source.document_path(document)
            for frame in frames:
                if frame.path != path or frame.line < 1:
                    continue
                line_range = Range.full_line(frame.line - 1, self.config.line_end_column)
                # Same document shown in two views gets one anchor
                if any(a.range == line_range for a in self.anchors_for(document)):
                    continue
                if frame.line - 1 > self._last_line(document):
                    LOGGER.debug("Frame %r is past the end of %s", frame, path)
                    continue
                self.create(document, line_range, Content.error(error))

        LOGGER.debug("Stack trace drew %d of %d frame(s)", len(self), len(frames))
        return len(self)

    def clear(self) -> int:
        self.error = None
        return super().clear()

    def _last_line(self, document: DocumentRef) -> int:
        return self.source.current_text(document).count("\n")
