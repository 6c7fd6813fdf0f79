"""In-memory host editor: documents, views, overlays and change events."""

import itertools
from typing import Any
from dataclasses import field, dataclass
from collections.abc import Callable, Iterable, Sequence

from anchorage.text.positions import Range, Position
from anchorage.host.protocols import View, TextEdit, ChangeEvent


class MemoryDocument:
    """Editable text stored as a list of lines."""

    def __init__(self, path: str, text: str = "") -> None:
        self.path = path
        self.version = 0
        self._lines = text.split("\n")

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        return self._lines[index]

    def validate_position(self, position: Position) -> Position:
        """Clamp a position to the document bounds."""
        if position.line < 0:
            return Position(0, 0)
        if position.line >= len(self._lines):
            last = len(self._lines) - 1
            return Position(last, len(self._lines[last]))
        length = len(self._lines[position.line])
        return Position(position.line, min(max(position.character, 0), length))

    def validate_range(self, range: Range) -> Range:
        return Range(
            self.validate_position(range.start), self.validate_position(range.end)
        )

    def offset_at(self, position: Position) -> int:
        position = self.validate_position(position)
        offset = sum(len(line) + 1 for line in self._lines[: position.line])
        return offset + position.character

    def position_at(self, offset: int) -> Position:
        offset = max(offset, 0)
        for index, line in enumerate(self._lines):
            if offset <= len(line):
                return Position(index, offset)
            offset -= len(line) + 1
        last = len(self._lines) - 1
        return Position(last, len(self._lines[last]))

    def text_at(self, range: Range) -> str:
        start = self.offset_at(range.start)
        end = self.offset_at(range.end)
        return self.text[start:end]

    def apply(self, edits: Iterable[TextEdit]) -> None:
        """Apply one batch of edits in order.

        Each edit is expressed in the coordinates left by the edits before it.
        """
        text = self.text
        for edit in edits:
            start = self.offset_at(edit.range.start)
            end = self.offset_at(edit.range.end)
            text = text[:start] + edit.text + text[end:]
            self._lines = text.split("\n")
        self.version += 1

    def __repr__(self) -> str:
        return f"MemoryDocument({self.path!r}, {len(self._lines)} lines)"


@dataclass
class OverlayHandle:
    """Render resource created by the in-memory overlay sink."""

    handle_id: int
    options: Any
    applied: dict[str, tuple[str, Range]] = field(default_factory=dict)
    disposed: bool = False

    def __hash__(self) -> int:
        return hash(self.handle_id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OverlayHandle) and other.handle_id == self.handle_id


class Disposable:
    """Callback holder returned by event subscriptions."""

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose: Callable[[], None] | None = on_dispose

    def dispose(self) -> None:
        if self._on_dispose is not None:
            self._on_dispose()
            self._on_dispose = None


class _Event:
    """Minimal synchronous event emitter."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[Any], None]] = []

    def subscribe(self, listener: Callable[[Any], None]) -> Disposable:
        self._listeners.append(listener)
        return Disposable(lambda: self._remove(listener))

    def _remove(self, listener: Callable[[Any], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def fire(self, payload: Any) -> None:
        for listener in list(self._listeners):
            listener(payload)


class MemoryEditor:
    """Host editor implementing both DocumentSource and OverlaySink."""

    def __init__(self) -> None:
        self.documents: dict[str, MemoryDocument] = {}
        self._views: list[View] = []
        self._view_ids = itertools.count(1)
        self._handle_ids = itertools.count(1)
        self.overlays: list[OverlayHandle] = []
        self.disposed_count = 0
        self._document_changed = _Event()
        self._views_changed = _Event()

    # Documents

    def open_document(self, path: str, text: str = "") -> MemoryDocument:
        """Create (or replace) the document stored under ``path``."""
        document = MemoryDocument(path, text)
        self.documents[path] = document
        return document

    def document(self, path: str) -> MemoryDocument:
        if path not in self.documents:
            raise KeyError(f"No document named {path!r}")
        return self.documents[path]

    def edit(
        self, document: MemoryDocument, edits: Sequence[TextEdit]
    ) -> ChangeEvent:
        """Apply an edit batch and publish the matching change event."""
        event = ChangeEvent(document, tuple(edits))
        document.apply(event.edits)
        self._document_changed.fire(event)
        return event

    def replace(self, document: MemoryDocument, range: Range, text: str) -> ChangeEvent:
        return self.edit(document, [TextEdit(range, text)])

    def insert(self, document: MemoryDocument, position: Position, text: str) -> ChangeEvent:
        return self.edit(document, [TextEdit(Range(position, position), text)])

    # Views

    def show(self, document: MemoryDocument, view_id: str | None = None) -> View:
        """Open a view on ``document`` and publish the new visible set."""
        view = View(document, view_id or f"view-{next(self._view_ids)}")
        self._views = [v for v in self._views if v.view_id != view.view_id]
        self._views.append(view)
        self._views_changed.fire(self.visible_views())
        return view

    def hide(self, view: View | str) -> None:
        view_id = view if isinstance(view, str) else view.view_id
        self._views = [v for v in self._views if v.view_id != view_id]
        self._views_changed.fire(self.visible_views())

    def set_selections(self, view: View, selections: Sequence[Range]) -> View:
        updated = View(view.document, view.view_id, tuple(selections))
        self._views = [updated if v.view_id == view.view_id else v for v in self._views]
        return updated

    @property
    def active_view(self) -> View | None:
        return self._views[-1] if self._views else None

    # DocumentSource

    def text_at(self, document: MemoryDocument, range: Range) -> str:
        return document.text_at(range)

    def current_text(self, document: MemoryDocument) -> str:
        return document.text

    def visible_views(self) -> list[View]:
        return list(self._views)

    def document_path(self, document: MemoryDocument) -> str:
        return document.path

    # OverlaySink

    def create_overlay(self, options: Any) -> OverlayHandle:
        handle = OverlayHandle(next(self._handle_ids), options)
        self.overlays.append(handle)
        return handle

    def apply_overlay(
        self, view_id: str, handle: OverlayHandle, hover: str, range: Range
    ) -> None:
        handle.applied[view_id] = (hover, range)

    def dispose_overlay(self, handle: OverlayHandle) -> None:
        handle.disposed = True
        self.disposed_count += 1

    def live_overlays(self) -> list[OverlayHandle]:
        """Overlays created and not yet disposed."""
        return [h for h in self.overlays if not h.disposed]

    # Events

    def on_did_change_text_document(
        self, listener: Callable[[ChangeEvent], None]
    ) -> Disposable:
        return self._document_changed.subscribe(listener)

    def on_did_change_visible_views(
        self, listener: Callable[[list[View]], None]
    ) -> Disposable:
        return self._views_changed.subscribe(listener)
