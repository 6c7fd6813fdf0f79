"""Boundary types for the host editor that owns documents and views."""

from typing import Any, Protocol
from dataclasses import field, dataclass
from collections.abc import Hashable, Sequence

from anchorage.text.positions import Range

# Opaque identity of a document; compared by equality
DocumentRef = Hashable


@dataclass(frozen=True)
class TextEdit:
    """One replacement reported by the host.

    Within a batch, each edit is in the coordinates left by the edits before it.
    """

    range: Range
    text: str

    @property
    def is_insertion(self) -> bool:
        return self.range.is_empty


@dataclass(frozen=True)
class ChangeEvent:
    """A batch of edits applied to one document."""

    document: DocumentRef
    edits: tuple[TextEdit, ...] = ()


@dataclass(frozen=True)
class View:
    """A visible editor showing a document."""

    document: DocumentRef
    view_id: str
    selections: tuple[Range, ...] = field(default=(), compare=False)


class DocumentSource(Protocol):
    """Read access to the host's documents and visible views."""

    def text_at(self, document: DocumentRef, range: Range) -> str:
        """Text covered by ``range``, clamped to the document."""
        ...

    def current_text(self, document: DocumentRef) -> str:
        ...

    def visible_views(self) -> Sequence[View]:
        ...

    def document_path(self, document: DocumentRef) -> str:
        """File path used to match stack frames against documents."""
        ...


class OverlaySink(Protocol):
    """Decoration layer of the host editor."""

    def create_overlay(self, options: Any) -> Any:
        """Create a render resource from decoration options."""
        ...

    def apply_overlay(self, view_id: str, handle: Any, hover: str, range: Range) -> None:
        ...

    def dispose_overlay(self, handle: Any) -> None:
        ...
