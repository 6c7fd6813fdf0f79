"""Host editor boundary."""

from anchorage.host.memory import MemoryEditor, OverlayHandle, MemoryDocument
from anchorage.host.protocols import View, TextEdit, ChangeEvent, OverlaySink, DocumentSource

__all__ = [
    "ChangeEvent",
    "DocumentSource",
    "MemoryDocument",
    "MemoryEditor",
    "OverlayHandle",
    "OverlaySink",
    "TextEdit",
    "View",
]
