"""Anchored annotations and their change tracking."""

from anchorage.annotations.anchor import Anchor, AnchorCollection
from anchorage.annotations.content import (
    Content,
    AnchorState,
    IconPayload,
    TextPayload,
    DecorationKind,
    DecorationOptions,
    decoration_options,
)
from anchorage.annotations.registry import ResultRegistry
from anchorage.annotations.validator import ChangeValidator, translate_range, translate_through
from anchorage.annotations.diagnostics import StackFrame, DiagnosticOverlay

__all__ = [
    "Anchor",
    "AnchorCollection",
    "AnchorState",
    "ChangeValidator",
    "Content",
    "DecorationKind",
    "DecorationOptions",
    "DiagnosticOverlay",
    "IconPayload",
    "ResultRegistry",
    "StackFrame",
    "TextPayload",
    "decoration_options",
    "translate_range",
    "translate_through",
]
