"""Annotation payloads and the decoration options derived from them."""

from enum import IntEnum, auto
from dataclasses import dataclass

from anchorage.config import TrackerConfig


class AnchorState(IntEnum):
    """Lifecycle state of an anchor."""

    LIVE = auto()
    DESTROYED = auto()  # Terminal


class DecorationKind(IntEnum):
    """How an anchor is drawn."""

    RESULT = auto()  # Trailing inline marker past the end of the line
    ERROR = auto()  # Whole-line highlight over the anchored range


@dataclass(frozen=True)
class IconPayload:
    """Icon rendered in front of the marker."""

    path: str

    def describe(self) -> str:
        return f"icon:{self.path}"


@dataclass(frozen=True)
class TextPayload:
    """Literal text rendered as the marker."""

    text: str

    def describe(self) -> str:
        return self.text


Payload = IconPayload | TextPayload


@dataclass(frozen=True)
class Content:
    """Everything an anchor renders."""

    payload: Payload
    hover: str = ""
    is_error: bool = False

    @classmethod
    def text(cls, text: str, hover: str = "") -> "Content":
        return cls(TextPayload(text), hover)

    @classmethod
    def icon(cls, path: str, hover: str = "") -> "Content":
        return cls(IconPayload(path), hover)

    @classmethod
    def error(cls, hover: str) -> "Content":
        """Empty, error-flagged content used for stack frames."""
        return cls(TextPayload(""), hover, is_error=True)

    @property
    def kind(self) -> DecorationKind:
        return DecorationKind.ERROR if self.is_error else DecorationKind.RESULT


@dataclass(frozen=True)
class InlineContent:
    """Content attached before or after a decorated range."""

    text: str | None = None
    icon_path: str | None = None
    background: str | None = None
    foreground: str | None = None
    margin: str | None = None


@dataclass(frozen=True)
class DecorationOptions:
    """Render options handed to the overlay sink."""

    kind: DecorationKind
    before: InlineContent | None = None
    background: str | None = None
    border: str | None = None
    whole_line: bool = False
    # Growing at the end only, never at the start
    range_behavior: str = "open-closed"


def decoration_options(content: Content, config: TrackerConfig) -> DecorationOptions:
    """Build the decoration for ``content``."""
    if content.is_error:
        return DecorationOptions(
            kind=DecorationKind.ERROR,
            background=config.error_background,
            border=config.error_border,
            whole_line=True,
        )

    payload = content.payload
    before = InlineContent(
        text=payload.text if isinstance(payload, TextPayload) else None,
        icon_path=payload.path if isinstance(payload, IconPayload) else None,
        background=config.result_background,
        foreground=config.result_foreground,
        margin=config.result_margin,
    )
    return DecorationOptions(kind=DecorationKind.RESULT, before=before)
