"""Text coordinates."""

from anchorage.text.positions import (
    Range,
    Position,
    count_newlines,
    last_line_length,
)

__all__ = [
    "Position",
    "Range",
    "count_newlines",
    "last_line_length",
]
