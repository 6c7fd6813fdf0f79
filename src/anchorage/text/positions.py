"""Document positions and half-open ranges."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based (line, character) location in a document."""

    line: int
    character: int

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> "Position":
        """Return a position shifted by the given deltas."""
        return Position(self.line + line_delta, self.character + character_delta)

    def with_character(self, character: int) -> "Position":
        return Position(self.line, character)

    def __repr__(self) -> str:
        return f"{self.line}:{self.character}"


@dataclass(frozen=True)
class Range:
    """A half-open [start, end) span between two positions.

    Endpoints given in reverse order are swapped, so ``start <= end`` always
    holds.
    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def of(
        cls, start_line: int, start_char: int, end_line: int, end_char: int
    ) -> "Range":
        """Build a range from four integers."""
        return cls(Position(start_line, start_char), Position(end_line, end_char))

    @classmethod
    def empty(cls, line: int, character: int) -> "Range":
        position = Position(line, character)
        return cls(position, position)

    @classmethod
    def full_line(cls, line: int, end_character: int) -> "Range":
        """Range covering ``line`` from column 0 up to ``end_character``."""
        return cls(Position(line, 0), Position(line, end_character))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def contains(self, other: "Position | Range") -> bool:
        """Check whether a position or range lies inside this range."""
        if isinstance(other, Range):
            return self.contains(other.start) and self.contains(other.end)
        return self.start <= other <= self.end

    def intersection(self, other: "Range") -> "Range | None":
        """Overlap of two ranges.

        Ranges that merely touch intersect in an empty range; only disjoint
        ranges yield ``None``.
        """
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start > end:
            return None
        return Range(start, end)

    def intersects(self, other: "Range") -> bool:
        return self.intersection(other) is not None

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> "Range":
        return Range(
            self.start.translate(line_delta, character_delta),
            self.end.translate(line_delta, character_delta),
        )

    def __repr__(self) -> str:
        return f"Range({self.start!r}-{self.end!r})"


def count_newlines(text: str) -> int:
    """Number of line breaks in ``text``."""
    return text.count("\n")


def last_line_length(text: str) -> int:
    """Length of the text after the final line break."""
    return len(text) - text.rfind("\n") - 1
