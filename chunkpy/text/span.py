from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class TextSpan:
    """
    Half-open span [start, end) of character offsets into the source text.

    Invariant:
    - 0 <= start <= end

    Synthesized chunks carry an empty span at their insertion offset.
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise ValueError("TextSpan offsets cannot be negative")
        if self.start > self.end:
            raise ValueError("TextSpan invariant violated: start > end")

    @staticmethod
    def empty(offset: int) -> "TextSpan":
        """Create an empty span at the given offset."""
        return TextSpan(offset, offset)

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def split_at(self, offset: int) -> tuple["TextSpan", "TextSpan"]:
        """Split into [start, start+offset) and [start+offset, end)."""
        if offset < 0 or offset > self.length:
            raise ValueError(f"Split offset {offset} outside span of length {self.length}")
        mid = self.start + offset
        return TextSpan(self.start, mid), TextSpan(mid, self.end)

    def __repr__(self) -> str:
        return f"TextSpan({self.start}, {self.end})"


EMPTY_SPAN: Final[TextSpan] = TextSpan(0, 0)


def slice_span(source: str, span: TextSpan) -> str:
    """Get the substring of the source text covered by the span."""
    return source[span.start : span.end]
