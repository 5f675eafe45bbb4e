"""Source text spans."""

from chunkpy.text.span import EMPTY_SPAN, TextSpan, slice_span

__all__ = [
    "EMPTY_SPAN",
    "TextSpan",
    "slice_span",
]
