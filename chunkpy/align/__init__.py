"""Alignment table."""

from chunkpy.align.table import AlignEntry, AlignTable

__all__ = [
    "AlignEntry",
    "AlignTable",
]
