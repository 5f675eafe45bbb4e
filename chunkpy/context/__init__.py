"""Per-file context and resolved options."""

from chunkpy.context.context import ParseContext
from chunkpy.context.options import CleanupOptions

__all__ = [
    "CleanupOptions",
    "ParseContext",
]
