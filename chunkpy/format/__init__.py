"""Output emitters."""

from chunkpy.format.render import render_chunks

__all__ = [
    "render_chunks",
]
