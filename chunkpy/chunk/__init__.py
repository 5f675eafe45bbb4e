"""Chunks, the chunk stream and the chunk stack."""

from chunkpy.chunk.chunk import Chunk, ChunkRef
from chunkpy.chunk.stack import ChunkStack, ChunkStackEntry
from chunkpy.chunk.stream import ChunkStream, Nav, dump_chunks

__all__ = [
    "Chunk",
    "ChunkRef",
    "ChunkStack",
    "ChunkStackEntry",
    "ChunkStream",
    "Nav",
    "dump_chunks",
]
