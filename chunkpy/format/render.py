"""Emit text from a chunk stream."""

from chunkpy.chunk import ChunkStream


def render_chunks(stream: ChunkStream, source: str) -> str:
    """Reproduce the source from the chunk stream.

    Whitespace between chunks is copied from `source`; chunk text is taken
    from the chunk so edited or synthesized chunks show up. Virtual braces
    have no text and are skipped.
    """
    parts: list[str] = []
    cursor = 0
    for chunk in stream:
        if chunk.kind.is_virtual:
            continue
        if chunk.span.is_empty():
            parts.append(chunk.text)
            continue
        if chunk.span.start > cursor:
            parts.append(source[cursor : chunk.span.start])
        parts.append(chunk.text)
        cursor = max(cursor, chunk.span.end)
    parts.append(source[cursor:])
    return "".join(parts)
