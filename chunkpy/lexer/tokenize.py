"""Fill a parse context's chunk stream from source text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chunkpy.chunk import Chunk
from chunkpy.lexer.lexer import Lexer
from chunkpy.syntax import ChunkKind

if TYPE_CHECKING:
    from chunkpy.context import ParseContext

logger = logging.getLogger(__name__)


def tokenize_into(ctx: ParseContext, text: str) -> int:
    """Lex `text` and append every chunk to `ctx.stream`. Returns the chunk count."""
    lexer = Lexer(text, language=ctx.language, tab_size=ctx.options.input_tab_size)
    chunks = lexer.tokenize()
    mark_functions(chunks)

    for chunk in chunks:
        ctx.stream.append(chunk)

    ctx.newline_counts = lexer.newline_counts
    ctx.newline = lexer.newline_counts.preferred()
    for diagnostic in lexer.diagnostics:
        ctx.record(diagnostic)
    if chunks:
        ctx.line_number = chunks[-1].orig_line

    logger.debug(
        "%s: %d chunks, newline=%r",
        ctx.filename or "<input>",
        len(chunks),
        ctx.newline,
    )
    return len(chunks)


def mark_functions(chunks: list[Chunk]) -> None:
    """A word directly followed by `(` is a function name."""
    previous: Chunk | None = None
    for chunk in chunks:
        if chunk.is_comment_or_newline:
            continue
        if previous is not None and previous.kind == ChunkKind.WORD and chunk.kind == ChunkKind.PAREN_OPEN:
            previous.kind = ChunkKind.FUNCTION
        previous = chunk
