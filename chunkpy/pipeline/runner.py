"""Run tokenize + brace cleanup + emit for one file."""

from __future__ import annotations

import logging
from pathlib import Path

from chunkpy.cleanup import brace_cleanup
from chunkpy.context import CleanupOptions, ParseContext
from chunkpy.diagnostics import CORE_FATAL, from_spec
from chunkpy.errors import ChunkpyError
from chunkpy.format import render_chunks
from chunkpy.lexer import tokenize_into
from chunkpy.pipeline.result import CleanupRunResult
from chunkpy.text import TextSpan

logger = logging.getLogger(__name__)


def run_cleanup(
    text: str,
    options: CleanupOptions | None = None,
    *,
    filename: str | None = None,
) -> CleanupRunResult:
    """Clean up a single source text with a fresh context.

    Tolerated problems end up in the diagnostics and the error count.
    A fatal error aborts the run: the result is marked failed, carries a
    `CORE_FATAL` diagnostic, and has no output text.
    """
    ctx = ParseContext(options=options or CleanupOptions(), filename=filename)
    result = CleanupRunResult(source_text=text, context=ctx)
    try:
        tokenize_into(ctx, text)
        result.transitions = brace_cleanup(ctx)
        result.output_text = render_chunks(ctx.stream, text)
    except ChunkpyError as exc:
        logger.error("%s: aborted: %s", filename or "<input>", exc)
        line = getattr(exc, "line", 0)
        ctx.diagnostics.append(from_spec(CORE_FATAL, TextSpan.empty(0), line, detail=str(exc)))
        ctx.error_count += 1
        result.failed = True
        result.output_text = None
    return result


def run_cleanup_file(path: str | Path, options: CleanupOptions | None = None) -> CleanupRunResult:
    """Read `path` (line endings untouched) and run cleanup on it."""
    path = Path(path)
    with path.open(encoding="utf-8", newline="") as handle:
        text = handle.read()
    resolved = options or CleanupOptions.for_filename(path)
    return run_cleanup(text, resolved, filename=str(path))
