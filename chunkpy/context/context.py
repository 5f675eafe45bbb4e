"""Per-file parse context."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

from chunkpy.align import AlignTable
from chunkpy.chunk import Chunk, ChunkStream
from chunkpy.cleanup.frames import FrameStack
from chunkpy.context.options import CleanupOptions
from chunkpy.diagnostics import Diagnostic, DiagnosticSpec, from_spec
from chunkpy.lexer.lexer import NewlineCounts
from chunkpy.syntax import ChunkKind, LanguageMask
from chunkpy.text import TextSpan

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ParseContext:
    """Everything one file's run owns.

    Create one per file and pass it explicitly; nothing in here is valid
    across files. Concurrent runs each need their own instance.
    """

    options: CleanupOptions = field(default_factory=CleanupOptions)
    filename: str | None = None
    output: TextIO | None = None

    stream: ChunkStream = field(default_factory=ChunkStream)
    frames: FrameStack = field(init=False)
    align: AlignTable = field(init=False)

    line_number: int = 0
    column: int = 0
    newline_counts: NewlineCounts = field(default_factory=NewlineCounts)
    newline: str = "\n"

    error_count: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)

    # bumped when a line is split or re-indented
    changes: int = 0

    # brace cleanup scratch state
    in_preproc: ChunkKind = ChunkKind.NONE
    pp_level: int = 0
    consumed: bool = False

    def __post_init__(self) -> None:
        self.frames = FrameStack(
            max_depth=self.options.max_paren_depth,
            max_frames=self.options.max_frames,
        )
        self.align = AlignTable(max_entries=self.options.max_align_entries)

    @property
    def language(self) -> LanguageMask:
        return self.options.language

    def reset(self) -> None:
        """Drop all per-file state, keeping options and output."""
        self.stream = ChunkStream()
        self.frames = FrameStack(
            max_depth=self.options.max_paren_depth,
            max_frames=self.options.max_frames,
        )
        self.align = AlignTable(max_entries=self.options.max_align_entries)
        self.line_number = 0
        self.column = 0
        self.newline_counts = NewlineCounts()
        self.newline = "\n"
        self.error_count = 0
        self.diagnostics = []
        self.changes = 0
        self.in_preproc = ChunkKind.NONE
        self.pp_level = 0
        self.consumed = False

    def report(self, spec: DiagnosticSpec, chunk: Chunk | None = None, *, detail: str | None = None) -> None:
        """Record a tolerated error and keep going."""
        span = chunk.span if chunk is not None else TextSpan.empty(0)
        line = chunk.orig_line if chunk is not None else 0
        self.record(from_spec(spec, span, line, detail=detail))

    def record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self.error_count += 1
        logger.warning("%s:%d: %s", self.filename or "<input>", diagnostic.line, diagnostic.message)

    def split_line_after(self, chunk: Chunk) -> Chunk:
        """Insert a newline after `chunk` and count it as a change."""
        newline = self.stream.synthesize_after(chunk, ChunkKind.NEWLINE, self.newline)
        newline.nl_count = 1
        newline.orig_line = chunk.orig_line
        self.changes += 1
        return newline

    def note_change(self) -> None:
        self.changes += 1
