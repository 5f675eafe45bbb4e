"""The chunk: one token plus its formatting metadata."""

from dataclasses import dataclass, field

from chunkpy.syntax import ChunkFlags, ChunkKind
from chunkpy.text import EMPTY_SPAN, TextSpan


@dataclass(frozen=True, slots=True)
class ChunkRef:
    """Non-owning handle to a chunk in a ChunkStream.

    A ref outlives its chunk safely: once the chunk is removed the slot's
    generation moves on and `ChunkStream.resolve` returns None.
    """

    index: int
    generation: int


@dataclass(slots=True, eq=False)
class Chunk:
    """A single token in the chunk stream.

    `orig_*` fields come from the lexer and never change. `column` and
    `column_indent` are owned by the formatting passes. `level`,
    `brace_level` and `pp_level` are written by brace cleanup.
    """

    kind: ChunkKind
    text: str = ""
    span: TextSpan = EMPTY_SPAN
    parent_kind: ChunkKind = ChunkKind.NONE
    orig_line: int = 0
    orig_col: int = 0
    orig_col_end: int = 0
    column: int = 0
    column_indent: int = 0
    nl_count: int = 0
    level: int = 0
    brace_level: int = 0
    pp_level: int = 0
    after_tab: bool = False
    flags: ChunkFlags = ChunkFlags.NONE

    # Arena bookkeeping, written only by ChunkStream.
    _index: int = field(default=-1, repr=False)
    _generation: int = field(default=0, repr=False)
    _next: int = field(default=-1, repr=False)
    _prev: int = field(default=-1, repr=False)

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def is_linked(self) -> bool:
        return self._index > 0

    @property
    def ref(self) -> ChunkRef:
        if self._index <= 0:
            raise ValueError(f"{self.kind.name} chunk is not linked into a stream")
        return ChunkRef(self._index, self._generation)

    @property
    def is_newline(self) -> bool:
        return self.kind.is_newline

    @property
    def is_comment(self) -> bool:
        return self.kind.is_comment

    @property
    def is_comment_or_newline(self) -> bool:
        return self.kind.is_newline or self.kind.is_comment

    @property
    def is_semicolon(self) -> bool:
        return self.kind == ChunkKind.SEMICOLON

    @property
    def in_preproc(self) -> bool:
        return bool(self.flags & ChunkFlags.IN_PREPROC)

    def has_flags(self, flags: ChunkFlags) -> bool:
        return self.flags & flags == flags

    def set_flags(self, flags: ChunkFlags) -> None:
        self.flags |= flags

    def clear_flags(self, flags: ChunkFlags) -> None:
        self.flags &= ~flags

    def is_str(self, text: str) -> bool:
        return self.text == text

    def describe(self) -> str:
        text = self.text.replace("\n", "\\n").replace("\r", "\\r")
        return f"{self.kind.name}({text!r}) line={self.orig_line} col={self.orig_col}"
