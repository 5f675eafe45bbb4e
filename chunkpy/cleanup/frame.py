"""Paren stack entries and parse frames."""

from dataclasses import dataclass, field, replace
from enum import IntEnum

from chunkpy.chunk import Chunk, ChunkRef
from chunkpy.errors import FrameIndexError, ParseDepthError
from chunkpy.syntax import ChunkKind


class BraceStage(IntEnum):
    """Where a complex statement is in its keyword/paren/brace sequence."""

    NONE = 0
    PAREN1 = 1  # if/for/switch/while: expecting the condition
    OP_PAREN1 = 2  # optional paren: catch () {
    WOD_PAREN = 3  # while of do parens
    WOD_SEMI = 4  # semicolon after while of do
    BRACE_DO = 5  # do
    BRACE2 = 6  # if/else/for/switch/while body
    ELSE = 7  # expecting 'else' after 'if'
    ELSEIF = 8  # expecting 'if' after 'else'
    WHILE = 9  # expecting 'while' after 'do'
    VALUE = 10  # namespace: skipping the name until the brace


@dataclass(slots=True)
class ParenStackEntry:
    kind: ChunkKind = ChunkKind.NONE  # the type that opened the entry
    parent: ChunkKind = ChunkKind.NONE  # if, for, function, ...
    level: int = 0  # frame level right after the open
    open_line: int = 0
    brace_indent: int = 0  # indent of the brace itself
    indent: int = 0  # nominal indent of the contents
    indent_tmp: int = 0  # scratch for the indent pass
    indent_tab: int = 0  # tab-stop indent, never past `indent`
    ref_count: int = 0
    stage: BraceStage = BraceStage.NONE
    in_preproc: bool = False
    opener: ChunkRef | None = None


@dataclass(slots=True)
class ParseFrame:
    """Nesting state for one preprocessor branch.

    `entries[0]` is a permanent base entry, so `top` always exists and
    popping an empty frame is a no-op.
    """

    max_depth: int = 1024
    entries: list[ParenStackEntry] = field(default_factory=lambda: [ParenStackEntry()])

    level: int = 0  # parens/squares/braces
    brace_level: int = 0  # braces/vbraces only
    pp_level: int = 0  # #if depth this frame was saved at
    sparen_count: int = 0
    paren_count: int = 0
    in_ifdef: ChunkKind = ChunkKind.NONE  # PP_IF/PP_ELSE: branch this frame belongs to
    stmt_count: int = 0
    expr_count: int = 0
    maybe_decl: bool = False
    maybe_cast: bool = False

    @property
    def top(self) -> ParenStackEntry:
        return self.entries[-1]

    @property
    def depth(self) -> int:
        return len(self.entries) - 1

    def entry(self, index: int) -> ParenStackEntry:
        if index < 0 or index >= len(self.entries):
            raise FrameIndexError(f"Paren stack index {index} out of range 0..{len(self.entries) - 1}")
        return self.entries[index]

    def push(
        self,
        kind: ChunkKind,
        *,
        parent: ChunkKind = ChunkKind.NONE,
        stage: BraceStage = BraceStage.NONE,
        opener: Chunk | None = None,
    ) -> ParenStackEntry:
        if self.depth >= self.max_depth:
            line = opener.orig_line if opener is not None else 0
            raise ParseDepthError(self.depth + 1, self.max_depth, line)
        entry = ParenStackEntry(
            kind=kind,
            parent=parent,
            level=self.level,
            open_line=opener.orig_line if opener is not None else 0,
            stage=stage,
            in_preproc=opener.in_preproc if opener is not None else False,
            opener=opener.ref if opener is not None and opener.is_linked else None,
        )
        self.entries.append(entry)
        return entry

    def pop(self) -> ParenStackEntry | None:
        if self.depth == 0:
            return None
        return self.entries.pop()

    def has_below_top(self, kind: ChunkKind) -> bool:
        return any(entry.kind == kind for entry in self.entries[:-1])

    def copy(self) -> "ParseFrame":
        return replace(self, entries=[replace(entry) for entry in self.entries])
