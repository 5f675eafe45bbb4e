"""Brace cleanup.

Walks the chunk stream once, assigns `level`/`brace_level`/`pp_level`,
works out which construct every brace and paren belongs to, retypes
parens (SPAREN/FPAREN), `else if` and `while` of `do`, and wraps braceless
bodies in virtual braces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from chunkpy.chunk import Chunk, ChunkRef, Nav
from chunkpy.cleanup.frame import BraceStage, ParenStackEntry, ParseFrame
from chunkpy.cleanup.stage import StageAction, opening_stage, step_on_chunk, step_on_close
from chunkpy.diagnostics import (
    CLEANUP_EXPECTED_WOD_SEMI,
    CLEANUP_UNBALANCED_PREPROC,
    CLEANUP_UNCLOSED_AT_EOF,
    CLEANUP_UNEXPECTED_CLOSE,
)
from chunkpy.syntax import ChunkFlags, ChunkKind, copy_relevant_flags

if TYPE_CHECKING:
    from chunkpy.context import ParseContext

logger = logging.getLogger(__name__)

_OPENS: Final[frozenset[ChunkKind]] = frozenset(
    {
        ChunkKind.BRACE_OPEN,
        ChunkKind.PAREN_OPEN,
        ChunkKind.FPAREN_OPEN,
        ChunkKind.SPAREN_OPEN,
        ChunkKind.ANGLE_OPEN,
        ChunkKind.SQUARE_OPEN,
    }
)

_CLOSES: Final[frozenset[ChunkKind]] = frozenset(
    {
        ChunkKind.PAREN_CLOSE,
        ChunkKind.BRACE_CLOSE,
        ChunkKind.VBRACE_CLOSE,
        ChunkKind.ANGLE_CLOSE,
        ChunkKind.SQUARE_CLOSE,
    }
)

_EXPR_STARTERS: Final[frozenset[ChunkKind]] = frozenset(
    {
        ChunkKind.ARITH,
        ChunkKind.ASSIGN,
        ChunkKind.CASE,
        ChunkKind.COMPARE,
        ChunkKind.BOOL,
        ChunkKind.MINUS,
        ChunkKind.PLUS,
        ChunkKind.ANGLE_OPEN,
        ChunkKind.ANGLE_CLOSE,
        ChunkKind.RETURN,
        ChunkKind.GOTO,
        ChunkKind.CONTINUE,
        ChunkKind.PAREN_OPEN,
        ChunkKind.FPAREN_OPEN,
        ChunkKind.SPAREN_OPEN,
        ChunkKind.BRACE_OPEN,
        ChunkKind.SEMICOLON,
        ChunkKind.COMMA,
        ChunkKind.NOT,
        ChunkKind.INV,
        ChunkKind.COLON,
        ChunkKind.QUESTION,
    }
)

_PAREN_TOPS: Final[frozenset[ChunkKind]] = frozenset(
    {ChunkKind.PAREN_OPEN, ChunkKind.FPAREN_OPEN, ChunkKind.SPAREN_OPEN}
)


@dataclass(frozen=True, slots=True)
class StageTransition:
    """One stage change of the complex statement opened by `opener`."""

    opener: ChunkRef | None
    owner: ChunkKind
    old: BraceStage
    new: BraceStage


def brace_cleanup(ctx: ParseContext) -> list[StageTransition]:
    """Classify every chunk in `ctx.stream`. Returns the stage transitions taken."""
    return BraceCleanup(ctx).run()


class BraceCleanup:
    def __init__(self, ctx: ParseContext) -> None:
        self._ctx = ctx
        self._stream = ctx.stream
        self._frames = ctx.frames
        self.transitions: list[StageTransition] = []

    @property
    def _frm(self) -> ParseFrame:
        return self._frames.active

    def run(self) -> list[StageTransition]:
        ctx = self._ctx
        ctx.in_preproc = ChunkKind.NONE
        ctx.pp_level = 0

        pc = self._stream.head
        while pc is not None:
            # Leaving a directive; a #define body had its own frame.
            if ctx.in_preproc != ChunkKind.NONE and not pc.in_preproc:
                if ctx.in_preproc == ChunkKind.PP_DEFINE:
                    self._frames.pop()
                ctx.in_preproc = ChunkKind.NONE

            pp_level = ctx.pp_level
            if pc.kind == ChunkKind.PREPROC:
                pp_level = self._preproc_start(pc)

            frm = self._frm
            pc.level = frm.level
            pc.brace_level = frm.brace_level
            pc.pp_level = pp_level

            if not pc.is_comment_or_newline and ctx.in_preproc in (ChunkKind.NONE, ChunkKind.PP_DEFINE):
                ctx.consumed = False
                self._parse_cleanup(pc)

            pc = self._stream.get_next(pc)

        if ctx.in_preproc == ChunkKind.PP_DEFINE:
            self._frames.pop()
            ctx.in_preproc = ChunkKind.NONE
        self._report_unclosed()
        return self.transitions

    def _report_unclosed(self) -> None:
        """Count every entry the input left open. A pending `else` is fine."""
        for entry in self._frm.entries[1:]:
            if entry.stage == BraceStage.ELSE:
                continue
            opener = self._stream.resolve(entry.opener)
            what = entry.kind.name
            if entry.stage != BraceStage.NONE:
                what = f"{what} in stage {entry.stage.name}"
            self._ctx.report(CLEANUP_UNCLOSED_AT_EOF, opener, detail=f"{what}, opened on line {entry.open_line}.")

    # ------------------------------------------------------------------
    # Preprocessor
    # ------------------------------------------------------------------

    def _preproc_start(self, pc: Chunk) -> int:
        ctx = self._ctx
        directive = self._stream.get_next_ncnl(pc, Nav.PREPROC)
        if directive is None:
            # null directive: a lone `#`
            ctx.in_preproc = ChunkKind.PP_OTHER
            return ctx.pp_level

        ctx.in_preproc = directive.kind
        if directive.kind == ChunkKind.PP_DEFINE:
            # A #define body starts from a blank frame.
            self._frames.push()
            frm = self._frames.fresh()
            frm.level = 1
            frm.brace_level = 1
            frm.push(ChunkKind.PP_DEFINE, opener=pc)
            return ctx.pp_level
        return self._check_preproc(pc, directive.kind)

    def _check_preproc(self, pc: Chunk, directive: ChunkKind) -> int:
        ctx = self._ctx
        frames = self._frames
        pc.parent_kind = directive
        pp_level = ctx.pp_level

        if directive == ChunkKind.PP_IF:
            ctx.pp_level += 1
            frames.push()
            frames.active.in_ifdef = ChunkKind.PP_IF
            logger.debug("line %d: #if push, %d saved frames", pc.orig_line, frames.count)

        elif directive == ChunkKind.PP_ELSE:
            if self._frm.in_ifdef not in (ChunkKind.PP_IF, ChunkKind.PP_ELSE):
                ctx.report(CLEANUP_UNBALANCED_PREPROC, pc)
                return pp_level
            pp_level -= 1
            # Keep the #if state, restart from the copy taken before the #if.
            if self._frm.in_ifdef == ChunkKind.PP_IF:
                frames.push()
            frames.copy_2nd_tos()
            frames.active.in_ifdef = ChunkKind.PP_ELSE
            logger.debug("line %d: #else restart, %d saved frames", pc.orig_line, frames.count)

        elif directive == ChunkKind.PP_ENDIF:
            if self._frm.in_ifdef not in (ChunkKind.PP_IF, ChunkKind.PP_ELSE):
                ctx.report(CLEANUP_UNBALANCED_PREPROC, pc)
                return pp_level
            ctx.pp_level -= 1
            pp_level = ctx.pp_level
            # [base] [if]-[else] -> [base]-[if]: drop the #else branch.
            if self._frm.in_ifdef == ChunkKind.PP_ELSE:
                frames.copy_tos()
                frames.trash_tos()
            outer_ifdef = frames.saved(frames.count - 1).in_ifdef
            frames.trash_tos()
            frames.active.in_ifdef = outer_ifdef
            logger.debug("line %d: #endif pop, %d saved frames", pc.orig_line, frames.count)

        self._frm.pp_level = ctx.pp_level
        return pp_level

    # ------------------------------------------------------------------
    # Per-chunk classification
    # ------------------------------------------------------------------

    def _parse_cleanup(self, pc: Chunk) -> None:
        ctx = self._ctx
        frm = self._frm

        if (
            (frm.stmt_count == 0 or frm.expr_count == 0)
            and pc.kind not in (ChunkKind.SEMICOLON, ChunkKind.BRACE_CLOSE, ChunkKind.VBRACE_CLOSE)
            and not pc.is_str(")")
            and not pc.is_str("]")
        ):
            pc.set_flags(ChunkFlags.EXPR_START)
            if frm.stmt_count == 0:
                pc.set_flags(ChunkFlags.STMT_START)
        frm.stmt_count += 1
        frm.expr_count += 1

        if frm.sparen_count > 0:
            pc.set_flags(ChunkFlags.IN_SPAREN)
            if frm.has_below_top(ChunkKind.FOR):
                pc.set_flags(ChunkFlags.IN_FOR)
            # for (a; b; c): the semicolons belong to the for
            if pc.is_semicolon and frm.depth > 1 and frm.entry(frm.depth - 1).kind == ChunkKind.FOR:
                pc.parent_kind = ChunkKind.FOR

        if any(entry.parent == ChunkKind.NAMESPACE and entry.kind.opens_brace_level for entry in frm.entries):
            pc.set_flags(ChunkFlags.IN_NAMESPACE)

        if frm.top.stage != BraceStage.NONE and self._check_complex_statements(pc):
            return

        # A semicolon ends a virtual-brace body; the VBRACE_CLOSE is handled next time round.
        if frm.top.kind == ChunkKind.VBRACE_OPEN and pc.is_semicolon:
            ctx.consumed = True
            self._close_statement(pc)

        if pc.kind in _CLOSES:
            self._close_group(pc)

        # The while-of-do wants its semicolon; a close sparen was already consumed above.
        if frm.top.stage == BraceStage.WOD_SEMI and not ctx.consumed:
            if pc.is_semicolon:
                ctx.consumed = True
                pc.parent_kind = ChunkKind.WHILE_OF_DO
            else:
                ctx.report(CLEANUP_EXPECTED_WOD_SEMI, pc, detail=f"Got `{pc.text}`.")
            self._handle_complex_close(pc)

        parent = pc.parent_kind
        if pc.kind.is_paren_open or pc.kind == ChunkKind.BRACE_OPEN:
            prev = self._stream.get_prev_ncnl(pc)
            if prev is not None:
                if pc.kind.is_paren_open:
                    if frm.top.stage != BraceStage.NONE:
                        pc.kind = ChunkKind.SPAREN_OPEN
                        parent = frm.top.kind
                        frm.sparen_count += 1
                    elif prev.kind == ChunkKind.FUNCTION:
                        pc.kind = ChunkKind.FPAREN_OPEN
                        parent = ChunkKind.FUNCTION
                elif frm.top.stage != BraceStage.NONE:
                    parent = frm.top.kind
                elif prev.kind == ChunkKind.ASSIGN and prev.is_str("="):
                    parent = ChunkKind.ASSIGN
                elif prev.kind == ChunkKind.FPAREN_CLOSE:
                    parent = ChunkKind.FUNCTION

        if pc.kind in _OPENS:
            frm.level += 1
            if pc.kind == ChunkKind.BRACE_OPEN:
                frm.brace_level += 1
            if pc.kind.is_paren_open:
                frm.paren_count += 1
            entry = frm.push(pc.kind, parent=parent, opener=pc)
            self._set_indent(entry, pc)
            pc.parent_kind = parent
            logger.debug("line %d: +open %s parent=%s depth=%d", pc.orig_line, pc.kind.name, parent.name, frm.depth)

        stage = opening_stage(pc.kind)
        if stage is not None:
            if pc.kind == ChunkKind.WHILE and self._maybe_while_of_do(pc):
                pc.kind = ChunkKind.WHILE_OF_DO
                stage = BraceStage.WOD_PAREN
            frm.push(pc.kind, stage=stage, opener=pc)
            self._record(frm.top, BraceStage.NONE, stage)

        # Simple statement/expression starts.
        if (
            pc.kind == ChunkKind.SQUARE_OPEN
            or (pc.kind == ChunkKind.BRACE_OPEN and pc.parent_kind != ChunkKind.ASSIGN)
            or pc.kind in (ChunkKind.BRACE_CLOSE, ChunkKind.VBRACE_CLOSE)
            or (pc.kind == ChunkKind.SPAREN_OPEN and pc.parent_kind == ChunkKind.FOR)
            or (pc.is_semicolon and frm.top.kind not in _PAREN_TOPS)
        ):
            frm.stmt_count = 0
            frm.expr_count = 0

        if pc.kind in _EXPR_STARTERS or (pc.kind == ChunkKind.STAR and not self._next_is_star(pc)):
            frm.expr_count = 0

    def _check_complex_statements(self, pc: Chunk) -> bool:
        """Advance the pending complex statement. True if `pc` is fully handled."""
        while True:
            frm = self._frm
            top = frm.top
            if top.stage == BraceStage.NONE:
                return False

            next_kind = None
            chain = True
            if top.stage == BraceStage.ELSE and pc.kind == ChunkKind.ELSE:
                nxt = self._stream.get_next_ncnl(pc)
                if nxt is not None:
                    next_kind = nxt.kind
                    chain = self._chains_else_if(nxt)
            step = step_on_chunk(top.stage, top.kind, pc.kind, next_kind, chain_else_if=chain)
            match step.action:
                case StageAction.CONTINUE:
                    if step.stage is not None:
                        self._restage(top, step.stage)
                    return False
                case StageAction.HANDLED:
                    if step.owner == ChunkKind.ELSE:
                        pc.parent_kind = ChunkKind.IF
                    if step.owner is not None:
                        top.kind = step.owner
                    if step.retype is not None:
                        pc.kind = step.retype
                    if step.stage is not None:
                        self._restage(top, step.stage)
                    return True
                case StageAction.RESTAGE:
                    if step.stage is not None:
                        self._restage(top, step.stage)
                case StageAction.POP:
                    self._pop()
                case StageAction.POP_CLOSE:
                    self._pop()
                    if self._close_statement(pc):
                        return True
                case StageAction.POP_ERROR:
                    if step.error is not None:
                        self._ctx.report(step.error, pc, detail=f"Got `{pc.text}` for `{top.kind.name.lower()}`.")
                    self._pop()
                case StageAction.OPEN_VBRACE:
                    self._open_vbrace(pc)
                    return False
                case _:
                    return False

    def _close_group(self, pc: Chunk) -> None:
        ctx = self._ctx
        frm = self._frm
        top = frm.top

        if pc.kind == ChunkKind.PAREN_CLOSE and top.kind in (ChunkKind.FPAREN_OPEN, ChunkKind.SPAREN_OPEN):
            pc.kind = top.kind.closing or pc.kind
            if pc.kind == ChunkKind.SPAREN_CLOSE:
                frm.sparen_count -= 1
                pc.clear_flags(ChunkFlags.IN_SPAREN)

        if pc.kind != top.kind.closing:
            if top.kind != ChunkKind.PP_DEFINE:
                opened = f" opened on line {top.open_line}" if top.kind != ChunkKind.NONE else ""
                ctx.report(
                    CLEANUP_UNEXPECTED_CLOSE,
                    pc,
                    detail=f"Got `{pc.text or pc.kind.name}` for {top.kind.name}{opened}.",
                )
            return

        ctx.consumed = True
        pc.parent_kind = top.parent
        frm.level -= 1
        if pc.kind.closes_brace_level:
            frm.brace_level -= 1
        if pc.kind.is_paren_close:
            frm.paren_count -= 1
        pc.level = frm.level
        pc.brace_level = frm.brace_level
        self._pop()
        logger.debug("line %d: -close %s depth=%d", pc.orig_line, pc.kind.name, frm.depth)

        if frm.top.stage != BraceStage.NONE:
            self._handle_complex_close(pc)

    def _handle_complex_close(self, pc: Chunk) -> bool:
        frm = self._frm
        top = frm.top
        nxt = self._stream.get_next_ncnl(pc)
        step = step_on_close(top.stage, top.kind, nxt.kind if nxt is not None else None)
        if step.stage is not None:
            self._restage(top, step.stage)
        if step.action == StageAction.POP_CLOSE:
            self._pop()
            return self._close_statement(pc)
        if step.action == StageAction.REPORT and step.error is not None:
            self._ctx.report(step.error, pc, detail=f"Top is {top.kind.name} in stage {top.stage.name}.")
        return False

    def _close_statement(self, pc: Chunk) -> bool:
        ctx = self._ctx
        frm = self._frm
        vbc = pc

        if ctx.consumed:
            frm.stmt_count = 0
            frm.expr_count = 0

        if frm.top.kind == ChunkKind.VBRACE_OPEN:
            if ctx.consumed:
                # After the consumed chunk; the main loop handles it next.
                self._insert_vbrace_close_after(pc)
            else:
                # Before the current chunk, and close it out right here.
                anchor = self._stream.get_prev_ncnl(pc) or pc
                vbc = self._insert_vbrace_close_after(anchor)
                vbc.parent_kind = frm.top.parent
                frm.level -= 1
                frm.brace_level -= 1
                self._pop()
                vbc.level = frm.level
                vbc.brace_level = frm.brace_level
                pc.level = frm.level
                pc.brace_level = frm.brace_level
                self._close_statement(pc)
                return True

        if frm.top.stage != BraceStage.NONE:
            return self._handle_complex_close(vbc)
        return False

    # ------------------------------------------------------------------
    # Virtual braces
    # ------------------------------------------------------------------

    def _open_vbrace(self, pc: Chunk) -> None:
        frm = self._frm
        owner = frm.top.kind
        vbrace = self._insert_vbrace_open_before(pc)
        vbrace.parent_kind = owner

        frm.level += 1
        frm.brace_level += 1
        entry = frm.push(ChunkKind.VBRACE_OPEN, parent=owner, opener=vbrace)
        self._set_indent(entry, vbrace)

        pc.level = frm.level
        pc.brace_level = frm.brace_level
        pc.set_flags(ChunkFlags.STMT_START | ChunkFlags.EXPR_START)
        frm.stmt_count = 1
        frm.expr_count = 1

    def _insert_vbrace_open_before(self, pc: Chunk) -> Chunk:
        frm = self._frm
        ref = self._stream.get_prev(pc)
        while ref is not None and ref.is_comment_or_newline:
            ref.level += 1
            ref.brace_level += 1
            ref = self._stream.get_prev(ref)

        # Don't back into a preprocessor directive.
        if ref is not None and not pc.in_preproc and ref.in_preproc:
            if ref.kind == ChunkKind.PREPROC_BODY:
                while ref is not None and ref.in_preproc:
                    ref = self._stream.get_prev(ref)
            else:
                ref = self._stream.get_next(ref)

        if ref is None:
            vbrace = self._stream.synthesize_before(pc, ChunkKind.VBRACE_OPEN)
        else:
            vbrace = self._stream.synthesize_after(ref, ChunkKind.VBRACE_OPEN)
            vbrace.orig_line = ref.orig_line
            vbrace.column = ref.column + ref.length + 1

        vbrace.flags = copy_relevant_flags(pc.flags)
        if ref is None or not ref.in_preproc:
            vbrace.clear_flags(ChunkFlags.IN_PREPROC)
        vbrace.level = frm.level
        vbrace.brace_level = frm.brace_level
        vbrace.pp_level = pc.pp_level
        return vbrace

    def _insert_vbrace_close_after(self, pc: Chunk) -> Chunk:
        frm = self._frm
        vbc = self._stream.synthesize_after(pc, ChunkKind.VBRACE_CLOSE)
        vbc.parent_kind = frm.top.parent
        vbc.level = frm.level
        vbc.brace_level = frm.brace_level
        vbc.column = pc.column + pc.length
        return vbc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _chains_else_if(self, pc: Chunk) -> bool:
        """False if `indent_else_if` keeps the `if` at `pc` out of the chain."""
        if not self._ctx.options.indent_else_if:
            return True
        prev = self._stream.get_prev_nc(pc)
        return prev is None or not prev.is_newline

    def _maybe_while_of_do(self, pc: Chunk) -> bool:
        """A `while` right after a directive may still close a `do` body."""
        prev = self._stream.get_prev_ncnl(pc)
        if prev is None or not prev.in_preproc:
            return False
        while prev is not None and prev.in_preproc:
            prev = self._stream.get_prev_ncnl(prev)
        return (
            prev is not None
            and prev.parent_kind == ChunkKind.DO
            and prev.kind in (ChunkKind.VBRACE_CLOSE, ChunkKind.BRACE_CLOSE)
        )

    def _next_is_star(self, pc: Chunk) -> bool:
        nxt = self._stream.get_next(pc)
        return nxt is not None and nxt.kind == ChunkKind.STAR

    def _set_indent(self, entry: ParenStackEntry, opener: Chunk) -> None:
        frm = self._frm
        width = max(self._ctx.options.indent_columns, 1)
        if entry.kind.opens_brace_level:
            entry.brace_indent = 1 + (frm.brace_level - 1) * width
            entry.indent = 1 + frm.brace_level * width
        else:
            entry.brace_indent = 1 + frm.brace_level * width
            entry.indent = opener.column + opener.length
        entry.indent_tmp = entry.indent
        entry.indent_tab = 1 + ((entry.indent - 1) // width) * width

    def _restage(self, entry: ParenStackEntry, stage: BraceStage) -> None:
        if entry.stage != stage:
            self._record(entry, entry.stage, stage)
            entry.stage = stage

    def _pop(self) -> ParenStackEntry | None:
        entry = self._frm.pop()
        if entry is not None and entry.stage != BraceStage.NONE:
            self._record(entry, entry.stage, BraceStage.NONE)
        return entry

    def _record(self, entry: ParenStackEntry, old: BraceStage, new: BraceStage) -> None:
        self.transitions.append(StageTransition(entry.opener, entry.kind, old, new))
