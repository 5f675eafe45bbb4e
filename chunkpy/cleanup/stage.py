"""Brace stage transitions.

Both functions are pure: they look at the top entry's stage and owner plus
one chunk kind and say what should happen. The driver in
`brace_cleanup` applies the step to the frame and the stream.
"""

from dataclasses import dataclass
from enum import IntEnum

from chunkpy.cleanup.frame import BraceStage
from chunkpy.diagnostics import (
    CLEANUP_BAD_COMPLEX_CLOSE,
    CLEANUP_EXPECTED_PAREN,
    CLEANUP_EXPECTED_WHILE,
    DiagnosticSpec,
)
from chunkpy.syntax import ChunkKind, PatternClass, pattern_class


class StageAction(IntEnum):
    CONTINUE = 0  # apply `stage` (if any) and keep processing the chunk
    HANDLED = 1  # apply the step; the chunk needs no further processing
    RESTAGE = 2  # apply `stage` and evaluate the new top again
    POP = 3  # drop the top entry and evaluate again
    POP_CLOSE = 4  # drop the top entry and close the enclosing statement
    POP_ERROR = 5  # drop the top entry, report, evaluate again
    OPEN_VBRACE = 6  # braceless body: insert a virtual brace first
    REPORT = 7  # report and leave the stack alone


@dataclass(frozen=True, slots=True)
class StageStep:
    action: StageAction
    stage: BraceStage | None = None
    owner: ChunkKind | None = None  # new kind for the top entry
    retype: ChunkKind | None = None  # new kind for the chunk
    error: DiagnosticSpec | None = None


_CONTINUE = StageStep(StageAction.CONTINUE)


def opening_stage(kind: ChunkKind) -> BraceStage | None:
    """Stage for a complex statement started by `kind`, or None."""
    match pattern_class(kind):
        case PatternClass.BRACED:
            return BraceStage.BRACE_DO if kind == ChunkKind.DO else BraceStage.BRACE2
        case PatternClass.PBRACED:
            return BraceStage.PAREN1
        case PatternClass.OPBRACED:
            return BraceStage.OP_PAREN1
        case PatternClass.VBRACED:
            return BraceStage.VALUE
        case PatternClass.PAREN:
            return BraceStage.WOD_PAREN
        case PatternClass.ELSE:
            return BraceStage.ELSEIF
    return None


def step_on_chunk(
    stage: BraceStage,
    owner: ChunkKind,
    kind: ChunkKind,
    next_kind: ChunkKind | None = None,
    *,
    chain_else_if: bool = True,
) -> StageStep:
    """What a pending complex statement does with the next chunk.

    `next_kind` is the kind of the chunk after `kind` (skipping comments and
    newlines); only an `else` looks at it, to tell `else if` from `else`.
    """
    match stage:
        case BraceStage.OP_PAREN1:
            # An optional paren turns into either a real paren or a brace.
            next_stage = BraceStage.PAREN1 if kind == ChunkKind.PAREN_OPEN else BraceStage.BRACE2
            return StageStep(StageAction.RESTAGE, stage=next_stage)
        case BraceStage.ELSE:
            if kind == ChunkKind.ELSE:
                chained = next_kind == ChunkKind.IF and chain_else_if
                next_stage = BraceStage.ELSEIF if chained else BraceStage.BRACE2
                return StageStep(StageAction.HANDLED, stage=next_stage, owner=ChunkKind.ELSE)
            return StageStep(StageAction.POP_CLOSE)
        case BraceStage.ELSEIF:
            if kind == ChunkKind.IF:
                return StageStep(
                    StageAction.HANDLED,
                    stage=BraceStage.PAREN1,
                    owner=ChunkKind.ELSEIF,
                    retype=ChunkKind.ELSEIF,
                )
            return StageStep(StageAction.RESTAGE, stage=BraceStage.BRACE2)
        case BraceStage.WHILE:
            if kind == ChunkKind.WHILE:
                return StageStep(
                    StageAction.HANDLED,
                    stage=BraceStage.WOD_PAREN,
                    owner=ChunkKind.WHILE_OF_DO,
                    retype=ChunkKind.WHILE_OF_DO,
                )
            return StageStep(StageAction.POP_ERROR, error=CLEANUP_EXPECTED_WHILE)
        case BraceStage.VALUE:
            if kind == ChunkKind.BRACE_OPEN:
                return StageStep(StageAction.RESTAGE, stage=BraceStage.BRACE2)
            if kind == ChunkKind.SEMICOLON:
                return StageStep(StageAction.POP)
            return _CONTINUE
        case BraceStage.BRACE2 | BraceStage.BRACE_DO:
            if kind != ChunkKind.BRACE_OPEN:
                return StageStep(StageAction.OPEN_VBRACE)
        case BraceStage.PAREN1 | BraceStage.WOD_PAREN:
            if kind != ChunkKind.PAREN_OPEN:
                return StageStep(StageAction.POP_ERROR, error=CLEANUP_EXPECTED_PAREN)
    return _CONTINUE


def step_on_close(stage: BraceStage, owner: ChunkKind, next_kind: ChunkKind | None) -> StageStep:
    """What a pending complex statement does when its paren/brace closes.

    `next_kind` is the kind of the next non-comment, non-newline chunk, or
    None at the end of the stream.
    """
    match stage:
        case BraceStage.PAREN1:
            return StageStep(StageAction.CONTINUE, stage=BraceStage.BRACE2)
        case BraceStage.BRACE2:
            if owner in (ChunkKind.IF, ChunkKind.ELSEIF):
                if next_kind is not None and next_kind != ChunkKind.ELSE:
                    return StageStep(StageAction.POP_CLOSE, stage=BraceStage.ELSE)
                return StageStep(StageAction.CONTINUE, stage=BraceStage.ELSE)
            return StageStep(StageAction.POP_CLOSE)
        case BraceStage.BRACE_DO:
            return StageStep(StageAction.CONTINUE, stage=BraceStage.WHILE)
        case BraceStage.WOD_PAREN:
            return StageStep(StageAction.CONTINUE, stage=BraceStage.WOD_SEMI)
        case BraceStage.WOD_SEMI:
            return StageStep(StageAction.POP_CLOSE)
    return StageStep(StageAction.REPORT, error=CLEANUP_BAD_COMPLEX_CLOSE)
