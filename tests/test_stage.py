from chunkpy.cleanup import BraceStage, StageAction, opening_stage, step_on_chunk, step_on_close
from chunkpy.syntax import ChunkKind


def test_opening_stage_per_keyword() -> None:
    assert opening_stage(ChunkKind.IF) == BraceStage.PAREN1
    assert opening_stage(ChunkKind.SWITCH) == BraceStage.PAREN1
    assert opening_stage(ChunkKind.DO) == BraceStage.BRACE_DO
    assert opening_stage(ChunkKind.TRY) == BraceStage.BRACE2
    assert opening_stage(ChunkKind.CATCH) == BraceStage.OP_PAREN1
    assert opening_stage(ChunkKind.NAMESPACE) == BraceStage.VALUE
    assert opening_stage(ChunkKind.WHILE_OF_DO) == BraceStage.WOD_PAREN
    assert opening_stage(ChunkKind.ELSE) == BraceStage.ELSEIF
    assert opening_stage(ChunkKind.WORD) is None


def test_optional_paren_resolves_either_way() -> None:
    with_paren = step_on_chunk(BraceStage.OP_PAREN1, ChunkKind.CATCH, ChunkKind.PAREN_OPEN)
    without = step_on_chunk(BraceStage.OP_PAREN1, ChunkKind.CATCH, ChunkKind.BRACE_OPEN)

    assert (with_paren.action, with_paren.stage) == (StageAction.RESTAGE, BraceStage.PAREN1)
    assert (without.action, without.stage) == (StageAction.RESTAGE, BraceStage.BRACE2)


def test_else_is_absorbed_or_closes_the_if() -> None:
    plain = step_on_chunk(BraceStage.ELSE, ChunkKind.IF, ChunkKind.ELSE, ChunkKind.BRACE_OPEN)
    closed = step_on_chunk(BraceStage.ELSE, ChunkKind.IF, ChunkKind.WORD)

    assert plain.action == StageAction.HANDLED
    assert plain.stage == BraceStage.BRACE2
    assert plain.owner == ChunkKind.ELSE
    assert closed.action == StageAction.POP_CLOSE


def test_else_if_chains_unless_disabled() -> None:
    chained = step_on_chunk(BraceStage.ELSE, ChunkKind.IF, ChunkKind.ELSE, ChunkKind.IF)
    nested = step_on_chunk(BraceStage.ELSE, ChunkKind.IF, ChunkKind.ELSE, ChunkKind.IF, chain_else_if=False)
    at_end = step_on_chunk(BraceStage.ELSE, ChunkKind.IF, ChunkKind.ELSE, None)

    assert (chained.action, chained.stage) == (StageAction.HANDLED, BraceStage.ELSEIF)
    assert (nested.action, nested.stage) == (StageAction.HANDLED, BraceStage.BRACE2)
    assert at_end.stage == BraceStage.BRACE2

    if_step = step_on_chunk(BraceStage.ELSEIF, ChunkKind.ELSE, ChunkKind.IF)
    assert if_step.action == StageAction.HANDLED
    assert if_step.retype == ChunkKind.ELSEIF
    assert if_step.owner == ChunkKind.ELSEIF
    assert if_step.stage == BraceStage.PAREN1


def test_do_wants_while() -> None:
    ok = step_on_chunk(BraceStage.WHILE, ChunkKind.DO, ChunkKind.WHILE)
    bad = step_on_chunk(BraceStage.WHILE, ChunkKind.DO, ChunkKind.WORD)

    assert ok.retype == ChunkKind.WHILE_OF_DO
    assert ok.stage == BraceStage.WOD_PAREN
    assert bad.action == StageAction.POP_ERROR
    assert bad.error is not None
    assert bad.error.code == "CLEANUP_EXPECTED_WHILE"


def test_missing_paren_drops_the_statement() -> None:
    step = step_on_chunk(BraceStage.PAREN1, ChunkKind.IF, ChunkKind.WORD)

    assert step.action == StageAction.POP_ERROR
    assert step.error is not None
    assert step.error.code == "CLEANUP_EXPECTED_PAREN"
    assert step_on_chunk(BraceStage.PAREN1, ChunkKind.IF, ChunkKind.PAREN_OPEN).action == StageAction.CONTINUE


def test_braceless_body_opens_virtual_brace() -> None:
    assert step_on_chunk(BraceStage.BRACE2, ChunkKind.FOR, ChunkKind.WORD).action == StageAction.OPEN_VBRACE
    assert step_on_chunk(BraceStage.BRACE_DO, ChunkKind.DO, ChunkKind.RETURN).action == StageAction.OPEN_VBRACE
    assert step_on_chunk(BraceStage.BRACE2, ChunkKind.FOR, ChunkKind.BRACE_OPEN).action == StageAction.CONTINUE


def test_namespace_value_waits_for_brace() -> None:
    assert step_on_chunk(BraceStage.VALUE, ChunkKind.NAMESPACE, ChunkKind.WORD).action == StageAction.CONTINUE
    brace = step_on_chunk(BraceStage.VALUE, ChunkKind.NAMESPACE, ChunkKind.BRACE_OPEN)
    assert (brace.action, brace.stage) == (StageAction.RESTAGE, BraceStage.BRACE2)
    assert step_on_chunk(BraceStage.VALUE, ChunkKind.NAMESPACE, ChunkKind.SEMICOLON).action == StageAction.POP


def test_close_advances_statement() -> None:
    assert step_on_close(BraceStage.PAREN1, ChunkKind.IF, ChunkKind.BRACE_OPEN).stage == BraceStage.BRACE2
    assert step_on_close(BraceStage.BRACE_DO, ChunkKind.DO, ChunkKind.WHILE).stage == BraceStage.WHILE
    assert step_on_close(BraceStage.WOD_PAREN, ChunkKind.WHILE_OF_DO, ChunkKind.SEMICOLON).stage == BraceStage.WOD_SEMI
    assert step_on_close(BraceStage.WOD_SEMI, ChunkKind.WHILE_OF_DO, None).action == StageAction.POP_CLOSE
    assert step_on_close(BraceStage.BRACE2, ChunkKind.FOR, ChunkKind.WORD).action == StageAction.POP_CLOSE


def test_if_body_close_looks_ahead_for_else() -> None:
    before_else = step_on_close(BraceStage.BRACE2, ChunkKind.IF, ChunkKind.ELSE)
    before_word = step_on_close(BraceStage.BRACE2, ChunkKind.ELSEIF, ChunkKind.WORD)
    at_end = step_on_close(BraceStage.BRACE2, ChunkKind.IF, None)

    assert (before_else.action, before_else.stage) == (StageAction.CONTINUE, BraceStage.ELSE)
    assert before_word.action == StageAction.POP_CLOSE
    assert (at_end.action, at_end.stage) == (StageAction.CONTINUE, BraceStage.ELSE)


def test_close_in_unexpected_stage_is_reported() -> None:
    step = step_on_close(BraceStage.NONE, ChunkKind.NONE, None)

    assert step.action == StageAction.REPORT
    assert step.error is not None
    assert step.error.code == "CLEANUP_BAD_COMPLEX_CLOSE"
