import pytest

from chunkpy.cleanup import BraceStage, FrameStack, ParseFrame
from chunkpy.errors import FrameIndexError, FrameLimitError, ParseDepthError
from chunkpy.syntax import ChunkKind


def test_new_frame_has_base_entry() -> None:
    frame = ParseFrame()

    assert frame.depth == 0
    assert frame.top.kind == ChunkKind.NONE
    assert frame.pop() is None
    assert frame.depth == 0


def test_push_records_level_and_stage() -> None:
    frame = ParseFrame()
    frame.level = 2

    entry = frame.push(ChunkKind.IF, stage=BraceStage.PAREN1)

    assert frame.top is entry
    assert frame.depth == 1
    assert entry.level == 2
    assert entry.stage == BraceStage.PAREN1
    assert entry.opener is None
    assert frame.has_below_top(ChunkKind.NONE)
    assert not frame.has_below_top(ChunkKind.IF)


def test_push_past_max_depth_raises() -> None:
    frame = ParseFrame(max_depth=2)
    frame.push(ChunkKind.PAREN_OPEN)
    frame.push(ChunkKind.PAREN_OPEN)

    with pytest.raises(ParseDepthError) as excinfo:
        frame.push(ChunkKind.PAREN_OPEN)
    assert excinfo.value.limit == 2


def test_entry_out_of_range_raises() -> None:
    frame = ParseFrame()

    assert frame.entry(0) is frame.top
    with pytest.raises(FrameIndexError):
        frame.entry(1)


def test_copy_is_deep() -> None:
    frame = ParseFrame()
    frame.push(ChunkKind.BRACE_OPEN)

    clone = frame.copy()
    clone.top.stage = BraceStage.BRACE2
    clone.push(ChunkKind.PAREN_OPEN)

    assert frame.top.stage == BraceStage.NONE
    assert frame.depth == 1
    assert clone.depth == 2


def test_frame_stack_if_else_endif_keeps_if_branch() -> None:
    frames = FrameStack()
    frames.active.push(ChunkKind.BRACE_OPEN)

    # #if
    frames.push()
    frames.active.push(ChunkKind.IF, stage=BraceStage.PAREN1)
    # #else: [base] [if], restart from base
    frames.push()
    frames.copy_2nd_tos()
    assert frames.active.depth == 1
    frames.active.push(ChunkKind.WHILE, stage=BraceStage.PAREN1)
    # #endif: take back the #if branch
    frames.copy_tos()
    frames.trash_tos()
    frames.trash_tos()

    assert frames.count == 0
    assert frames.active.top.kind == ChunkKind.IF


def test_frame_stack_pop_restores_saved_frame() -> None:
    frames = FrameStack()
    frames.active.level = 3
    frames.push()

    fresh = frames.fresh()
    assert fresh.level == 0
    restored = frames.pop()

    assert restored.level == 3
    assert frames.active is restored
    assert len(frames) == 0


def test_frame_stack_limits() -> None:
    frames = FrameStack(max_frames=1)
    frames.push()

    with pytest.raises(FrameLimitError):
        frames.push()

    frames.trash_tos()
    with pytest.raises(FrameIndexError):
        frames.pop()
    with pytest.raises(FrameIndexError):
        frames.trash_tos()
    with pytest.raises(FrameIndexError):
        frames.copy_2nd_tos()
