"""Brace cleanup: parse frames, stage transitions and the classification driver."""

from chunkpy.cleanup.brace_cleanup import BraceCleanup, StageTransition, brace_cleanup
from chunkpy.cleanup.frame import BraceStage, ParenStackEntry, ParseFrame
from chunkpy.cleanup.frames import FrameStack
from chunkpy.cleanup.stage import StageAction, StageStep, opening_stage, step_on_chunk, step_on_close

__all__ = [
    "BraceCleanup",
    "BraceStage",
    "FrameStack",
    "ParenStackEntry",
    "ParseFrame",
    "StageAction",
    "StageStep",
    "StageTransition",
    "brace_cleanup",
    "opening_stage",
    "step_on_chunk",
    "step_on_close",
]
