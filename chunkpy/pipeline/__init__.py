"""Pipeline entrypoints."""

from chunkpy.pipeline.result import CleanupRunResult
from chunkpy.pipeline.runner import run_cleanup, run_cleanup_file

__all__ = [
    "CleanupRunResult",
    "run_cleanup",
    "run_cleanup_file",
]
