"""chunkpy: token-stream core of a C-family source beautifier."""

from chunkpy.pipeline import CleanupRunResult, run_cleanup, run_cleanup_file

__all__ = [
    "CleanupRunResult",
    "run_cleanup",
    "run_cleanup_file",
]
