"""Saved parse frames for preprocessor branches and #define bodies."""

from chunkpy.cleanup.frame import ParseFrame
from chunkpy.errors import FrameIndexError, FrameLimitError


class FrameStack:
    """The active frame plus a stack of saved copies.

    `#if` saves a copy, `#else` restarts from the copy taken before the
    `#if`, and `#endif` keeps the `#if` branch. Saved frames are never
    merged, only copied back or thrown away.
    """

    def __init__(self, max_depth: int = 1024, max_frames: int = 256) -> None:
        self._max_depth = max_depth
        self._max_frames = max_frames
        self.active = ParseFrame(max_depth=max_depth)
        self._saved: list[ParseFrame] = []

    def __len__(self) -> int:
        return len(self._saved)

    @property
    def count(self) -> int:
        return len(self._saved)

    def saved(self, index: int) -> ParseFrame:
        if index < 0 or index >= len(self._saved):
            raise FrameIndexError(f"Frame index {index} out of range (count={len(self._saved)})")
        return self._saved[index]

    def fresh(self) -> ParseFrame:
        """Replace the active frame with a blank one."""
        self.active = ParseFrame(max_depth=self._max_depth)
        return self.active

    def push(self) -> None:
        """Save a copy of the active frame."""
        if len(self._saved) >= self._max_frames:
            raise FrameLimitError(len(self._saved) + 1, self._max_frames)
        self._saved.append(self.active.copy())

    def pop(self) -> ParseFrame:
        """Make the most recently saved frame active again."""
        if not self._saved:
            raise FrameIndexError("Pop from an empty frame stack")
        self.active = self._saved.pop()
        return self.active

    def copy_tos(self) -> None:
        self.active = self.saved(len(self._saved) - 1).copy()

    def copy_2nd_tos(self) -> None:
        self.active = self.saved(len(self._saved) - 2).copy()

    def trash_tos(self) -> None:
        if not self._saved:
            raise FrameIndexError("Trash from an empty frame stack")
        self._saved.pop()
