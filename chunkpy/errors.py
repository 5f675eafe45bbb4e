"""Exceptions that abort processing of the current file.

Malformed input never raises; it is counted on the parse context. These
cover resource ceilings and broken internal invariants.
"""


class ChunkpyError(Exception):
    """Base for every condition that aborts the current file."""


class FatalParseError(ChunkpyError):
    """A workload ceiling was exceeded."""


class ParseDepthError(FatalParseError):
    def __init__(self, depth: int, limit: int, line: int = 0) -> None:
        super().__init__(f"Nesting depth {depth} exceeds limit {limit} (line {line})")
        self.depth = depth
        self.limit = limit
        self.line = line


class FrameLimitError(FatalParseError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Preprocessor frame count {count} exceeds limit {limit}")
        self.count = count
        self.limit = limit


class AlignTableFullError(FatalParseError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Align table is full ({limit} entries)")
        self.limit = limit


class InvariantError(ChunkpyError):
    """Internal structure is inconsistent. Always a programming defect."""


class StreamIntegrityError(InvariantError):
    pass


class FrameIndexError(InvariantError):
    pass
