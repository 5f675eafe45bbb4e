"""Chunk kinds, context flags and language masks."""

from chunkpy.syntax.flags import (
    COPY_FLAGS,
    ChunkFlags,
    copy_relevant_flags,
    flag_names,
    is_first_var_def,
    is_one_class,
)
from chunkpy.syntax.kind import (
    CLOSE_TO_OPEN,
    OPEN_TO_CLOSE,
    ChunkKind,
    PatternClass,
    pattern_class,
)
from chunkpy.syntax.language import LanguageMask, language_from_filename

__all__ = [
    "CLOSE_TO_OPEN",
    "COPY_FLAGS",
    "OPEN_TO_CLOSE",
    "ChunkFlags",
    "ChunkKind",
    "LanguageMask",
    "PatternClass",
    "copy_relevant_flags",
    "flag_names",
    "is_first_var_def",
    "is_one_class",
    "language_from_filename",
    "pattern_class",
]
