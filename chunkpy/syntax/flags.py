"""Chunk context flags."""

from enum import IntFlag
from typing import Final


class ChunkFlags(IntFlag):
    """Syntactic context of a chunk.

    Containment bits (IN_*) describe where a chunk sits; role bits
    (STMT_START, VAR_DEF, ONE_LINER, ...) only hold for the chunk they were
    computed on.
    """

    NONE = 0
    STMT_START = 1 << 0  # first chunk of a statement
    EXPR_START = 1 << 1
    IN_PREPROC = 1 << 2  # inside a preprocessor directive
    DONT_INDENT = 1 << 3  # already aligned
    MFC_PAREN = 1 << 4  # macro function close paren
    VAR_DEF = 1 << 5  # variable name in a variable definition
    VAR_1ST = 1 << 6  # first variable definition in a statement
    VAR_INLINE = 1 << 7  # type was an inline struct/enum/union
    IN_ENUM = 1 << 8
    IN_FCN_DEF = 1 << 9  # inside function definition parens
    IN_FCN_CALL = 1 << 10  # inside function call parens
    IN_SPAREN = 1 << 11  # inside if/for/while/switch parens
    RIGHT_COMMENT = 1 << 12
    OLD_FCN_PARAMS = 1 << 13
    WAS_ALIGNED = 1 << 14
    OPTIONAL = 1 << 15
    IN_TYPEDEF = 1 << 16
    IN_CONST_ARGS = 1 << 17
    LVALUE = 1 << 18  # left of an assignment
    IN_ARRAY_ASSIGN = 1 << 19
    IN_CLASS = 1 << 20
    IN_NAMESPACE = 1 << 21
    IN_FOR = 1 << 22
    ONE_LINER = 1 << 23

    VAR_1ST_DEF = VAR_DEF | VAR_1ST
    ONE_CLASS = ONE_LINER | IN_CLASS


COPY_FLAGS: Final[ChunkFlags] = (
    ChunkFlags.IN_PREPROC
    | ChunkFlags.IN_SPAREN
    | ChunkFlags.IN_ENUM
    | ChunkFlags.IN_FCN_DEF
    | ChunkFlags.IN_FCN_CALL
    | ChunkFlags.IN_TYPEDEF
    | ChunkFlags.IN_ARRAY_ASSIGN
    | ChunkFlags.IN_CLASS
    | ChunkFlags.IN_NAMESPACE
    | ChunkFlags.IN_FOR
)
"""Flags a synthesized chunk inherits from its insertion point."""


def copy_relevant_flags(source: ChunkFlags) -> ChunkFlags:
    return source & COPY_FLAGS


def is_first_var_def(flags: ChunkFlags) -> bool:
    """True when both VAR_DEF and VAR_1ST are set."""
    return flags & ChunkFlags.VAR_1ST_DEF == ChunkFlags.VAR_1ST_DEF


def is_one_class(flags: ChunkFlags) -> bool:
    """True for a one-liner inside a class body."""
    return flags & ChunkFlags.ONE_CLASS == ChunkFlags.ONE_CLASS


_SINGLE_BITS: Final[tuple[ChunkFlags, ...]] = tuple(
    flag for flag in ChunkFlags if flag.value and flag.value & (flag.value - 1) == 0
)


def flag_names(flags: ChunkFlags) -> list[str]:
    """Names of the single bits set in `flags`, lowest bit first."""
    return [flag.name for flag in _SINGLE_BITS if flags & flag and flag.name is not None]
