"""Chunk kinds and keyword pattern classes."""

from enum import IntEnum
from typing import Final


class ChunkKind(IntEnum):
    """Token vocabulary shared by the lexer, the chunk stream and cleanup."""

    NONE = 0

    # -------------------------
    # Whitespace-like chunks
    # -------------------------
    NEWLINE = 10
    NL_CONT = 11  # backslash-newline inside a directive
    COMMENT = 12  # /* ... */ on one line
    COMMENT_CPP = 13  # // ...
    COMMENT_MULTI = 14  # /* ... */ spanning lines

    # -------------------------
    # Words / literals
    # -------------------------
    WORD = 20
    TYPE = 21
    NUMBER = 22
    STRING = 23
    FUNCTION = 24  # word followed by '('

    # -------------------------
    # Keywords
    # -------------------------
    IF = 30
    ELSE = 31
    ELSEIF = 32
    FOR = 33
    WHILE = 34
    WHILE_OF_DO = 35
    DO = 36
    SWITCH = 37
    CASE = 38
    DEFAULT = 39
    TRY = 40
    CATCH = 41
    FINALLY = 42
    NAMESPACE = 43
    CLASS = 44
    STRUCT = 45
    UNION = 46
    ENUM = 47
    TYPEDEF = 48
    RETURN = 49
    GOTO = 50
    BREAK = 51
    CONTINUE = 52
    USING = 53
    SYNCHRONIZED = 54
    LOCK = 55
    VERSION = 56
    UNITTEST = 57

    # -------------------------
    # Operators / punctuation
    # -------------------------
    ASSIGN = 70
    ARITH = 71
    COMPARE = 72
    BOOL = 73
    STAR = 74
    PLUS = 75
    MINUS = 76
    NOT = 77
    INV = 78
    AMP = 79
    INCDEC = 80
    COLON = 81
    QUESTION = 82
    COMMA = 83
    SEMICOLON = 84
    DOT = 85
    MEMBER = 86  # ->
    DC_MEMBER = 87  # ::
    UNKNOWN = 88

    # -------------------------
    # Grouping (open/close pairs)
    # -------------------------
    PAREN_OPEN = 100
    PAREN_CLOSE = 101
    SPAREN_OPEN = 102  # if/for/while/switch parens
    SPAREN_CLOSE = 103
    FPAREN_OPEN = 104  # function parens
    FPAREN_CLOSE = 105
    BRACE_OPEN = 106
    BRACE_CLOSE = 107
    VBRACE_OPEN = 108  # virtual brace around a braceless body
    VBRACE_CLOSE = 109
    SQUARE_OPEN = 110
    SQUARE_CLOSE = 111
    ANGLE_OPEN = 112
    ANGLE_CLOSE = 113

    # -------------------------
    # Preprocessor
    # -------------------------
    PREPROC = 130  # the '#'
    PP_IF = 131  # #if, #ifdef, #ifndef
    PP_ELSE = 132  # #else, #elif
    PP_ENDIF = 133
    PP_DEFINE = 134
    PP_INCLUDE = 135
    PP_OTHER = 136
    PREPROC_BODY = 137

    @property
    def is_newline(self) -> bool:
        return self in (ChunkKind.NEWLINE, ChunkKind.NL_CONT)

    @property
    def is_comment(self) -> bool:
        return self in (ChunkKind.COMMENT, ChunkKind.COMMENT_CPP, ChunkKind.COMMENT_MULTI)

    @property
    def is_opening(self) -> bool:
        return self in OPEN_TO_CLOSE

    @property
    def is_closing(self) -> bool:
        return self in CLOSE_TO_OPEN

    @property
    def is_paren_open(self) -> bool:
        return self in (ChunkKind.PAREN_OPEN, ChunkKind.SPAREN_OPEN, ChunkKind.FPAREN_OPEN)

    @property
    def is_paren_close(self) -> bool:
        return self in (ChunkKind.PAREN_CLOSE, ChunkKind.SPAREN_CLOSE, ChunkKind.FPAREN_CLOSE)

    @property
    def opens_brace_level(self) -> bool:
        return self in (ChunkKind.BRACE_OPEN, ChunkKind.VBRACE_OPEN)

    @property
    def closes_brace_level(self) -> bool:
        return self in (ChunkKind.BRACE_CLOSE, ChunkKind.VBRACE_CLOSE)

    @property
    def is_virtual(self) -> bool:
        return self in (ChunkKind.VBRACE_OPEN, ChunkKind.VBRACE_CLOSE)

    @property
    def closing(self) -> "ChunkKind | None":
        """The kind that closes this opening kind."""
        return OPEN_TO_CLOSE.get(self)


OPEN_TO_CLOSE: Final[dict[ChunkKind, ChunkKind]] = {
    ChunkKind.PAREN_OPEN: ChunkKind.PAREN_CLOSE,
    ChunkKind.SPAREN_OPEN: ChunkKind.SPAREN_CLOSE,
    ChunkKind.FPAREN_OPEN: ChunkKind.FPAREN_CLOSE,
    ChunkKind.BRACE_OPEN: ChunkKind.BRACE_CLOSE,
    ChunkKind.VBRACE_OPEN: ChunkKind.VBRACE_CLOSE,
    ChunkKind.SQUARE_OPEN: ChunkKind.SQUARE_CLOSE,
    ChunkKind.ANGLE_OPEN: ChunkKind.ANGLE_CLOSE,
}

CLOSE_TO_OPEN: Final[dict[ChunkKind, ChunkKind]] = {close: open_ for open_, close in OPEN_TO_CLOSE.items()}


class PatternClass(IntEnum):
    """How a keyword is followed by its condition and body."""

    NONE = 0
    BRACED = 1  # keyword + braced stmt: do, try
    PBRACED = 2  # keyword + parens + braced stmt: if, for, while, switch
    OPBRACED = 3  # keyword + optional parens + braced stmt: catch, version
    VBRACED = 4  # keyword + value + braced stmt: namespace
    PAREN = 5  # keyword + parens: while-of-do
    ELSE = 6  # braced stmt that may chain into an if


_PATTERN_CLASSES: Final[dict[ChunkKind, PatternClass]] = {
    ChunkKind.IF: PatternClass.PBRACED,
    ChunkKind.ELSEIF: PatternClass.PBRACED,
    ChunkKind.SWITCH: PatternClass.PBRACED,
    ChunkKind.FOR: PatternClass.PBRACED,
    ChunkKind.WHILE: PatternClass.PBRACED,
    ChunkKind.SYNCHRONIZED: PatternClass.PBRACED,
    ChunkKind.LOCK: PatternClass.PBRACED,
    ChunkKind.ELSE: PatternClass.ELSE,
    ChunkKind.DO: PatternClass.BRACED,
    ChunkKind.TRY: PatternClass.BRACED,
    ChunkKind.FINALLY: PatternClass.BRACED,
    ChunkKind.UNITTEST: PatternClass.BRACED,
    ChunkKind.CATCH: PatternClass.OPBRACED,
    ChunkKind.VERSION: PatternClass.OPBRACED,
    ChunkKind.NAMESPACE: PatternClass.VBRACED,
    ChunkKind.WHILE_OF_DO: PatternClass.PAREN,
}


def pattern_class(kind: ChunkKind) -> PatternClass:
    return _PATTERN_CLASSES.get(kind, PatternClass.NONE)
