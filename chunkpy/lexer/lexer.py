"""Lexer for C-family sources."""

from dataclasses import dataclass
from typing import Final

from chunkpy.chunk import Chunk
from chunkpy.diagnostics import (
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
    Diagnostic,
    from_spec,
)
from chunkpy.lexer.keywords import find_keyword
from chunkpy.syntax import ChunkFlags, ChunkKind, LanguageMask
from chunkpy.text import TextSpan

_PUNCTUATORS: Final[dict[str, ChunkKind]] = {
    "<<=": ChunkKind.ASSIGN,
    ">>=": ChunkKind.ASSIGN,
    "->*": ChunkKind.MEMBER,
    "...": ChunkKind.UNKNOWN,
    "==": ChunkKind.COMPARE,
    "!=": ChunkKind.COMPARE,
    "<=": ChunkKind.COMPARE,
    ">=": ChunkKind.COMPARE,
    "&&": ChunkKind.BOOL,
    "||": ChunkKind.BOOL,
    "++": ChunkKind.INCDEC,
    "--": ChunkKind.INCDEC,
    "+=": ChunkKind.ASSIGN,
    "-=": ChunkKind.ASSIGN,
    "*=": ChunkKind.ASSIGN,
    "/=": ChunkKind.ASSIGN,
    "%=": ChunkKind.ASSIGN,
    "&=": ChunkKind.ASSIGN,
    "|=": ChunkKind.ASSIGN,
    "^=": ChunkKind.ASSIGN,
    "<<": ChunkKind.ARITH,
    ">>": ChunkKind.ARITH,
    "->": ChunkKind.MEMBER,
    "::": ChunkKind.DC_MEMBER,
    "=": ChunkKind.ASSIGN,
    "<": ChunkKind.COMPARE,
    ">": ChunkKind.COMPARE,
    "+": ChunkKind.PLUS,
    "-": ChunkKind.MINUS,
    "*": ChunkKind.STAR,
    "&": ChunkKind.AMP,
    "/": ChunkKind.ARITH,
    "%": ChunkKind.ARITH,
    "^": ChunkKind.ARITH,
    "|": ChunkKind.ARITH,
    "!": ChunkKind.NOT,
    "~": ChunkKind.INV,
    ":": ChunkKind.COLON,
    "?": ChunkKind.QUESTION,
    ",": ChunkKind.COMMA,
    ";": ChunkKind.SEMICOLON,
    ".": ChunkKind.DOT,
    "(": ChunkKind.PAREN_OPEN,
    ")": ChunkKind.PAREN_CLOSE,
    "{": ChunkKind.BRACE_OPEN,
    "}": ChunkKind.BRACE_CLOSE,
    "[": ChunkKind.SQUARE_OPEN,
    "]": ChunkKind.SQUARE_CLOSE,
}


@dataclass(slots=True)
class NewlineCounts:
    """How often each line-ending convention was seen."""

    lf: int = 0
    crlf: int = 0
    cr: int = 0

    def preferred(self) -> str:
        """Most frequent ending; LF wins ties and empty input."""
        best, newline = self.lf, "\n"
        if self.crlf > best:
            best, newline = self.crlf, "\r\n"
        if self.cr > best:
            newline = "\r"
        return newline


@dataclass(slots=True)
class _Directive:
    active: bool = False
    kind: ChunkKind = ChunkKind.NONE
    expect_name: bool = False


class Lexer:
    """Turns source text into raw chunks.

    Chunk kinds come from punctuation and the keyword table only; brace
    cleanup refines them later. Newlines merge consecutive blank lines
    into one NEWLINE chunk whose `nl_count` is the number of line breaks.
    """

    def __init__(
        self,
        source: str,
        *,
        language: LanguageMask = LanguageMask.CPP,
        tab_size: int = 8,
    ) -> None:
        self._source = source
        self._language = language
        self._tab_size = max(tab_size, 1)
        self._position = 0
        self._line = 1
        self._column = 1
        self._line_has_token = False
        self._directive = _Directive()
        self._newlines = NewlineCounts()
        self._diagnostics: list[Diagnostic] = []
        self._chunks: list[Chunk] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def newline_counts(self) -> NewlineCounts:
        return self._newlines

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def tokenize(self) -> list[Chunk]:
        after_tab = False
        while not self.is_eof:
            ch = self._current_char()
            if ch == " " or ch == "\t":
                after_tab = self._consume_whitespace()
                continue
            if ch == "\\" and self._newline_length(1) and self._directive.active:
                self._lex_continuation()
                after_tab = False
                continue
            if self._newline_length(0):
                self._lex_newline()
                after_tab = False
                continue
            self._lex_token(after_tab)
            after_tab = False
        return self._chunks

    # ------------------------------------------------------------------
    # Token kinds
    # ------------------------------------------------------------------

    def _lex_token(self, after_tab: bool) -> None:
        start, line, col = self._position, self._line, self._column
        ch = self._current_char()
        nxt = self._peek_char()

        if ch == "#" and not self._line_has_token:
            self._advance(1)
            self._directive = _Directive(active=True, expect_name=True)
            self._emit(ChunkKind.PREPROC, start, line, col, after_tab)
            return

        if ch == "/" and nxt == "/":
            self._consume_until_newline()
            self._emit(ChunkKind.COMMENT_CPP, start, line, col, after_tab)
            return

        if ch == "/" and nxt == "*":
            kind = self._lex_block_comment(start, line)
            self._emit(kind, start, line, col, after_tab)
            return

        if ch == '"' or ch == "'":
            self._lex_string(ch, start, line)
            self._emit(ChunkKind.STRING, start, line, col, after_tab)
            return

        if ch.isdigit() or (ch == "." and nxt.isdigit()):
            self._lex_number()
            self._emit(ChunkKind.NUMBER, start, line, col, after_tab)
            return

        if ch.isalpha() or ch == "_" or ch == "$":
            self._lex_word(start, line, col, after_tab)
            return

        for width in (3, 2, 1):
            kind = _PUNCTUATORS.get(self._source[self._position : self._position + width])
            if kind is not None:
                self._advance(width)
                self._emit(kind, start, line, col, after_tab)
                return

        # Fallback: keep the byte so nothing is lost.
        self._advance(1)
        self._emit(ChunkKind.UNKNOWN, start, line, col, after_tab)

    def _lex_word(self, start: int, line: int, col: int, after_tab: bool) -> None:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_" or ch == "$":
                self._advance(1)
                continue
            break
        word = self._source[start : self._position]

        if self._directive.expect_name:
            kind = find_keyword(word, self._language, in_preproc=True) or ChunkKind.PP_OTHER
            self._directive.kind = kind
            self._directive.expect_name = False
            self._emit(kind, start, line, col, after_tab)
            if kind in (ChunkKind.PP_INCLUDE, ChunkKind.PP_OTHER):
                self._lex_directive_body()
            return

        kind = find_keyword(word, self._language) or ChunkKind.WORD
        self._emit(kind, start, line, col, after_tab)

    def _lex_directive_body(self) -> None:
        """Swallow the rest of an opaque directive into one PREPROC_BODY chunk."""
        after_tab = self._consume_whitespace()
        start, line, col = self._position, self._line, self._column
        while not self.is_eof:
            if self._newline_length(0):
                break
            if self._current_char() == "\\" and self._newline_length(1):
                break
            if self._source.startswith("//", self._position) or self._source.startswith("/*", self._position):
                break
            self._advance(1)
        end = self._position
        while end > start and self._source[end - 1] in " \t":
            end -= 1
        if end > start:
            self._position = start
            self._column = col
            self._advance(end - start)
            self._emit(ChunkKind.PREPROC_BODY, start, line, col, after_tab)

    def _lex_block_comment(self, start: int, line: int) -> ChunkKind:
        self._advance(2)
        multiline = False
        while not self.is_eof:
            if self._source.startswith("*/", self._position):
                self._advance(2)
                return ChunkKind.COMMENT_MULTI if multiline else ChunkKind.COMMENT
            width = self._newline_length(0)
            if width:
                self._count_newline(width)
                self._advance_line(width)
                multiline = True
                continue
            self._advance(1)
        self._diagnostics.append(from_spec(LEXER_UNTERMINATED_COMMENT, TextSpan(start, self._position), line))
        return ChunkKind.COMMENT_MULTI if multiline else ChunkKind.COMMENT

    def _lex_string(self, quote: str, start: int, line: int) -> None:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == quote:
                self._advance(1)
                return
            if ch == "\\":
                self._advance(1)
                if not self.is_eof and not self._newline_length(0):
                    self._advance(1)
                continue
            if self._newline_length(0):
                break
            self._advance(1)
        self._diagnostics.append(from_spec(LEXER_UNTERMINATED_STRING, TextSpan(start, self._position), line))

    def _lex_number(self) -> None:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_" or ch == ".":
                self._advance(1)
                continue
            # exponent sign: 1e+5, 0x1p-3
            if ch in "+-" and self._source[self._position - 1] in "eEpP":
                self._advance(1)
                continue
            break

    def _lex_newline(self) -> None:
        start, line, col = self._position, self._line, self._column
        count = 0
        while True:
            width = self._newline_length(0)
            if not width:
                break
            self._count_newline(width)
            self._advance_line(width)
            count += 1
            # Fold whitespace-only lines into the same chunk.
            lookahead = self._position
            while lookahead < len(self._source) and self._source[lookahead] in " \t":
                lookahead += 1
            if lookahead < len(self._source) and self._source[lookahead] in "\r\n":
                self._column += lookahead - self._position
                self._position = lookahead
        # The newline that ends a directive is not part of it.
        self._directive = _Directive()
        self._line_has_token = False
        chunk = self._make(ChunkKind.NEWLINE, start, self._position, line, col, False)
        chunk.nl_count = count
        self._chunks.append(chunk)

    def _lex_continuation(self) -> None:
        start, line, col = self._position, self._line, self._column
        self._advance(1)
        width = self._newline_length(0)
        self._count_newline(width)
        self._advance_line(width)
        chunk = self._make(ChunkKind.NL_CONT, start, self._position, line, col, False)
        chunk.nl_count = 1
        self._chunks.append(chunk)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, kind: ChunkKind, start: int, line: int, col: int, after_tab: bool) -> None:
        self._chunks.append(self._make(kind, start, self._position, line, col, after_tab))
        self._line_has_token = True

    def _make(self, kind: ChunkKind, start: int, end: int, line: int, col: int, after_tab: bool) -> Chunk:
        chunk = Chunk(
            kind=kind,
            text=self._source[start:end],
            span=TextSpan(start, end),
            orig_line=line,
            orig_col=col,
            orig_col_end=self._column,
            column=col,
            after_tab=after_tab,
        )
        if self._directive.active:
            chunk.set_flags(ChunkFlags.IN_PREPROC)
        return chunk

    def _consume_whitespace(self) -> bool:
        saw_tab = False
        while not self.is_eof:
            ch = self._current_char()
            if ch == " ":
                self._advance(1)
            elif ch == "\t":
                saw_tab = True
                self._position += 1
                self._column = ((self._column - 1) // self._tab_size + 1) * self._tab_size + 1
            else:
                break
        return saw_tab

    def _consume_until_newline(self) -> None:
        while not self.is_eof and not self._newline_length(0):
            self._advance(1)

    def _newline_length(self, ahead: int) -> int:
        index = self._position + ahead
        if index >= len(self._source):
            return 0
        ch = self._source[index]
        if ch == "\n":
            return 1
        if ch == "\r":
            return 2 if self._source.startswith("\n", index + 1) else 1
        return 0

    def _count_newline(self, width: int) -> None:
        text = self._source[self._position : self._position + width]
        if text == "\r\n":
            self._newlines.crlf += 1
        elif text == "\r":
            self._newlines.cr += 1
        else:
            self._newlines.lf += 1

    def _advance_line(self, width: int) -> None:
        self._position += width
        self._line += 1
        self._column = 1

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps
        self._column += steps
