"""Keyword lookup gated by language mask."""

from dataclasses import dataclass
from typing import Final

from chunkpy.syntax import ChunkKind, LanguageMask

_L = LanguageMask
_BRACED_LANGS: Final[LanguageMask] = _L.CPP | _L.D | _L.CS | _L.JAVA | _L.OC


@dataclass(frozen=True, slots=True)
class KeywordTag:
    tag: str
    kind: ChunkKind
    languages: LanguageMask


KEYWORDS: Final[tuple[KeywordTag, ...]] = (
    KeywordTag("if", ChunkKind.IF, _L.ALL),
    KeywordTag("else", ChunkKind.ELSE, _L.ALL),
    KeywordTag("for", ChunkKind.FOR, _L.ALL),
    KeywordTag("foreach", ChunkKind.FOR, _L.CS | _L.D),
    KeywordTag("while", ChunkKind.WHILE, _L.ALL),
    KeywordTag("do", ChunkKind.DO, _L.ALL),
    KeywordTag("switch", ChunkKind.SWITCH, _L.ALL),
    KeywordTag("case", ChunkKind.CASE, _L.ALL),
    KeywordTag("default", ChunkKind.DEFAULT, _L.ALL),
    KeywordTag("try", ChunkKind.TRY, _BRACED_LANGS),
    KeywordTag("catch", ChunkKind.CATCH, _BRACED_LANGS),
    KeywordTag("finally", ChunkKind.FINALLY, _L.D | _L.CS | _L.JAVA),
    KeywordTag("namespace", ChunkKind.NAMESPACE, _L.CPP | _L.CS),
    KeywordTag("class", ChunkKind.CLASS, _BRACED_LANGS),
    KeywordTag("struct", ChunkKind.STRUCT, _L.C | _L.CPP | _L.D | _L.CS | _L.OC),
    KeywordTag("union", ChunkKind.UNION, _L.C | _L.CPP | _L.D | _L.OC),
    KeywordTag("enum", ChunkKind.ENUM, _L.ALL),
    KeywordTag("typedef", ChunkKind.TYPEDEF, _L.C | _L.CPP | _L.D | _L.OC),
    KeywordTag("return", ChunkKind.RETURN, _L.ALL),
    KeywordTag("goto", ChunkKind.GOTO, _L.C | _L.CPP | _L.D | _L.CS | _L.OC | _L.PAWN),
    KeywordTag("break", ChunkKind.BREAK, _L.ALL),
    KeywordTag("continue", ChunkKind.CONTINUE, _L.ALL),
    KeywordTag("using", ChunkKind.USING, _L.CPP | _L.CS),
    KeywordTag("synchronized", ChunkKind.SYNCHRONIZED, _L.JAVA | _L.D),
    KeywordTag("lock", ChunkKind.LOCK, _L.CS),
    KeywordTag("version", ChunkKind.VERSION, _L.D),
    KeywordTag("unittest", ChunkKind.UNITTEST, _L.D),
    KeywordTag("void", ChunkKind.TYPE, _L.ALLC),
    KeywordTag("char", ChunkKind.TYPE, _L.ALLC),
    KeywordTag("short", ChunkKind.TYPE, _L.ALLC),
    KeywordTag("int", ChunkKind.TYPE, _L.ALLC),
    KeywordTag("long", ChunkKind.TYPE, _L.ALLC),
    KeywordTag("float", ChunkKind.TYPE, _L.ALLC | _L.PAWN),
    KeywordTag("double", ChunkKind.TYPE, _L.ALLC),
    KeywordTag("signed", ChunkKind.TYPE, _L.C | _L.CPP | _L.OC),
    KeywordTag("unsigned", ChunkKind.TYPE, _L.C | _L.CPP | _L.OC),
    KeywordTag("bool", ChunkKind.TYPE, _L.CPP | _L.D | _L.CS),
    KeywordTag("boolean", ChunkKind.TYPE, _L.JAVA),
    # Directive names: only right after '#'.
    KeywordTag("if", ChunkKind.PP_IF, _L.ALL | _L.PP),
    KeywordTag("ifdef", ChunkKind.PP_IF, _L.ALL | _L.PP),
    KeywordTag("ifndef", ChunkKind.PP_IF, _L.ALL | _L.PP),
    KeywordTag("elif", ChunkKind.PP_ELSE, _L.ALL | _L.PP),
    KeywordTag("else", ChunkKind.PP_ELSE, _L.ALL | _L.PP),
    KeywordTag("endif", ChunkKind.PP_ENDIF, _L.ALL | _L.PP),
    KeywordTag("define", ChunkKind.PP_DEFINE, _L.ALL | _L.PP),
    KeywordTag("include", ChunkKind.PP_INCLUDE, _L.ALL | _L.PP),
    KeywordTag("import", ChunkKind.PP_INCLUDE, _L.OC | _L.PP),
)

_BY_TAG: Final[dict[str, tuple[KeywordTag, ...]]] = {}
for _entry in KEYWORDS:
    _BY_TAG[_entry.tag] = (*_BY_TAG.get(_entry.tag, ()), _entry)


def find_keyword(word: str, language: LanguageMask, *, in_preproc: bool = False) -> ChunkKind | None:
    """Look up `word` for the active language.

    With `in_preproc`, only directive names match; anything else there is
    an unrecognized directive and maps to PP_OTHER.
    """
    for entry in _BY_TAG.get(word, ()):
        if bool(entry.languages & LanguageMask.PP) != in_preproc:
            continue
        if entry.languages.applies_to(language, in_preproc=in_preproc):
            return entry.kind
    return ChunkKind.PP_OTHER if in_preproc else None
