"""Lexer and keyword table."""

from chunkpy.lexer.keywords import KEYWORDS, KeywordTag, find_keyword
from chunkpy.lexer.lexer import Lexer, NewlineCounts
from chunkpy.lexer.tokenize import mark_functions, tokenize_into

__all__ = [
    "KEYWORDS",
    "KeywordTag",
    "Lexer",
    "NewlineCounts",
    "find_keyword",
    "mark_functions",
    "tokenize_into",
]
