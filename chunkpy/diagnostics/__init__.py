"""Diagnostics."""

from chunkpy.diagnostics.codes import (
    CLEANUP_BAD_COMPLEX_CLOSE,
    CLEANUP_EXPECTED_PAREN,
    CLEANUP_EXPECTED_WHILE,
    CLEANUP_EXPECTED_WOD_SEMI,
    CLEANUP_UNBALANCED_PREPROC,
    CLEANUP_UNCLOSED_AT_EOF,
    CLEANUP_UNEXPECTED_CLOSE,
    CORE_FATAL,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
    DiagnosticSpec,
)
from chunkpy.diagnostics.diagnostic import Diagnostic, Severity
from chunkpy.diagnostics.report import from_spec, has_errors

__all__ = [
    "CLEANUP_BAD_COMPLEX_CLOSE",
    "CLEANUP_EXPECTED_PAREN",
    "CLEANUP_EXPECTED_WHILE",
    "CLEANUP_EXPECTED_WOD_SEMI",
    "CLEANUP_UNBALANCED_PREPROC",
    "CLEANUP_UNCLOSED_AT_EOF",
    "CLEANUP_UNEXPECTED_CLOSE",
    "CORE_FATAL",
    "LEXER_UNTERMINATED_COMMENT",
    "LEXER_UNTERMINATED_STRING",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "from_spec",
    "has_errors",
]
