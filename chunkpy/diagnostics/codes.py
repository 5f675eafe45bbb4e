"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string or character literal.",
    hint="Close the literal with a matching quote before the end of the line.",
    severity="warning",
    category="lexer",
)

LEXER_UNTERMINATED_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_COMMENT",
    message="Unterminated block comment.",
    hint="Close the comment with `*/`.",
    severity="warning",
    category="lexer",
)

CLEANUP_UNEXPECTED_CLOSE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_UNEXPECTED_CLOSE",
    message="Closing token does not match the open one.",
    severity="warning",
    category="cleanup",
)

CLEANUP_EXPECTED_PAREN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_EXPECTED_PAREN",
    message="Expected `(` after keyword; the statement is dropped.",
    severity="warning",
    category="cleanup",
)

CLEANUP_EXPECTED_WHILE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_EXPECTED_WHILE",
    message="Expected `while` after `do` body.",
    severity="warning",
    category="cleanup",
)

CLEANUP_EXPECTED_WOD_SEMI: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_EXPECTED_WOD_SEMI",
    message="Expected `;` after `do ... while (...)`.",
    hint="The statement is closed anyway.",
    severity="warning",
    category="cleanup",
)

CLEANUP_BAD_COMPLEX_CLOSE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_BAD_COMPLEX_CLOSE",
    message="Close token arrived in an unexpected brace stage.",
    severity="warning",
    category="cleanup",
)

CLEANUP_UNBALANCED_PREPROC: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_UNBALANCED_PREPROC",
    message="`#else`/`#endif` without a matching `#if`.",
    severity="warning",
    category="cleanup",
)

CLEANUP_UNCLOSED_AT_EOF: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CLEANUP_UNCLOSED_AT_EOF",
    message="Still open at the end of the file.",
    severity="warning",
    category="cleanup",
)

CORE_FATAL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CORE_FATAL",
    message="Processing aborted.",
    severity="error",
    category="core",
)
