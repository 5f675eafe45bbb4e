"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

from chunkpy.text import TextSpan

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the lexer, cleanup and pipeline."""

    code: str
    message: str
    span: TextSpan
    line: int = 0
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
