"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from chunkpy.diagnostics.codes import DiagnosticSpec
from chunkpy.diagnostics.diagnostic import Diagnostic
from chunkpy.text import TextSpan


def from_spec(spec: DiagnosticSpec, span: TextSpan, line: int = 0, *, detail: str | None = None) -> Diagnostic:
    message = spec.message if detail is None else f"{spec.message} {detail}"
    return Diagnostic(
        code=spec.code,
        message=message,
        span=span,
        line=line,
        severity=spec.severity,
        hint=spec.hint,
        category=spec.category,
    )


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)
