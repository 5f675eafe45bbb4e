"""Result carrier for one cleanup run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chunkpy.diagnostics import has_errors

if TYPE_CHECKING:
    from chunkpy.cleanup import StageTransition
    from chunkpy.context import ParseContext
    from chunkpy.diagnostics import Diagnostic


@dataclass(slots=True)
class CleanupRunResult:
    """Output of `run_cleanup`.

    `output_text` is None when the run was aborted by a fatal error; the
    context still holds everything that was built up to that point.
    """

    source_text: str
    context: ParseContext
    output_text: str | None = None
    transitions: list[StageTransition] = field(default_factory=list)
    failed: bool = False

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.context.diagnostics

    @property
    def error_count(self) -> int:
        return self.context.error_count

    @property
    def has_errors(self) -> bool:
        return self.failed or self.context.error_count > 0 or has_errors(self.context.diagnostics)

    @property
    def changed(self) -> bool:
        return self.output_text is not None and self.output_text != self.source_text
