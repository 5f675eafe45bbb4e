"""Resolved settings consumed by cleanup."""

from dataclasses import dataclass, replace
from pathlib import PurePath

from chunkpy.syntax import LanguageMask, language_from_filename


@dataclass(frozen=True, slots=True)
class CleanupOptions:
    """One resolved value per knob. Never mutated during a run."""

    language: LanguageMask = LanguageMask.CPP
    input_tab_size: int = 8
    # True: `else` + newline + `if` stays a nested statement instead of an else-if chain.
    indent_else_if: bool = False
    max_paren_depth: int = 1024
    max_frames: int = 256
    max_align_entries: int = 1024
    # nominal indent step recorded on paren stack entries
    indent_columns: int = 4

    @staticmethod
    def for_language(language: LanguageMask) -> "CleanupOptions":
        return CleanupOptions(language=language)

    @staticmethod
    def for_filename(path: str | PurePath) -> "CleanupOptions":
        return CleanupOptions(language=language_from_filename(path))

    def with_language(self, language: LanguageMask) -> "CleanupOptions":
        return replace(self, language=language)
