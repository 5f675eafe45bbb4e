"""Source dialect masks."""

from enum import IntFlag
from pathlib import PurePath
from typing import Final


class LanguageMask(IntFlag):
    """Which dialects a keyword or rule applies to."""

    NONE = 0
    C = 0x01
    CPP = 0x02
    D = 0x04
    CS = 0x08  # C#
    JAVA = 0x10
    OC = 0x20  # Objective-C
    PAWN = 0x40

    ALLC = 0x3F  # every classic C-family dialect (not Pawn)
    ALL = 0x7F

    PP = 0x80  # only valid inside a preprocessor directive

    @property
    def dialects(self) -> "LanguageMask":
        """The mask without the preprocessor-only bit."""
        return self & LanguageMask.ALL

    def applies_to(self, language: "LanguageMask", *, in_preproc: bool = False) -> bool:
        """Check whether a tag with this mask is active for `language`.

        Tags carrying PP only match inside a directive.
        """
        if self & LanguageMask.PP and not in_preproc:
            return False
        return bool(self.dialects & language)


_EXTENSIONS: Final[dict[str, LanguageMask]] = {
    ".c": LanguageMask.C,
    ".h": LanguageMask.CPP,
    ".cpp": LanguageMask.CPP,
    ".cc": LanguageMask.CPP,
    ".cxx": LanguageMask.CPP,
    ".hpp": LanguageMask.CPP,
    ".hh": LanguageMask.CPP,
    ".d": LanguageMask.D,
    ".di": LanguageMask.D,
    ".cs": LanguageMask.CS,
    ".java": LanguageMask.JAVA,
    ".m": LanguageMask.OC,
    ".mm": LanguageMask.OC | LanguageMask.CPP,
    ".p": LanguageMask.PAWN,
    ".pawn": LanguageMask.PAWN,
    ".sma": LanguageMask.PAWN,
}


def language_from_filename(path: str | PurePath, default: LanguageMask = LanguageMask.CPP) -> LanguageMask:
    suffix = PurePath(path).suffix.lower()
    return _EXTENSIONS.get(suffix, default)
