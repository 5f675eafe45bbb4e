"""Alignment column table filled by the align passes."""

from collections.abc import Iterator
from dataclasses import dataclass

from chunkpy.errors import AlignTableFullError
from chunkpy.syntax import ChunkKind


@dataclass(frozen=True, slots=True)
class AlignEntry:
    column: int
    kind: ChunkKind
    length: int  # token plus trailing space


class AlignTable:
    """Growable table with a hard ceiling."""

    def __init__(self, max_entries: int = 1024) -> None:
        self._max_entries = max_entries
        self._entries: list[AlignEntry] = []
        self.c99_array = False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AlignEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> AlignEntry:
        return self._entries[index]

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def add(self, column: int, kind: ChunkKind, length: int) -> AlignEntry:
        if len(self._entries) >= self._max_entries:
            raise AlignTableFullError(self._max_entries)
        entry = AlignEntry(column, kind, length)
        self._entries.append(entry)
        return entry

    def max_end_column(self) -> int:
        """Rightmost column reached by any entry, 0 when empty."""
        return max((entry.column + entry.length for entry in self._entries), default=0)

    def clear(self) -> None:
        self._entries.clear()
        self.c99_array = False
