"""LIFO of chunk refs tagged with sequence numbers."""

from dataclasses import dataclass

from chunkpy.chunk.chunk import Chunk, ChunkRef
from chunkpy.chunk.stream import ChunkStream


@dataclass(frozen=True, slots=True)
class ChunkStackEntry:
    ref: ChunkRef | None  # None once zapped
    seqnum: int


class ChunkStack:
    """Stack used by the alignment passes to remember chunks.

    Each push is stamped with a sequence number. Callers that advance the
    stack and the chunk walk independently compare sequence numbers to
    spot entries pushed or popped in between.
    """

    def __init__(self, stream: ChunkStream) -> None:
        self._stream = stream
        self._entries: list[ChunkStackEntry] = []
        self._seqnum = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def seqnum(self) -> int:
        """The last sequence number handed out."""
        return self._seqnum

    def set_seqnum(self, seqnum: int) -> None:
        self._seqnum = seqnum

    def push(self, chunk: Chunk, seqnum: int | None = None) -> int:
        if seqnum is None:
            self._seqnum += 1
            seqnum = self._seqnum
        self._entries.append(ChunkStackEntry(chunk.ref, seqnum))
        return seqnum

    def pop(self) -> ChunkStackEntry | None:
        if not self._entries:
            return None
        return self._entries.pop()

    def pop_front(self) -> ChunkStackEntry | None:
        if not self._entries:
            return None
        return self._entries.pop(0)

    def top(self) -> ChunkStackEntry | None:
        if not self._entries:
            return None
        return self._entries[-1]

    def get(self, index: int) -> ChunkStackEntry | None:
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[index]

    def chunk_at(self, index: int) -> Chunk | None:
        entry = self.get(index)
        return None if entry is None else self.resolve(entry)

    def resolve(self, entry: ChunkStackEntry) -> Chunk | None:
        """The chunk behind `entry`, or None if zapped or removed from the stream."""
        return self._stream.resolve(entry.ref)

    def zap(self, index: int) -> None:
        """Blank out one entry in place; `collapse` drops the blanks."""
        entry = self.get(index)
        if entry is not None:
            self._entries[index] = ChunkStackEntry(None, entry.seqnum)

    def collapse(self) -> None:
        self._entries = [entry for entry in self._entries if entry.ref is not None]

    def reset(self) -> None:
        self._entries.clear()
