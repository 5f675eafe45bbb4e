"""Owning, doubly-linked chunk list backed by an index arena."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import replace
from enum import IntEnum

from chunkpy.chunk.chunk import Chunk, ChunkRef
from chunkpy.errors import StreamIntegrityError
from chunkpy.syntax import ChunkKind, copy_relevant_flags, flag_names
from chunkpy.text import TextSpan

_SENTINEL = 0


class Nav(IntEnum):
    """Navigation filter for stepping through the stream."""

    ALL = 0
    # Inside a directive: stop at its edge. Outside: skip directives.
    PREPROC = 1


class ChunkStream:
    """All chunks of one file, in source order.

    Chunks live in arena slots addressed by index. Slot 0 is a sentinel
    whose `_next` is the first chunk and whose `_prev` is the last, so an
    empty stream is a sentinel linked to itself. Removing a chunk bumps its
    slot's generation, which invalidates every outstanding ChunkRef.

    Nothing here recomputes `level`/`brace_level`/`pp_level`; callers that
    splice chunks rerun brace cleanup when they need them.
    """

    def __init__(self) -> None:
        sentinel = Chunk(ChunkKind.NONE)
        sentinel._index = _SENTINEL
        sentinel._next = _SENTINEL
        sentinel._prev = _SENTINEL
        self._slots: list[Chunk | None] = [sentinel]
        self._generations: list[int] = [0]
        self._free: list[int] = []
        self._count = 0

    # ------------------------------------------------------------------
    # Size / iteration
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[Chunk]:
        chunk = self.head
        while chunk is not None:
            yield chunk
            chunk = self.get_next(chunk)

    def __reversed__(self) -> Iterator[Chunk]:
        chunk = self.tail
        while chunk is not None:
            yield chunk
            chunk = self.get_prev(chunk)

    def iter_from(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Iterator[Chunk]:
        current: Chunk | None = chunk
        while current is not None:
            yield current
            current = self.get_next(current, nav)

    @property
    def head(self) -> Chunk | None:
        return self._link(self._sentinel._next)

    @property
    def tail(self) -> Chunk | None:
        return self._link(self._sentinel._prev)

    # ------------------------------------------------------------------
    # Refs
    # ------------------------------------------------------------------

    def resolve(self, ref: ChunkRef | None) -> Chunk | None:
        """Return the chunk behind `ref`, or None if it was removed."""
        if ref is None or ref.index <= _SENTINEL or ref.index >= len(self._slots):
            return None
        chunk = self._slots[ref.index]
        if chunk is None or chunk._generation != ref.generation:
            return None
        return chunk

    def is_live(self, chunk: Chunk) -> bool:
        return 0 < chunk._index < len(self._slots) and self._slots[chunk._index] is chunk

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get_next(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        nxt = self._link(chunk._next)
        if nav == Nav.ALL or nxt is None:
            return nxt
        if chunk.in_preproc:
            return nxt if nxt.in_preproc else None
        while nxt is not None and nxt.in_preproc:
            nxt = self._link(nxt._next)
        return nxt

    def get_prev(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        prv = self._link(chunk._prev)
        if nav == Nav.ALL or prv is None:
            return prv
        if chunk.in_preproc:
            return prv if prv.in_preproc else None
        while prv is not None and prv.in_preproc:
            prv = self._link(prv._prev)
        return prv

    def get_next_nc(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        """Next chunk that is not a comment."""
        return self._scan(chunk, self.get_next, nav, lambda c: c.is_comment)

    def get_next_nnl(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        """Next chunk that is not a newline."""
        return self._scan(chunk, self.get_next, nav, lambda c: c.is_newline)

    def get_next_ncnl(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        """Next chunk that is neither a comment nor a newline."""
        return self._scan(chunk, self.get_next, nav, lambda c: c.is_comment_or_newline)

    def get_prev_nc(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        return self._scan(chunk, self.get_prev, nav, lambda c: c.is_comment)

    def get_prev_nnl(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        return self._scan(chunk, self.get_prev, nav, lambda c: c.is_newline)

    def get_prev_ncnl(self, chunk: Chunk, nav: Nav = Nav.ALL) -> Chunk | None:
        return self._scan(chunk, self.get_prev, nav, lambda c: c.is_comment_or_newline)

    def _scan(
        self,
        chunk: Chunk,
        step: Callable[[Chunk, Nav], Chunk | None],
        nav: Nav,
        skip: Callable[[Chunk], bool],
    ) -> Chunk | None:
        current = step(chunk, nav)
        while current is not None and skip(current):
            current = step(current, nav)
        return current

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, chunk: Chunk) -> Chunk:
        return self._insert(chunk, self._sentinel._prev)

    def prepend(self, chunk: Chunk) -> Chunk:
        return self._insert(chunk, _SENTINEL)

    def add_after(self, chunk: Chunk, ref: Chunk) -> Chunk:
        self._require_live(ref)
        return self._insert(chunk, ref._index)

    def add_before(self, chunk: Chunk, ref: Chunk) -> Chunk:
        self._require_live(ref)
        return self._insert(chunk, ref._prev)

    def remove(self, chunk: Chunk) -> None:
        """Splice `chunk` out. Refs to it stop resolving."""
        self._require_live(chunk)
        prv = self._slot(chunk._prev)
        nxt = self._slot(chunk._next)
        prv._next = nxt._index
        nxt._prev = prv._index

        index = chunk._index
        self._slots[index] = None
        self._generations[index] += 1
        self._free.append(index)
        self._count -= 1

        chunk._index = -1
        chunk._next = -1
        chunk._prev = -1

    def synthesize_after(self, ref: Chunk, kind: ChunkKind, text: str = "") -> Chunk:
        """Insert a new chunk after `ref` that inherits only its copy flags."""
        return self.add_after(self._synthesized(ref, kind, text, ref.span.end), ref)

    def synthesize_before(self, ref: Chunk, kind: ChunkKind, text: str = "") -> Chunk:
        return self.add_before(self._synthesized(ref, kind, text, ref.span.start), ref)

    def split(self, chunk: Chunk, offset: int) -> Chunk:
        """Cut `chunk` at `offset` characters; the tail becomes a new chunk after it."""
        if offset <= 0 or offset >= chunk.length:
            raise ValueError(f"Cannot split {chunk.describe()} at {offset}")
        self._require_live(chunk)
        if chunk.span.length == chunk.length:
            head_span, tail_span = chunk.span.split_at(offset)
        else:
            head_span, tail_span = chunk.span, TextSpan.empty(chunk.span.end)
        tail = replace(
            chunk,
            text=chunk.text[offset:],
            span=tail_span,
            orig_col=chunk.orig_col + offset,
            column=chunk.column + offset,
            flags=copy_relevant_flags(chunk.flags),
            _index=-1,
            _generation=0,
            _next=-1,
            _prev=-1,
        )
        chunk.text = chunk.text[:offset]
        chunk.span = head_span
        chunk.orig_col_end = chunk.orig_col + offset
        return self.add_after(tail, chunk)

    def _synthesized(self, ref: Chunk, kind: ChunkKind, text: str, offset: int) -> Chunk:
        return Chunk(
            kind=kind,
            text=text,
            span=TextSpan.empty(offset),
            orig_line=ref.orig_line,
            orig_col=ref.orig_col,
            orig_col_end=ref.orig_col,
            column=ref.column,
            level=ref.level,
            brace_level=ref.brace_level,
            pp_level=ref.pp_level,
            flags=copy_relevant_flags(ref.flags),
        )

    # ------------------------------------------------------------------
    # Integrity
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Walk both directions and check every link. Raises on corruption."""
        seen = 0
        prev_index = _SENTINEL
        index = self._sentinel._next
        while index != _SENTINEL:
            chunk = self._slot(index)
            if chunk._prev != prev_index:
                raise StreamIntegrityError(f"Broken back-link at slot {index}: {chunk.describe()}")
            seen += 1
            if seen > self._count:
                raise StreamIntegrityError("Forward walk is longer than the stream (cycle?)")
            prev_index = index
            index = chunk._next
        if self._sentinel._prev != prev_index:
            raise StreamIntegrityError("Sentinel tail link does not match the last chunk")
        if seen != self._count:
            raise StreamIntegrityError(f"Forward walk saw {seen} chunks, expected {self._count}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @property
    def _sentinel(self) -> Chunk:
        return self._slot(_SENTINEL)

    def _slot(self, index: int) -> Chunk:
        chunk = self._slots[index] if 0 <= index < len(self._slots) else None
        if chunk is None:
            raise StreamIntegrityError(f"Link points at empty slot {index}")
        return chunk

    def _link(self, index: int) -> Chunk | None:
        if index == _SENTINEL:
            return None
        return self._slot(index)

    def _require_live(self, chunk: Chunk) -> None:
        if not self.is_live(chunk):
            raise StreamIntegrityError(f"{chunk.describe()} is not part of this stream")

    def _insert(self, chunk: Chunk, after_index: int) -> Chunk:
        if chunk._index != -1:
            raise StreamIntegrityError(f"{chunk.describe()} is already linked")
        prv = self._slot(after_index)
        nxt = self._slot(prv._next)

        if self._free:
            index = self._free.pop()
            self._slots[index] = chunk
        else:
            index = len(self._slots)
            self._slots.append(chunk)
            self._generations.append(0)

        chunk._index = index
        chunk._generation = self._generations[index]
        chunk._prev = prv._index
        chunk._next = nxt._index
        prv._next = index
        nxt._prev = index
        self._count += 1
        return chunk


def dump_chunks(stream: ChunkStream) -> list[str]:
    """Render one debug line per chunk: kind, parent, levels, flags, text."""
    lines: list[str] = []
    for i, chunk in enumerate(stream):
        text = chunk.text.replace("\n", "\\n").replace("\r", "\\r")
        flags = ",".join(flag_names(chunk.flags)) or "-"
        lines.append(
            f"{i:03d} {chunk.kind.name:<14} parent={chunk.parent_kind.name:<12} "
            f"line={chunk.orig_line} col={chunk.orig_col} "
            f"lvl={chunk.level}/{chunk.brace_level}/{chunk.pp_level} "
            f"flags={flags} text={text!r}"
        )
    return lines
