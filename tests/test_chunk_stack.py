from chunkpy.chunk import Chunk, ChunkStack, ChunkStream
from chunkpy.syntax import ChunkKind


def _stream_with(*texts: str) -> tuple[ChunkStream, list[Chunk]]:
    stream = ChunkStream()
    return stream, [stream.append(Chunk(ChunkKind.WORD, text)) for text in texts]


def test_push_stamps_increasing_seqnums() -> None:
    stream, (a, b, c) = _stream_with("a", "b", "c")
    stack = ChunkStack(stream)

    assert stack.push(a) == 1
    assert stack.push(b) == 2
    assert stack.push(c, seqnum=10) == 10
    assert stack.seqnum == 2
    assert [stack.get(i).seqnum for i in range(len(stack))] == [1, 2, 10]


def test_set_seqnum_restarts_numbering() -> None:
    stream, (a,) = _stream_with("a")
    stack = ChunkStack(stream)
    stack.set_seqnum(41)

    assert stack.push(a) == 42


def test_empty_stack_queries_return_none() -> None:
    stack = ChunkStack(ChunkStream())

    assert stack.is_empty
    assert stack.pop() is None
    assert stack.pop_front() is None
    assert stack.top() is None
    assert stack.get(0) is None
    assert stack.chunk_at(3) is None


def test_pop_and_pop_front_take_opposite_ends() -> None:
    stream, (a, b, c) = _stream_with("a", "b", "c")
    stack = ChunkStack(stream)
    for chunk in (a, b, c):
        stack.push(chunk)

    assert stack.resolve(stack.pop()) is c
    assert stack.resolve(stack.pop_front()) is a
    assert stack.chunk_at(0) is b
    assert stack.top().seqnum == 2


def test_entry_of_removed_chunk_resolves_to_none() -> None:
    stream, (a, b) = _stream_with("a", "b")
    stack = ChunkStack(stream)
    stack.push(a)
    stack.push(b)

    stream.remove(a)

    assert stack.chunk_at(0) is None
    assert stack.chunk_at(1) is b


def test_zap_then_collapse_drops_blank_entries() -> None:
    stream, (a, b, c) = _stream_with("a", "b", "c")
    stack = ChunkStack(stream)
    for chunk in (a, b, c):
        stack.push(chunk)

    stack.zap(1)
    assert len(stack) == 3
    assert stack.chunk_at(1) is None
    assert stack.get(1).seqnum == 2

    stack.collapse()
    assert len(stack) == 2
    assert [stack.chunk_at(i) for i in range(2)] == [a, c]

    stack.reset()
    assert stack.is_empty
