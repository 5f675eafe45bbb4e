import dataclasses
import logging

import pytest

from chunkpy.align import AlignTable
from chunkpy.context import CleanupOptions, ParseContext
from chunkpy.diagnostics import CLEANUP_UNEXPECTED_CLOSE
from chunkpy.errors import AlignTableFullError
from chunkpy.format import render_chunks
from chunkpy.lexer import tokenize_into
from chunkpy.syntax import ChunkFlags, ChunkKind, LanguageMask


def test_options_are_frozen_and_resolved_from_filename() -> None:
    options = CleanupOptions.for_filename("src/Main.java")

    assert options.language == LanguageMask.JAVA
    assert options.input_tab_size == 8
    assert options.indent_else_if is False
    assert CleanupOptions.for_language(LanguageMask.D).language == LanguageMask.D
    assert options.with_language(LanguageMask.CS).language == LanguageMask.CS
    assert options.language == LanguageMask.JAVA
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.input_tab_size = 4  # type: ignore[misc]


def test_context_limits_follow_options() -> None:
    ctx = ParseContext(options=CleanupOptions(max_paren_depth=7, max_align_entries=3))

    assert ctx.frames.active.max_depth == 7
    assert ctx.align.max_entries == 3
    assert ctx.language == LanguageMask.CPP


def test_report_counts_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    ctx = ParseContext(filename="x.c")
    tokenize_into(ctx, "a\n}\n")
    close = ctx.stream.tail
    assert close is not None
    close = ctx.stream.get_prev(close)
    assert close is not None and close.kind == ChunkKind.BRACE_CLOSE

    with caplog.at_level(logging.WARNING, logger="chunkpy"):
        ctx.report(CLEANUP_UNEXPECTED_CLOSE, close, detail="Got `}`.")

    assert ctx.error_count == 1
    assert ctx.diagnostics[0].code == "CLEANUP_UNEXPECTED_CLOSE"
    assert ctx.diagnostics[0].line == 2
    assert ctx.diagnostics[0].message.endswith("Got `}`.")
    assert "x.c:2" in caplog.text


def test_report_without_chunk_uses_empty_span() -> None:
    ctx = ParseContext()

    ctx.report(CLEANUP_UNEXPECTED_CLOSE)

    assert ctx.error_count == 1
    assert ctx.diagnostics[0].span.is_empty()
    assert ctx.diagnostics[0].line == 0


def test_split_line_after_inserts_newline_and_counts_change() -> None:
    source = "a b;"
    ctx = ParseContext()
    tokenize_into(ctx, source)
    a = ctx.stream.head
    assert a is not None
    a.set_flags(ChunkFlags.IN_PREPROC | ChunkFlags.STMT_START)

    newline = ctx.split_line_after(a)

    assert ctx.changes == 1
    assert newline.kind == ChunkKind.NEWLINE
    assert newline.nl_count == 1
    assert newline.text == "\n"
    assert newline.flags == ChunkFlags.IN_PREPROC
    assert ctx.stream.get_next(a) is newline
    assert render_chunks(ctx.stream, source) == "a\n b;"

    ctx.note_change()
    assert ctx.changes == 2


def test_split_line_uses_detected_newline_style() -> None:
    ctx = ParseContext()
    tokenize_into(ctx, "a;\r\nb;\r\n")

    newline = ctx.split_line_after(ctx.stream.head)

    assert newline.text == "\r\n"


def test_reset_drops_per_file_state() -> None:
    options = CleanupOptions(language=LanguageMask.C)
    ctx = ParseContext(options=options, filename="a.c")
    tokenize_into(ctx, 'x = "open\r\n')
    ctx.frames.push()
    ctx.align.add(4, ChunkKind.ASSIGN, 2)
    ctx.changes = 3

    ctx.reset()

    assert len(ctx.stream) == 0
    assert ctx.frames.count == 0
    assert len(ctx.align) == 0
    assert ctx.error_count == 0
    assert ctx.diagnostics == []
    assert ctx.changes == 0
    assert ctx.newline == "\n"
    assert ctx.in_preproc == ChunkKind.NONE
    assert ctx.options is options
    assert ctx.filename == "a.c"


def test_align_table_has_hard_ceiling() -> None:
    table = AlignTable(max_entries=2)

    table.add(5, ChunkKind.ASSIGN, 2)
    table.add(9, ChunkKind.ASSIGN, 3)
    with pytest.raises(AlignTableFullError):
        table.add(1, ChunkKind.ASSIGN, 1)

    assert len(table) == 2
    assert table[1].column == 9
    assert table.max_end_column() == 12
    table.c99_array = True
    table.clear()
    assert list(table) == []
    assert table.max_end_column() == 0
    assert table.c99_array is False
