from pathlib import Path

import pytest

from chunkpy import run_cleanup, run_cleanup_file
from chunkpy.context import CleanupOptions
from chunkpy.syntax import LanguageMask
from tests._debug import debug_dump_diagnostics


def test_run_cleanup_reproduces_source() -> None:
    source = "int main(void)\n{\n\tif (a)\n\t\treturn 1;\n\treturn 0;\n}\n"

    result = run_cleanup(source)

    assert result.output_text == source
    assert result.failed is False
    assert result.changed is False
    assert result.has_errors is False
    assert result.error_count == 0
    assert result.transitions
    assert result.source_text == source


def test_each_run_gets_a_fresh_context() -> None:
    first = run_cleanup("x;\n}\n")
    second = run_cleanup("y;\n")

    assert first.context is not second.context
    assert first.error_count == 1
    assert second.error_count == 0


def test_tolerated_errors_still_produce_output() -> None:
    source = "x;\n}\n"

    result = run_cleanup(source)
    debug_dump_diagnostics("test_tolerated_errors_still_produce_output", result.diagnostics, source)

    assert result.failed is False
    assert result.output_text == source
    assert result.error_count == 1
    assert result.has_errors is True


def test_nesting_past_the_limit_aborts_without_output() -> None:
    source = "(" * 10 + ")" * 10 + ";\n"

    result = run_cleanup(source, CleanupOptions(max_paren_depth=4))

    assert result.failed is True
    assert result.output_text is None
    assert result.has_errors is True
    assert result.error_count == 1
    fatal = result.diagnostics[-1]
    assert fatal.code == "CORE_FATAL"
    assert fatal.severity == "error"
    assert fatal.line == 1
    assert "limit 4" in fatal.message


def test_too_many_preprocessor_frames_aborts() -> None:
    source = "#if A\n" * 5 + "x;\n" + "#endif\n" * 5

    result = run_cleanup(source, CleanupOptions(max_frames=3))

    assert result.failed is True
    assert result.output_text is None
    assert result.diagnostics[-1].code == "CORE_FATAL"


def test_run_cleanup_file_keeps_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "sample.c"
    source = "void f(void)\r\n{\r\n    do x++; while (x < 3);\r\n}\r\n"
    path.write_bytes(source.encode("utf-8"))

    result = run_cleanup_file(path)

    assert result.output_text == source
    assert result.context.language == LanguageMask.C
    assert result.context.newline == "\r\n"
    assert result.context.filename == str(path)
    assert result.error_count == 0


def test_run_cleanup_file_honours_explicit_options(tmp_path: Path) -> None:
    path = tmp_path / "sample.c"
    path.write_text("namespace n { }\n", encoding="utf-8")

    as_c = run_cleanup_file(path)
    as_cpp = run_cleanup_file(path, CleanupOptions(language=LanguageMask.CPP))

    assert as_c.context.language == LanguageMask.C
    assert as_cpp.context.language == LanguageMask.CPP
    assert [t.owner.name for t in as_c.transitions] == []
    assert as_cpp.transitions[0].owner.name == "NAMESPACE"


def test_run_cleanup_file_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        run_cleanup_file(tmp_path / "missing.c")
