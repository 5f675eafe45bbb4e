"""Shared debug printers for lexer/cleanup tests."""

from __future__ import annotations

import os

from chunkpy.chunk import ChunkStream, dump_chunks
from chunkpy.diagnostics import Diagnostic

PRINT_CHUNKS = os.getenv("PRINT_CHUNKS", "0").lower() in {"1", "true", "yes", "on"}
PRINT_SOURCE = os.getenv("PRINT_SOURCE", "0").lower() in {"1", "true", "yes", "on"}
PRINT_DIAGNOSTICS = os.getenv("PRINT_DIAGNOSTICS", "0").lower() in {
    "1",
    "true",
    "yes",
    "on",
}


def debug_print_source(test_name: str, source: str) -> None:
    if not PRINT_SOURCE:
        return
    print(f"\n===== {test_name} SOURCE =====")
    print(source)


def debug_dump_chunks(test_name: str, stream: ChunkStream, source: str | None = None) -> None:
    if not PRINT_CHUNKS:
        return
    if source is not None:
        debug_print_source(test_name, source)
    print(f"\n===== {test_name} CHUNKS =====")
    for line in dump_chunks(stream):
        print(line)


def debug_dump_diagnostics(test_name: str, diagnostics: list[Diagnostic], source: str | None = None) -> None:
    if not PRINT_DIAGNOSTICS:
        return
    if source is not None:
        debug_print_source(test_name, source)
    print(f"===== {test_name} DIAGNOSTICS =====")
    if not diagnostics:
        print("(none)")
        return
    for diagnostic in diagnostics:
        print(diagnostic)
