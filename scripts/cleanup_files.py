#!/usr/bin/env python3
"""Run brace cleanup over a tree of C-family sources."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import time

from tqdm import tqdm

from chunkpy import run_cleanup_file
from chunkpy.context import CleanupOptions
from chunkpy.syntax import language_from_filename

logger = logging.getLogger("cleanup_files")

DEFAULT_SUFFIXES = (".c", ".h", ".cpp", ".cc", ".cxx", ".hpp", ".hh", ".d", ".cs", ".java", ".m", ".mm")


def _collect_files(root: Path, suffixes: tuple[str, ...]) -> list[Path]:
    if root.is_file():
        return [root]
    return sorted(path for path in root.rglob("*") if path.is_file() and path.suffix.lower() in suffixes)


def main() -> int:
    parser = argparse.ArgumentParser(description="Brace-cleanup every source file under a directory")
    parser.add_argument("root", type=Path, help="File or directory to process")
    parser.add_argument(
        "--suffix",
        action="append",
        default=None,
        help="File suffix to include (repeatable, default: common C-family suffixes)",
    )
    parser.add_argument("--tab-size", type=int, default=8, help="Input tab size (default: 8)")
    parser.add_argument(
        "--indent-else-if",
        action="store_true",
        help="Treat `else` + newline + `if` as a nested statement",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable the tqdm progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every tolerated error")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root: Path = args.root
    if not root.exists():
        raise SystemExit(f"Invalid root: {root}")

    suffixes = tuple(s if s.startswith(".") else f".{s}" for s in args.suffix) if args.suffix else DEFAULT_SUFFIXES
    files = _collect_files(root, suffixes)
    if not files:
        raise SystemExit(f"No matching files found under {root}")

    start = time.perf_counter()
    failed: list[Path] = []
    total_errors = 0
    total_chunks = 0
    iterator = files if args.no_progress else tqdm(files, desc="cleanup", unit="file")
    for path in iterator:
        options = CleanupOptions(
            language=language_from_filename(path),
            input_tab_size=args.tab_size,
            indent_else_if=args.indent_else_if,
        )
        try:
            result = run_cleanup_file(path, options)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("%s: cannot read: %s", path, exc)
            failed.append(path)
            continue
        total_chunks += len(result.context.stream)
        total_errors += result.error_count
        if result.failed:
            failed.append(path)
    duration = time.perf_counter() - start

    print(f"Files: {len(files)}")
    print(f"Chunks: {total_chunks}")
    print(f"Tolerated errors: {total_errors}")
    print(f"Failed: {len(failed)}")
    for path in failed:
        print(f"  {path}")
    print(f"Time: {duration:.3f}s")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
