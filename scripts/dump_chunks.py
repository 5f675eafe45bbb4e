#!/usr/bin/env python3
"""Dump the classified chunk stream of one source file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from chunkpy import run_cleanup_file
from chunkpy.chunk import dump_chunks


def main() -> int:
    parser = argparse.ArgumentParser(description="Print every chunk after brace cleanup")
    parser.add_argument("path", type=Path, help="C-family source file")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write the dump here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log paren stack traces")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    result = run_cleanup_file(args.path)
    lines = dump_chunks(result.context.stream)

    if args.output is None:
        for line in lines:
            print(line)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open("w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        print(f"Wrote {len(lines)} chunks to {args.output}")

    for diagnostic in result.diagnostics:
        print(f"{args.path}:{diagnostic.line}: {diagnostic.code}: {diagnostic.message}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
