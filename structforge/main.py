#!/usr/bin/env python3
"""structforge: turn a text tree into directories and placeholder files.

    structforge --root . --infer-root --gitkeep --from tree.txt
    pbpaste | structforge --dry-run --tree
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from structforge.executor import execute_plan
from structforge.parser import ParseOptions, parse_to_plan
from structforge.paths import ScaffoldPathError
from structforge.render import render_plan
from structforge.utils import known_files, load_cfg, log


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="structforge",
        description="Text to filesystem scaffolder. Reads an indented or box-drawing tree and creates it.",
    )
    ap.add_argument("--root", default=".", help="Root directory where the structure will be created. Default '.'")
    ap.add_argument("--infer-root", action="store_true", help="Use a first line like 'my-project/' as a sub root")
    ap.add_argument("--gitkeep", action="store_true", default=None, help="Create .gitkeep in new empty directories")
    ap.add_argument("--dry-run", action="store_true", help="Do not create anything, only print the plan")
    ap.add_argument("--verbose", action="store_true", default=None, help="Log each created item")
    ap.add_argument("--from", dest="from_file", type=Path, help="Read input from a file instead of stdin")
    ap.add_argument("--tree", action="store_true", help="Print the planned structure as a tree")
    ap.add_argument("--config", type=Path, help="YAML config overriding the built-in defaults")
    return ap.parse_args(argv)


def read_input(from_file: Path | None) -> str:
    if from_file is not None:
        return from_file.read_text(encoding="utf-8")
    return sys.stdin.read()


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        cfg = load_cfg(args.config)
    except (FileNotFoundError, ValueError) as e:
        raise SystemExit(f"[error] {e}")
    lg = log("structforge", cfg["logging"]["level"])

    gitkeep = cfg["scaffold"]["gitkeep"] if args.gitkeep is None else args.gitkeep
    verbose = cfg["scaffold"]["verbose"] if args.verbose is None else args.verbose
    known = known_files(cfg)

    try:
        text = read_input(args.from_file)
    except OSError as e:
        raise SystemExit(f"[error] Cannot read input: {e}")
    if not text.strip():
        raise SystemExit("[error] Empty input. Use --from <file> or provide stdin.")

    try:
        plan, base_root = parse_to_plan(
            text, ParseOptions(root_dir=args.root, infer_root=args.infer_root, known_files=known)
        )
    except ScaffoldPathError as e:
        raise SystemExit(f"[error] {e}")
    lg.debug(f"Parsed {len(plan)} plan items, base root {base_root}")

    if args.tree:
        print(render_plan(plan, base_root))

    try:
        summary = execute_plan(
            plan, dry_run=args.dry_run, verbose=verbose, gitkeep=gitkeep, known_files=known
        )
    except OSError as e:
        raise SystemExit(f"[error] {e}")

    if args.dry_run:
        print("Dry run complete. Nothing was created.")
        return
    if verbose:
        lg.info(
            f"{summary['dirs']} dirs, {summary['files']} files written, "
            f"{summary['skipped']} existing files skipped, {summary['gitkeep']} .gitkeep"
        )
    print(f"Structure created at: {base_root}")


if __name__ == "__main__":
    main()
