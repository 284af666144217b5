"""Build a creation plan from a text tree.

    parse_to_plan("app/\\n  main.py\\n  core/\\n    config.py", ParseOptions("."))

yields the dirs ``.``, ``app``, ``app/core`` and the files ``app/main.py``,
``app/core/config.py``, every path absolute and sorted dirs-first.
"""

from __future__ import annotations

import logging
import os
import re
from typing import FrozenSet, List, NamedTuple, Optional, Set, Tuple

from structforge.lines import TAB_WIDTH, ClassifiedLine, classify_line
from structforge.paths import KNOWN_FILES, is_inside, looks_like_dir, safe_join

DIR = "dir"
FILE = "file"

logger = logging.getLogger(__name__)


class PlanItem(NamedTuple):
    kind: str
    path: str


class ParseOptions(NamedTuple):
    root_dir: str = "."
    infer_root: bool = False
    known_files: FrozenSet[str] = KNOWN_FILES


class ParseResult(NamedTuple):
    plan: List[PlanItem]
    base_root: str


def _physical_lines(text: str) -> List[str]:
    lines = (ln.replace("\t", " " * TAB_WIDTH).rstrip() for ln in re.split(r"\r?\n", text))
    return [ln for ln in lines if ln.strip()]


def _infer_base_root(first: ClassifiedLine, root_dir: str) -> Optional[str]:
    """``my-project/`` as a first line names a sub-root; anything else does not."""
    if not first.content.endswith("/"):
        return None
    token = first.content.rstrip("/")
    if not token or "/" in token:
        return None
    return safe_join(root_dir, token)


def sort_plan(items) -> List[PlanItem]:
    return sorted(items, key=lambda it: (it.kind != DIR, it.path))


def parse_to_plan(text: str, opts: ParseOptions = ParseOptions()) -> ParseResult:
    root_dir = os.path.abspath(opts.root_dir)
    known = opts.known_files
    lines = [classify_line(ln) for ln in _physical_lines(text)]

    base_root = root_dir
    if opts.infer_root and lines:
        inferred = _infer_base_root(lines[0], root_dir)
        if inferred is not None:
            base_root = inferred
            lines = lines[1:]

    seen: Set[Tuple[str, str]] = set()
    # depth -> open ancestor; None marks a hole left by a deeper jump
    stack: List[Optional[str]] = [base_root]

    def add_dir(abs_path: str) -> None:
        # register abs_path and every ancestor below base_root
        p = abs_path
        while is_inside(base_root, p):
            seen.add((DIR, p))
            if p == base_root:
                break
            p = os.path.dirname(p)

    def add_file(abs_path: str) -> None:
        add_dir(os.path.dirname(abs_path))
        seen.add((FILE, abs_path))

    def parent_at(depth: int) -> str:
        if depth < len(stack) and stack[depth] is not None:
            return stack[depth]
        return base_root

    def open_dir(abs_path: str, depth: int) -> None:
        add_dir(abs_path)
        del stack[depth + 1:]
        stack.extend([None] * (depth + 1 - len(stack)))
        stack.append(abs_path)

    def close_at(depth: int) -> None:
        del stack[max(1, depth + 1):]

    def place(parent: str, rel: str, depth: int, is_dir: bool) -> None:
        abs_path = safe_join(parent, rel.rstrip("/"))
        if is_dir:
            open_dir(abs_path, depth)
        else:
            add_file(abs_path)
            close_at(depth)

    add_dir(base_root)

    for depth, content in lines:
        if not content:
            logger.debug(f"Skipping line with no entry at depth {depth}")
            continue

        if content.startswith("/"):
            # anchored at the root whatever the indentation says
            rel = content.lstrip("/")
            place(base_root, rel, 0, looks_like_dir(rel, known))
        elif "/" in content:
            place(parent_at(depth), content, depth, content.endswith("/"))
        else:
            place(parent_at(depth), content, depth, looks_like_dir(content, known))

    plan = sort_plan(PlanItem(kind, path) for kind, path in seen)
    n_dirs = sum(1 for it in plan if it.kind == DIR)
    logger.debug(f"Planned {n_dirs} dirs and {len(plan) - n_dirs} files under {base_root}")
    return ParseResult(plan, base_root)
