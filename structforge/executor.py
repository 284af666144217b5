from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List

from structforge.defaults import default_scaffold_for
from structforge.parser import DIR, FILE, PlanItem
from structforge.paths import KNOWN_FILES

GITKEEP = ".gitkeep"

logger = logging.getLogger(__name__)


def _rel(path: str, cwd: str) -> str:
    return os.path.relpath(path, cwd)


def execute_plan(
    plan: Iterable[PlanItem],
    dry_run: bool = False,
    verbose: bool = False,
    gitkeep: bool = False,
    cwd: str | None = None,
    known_files: Iterable[str] = KNOWN_FILES,
) -> Dict[str, int]:
    """Create the planned dirs, then the planned files.

    Existing files are never overwritten. In dry-run nothing is touched and
    each item is printed instead.
    """
    cwd = cwd or os.getcwd()
    plan = list(plan)
    dirs = [it.path for it in plan if it.kind == DIR]
    files = [it.path for it in plan if it.kind == FILE]
    summary = {"dirs": 0, "files": 0, "skipped": 0, "gitkeep": 0}
    created: List[Path] = []

    for d in dirs:
        if dry_run:
            print(f"[dir]  {_rel(d, cwd)}")
            continue
        p = Path(d)
        if not p.is_dir():
            created.append(p)
        p.mkdir(parents=True, exist_ok=True)
        summary["dirs"] += 1
        if verbose:
            logger.info(f"[dir]  {_rel(d, cwd)}")

    for f in files:
        if dry_run:
            print(f"[file] {_rel(f, cwd)}")
            continue
        p = Path(f)
        exists = p.exists()
        if exists:
            summary["skipped"] += 1
        else:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(default_scaffold_for(f, known_files), encoding="utf-8")
            summary["files"] += 1
        if verbose:
            logger.info(f"[file] {_rel(f, cwd)}{' (skip)' if exists else ''}")

    if gitkeep and not dry_run:
        for p in created:
            if not any(p.iterdir()):
                (p / GITKEEP).touch()
                summary["gitkeep"] += 1
                if verbose:
                    logger.info(f"[keep] {_rel(str(p / GITKEEP), cwd)}")

    return summary
