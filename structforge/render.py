from __future__ import annotations

import os
from typing import Dict, Iterable, List

from structforge.parser import DIR, PlanItem


def render_plan(plan: Iterable[PlanItem], base_root: str) -> str:
    """Draw a plan as a ``tree``-style listing rooted at ``base_root``."""
    children: Dict[str, List[PlanItem]] = {}
    for it in plan:
        if it.path == base_root:
            continue
        children.setdefault(os.path.dirname(it.path), []).append(it)

    lines = [f"{os.path.basename(base_root)}/"]

    def walk(d: str, prefix: str) -> None:
        entries = sorted(
            children.get(d, []),
            key=lambda it: (it.kind != DIR, os.path.basename(it.path).lower()),
        )
        for i, it in enumerate(entries):
            last = i == len(entries) - 1
            connector = "└── " if last else "├── "
            name = os.path.basename(it.path) + ("/" if it.kind == DIR else "")
            lines.append(f"{prefix}{connector}{name}")
            if it.kind == DIR:
                walk(it.path, prefix + ("    " if last else "│   "))

    walk(base_root, "")
    return "\n".join(lines)
