from __future__ import annotations

import os
from typing import Iterable

from structforge.paths import KNOWN_FILES

TSX_STUB = "export default function Component(){return null}\n"

# extension -> placeholder body; ".md" is special-cased below, the rest start empty
EXT_TEMPLATES = {
    ".tsx": TSX_STUB,
    ".json": "{}\n",
}

BARE_TEMPLATES = {
    "README": "# README\n",
}


def default_scaffold_for(path: str, known_files: Iterable[str] = KNOWN_FILES) -> str:
    """Placeholder content for a new file, picked by bare name then extension."""
    base = os.path.basename(path)
    ext = os.path.splitext(base)[1].lower()
    if base in known_files:
        return BARE_TEMPLATES.get(base, "")
    if ext == ".md":
        return f"# {base}\n"
    return EXT_TEMPLATES.get(ext, "")
