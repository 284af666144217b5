"""Path joining and the directory-or-file decision shared by the tree builder."""

from __future__ import annotations

import os
import re
from typing import Iterable

KNOWN_FILES = frozenset({"Dockerfile", "Makefile", "LICENSE", "README"})

_EXT_RE = re.compile(r"\.[A-Za-z0-9]+$")
_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_SEP_RE = re.compile(r"[\\/]+")


class ScaffoldPathError(ValueError):
    """Base for paths that would leave the scaffold root."""


class PathTraversalError(ScaffoldPathError):
    pass


class RootEscapeError(ScaffoldPathError):
    pass


# ---------------------------------------------------------------------------
# Token classification
# ---------------------------------------------------------------------------

def has_extension(name: str) -> bool:
    if not name:
        return False
    # dotfiles (.env, .gitignore) count as having one; "." and ".." do not
    if name.startswith("."):
        return bool(name.strip("."))
    return bool(_EXT_RE.search(name))


def is_bare_known_file(name: str, known_files: Iterable[str] = KNOWN_FILES) -> bool:
    return name in known_files


def looks_like_dir(token: str, known_files: Iterable[str] = KNOWN_FILES) -> bool:
    """True for ``src/`` and ``scripts``; false for ``main.py`` and ``Dockerfile``."""
    if token.endswith("/"):
        return True
    name = token.rstrip("/").rsplit("/", 1)[-1]
    return not has_extension(name) and not is_bare_known_file(name, known_files)


# ---------------------------------------------------------------------------
# Joining
# ---------------------------------------------------------------------------

def safe_join(parent: str, rel: str) -> str:
    """Join ``rel`` onto ``parent`` without ever leaving ``parent``.

    Raises PathTraversalError for any ``..`` segment (checked before
    normalization, so ``a/../b`` is rejected too) and RootEscapeError when the
    normalized result is not ``parent`` or below it.
    """
    if any(seg == ".." for seg in _SEP_RE.split(rel)):
        raise PathTraversalError(f"Using '..' is not allowed in: {rel}")
    cleaned = _DRIVE_RE.sub("", rel)
    cleaned = os.path.normpath(cleaned) if cleaned else "."
    root = os.path.abspath(parent)
    joined = os.path.abspath(os.path.join(root, cleaned))
    if not is_inside(root, joined):
        raise RootEscapeError(f"Path escaped root: {rel}")
    return joined


def is_inside(root: str, path: str) -> bool:
    try:
        return os.path.commonpath([root, path]) == root
    except ValueError:  # different drives
        return False
