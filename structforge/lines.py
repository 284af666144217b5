"""Per-line classification: how deep an entry sits and what it names.

A line is split into a structural prefix (spaces and the box glyphs ``│``,
``├``, ``└``) and its content. Depth comes from the prefix, the entry name
from the content after bullets, branch connectors, comments and ``(optional)``
notes are removed.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Tuple

TAB_WIDTH = 4
INDENT_WIDTH = 2

VERTICAL = "│"
BRANCHES = "├└"

_PREFIX_RE = re.compile(r"[ \t│├└]*")
_CONNECTOR_RE = re.compile(r"[├└][─-]*[ \t]*")

_BULLET_RE = re.compile(r"^[-*•>]+\s+")
_BRANCH_RE = re.compile(r"^[│├└]?[─-]+\s*")
_COMMENT_RE = re.compile(r"(?:\s{2,}|\t)#.*$")
_OPTIONAL_RE = re.compile(r"\s*\((?:optional|opcional)[^)]*\)\s*$", re.IGNORECASE)
_SLASH_SPACE_RE = re.compile(r"/\s+$")


class ClassifiedLine(NamedTuple):
    depth: int
    content: str


# ---------------------------------------------------------------------------
# Prefix and depth
# ---------------------------------------------------------------------------

def split_prefix_content(line: str) -> Tuple[str, str]:
    prefix = _PREFIX_RE.match(line).group()
    return prefix, line[len(prefix):].strip()


def connector_width(line: str, prefix: str) -> int:
    """Column width implied by the branch connector (``├─ `` is 3, ``├── `` is 4).

    Lines without a branch glyph use plain two-space indentation.
    """
    idx = max(prefix.rfind("├"), prefix.rfind("└"))
    if idx < 0:
        return INDENT_WIDTH
    m = _CONNECTOR_RE.match(line, idx)
    return max(INDENT_WIDTH, len(m.group()))


def compute_depth(prefix: str, width: int = INDENT_WIDTH) -> int:
    """Glyph levels plus blank levels.

    Every ``│``, ``├`` or ``└`` is one level and owns the ``width - 1`` spaces
    of padding that follow it. Any other full group of ``width`` spaces is one
    more level; partial groups and the padding after a final branch glyph add
    nothing.
    """
    prefix = prefix.replace("\t", " " * TAB_WIDTH)
    glyphs = blanks = run = padding = 0
    branched = False
    for ch in prefix:
        if ch == VERTICAL or ch in BRANCHES:
            glyphs += 1
            blanks += run // width
            run = 0
            padding = width - 1
            branched = ch in BRANCHES
        elif padding:
            padding -= 1
        else:
            run += 1
    if not branched:
        blanks += run // width
    return glyphs + blanks


# ---------------------------------------------------------------------------
# Content sanitization
# ---------------------------------------------------------------------------

def strip_bullets(s: str) -> str:
    return _BULLET_RE.sub("", s)


def strip_branch_connector(s: str) -> str:
    return _BRANCH_RE.sub("", s)


def strip_trailing_comments(s: str) -> str:
    return _COMMENT_RE.sub("", s)


def strip_optional_note(s: str) -> str:
    return _OPTIONAL_RE.sub("", s)


def sanitize_content(s: str) -> str:
    out = s.strip()
    out = strip_bullets(out)
    out = strip_branch_connector(out)
    out = strip_trailing_comments(out)
    out = strip_optional_note(out)
    out = out.strip()
    return _SLASH_SPACE_RE.sub("/", out)


def classify_line(line: str) -> ClassifiedLine:
    prefix, content = split_prefix_content(line)
    depth = compute_depth(prefix, connector_width(line, prefix))
    return ClassifiedLine(depth, sanitize_content(content))
