import os

import pytest

from structforge.parser import DIR, FILE, ParseOptions, PlanItem, parse_to_plan
from structforge.paths import PathTraversalError


def rels(plan, base):
    return {(it.kind, os.path.relpath(it.path, base).replace("\\", "/")) for it in plan}


def parse(text, root, infer_root=False, **kw):
    return parse_to_plan(text, ParseOptions(root_dir=str(root), infer_root=infer_root, **kw))


# ---------------------------------------------------------------------------
# Tree shapes
# ---------------------------------------------------------------------------

def test_indent_only_tree(tmp_path):
    text = "my-project/\n  src/\n    types.ts\n    example.ts\n  tsconfig.json\n"
    plan, base = parse(text, tmp_path, infer_root=True)
    assert base == str(tmp_path / "my-project")
    assert rels(plan, base) == {
        (DIR, "."),
        (DIR, "src"),
        (FILE, "src/types.ts"),
        (FILE, "src/example.ts"),
        (FILE, "tsconfig.json"),
    }


def test_ascii_box_drawing_tree(tmp_path):
    text = """
example-api/
├─ app/
│  ├─ main.py
│  ├─ core/
│  │  ├─ config.py
│  │  └─ logging.py
├─ requirements.txt
""".strip()
    plan, base = parse(text, tmp_path, infer_root=True)
    assert rels(plan, base) == {
        (DIR, "."),
        (DIR, "app"),
        (DIR, "app/core"),
        (FILE, "app/main.py"),
        (FILE, "app/core/config.py"),
        (FILE, "app/core/logging.py"),
        (FILE, "requirements.txt"),
    }


def test_box_drawing_matches_indentation(tmp_path):
    boxed = "app/\n├─ main.py\n└─ core/\n   └─ config.py\n"
    indented = "app/\n  main.py\n  core/\n    config.py\n"
    expected = {
        (DIR, "."),
        (DIR, "app"),
        (FILE, "app/main.py"),
        (DIR, "app/core"),
        (FILE, "app/core/config.py"),
    }
    assert rels(parse(boxed, tmp_path).plan, tmp_path) == expected
    assert rels(parse(indented, tmp_path).plan, tmp_path) == expected


def test_tree_command_output(tmp_path):
    text = """
.
├── docs/
│   └── index.md
├── src/
│   ├── cli.py
│   └── core/
│       └── engine.py
└── Makefile
""".strip()
    plan, base = parse(text, tmp_path)
    assert base == str(tmp_path)
    assert rels(plan, base) == {
        (DIR, "."),
        (DIR, "docs"),
        (DIR, "src"),
        (DIR, "src/core"),
        (FILE, "docs/index.md"),
        (FILE, "src/cli.py"),
        (FILE, "src/core/engine.py"),
        (FILE, "Makefile"),
    }


def test_tabs_expand_to_two_levels(tmp_path):
    plan, _ = parse("pkg/\n\tmod.py\n", tmp_path)
    # a tab is four spaces, depth 2, and nothing is open there
    assert PlanItem(FILE, str(tmp_path / "mod.py")) in plan
    plan, _ = parse("pkg/\n  sub/\n\tmod.py\n", tmp_path)
    assert PlanItem(FILE, str(tmp_path / "pkg" / "sub" / "mod.py")) in plan


def test_bullets_comments_and_blank_lines(tmp_path):
    text = "- web/\n\n  - index.html   # landing page\n  - seed.sql (optional)\n\r\n  - assets/ \n"
    plan, _ = parse(text, tmp_path)
    assert rels(plan, tmp_path) == {
        (DIR, "."),
        (DIR, "web"),
        (DIR, "web/assets"),
        (FILE, "web/index.html"),
        (FILE, "web/seed.sql"),
    }


# ---------------------------------------------------------------------------
# Slash-containing and absolute-style entries
# ---------------------------------------------------------------------------

def test_path_with_slashes_inside_tree(tmp_path):
    text = "ui-library/\n  .github/workflows/ci.yml\n  src/\n    index.ts\n"
    plan, base = parse(text, tmp_path, infer_root=True)
    items = rels(plan, base)
    for target in [(DIR, ".github"), (DIR, ".github/workflows"), (FILE, ".github/workflows/ci.yml"), (FILE, "src/index.ts")]:
        assert target in items


def test_slash_dir_opens_new_ancestor(tmp_path):
    text = "a/b/c/\n  leaf.txt\n"
    plan, _ = parse(text, tmp_path)
    assert rels(plan, tmp_path) == {
        (DIR, "."),
        (DIR, "a"),
        (DIR, "a/b"),
        (DIR, "a/b/c"),
        (FILE, "a/b/c/leaf.txt"),
    }


def test_slash_file_does_not_advance_context(tmp_path):
    text = "app/\n  bin/run\n  util.py\n"
    plan, _ = parse(text, tmp_path)
    assert PlanItem(FILE, str(tmp_path / "app" / "bin" / "run")) in plan
    assert PlanItem(FILE, str(tmp_path / "app" / "util.py")) in plan


def test_absolute_entry_ignores_indentation(tmp_path):
    text = "app/\n  core/\n    /shared/utils\n    /shared/types.ts\n    after.py\n"
    plan, _ = parse(text, tmp_path)
    items = rels(plan, tmp_path)
    assert (DIR, "shared/utils") in items
    assert (FILE, "shared/types.ts") in items
    assert (DIR, "app/core/shared") not in items
    # the stack was reset to the root, so depth 2 has nothing open
    assert (FILE, "after.py") in items


def test_absolute_directory_becomes_depth_one_parent(tmp_path):
    text = "/config\n  settings.yaml\n"
    plan, _ = parse(text, tmp_path)
    assert PlanItem(FILE, str(tmp_path / "config" / "settings.yaml")) in plan


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def test_bare_token_classification(tmp_path):
    plan, _ = parse("X/\n  Dockerfile\n  scripts\n", tmp_path)
    assert PlanItem(FILE, str(tmp_path / "X" / "Dockerfile")) in plan
    assert PlanItem(DIR, str(tmp_path / "X" / "scripts")) in plan


def test_extra_known_files(tmp_path):
    plan, _ = parse("Procfile\n", tmp_path, known_files=frozenset({"Procfile"}))
    assert PlanItem(FILE, str(tmp_path / "Procfile")) in plan


# ---------------------------------------------------------------------------
# Root inference
# ---------------------------------------------------------------------------

def test_root_inference(tmp_path):
    plan, base = parse("proj/\n  a.txt", tmp_path, infer_root=True)
    assert base == str(tmp_path / "proj")
    assert PlanItem(FILE, str(tmp_path / "proj" / "a.txt")) in plan
    assert PlanItem(DIR, str(tmp_path / "proj")) in plan


def test_root_inference_disabled(tmp_path):
    plan, base = parse("proj/\n  a.txt", tmp_path)
    assert base == str(tmp_path)
    assert rels(plan, tmp_path) == {(DIR, "."), (DIR, "proj"), (FILE, "proj/a.txt")}


@pytest.mark.parametrize("first", ["proj", "proj/sub/", "main.py"])
def test_root_inference_needs_single_segment_dir(tmp_path, first):
    _, base = parse(f"{first}\n  a.txt", tmp_path, infer_root=True)
    assert base == str(tmp_path)


# ---------------------------------------------------------------------------
# Plan invariants
# ---------------------------------------------------------------------------

MIXED = """
service/
├── api/
│   ├── routes/users.py
│   └── deps.py
├── /infra/terraform/main.tf
├── Dockerfile
└── docs/
    └── guide.md  # how to
service/api/deps.py
""".strip()


def test_plan_has_no_duplicates_and_is_stable(tmp_path):
    first = parse(MIXED, tmp_path)
    second = parse(MIXED, tmp_path)
    assert first == second
    assert len(first.plan) == len(set(first.plan))


def test_plan_is_sorted_dirs_first(tmp_path):
    plan, _ = parse(MIXED, tmp_path)
    assert plan == sorted(plan, key=lambda it: (it.kind != DIR, it.path))
    kinds = [it.kind for it in plan]
    assert kinds == sorted(kinds, key=lambda k: k != DIR)


def test_every_file_has_its_ancestors(tmp_path):
    plan, base = parse(MIXED, tmp_path)
    dirs = {it.path for it in plan if it.kind == DIR}
    for it in plan:
        if it.kind != FILE:
            continue
        parent = os.path.dirname(it.path)
        while parent != base:
            assert parent in dirs
            parent = os.path.dirname(parent)
    assert base in dirs


def test_everything_stays_under_root(tmp_path):
    plan, _ = parse(MIXED, tmp_path)
    for it in plan:
        assert it.path.startswith(str(tmp_path))


def test_base_root_always_planned(tmp_path):
    plan, base = parse("   \n\n", tmp_path)
    assert plan == [PlanItem(DIR, str(tmp_path))]
    assert base == str(tmp_path)


@pytest.mark.parametrize(
    "text",
    ["app/\n  ../evil.txt", "app/\n  a/../../b/", "/../etc/", "../\n  x.py"],
)
def test_parent_segments_abort_parse(tmp_path, text):
    with pytest.raises(PathTraversalError, match=r"\.\."):
        parse(text, tmp_path, infer_root=True)


def test_relative_root_dir_is_resolved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    plan, base = parse_to_plan("a.txt", ParseOptions(root_dir="out"))
    out = os.path.join(os.getcwd(), "out")
    assert base == out
    assert PlanItem(FILE, os.path.join(out, "a.txt")) in plan
