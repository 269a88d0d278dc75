from __future__ import annotations

from pathlib import Path

import pytest


def _write_entry(root: Path, collection: str, name: str, front_matter: str, body: str = "Body text.") -> Path:
    path = root / collection / f"{name}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{front_matter.strip()}\n---\n\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture
def write_entry():
    return _write_entry


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    _write_entry(
        root,
        "posts",
        "a-first-post",
        "title: A\ndescription: B\npublishedAt: 2024-01-01",
        "Hello from **A**.",
    )
    _write_entry(
        root,
        "posts",
        "b-second-post",
        'title: "Second: the sequel"\ndescription: More words\npublishedAt: 2024-02-10',
    )
    _write_entry(
        root,
        "tils",
        "git-worktrees",
        "title: Git worktrees\ntags: [git, cli]\npublishedAt: 2024-03-02",
        "Use `git worktree add`.",
    )
    _write_entry(
        root,
        "tils",
        "python-walrus",
        "title: The walrus operator\npublishedAt: 2024-04-05",
    )
    return root
