"""Test configuration."""

from pathlib import Path
from typing import Callable

import pytest

from sitecontent.store import ContentStore


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)
    (root / "projects").mkdir(parents=True)
    return root


@pytest.fixture
def write_entry(content_root: Path) -> Callable[..., Path]:
    def _write(kind: str, name: str, text: str) -> Path:
        path = content_root / kind / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store(content_root: Path) -> ContentStore:
    return ContentStore(content_root)


@pytest.fixture
def scenario(write_entry, store) -> ContentStore:
    """Alpha and Beta are dated, Gamma is not."""
    write_entry(
        "posts", "a.mdx", "---\ntitle: Alpha\npublishedAt: 2024-01-01\n---\nA body\n"
    )
    write_entry(
        "posts", "b.mdx", "---\ntitle: Beta\npublishedAt: 2024-06-01\n---\nB body\n"
    )
    write_entry("posts", "c.mdx", "---\ntitle: Gamma\n---\nC body\n")
    return store
