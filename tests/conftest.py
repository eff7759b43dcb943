from __future__ import annotations

from pathlib import Path

import pytest


def make_page(root: Path, rel: str, body: str | None = None) -> Path:
    """Create ``root/rel`` with an index page."""
    directory = root / rel
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "index.html").write_text(body or f"<p>{rel}</p>", encoding="utf-8")
    return directory


def make_heading(root: Path, rel: str) -> Path:
    directory = root / rel
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """About/ (page), Episodes/ (heading) with Ep1/ and Ep2/ pages, Home/ (page)."""
    root = tmp_path / "content"
    make_page(root, "About")
    make_heading(root, "Episodes")
    make_page(root, "Episodes/Ep1", "<h1>Episode one</h1>")
    make_page(root, "Episodes/Ep2")
    make_page(root, "Home", "<h1>Welcome</h1>")
    return root


@pytest.fixture
def order_path(tmp_path: Path) -> Path:
    return tmp_path / "menuindex.yml"
