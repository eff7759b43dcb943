from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from conftest import make_heading, make_page
from podnav import scanner
from podnav.errors import ScanError
from podnav.scanner import scan
from podnav.tree import collect_identifiers


def test_scan_builds_nested_tree(content_root: Path) -> None:
    nodes = scan(content_root)

    assert [node.title for node in nodes] == ["About", "Episodes", "Home"]
    about, episodes, home = nodes
    assert about.identifier == "about"
    assert about.path == "About"
    assert episodes.identifier is None
    assert episodes.key == "episodes"
    assert [child.identifier for child in episodes.children] == ["episodes-ep1", "episodes-ep2"]
    assert episodes.children[0].path == "Episodes/Ep1"
    assert home.children == ()


def test_scan_keeps_empty_heading_directories(tmp_path: Path) -> None:
    make_heading(tmp_path, "Drafts")

    nodes = scan(tmp_path)

    assert len(nodes) == 1
    assert nodes[0].title == "Drafts"
    assert nodes[0].identifier is None
    assert nodes[0].children == ()


def test_scan_ignores_files_hidden_and_media_dirs(tmp_path: Path) -> None:
    page = make_page(tmp_path, "Show")
    (page / "media").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    nodes = scan(tmp_path)

    assert [node.key for node in nodes] == ["show"]
    assert nodes[0].children == ()


def test_scan_custom_ignore_keeps_media(tmp_path: Path) -> None:
    page = make_page(tmp_path, "Show")
    (page / "media").mkdir()

    nodes = scan(tmp_path, ignore=())

    assert [child.key for child in nodes[0].children] == ["show-media"]


def test_scan_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(ScanError) as exc:
        scan(tmp_path / "missing")
    assert exc.value.path == tmp_path / "missing"


def test_scan_root_that_is_a_file_raises(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(ScanError):
        scan(target)


def test_scan_unlistable_subdirectory_raises(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    original = scanner._list_subdirectories
    blocked = content_root / "Episodes"

    def fake_list(directory: Path, ignore: frozenset[str]) -> list[Path]:
        if directory == blocked:
            raise PermissionError(13, "Permission denied", str(directory))
        return original(directory, ignore)

    monkeypatch.setattr(scanner, "_list_subdirectories", fake_list)

    with pytest.raises(ScanError) as exc:
        scan(content_root)
    assert exc.value.path == blocked


def test_scan_tolerates_directory_vanishing(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    original = scanner._list_subdirectories
    doomed = content_root / "Episodes" / "Ep2"

    def racing_list(directory: Path, ignore: frozenset[str]) -> list[Path]:
        listed = original(directory, ignore)
        if directory == content_root / "Episodes" and doomed.exists():
            shutil.rmtree(doomed)
        return listed

    monkeypatch.setattr(scanner, "_list_subdirectories", racing_list)

    nodes = scan(content_root)

    assert collect_identifiers(nodes) == ["about", "episodes-ep1", "home"]


def test_identifiers_do_not_depend_on_siblings(tmp_path: Path) -> None:
    make_page(tmp_path, "Episodes/Season-1")
    first = collect_identifiers(scan(tmp_path))
    make_page(tmp_path, "Episodes/Aardvark")
    make_page(tmp_path, "Archive")

    second = collect_identifiers(scan(tmp_path))

    assert first == ["episodes-season-1"]
    assert "episodes-season-1" in second


def test_scan_skips_symlinked_directories(tmp_path: Path) -> None:
    page = make_page(tmp_path, "Show")
    (page / "loop").symlink_to(tmp_path, target_is_directory=True)
    (tmp_path / "Alias").symlink_to(page, target_is_directory=True)

    nodes = scan(tmp_path)

    assert [node.key for node in nodes] == ["show"]
    assert nodes[0].children == ()
