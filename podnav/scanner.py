"""Walk the content directory and build the unordered menu tree."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from .errors import ScanError
from .naming import derive_identifier, derive_title
from .tree import MenuNode

logger = logging.getLogger(__name__)

INDEX_NAME = "index.html"
DEFAULT_IGNORE = frozenset({"media"})


def _list_subdirectories(directory: Path, ignore: frozenset[str]) -> list[Path]:
    """Sub-directories of ``directory`` sorted by name.

    Files and symlinked directories are skipped, so a link loop cannot recurse.
    """
    with os.scandir(directory) as entries:
        names = [
            entry.name
            for entry in entries
            if entry.is_dir(follow_symlinks=False) and not entry.name.startswith(".") and entry.name not in ignore
        ]
    return [directory / name for name in sorted(names)]


def _scan_directory(
    directory: Path,
    rel: str,
    *,
    index_name: str,
    ignore: frozenset[str],
) -> MenuNode:
    key = derive_identifier(rel)
    try:
        child_dirs = _list_subdirectories(directory, ignore)
        has_index = (directory / index_name).is_file()
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise ScanError(f"Cannot list {directory}: {exc}", directory) from exc

    children: list[MenuNode] = []
    for child_dir in child_dirs:
        child_rel = f"{rel}/{child_dir.name}"
        try:
            children.append(_scan_directory(child_dir, child_rel, index_name=index_name, ignore=ignore))
        except FileNotFoundError:
            # Removed between listing and descent (e.g. a conversion rewrote it).
            logger.debug("Directory vanished during scan: %s", child_rel)
            continue

    return MenuNode(
        key=key,
        title=derive_title(directory.name),
        path=rel,
        identifier=key if has_index else None,
        children=tuple(children),
    )


def scan(
    content_root: Path | str,
    *,
    index_name: str = INDEX_NAME,
    ignore: Iterable[str] = DEFAULT_IGNORE,
) -> list[MenuNode]:
    """Return the top-level menu nodes under ``content_root`` in natural order.

    Natural order is sorted directory names; it is only a fallback, the
    ordering file normally overrides it. Raises ScanError when the root or any
    directory that still exists cannot be listed.
    """
    root = Path(content_root)
    ignored = frozenset(ignore)
    try:
        top_dirs = _list_subdirectories(root, ignored)
    except OSError as exc:
        raise ScanError(f"Cannot list content root {root}: {exc}", root) from exc

    nodes: list[MenuNode] = []
    for directory in top_dirs:
        try:
            nodes.append(_scan_directory(directory, directory.name, index_name=index_name, ignore=ignored))
        except FileNotFoundError:
            logger.debug("Directory vanished during scan: %s", directory.name)
            continue
    return nodes
