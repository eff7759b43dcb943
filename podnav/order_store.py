from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Iterable

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError

from .errors import OrderNotFoundError, OrderParseError, SynthesisWriteError
from .tree import ROOT_KEY, MenuNode, OrderMap

logger = logging.getLogger(__name__)


def _yaml(typ: str = "rt") -> YAML:
    # YAML instances are not thread-safe; one per call.
    # "base" keeps every scalar as its written text (010 stays "010").
    yaml = YAML(typ=typ)
    yaml.preserve_quotes = True
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


HEADER_COMMENT = (
    "Menu ordering. Each key lists its children in display order.\n"
    "'root' is the top level. Unlisted pages are appended, unknown ids are ignored."
)

# Values the base loader leaves as text for an entry with no children.
_EMPTY_VALUES = frozenset({"", "~", "null", "Null", "NULL"})

# One writer at a time for every order file in this process.
_WRITE_LOCK = threading.Lock()


def build_default_order(nodes: Iterable[MenuNode]) -> OrderMap:
    """Ordering that reproduces the scan order of ``nodes``.

    One ``root`` entry for the top level plus one entry per node that has
    children, in depth-first encounter order.
    """
    top = list(nodes)
    order: OrderMap = {ROOT_KEY: [node.key for node in top]}

    def _walk(items: list[MenuNode]) -> None:
        for node in items:
            if node.children:
                if node.key == ROOT_KEY:
                    logger.warning(
                        "Directory %s shares the reserved key %r; its children keep scan order",
                        node.path,
                        ROOT_KEY,
                    )
                else:
                    order[node.key] = [child.key for child in node.children]
                _walk(list(node.children))

    _walk(top)
    return order


def _to_document(order: OrderMap) -> CommentedMap:
    doc = CommentedMap()
    keys = sorted(key for key in order if key != ROOT_KEY)
    if ROOT_KEY in order:
        keys.insert(0, ROOT_KEY)
    for key in keys:
        doc[key] = CommentedSeq(order[key])
    doc.yaml_set_start_comment(HEADER_COMMENT)
    return doc


def _from_document(data: Any, path: Path) -> OrderMap:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OrderParseError(f"{path.name} must contain a mapping at the top level.", path)
    order: OrderMap = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise OrderParseError(f"{path.name} has an invalid key: {key!r}", path)
        if value is None or (isinstance(value, str) and value in _EMPTY_VALUES):
            order[key] = []
            continue
        if not isinstance(value, list):
            raise OrderParseError(f"Entry {key!r} in {path.name} must be a list.", path)
        items: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise OrderParseError(f"Entry {key!r} in {path.name} contains a non-scalar item.", path)
            items.append(item)
        order[key] = items
    return order


class OrderStore:
    """The hand-editable YAML file that holds menu ordering."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> OrderMap:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = _yaml("base").load(handle)
        except FileNotFoundError as exc:
            raise OrderNotFoundError(f"{self.path} does not exist", self.path) from exc
        except YAMLError as exc:
            raise OrderParseError(f"Failed to read {self.path.name}: {exc}", self.path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise OrderParseError(f"Failed to read {self.path.name}: {exc}", self.path) from exc
        return _from_document(data, self.path)

    def save(self, order: OrderMap) -> None:
        """Write ``order`` atomically, replacing whatever is on disk."""
        with _WRITE_LOCK:
            self._write(order)

    def ensure_default(self, nodes: Iterable[MenuNode]) -> bool:
        """Write the default ordering for ``nodes`` unless the file exists.

        Only existence is checked; a corrupt file is left for ``load`` to
        report. Returns True when a file was written.
        """
        with _WRITE_LOCK:
            try:
                if self.path.exists():
                    return False
            except OSError as exc:
                raise SynthesisWriteError(f"Cannot stat {self.path}: {exc}", self.path) from exc
            self._write(build_default_order(nodes))
        logger.info("Created default menu order at %s", self.path)
        return True

    def _file_mode(self) -> int:
        """Permission bits of the current file, or 0644 for a new one."""
        try:
            return self.path.stat().st_mode & 0o777
        except FileNotFoundError:
            return 0o644

    def _write(self, order: OrderMap) -> None:
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                _yaml().dump(_to_document(order), handle)
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise SynthesisWriteError(f"Cannot write {self.path}: {exc}", self.path) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
