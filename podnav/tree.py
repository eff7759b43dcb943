from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

ROOT_KEY = "root"

OrderMap = dict[str, list[str]]


@dataclass(frozen=True)
class MenuNode:
    """One directory in the content tree.

    ``key`` is the ordering key (slug of ``path``). ``identifier`` carries the
    same value only when the directory has an index page; heading-only nodes
    leave it as None.
    """

    key: str
    title: str
    path: str
    identifier: str | None = None
    children: tuple["MenuNode", ...] = field(default_factory=tuple)

    def with_children(self, children: Iterable["MenuNode"]) -> "MenuNode":
        return MenuNode(
            key=self.key,
            title=self.title,
            path=self.path,
            identifier=self.identifier,
            children=tuple(children),
        )


def walk(nodes: Iterable[MenuNode]) -> Iterator[MenuNode]:
    """Yield every node depth-first, parents before children."""
    for node in nodes:
        yield node
        yield from walk(node.children)


def collect_identifiers(nodes: Iterable[MenuNode]) -> list[str]:
    return [node.identifier for node in walk(nodes) if node.identifier]


def find_page(nodes: Iterable[MenuNode], identifier: str) -> MenuNode | None:
    for node in walk(nodes):
        if node.identifier == identifier:
            return node
    return None
