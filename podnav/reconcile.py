from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .tree import ROOT_KEY, MenuNode


def order_children(
    children: Sequence[MenuNode],
    listed: Iterable[str] | None,
) -> list[MenuNode]:
    """Listed-and-present children in listed order, then the rest in scan order.

    Ids with no matching child are skipped and repeated ids only match once,
    so a hand-edited list that drifted from the disk never raises.
    """
    if listed is None:
        return list(children)

    remaining = list(children)
    ordered: list[MenuNode] = []
    for key in listed:
        for idx, child in enumerate(remaining):
            if child.key == key:
                ordered.append(remaining.pop(idx))
                break
    ordered.extend(remaining)
    return ordered


def reconcile(node: MenuNode, order: Mapping[str, Sequence[str]], key: str | None = None) -> MenuNode:
    """Return a copy of ``node`` with every level ordered by ``order``.

    ``key`` overrides the lookup key; the synthetic top-level node uses the
    root sentinel.
    """
    children = [reconcile(child, order) for child in node.children]
    if key is None and node.key == ROOT_KEY:
        # A directory named "root" cannot use the top-level entry.
        return node.with_children(children)
    lookup = node.key if key is None else key
    return node.with_children(order_children(children, order.get(lookup)))


def reconcile_menu(nodes: Sequence[MenuNode], order: Mapping[str, Sequence[str]]) -> list[MenuNode]:
    """Reconcile the top-level nodes against the ``root`` entry and below."""
    root = MenuNode(key=ROOT_KEY, title="", path="", children=tuple(nodes))
    return list(reconcile(root, order, key=ROOT_KEY).children)
