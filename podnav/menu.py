"""Per-request menu pipeline: scan, ensure default order, load, reconcile."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .errors import OrderNotFoundError, OrderParseError, SynthesisWriteError
from .order_store import OrderStore
from .reconcile import reconcile_menu
from .scanner import DEFAULT_IGNORE, INDEX_NAME, scan
from .tree import MenuNode, OrderMap

logger = logging.getLogger(__name__)


def load_order(store: OrderStore) -> OrderMap:
    """Read the ordering file, falling back to an empty map on any failure."""
    try:
        return store.load()
    except OrderNotFoundError:
        logger.warning("Menu order file %s is missing; using natural order", store.path)
        return {}
    except OrderParseError as exc:
        logger.warning("Menu order load error: %s; using natural order", exc)
        return {}


def build_menu(
    content_root: Path | str,
    order_path: Path | str,
    *,
    index_name: str = INDEX_NAME,
    ignore: Iterable[str] = DEFAULT_IGNORE,
) -> list[MenuNode]:
    """Scan ``content_root`` and order it by the file at ``order_path``.

    The ordering file is created from the scan when missing and re-read every
    call. Only ScanError escapes; ordering problems fall back to scan order.
    """
    nodes = scan(content_root, index_name=index_name, ignore=ignore)
    store = OrderStore(order_path)

    try:
        store.ensure_default(nodes)
    except SynthesisWriteError as exc:
        logger.warning("Failed to create default %s: %s", store.path.name, exc)
        return nodes

    return reconcile_menu(nodes, load_order(store))

