"""Directory-backed navigation menu with a hand-editable ordering file."""
from __future__ import annotations

from .errors import (
    MenuError,
    OrderNotFoundError,
    OrderParseError,
    RenderError,
    ScanError,
    SynthesisWriteError,
)
from .menu import build_menu, load_order
from .order_store import OrderStore, build_default_order
from .reconcile import order_children, reconcile, reconcile_menu
from .render import render_menu
from .scanner import scan
from .tree import ROOT_KEY, MenuNode, OrderMap, find_page

__all__ = [
    "ROOT_KEY",
    "MenuError",
    "MenuNode",
    "OrderMap",
    "OrderNotFoundError",
    "OrderParseError",
    "OrderStore",
    "RenderError",
    "ScanError",
    "SynthesisWriteError",
    "build_default_order",
    "build_menu",
    "find_page",
    "load_order",
    "order_children",
    "reconcile",
    "reconcile_menu",
    "render_menu",
    "scan",
]
