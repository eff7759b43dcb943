from __future__ import annotations

from typing import Sequence

from markupsafe import Markup

from .errors import RenderError
from .tree import MenuNode

_LINK = Markup(
    '<a href="/page/{id}" hx-get="/page/{id}/content" hx-target="#content"'
    ' hx-swap="innerHTML" hx-push-url="/page/{id}">{title}</a>'
)
_HEADING = Markup('<span class="menu-heading">{title}</span>')


def _render_item(node: MenuNode) -> Markup:
    if node.identifier:
        label = _LINK.format(id=node.identifier, title=node.title)
    else:
        label = _HEADING.format(title=node.title)
    if node.children:
        label += Markup("<ul>{}</ul>").format(_render_items(node.children))
    return Markup("<li>{}</li>").format(label)


def _render_items(nodes: Sequence[MenuNode]) -> Markup:
    return Markup("").join(_render_item(node) for node in nodes)


def render_menu(nodes: Sequence[MenuNode]) -> Markup:
    """Nested ``<nav>`` markup for the menu; titles and ids are escaped."""
    try:
        return Markup("<nav><ul>{}</ul></nav>").format(_render_items(nodes))
    except RecursionError as exc:
        raise RenderError("Menu tree is too deep to render") from exc
