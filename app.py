# Run locally with: pip install -e . && python app.py
from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from flask import Flask, abort, current_app, render_template, send_file
from markupsafe import Markup

from podnav import (
    OrderStore,
    RenderError,
    ScanError,
    SynthesisWriteError,
    build_default_order,
    build_menu,
    find_page,
    render_menu,
    scan,
)

app = Flask(__name__, template_folder="templates")

logger = logging.getLogger(__name__)

CONTENT_DIRNAME = "web/content"
MENU_INDEX_FILENAME = "menuindex.yml"
INDEX_NAME = "index.html"
DEFAULT_PAGE_ID = "home"


def _resolve_path(env_name: str, default: str) -> Path:
    """Resolve a configured path, honoring an optional environment override."""
    env_path = os.environ.get(env_name)
    candidate = Path(env_path) if env_path else Path(default)
    return candidate if candidate.is_absolute() else Path.cwd() / candidate


def _resolve_ignore_dirs() -> tuple[str, ...]:
    raw = os.environ.get("MENU_IGNORE_DIRS")
    if raw is None:
        return ("media",)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


app.config.update(
    CONTENT_ROOT=_resolve_path("CONTENT_ROOT", CONTENT_DIRNAME),
    MENU_INDEX_PATH=_resolve_path("MENU_INDEX_PATH", MENU_INDEX_FILENAME),
    MENU_IGNORE_DIRS=_resolve_ignore_dirs(),
    INDEX_NAME=INDEX_NAME,
)


def _scan_options() -> dict:
    return {
        "index_name": current_app.config["INDEX_NAME"],
        "ignore": current_app.config["MENU_IGNORE_DIRS"],
    }


def _page_file(page_id: str) -> Path:
    """Locate the index page for ``page_id`` or abort with 404."""
    try:
        nodes = scan(current_app.config["CONTENT_ROOT"], **_scan_options())
    except ScanError:
        logger.exception("Content scan failed while resolving page %s", page_id)
        abort(500)
    node = find_page(nodes, page_id)
    if node is None:
        abort(404)
    return Path(current_app.config["CONTENT_ROOT"]) / node.path / current_app.config["INDEX_NAME"]


@app.route("/menu")
def menu():
    try:
        nodes = build_menu(
            current_app.config["CONTENT_ROOT"],
            current_app.config["MENU_INDEX_PATH"],
            **_scan_options(),
        )
    except ScanError:
        logger.exception("Menu build failed")
        return "Menu unavailable", 500, {"Content-Type": "text/plain; charset=utf-8"}

    try:
        markup = render_menu(nodes)
    except RenderError:
        logger.exception("Menu render failed")
        return "Menu unavailable", 500, {"Content-Type": "text/plain; charset=utf-8"}
    return markup, 200, {"Content-Type": "text/html; charset=utf-8"}


@app.route("/page/<page_id>/content")
def page_content(page_id: str):
    path = _page_file(page_id)
    try:
        return send_file(path, mimetype="text/html")
    except FileNotFoundError:
        abort(404)


@app.route("/")
@app.route("/page/<page_id>")
def page_full(page_id: str = DEFAULT_PAGE_ID):
    path = _page_file(page_id)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        abort(404)
    except OSError:
        logger.exception("Error reading page content for %s", page_id)
        return "Error reading page content", 500
    return render_template("layout.html", content=Markup(content), page_id=page_id)


@app.route("/health", methods=["GET"])
def healthcheck():
    content_root = Path(current_app.config["CONTENT_ROOT"])
    order_path = Path(current_app.config["MENU_INDEX_PATH"])
    return {
        "status": "ok",
        "content_root": str(content_root),
        "content_root_exists": content_root.is_dir(),
        "menu_index_path": str(order_path),
        "menu_index_exists": order_path.exists(),
    }


@app.cli.command("menu-index")
@click.option("--force", is_flag=True, help="Rewrite the file from the current directory tree.")
def menu_index_command(force: bool) -> None:
    """Write the default menu ordering file for the content tree."""
    try:
        nodes = scan(app.config["CONTENT_ROOT"], **_scan_options())
    except ScanError as exc:
        raise click.ClickException(str(exc)) from exc

    store = OrderStore(app.config["MENU_INDEX_PATH"])
    try:
        if force:
            store.save(build_default_order(nodes))
            written = True
        else:
            written = store.ensure_default(nodes)
    except SynthesisWriteError as exc:
        raise click.ClickException(str(exc)) from exc

    if written:
        click.echo(f"Wrote {store.path}")
    else:
        click.echo(f"{store.path} already exists; use --force to rewrite it")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=True)
