from __future__ import annotations

from pathlib import Path


class MenuError(Exception):
    """Base class for failures while building the navigation menu."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ScanError(MenuError):
    """A content directory could not be listed. Fatal for the request."""


class OrderNotFoundError(MenuError):
    """The ordering file does not exist yet."""


class OrderParseError(MenuError):
    """The ordering file exists but is not a mapping of keys to lists."""


class SynthesisWriteError(MenuError):
    """The default ordering file could not be written."""


class RenderError(MenuError):
    """The menu markup could not be produced. Fatal for the request."""
