from __future__ import annotations

import os
import re

_SEPARATORS = re.compile(r"[\\/]+")


def derive_title(basename: str) -> str:
    """Turn a directory name like ``season_one-extras`` into ``Season One Extras``."""
    spaced = (basename or "").replace("-", " ").replace("_", " ")
    return " ".join(token[:1].upper() + token[1:].lower() for token in spaced.split())


def derive_identifier(rel_path: str) -> str:
    """Slug for a path relative to the content root.

    Separators become dashes and the result is lower-cased, so
    ``Episodes/Season-1`` and ``Episodes\\Season-1`` both give
    ``episodes-season-1``.
    """
    rel = str(rel_path).replace(os.sep, "/")
    return _SEPARATORS.sub("-", rel.strip("/\\")).lower()
