"""Locate ``studiosite.toml``.

Lookup order: the ``STUDIOSITE_CONFIG`` environment variable, then a
walk up from the starting directory to the filesystem root (the way git
finds ``.git/``). The ``--config`` CLI flag bypasses both.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "studiosite.toml"
CONFIG_ENV_VAR = "STUDIOSITE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file at or above *start* (default: cwd).

    When ``STUDIOSITE_CONFIG`` is set it is authoritative: a path that
    does not exist yields None rather than falling back to the walk.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

