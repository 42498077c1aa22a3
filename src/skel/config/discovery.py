"""Project config file resolution.

Turns the ``--config`` flag (or the ``SKEL_CONFIG`` env var) into an
absolute path to the project layer's config file:

- no value: the current directory
- relative paths are joined onto the current directory
- a directory gets ``.skeleton.kdl`` appended
- the result is normalized lexically (``.`` and ``..`` folded, no symlinks)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = ".skeleton.kdl"
CONFIG_ENV_VAR = "SKEL_CONFIG"


def normalize_path(base: Path, path: Path) -> Path:
    """Join *path* onto *base* and fold ``.``/``..`` without touching the disk."""
    return Path(os.path.normpath(base / path))


def resolve_config_path(config: str | Path | None = None, cwd: Path | None = None) -> Path:
    """Return the absolute path of the project config file.

    *config* wins over ``SKEL_CONFIG``; with neither, *cwd* (default: the
    process working directory) is used.
    """
    current = cwd or Path.cwd()
    if config is None:
        config = os.environ.get(CONFIG_ENV_VAR) or None

    path = Path(config) if config is not None else current
    if not path.is_absolute():
        path = current / path
    if path.is_dir():
        path = path / CONFIG_FILENAME
    return normalize_path(current, path)
