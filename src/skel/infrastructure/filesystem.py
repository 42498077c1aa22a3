"""Filesystem reads for skeleton loading.

Reading is the only I/O the core performs: configuration text and a
listing of the skeleton's content tree.  Nothing here writes to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skel.domain.collation import sort_paths
from skel.domain.errors import SkelIOError

logger = logging.getLogger(__name__)

# Directory entries never treated as content (besides dot-prefixed names).
_SKIP_NAMES = frozenset({"node_modules"})


def read_text_with_default(path: Path) -> tuple[str, bool]:
    """Read *path*, returning ``(text, is_default)``.

    A missing file is not an error: it yields ``("", True)``.  Any other
    OSError, or text that is not valid UTF-8, is raised as SkelIOError.
    """
    try:
        return path.read_text(encoding="utf-8"), False
    except FileNotFoundError:
        logger.debug("Config file %s not found, using defaults", path)
        return "", True
    except (OSError, UnicodeDecodeError) as exc:
        raise SkelIOError(path, exc) from exc


def _is_skipped(name: str) -> bool:
    return name.startswith(".") or name in _SKIP_NAMES


def read_tree(root: Path) -> list[Path]:
    """List every regular file under *root* as a root-relative path.

    Hidden entries and ``node_modules`` are pruned from both recursion and
    output.  Unreadable or missing directories contribute nothing.  The
    result is in collated parent-then-name order regardless of the order
    the filesystem returns entries in.
    """
    results: list[Path] = []
    pending: list[Path] = [root]
    while pending:
        directory = pending.pop()
        try:
            entries = list(directory.iterdir())
        except OSError:
            logger.debug("Skipping unreadable directory %s", directory)
            continue
        for entry in entries:
            if _is_skipped(entry.name):
                continue
            if entry.is_dir():
                pending.append(entry)
            elif entry.is_file():
                results.append(entry.relative_to(root))
    return sort_paths(results)
