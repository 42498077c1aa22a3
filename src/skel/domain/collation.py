"""Deterministic path ordering using the Unicode Collation Algorithm.

Content keys are ordered by parent directory first, then file name, each
compared with locale-aware collation.  The raw path string is the final
tie-break so the order stays total even when two strings collate equal.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cache
from pathlib import PurePath, PurePosixPath

from pyuca import Collator

type CollationKey = tuple[int, ...]


@cache
def _collator() -> Collator:
    # Loading the DUCET table is slow; build it once per process.
    return Collator()


def collation_key(value: str) -> CollationKey:
    """Return the UCA sort key for *value*."""
    return tuple(_collator().sort_key(value))


def path_sort_key(path: PurePath | str) -> tuple[CollationKey, CollationKey, str]:
    """Sort key for a root-relative path: ``(parent, name, raw)``.

    Top-level entries have an empty parent so they sort before any
    subdirectory.
    """
    posix = PurePosixPath(PurePath(path).as_posix())
    parent = posix.parent.as_posix()
    if parent == ".":
        parent = ""
    return collation_key(parent), collation_key(posix.name), posix.as_posix()


def sort_paths[T: PurePath | str](paths: Iterable[T]) -> list[T]:
    """Return *paths* sorted into collated parent-then-name order."""
    return sorted(paths, key=path_sort_key)
