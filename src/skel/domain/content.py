"""Content entries — one file or template and its placement metadata.

Pure value types, no filesystem access.  The source path is relative to
the skeleton's content root; its POSIX form is the key in the content table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path, PurePath
from typing import Any

from skel.domain.errors import InvalidContentKindError

# Lets a skeleton ship dotfiles without committing literal dotfiles.
DOT_PREFIX = "dot_"


class ContentKind(StrEnum):
    """How a content entry is materialized."""

    FILE = "file"
    TEMPLATE = "template"

    @classmethod
    def parse(cls, value: str | None) -> ContentKind:
        """Map an optional kind string onto a ContentKind.

        Matching is case-insensitive and ignores surrounding whitespace.
        ``None`` means FILE.  Anything else raises InvalidContentKindError.
        """
        if value is None:
            return cls.FILE
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidContentKindError(value) from None


def destination_for(source: PurePath) -> Path:
    """Mirror *source*, rewriting a ``dot_`` file name prefix to ``.``."""
    name = source.name
    if name.startswith(DOT_PREFIX):
        name = "." + name.removeprefix(DOT_PREFIX)
    return Path(source.parent, name)


@dataclass(frozen=True)
class Content:
    """A single piece of skeleton content."""

    source: Path
    destination: Path
    kind: ContentKind = ContentKind.FILE
    dependencies: tuple[str, ...] = ()

    @classmethod
    def from_source(cls, path: PurePath, kind: str | None = None) -> Content:
        """Derive an entry for *path* with the default destination."""
        source = Path(path)
        return cls(
            source=source,
            destination=destination_for(source),
            kind=ContentKind.parse(kind),
        )

    @property
    def key(self) -> str:
        """Content table key for this entry."""
        return self.source.as_posix()

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.key,
            "destination": self.destination.as_posix(),
            "kind": self.kind.value,
            "dependencies": list(self.dependencies),
        }
