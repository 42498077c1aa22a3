"""Structured error taxonomy for skeleton loading and resolution.

Every failure raised by the core is a :class:`SkelError` carrying a stable
``code``.  Services translate these into a failed ``ServiceResult`` so the
CLI never has to catch anything broader than ``SkelError``.

Configuration errors additionally carry the offending document text and a
``(offset, length)`` span so the exact location can be shown to the user.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

type Span = tuple[int, int]


class ConfigErrorKind(StrEnum):
    """Semantic problems found in an otherwise well-formed document."""

    MISSING_ARGUMENT = "missing_argument"
    INVALID_STRING = "invalid_string"
    MISSING_SOURCE = "missing_source"
    INVALID_FLOAT = "invalid_float"
    INVALID_CONTENT_KIND = "invalid_content_kind"
    UNKNOWN_DEPENDENCY = "unknown_dependency"


_KIND_MESSAGES: dict[ConfigErrorKind, str] = {
    ConfigErrorKind.MISSING_ARGUMENT: "missing required argument",
    ConfigErrorKind.INVALID_STRING: "invalid string value",
    ConfigErrorKind.MISSING_SOURCE: "missing source file",
    ConfigErrorKind.INVALID_FLOAT: "invalid float",
    ConfigErrorKind.INVALID_CONTENT_KIND: "invalid content kind",
    ConfigErrorKind.UNKNOWN_DEPENDENCY: "unknown dependency",
}


class SkelError(Exception):
    """Base class for every error surfaced by skel."""

    code = "OTHER"

    def detail(self) -> dict[str, Any]:
        """Extra structured fields for ``ServiceError.detail``."""
        return {}


class SkelIOError(SkelError):
    """A config file that exists but cannot be read as UTF-8 text."""

    code = "IO_ERROR"

    def __init__(self, path: Path, cause: OSError | UnicodeDecodeError) -> None:
        self.path = path
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"cannot read {path}: {reason}")

    def detail(self) -> dict[str, Any]:
        return {"path": str(self.path)}


class ParseError(SkelError):
    """The configuration text is not a well-formed KDL document."""

    code = "PARSE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.line = line
        self.column = column
        super().__init__(message)

    def detail(self) -> dict[str, Any]:
        detail: dict[str, Any] = {}
        if self.path is not None:
            detail["path"] = str(self.path)
        if self.line is not None:
            detail["line"] = self.line
        if self.column is not None:
            detail["column"] = self.column
        return detail


class ConfigError(SkelError):
    """A semantic error pointing at a location in the configuration text.

    Attributes:
        kind: What went wrong.
        config: Full text of the offending document.
        span: ``(offset, length)`` of the offending token, if it could be located.
        label: Short annotation for the span.
        help_text: Suggestion for fixing the problem.
    """

    code = "CONFIG_ERROR"

    def __init__(
        self,
        kind: ConfigErrorKind,
        *,
        config: str = "",
        span: Span | None = None,
        label: str | None = None,
        help_text: str | None = None,
        message: str | None = None,
    ) -> None:
        self.kind = kind
        self.config = config
        self.span = span
        self.label = label
        self.help_text = help_text
        super().__init__(message or _KIND_MESSAGES[kind])

    @classmethod
    def missing_argument(cls, config: str, span: Span | None) -> ConfigError:
        return cls(
            ConfigErrorKind.MISSING_ARGUMENT,
            config=config,
            span=span,
            label="insert an argument here",
            help_text="this node requires an argument",
        )

    @classmethod
    def invalid_string(cls, config: str, span: Span | None) -> ConfigError:
        return cls(
            ConfigErrorKind.INVALID_STRING,
            config=config,
            span=span,
            help_text="the indicated argument must be a string",
        )

    @classmethod
    def missing_source(cls, config: str, span: Span | None) -> ConfigError:
        return cls(
            ConfigErrorKind.MISSING_SOURCE,
            config=config,
            span=span,
            help_text="the file indicated does not exist",
        )

    def location(self) -> tuple[int, int] | None:
        """Return the 1-based ``(line, column)`` of the span start."""
        if self.span is None:
            return None
        offset = min(self.span[0], len(self.config))
        before = self.config[:offset]
        line = before.count("\n") + 1
        column = offset - (before.rfind("\n") + 1) + 1
        return line, column

    def snippet(self) -> str | None:
        """Return the source line containing the span start."""
        location = self.location()
        if location is None:
            return None
        lines = self.config.splitlines()
        if not lines:
            return ""
        return lines[min(location[0], len(lines)) - 1]

    def detail(self) -> dict[str, Any]:
        detail: dict[str, Any] = {"kind": self.kind.value}
        location = self.location()
        if location is not None:
            detail["line"], detail["column"] = location
            detail["snippet"] = self.snippet()
        if self.label:
            detail["label"] = self.label
        if self.help_text:
            detail["help"] = self.help_text
        return detail


class InvalidContentKindError(ConfigError):
    """A content kind string other than ``file`` or ``template``."""

    def __init__(self, value: str, *, config: str = "", span: Span | None = None) -> None:
        self.value = value
        super().__init__(
            ConfigErrorKind.INVALID_CONTENT_KIND,
            config=config,
            span=span,
            help_text='expected "file" or "template"',
            message=f"invalid content kind: {value!r}",
        )

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "value": self.value}


class UnknownDependencyError(ConfigError):
    """A content entry depends on a key that is not in the content table."""

    def __init__(
        self,
        source: str,
        dependency: str,
        *,
        config: str = "",
        span: Span | None = None,
    ) -> None:
        self.source = source
        self.dependency = dependency
        super().__init__(
            ConfigErrorKind.UNKNOWN_DEPENDENCY,
            config=config,
            span=span,
            help_text="dependencies must name a file under the content directory",
            message=f"{source!r} depends on unknown content {dependency!r}",
        )

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "source": self.source, "dependency": self.dependency}


class CycleDetectedError(SkelError):
    """Content dependencies form a cycle and cannot be ordered.

    Attributes:
        remaining: Every key left unresolved, in collated order.
        cycle: One concrete cycle among them, as a list of keys.
    """

    code = "CYCLE_DETECTED"

    def __init__(self, remaining: list[str], cycle: list[str] | None = None) -> None:
        self.remaining = remaining
        self.cycle = cycle or []
        if self.cycle:
            path = " -> ".join([*self.cycle, self.cycle[0]])
            message = f"dependency cycle detected: {path}"
        else:
            message = f"dependency cycle detected among: {', '.join(remaining)}"
        super().__init__(message)

    def detail(self) -> dict[str, Any]:
        return {"remaining": self.remaining, "cycle": self.cycle}
