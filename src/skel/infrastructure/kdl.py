"""KDL document access — parsing, argument extraction, value coercion.

Wraps the ``kdl-py`` parser so the rest of skel only sees plain Python
scalars and skel's own error types.  ``kdl-py`` does not record source
positions, so :class:`Locator` recovers approximate spans from the raw
text for diagnostics.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

import kdl

from skel.domain.errors import ConfigError, ParseError, Span

type Scalar = str | int | float | bool | None

_STRING = r'"(?:\\.|[^"\\])*"'
_RAW_STRING = r'(?:r#*|#+)"[^"]*"#*'
_BARE = r'[^\s;{}="]+'
# Argument tokens on a node line; ``prop`` marks named entries, ``end``
# marks where the node's own entries stop.
_TOKEN_PATTERN = re.compile(
    rf"(?P<prop>(?:{_BARE}|{_STRING})=(?:{_STRING}|{_RAW_STRING}|{_BARE}))"
    rf"|(?P<end>[{{;]|//|/-)"
    rf"|{_RAW_STRING}|{_STRING}|[^\s;{{}}]+"
)
_LOCATION_PATTERN = re.compile(r"line\s+(\d+)\D+(\d+)", re.IGNORECASE)
# v1 ``r#"..."#`` and v2 ``#"..."#`` raw string openers.
_RAW_OPEN_PATTERN = re.compile(r'(?:r(#*)|(#+))"')


def _block_comment_end(text: str, start: int) -> int:
    """Offset just past the ``/* */`` comment at *start*; these nest."""
    nesting = 0
    index = start
    while index < len(text):
        if text.startswith("/*", index):
            nesting += 1
            index += 2
        elif text.startswith("*/", index):
            nesting -= 1
            index += 2
            if nesting == 0:
                return index
        else:
            index += 1
    return len(text)


def _string_end(text: str, start: int) -> int:
    """Offset just past the quoted string at *start*."""
    if text.startswith('"""', start):
        end = text.find('"""', start + 3)
        return len(text) if end == -1 else end + 3
    index = start + 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == '"':
            return index + 1
        index += 1
    return len(text)


def _inert_end(text: str, index: int) -> int | None:
    """End of the comment or string starting at *index*, or None."""
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end == -1 else end
    if text.startswith("/*", index):
        return _block_comment_end(text, index)
    if text[index] == '"':
        return _string_end(text, index)
    match = _RAW_OPEN_PATTERN.match(text, index)
    if match:
        closing = '"' + (match.group(1) or match.group(2) or "")
        end = text.find(closing, match.end())
        return len(text) if end == -1 else end + len(closing)
    return None


def parse_document(text: str, *, path: Path | None = None) -> kdl.Document:
    """Parse *text* as KDL, raising ParseError on malformed input."""
    try:
        return kdl.parse(text)
    except kdl.ParseError as exc:
        message = str(exc)
        line = column = None
        match = _LOCATION_PATTERN.search(message)
        if match:
            line, column = int(match.group(1)), int(match.group(2))
        raise ParseError(message, path=path, line=line, column=column) from exc


def nodes_named(nodes: Iterable[kdl.Node], name: str) -> Iterator[kdl.Node]:
    """Yield every node in *nodes* called *name*, in document order."""
    return (node for node in nodes if node.name == name)


def find_node(nodes: Iterable[kdl.Node], name: str) -> kdl.Node | None:
    """Return the first node called *name*, or None."""
    return next(nodes_named(nodes, name), None)


def native(value: Any) -> Scalar:
    """Unwrap a parsed KDL value into a Python scalar."""
    if value is None or isinstance(value, str | bool | int | float):
        return value
    # Tagged values stay wrapped in kdl-py value objects.
    return getattr(value, "value", value)


def to_text(value: Any) -> str:
    """Textual form of a value: strings pass through, null is ``"null"``."""
    value = native(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Locator:
    """Recover approximate source spans for nodes and their arguments."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._depths, self._hidden = self._scan(text)

    @staticmethod
    def _scan(text: str) -> tuple[list[int], list[bool]]:
        """Children-block depth at every offset, and whether it is inert text.

        Braces inside strings, raw strings and comments do not count, and
        offsets inside them are marked hidden so no node is found there.
        """
        size = len(text)
        depths = [0] * (size + 1)
        hidden = [False] * (size + 1)
        depth = 0
        index = 0
        while index < size:
            end = _inert_end(text, index)
            if end is not None:
                for offset in range(index, end):
                    depths[offset] = depth
                    hidden[offset] = True
                index = end
                continue
            depths[index] = depth
            char = text[index]
            if char == "{":
                depth += 1
            elif char == "}":
                depth = max(depth - 1, 0)
            index += 1
        depths[size] = depth
        return depths, hidden

    def node(
        self,
        name: str,
        *,
        occurrence: int = 0,
        start: int = 0,
        depth: int = 0,
    ) -> Span | None:
        """Span of the *occurrence*-th node called *name* at or after *start*.

        Only nodes nested exactly *depth* children blocks deep are counted.
        """
        pattern = re.compile(
            rf"(?:^|[;{{])[ \t]*(?:\([^)]*\))?({re.escape(name)})(?=[\s;{{}}]|$)", re.M
        )
        index = 0
        for match in pattern.finditer(self.text, start):
            found = match.start(1)
            if self._hidden[found] or self._depths[found] != depth:
                continue
            if index == occurrence:
                return match.start(1), len(name)
            index += 1
        return None

    def argument(
        self,
        name: str,
        index: int,
        *,
        occurrence: int = 0,
        start: int = 0,
        depth: int = 0,
    ) -> Span | None:
        """Span of the *index*-th positional argument of a node.

        Falls back to a zero-length span just after the node name when the
        argument is absent, which is where one should be inserted.
        """
        node_span = self.node(name, occurrence=occurrence, start=start, depth=depth)
        if node_span is None:
            return None
        cursor = node_span[0] + node_span[1]
        line_end = self.text.find("\n", cursor)
        if line_end == -1:
            line_end = len(self.text)
        position = 0
        for match in _TOKEN_PATTERN.finditer(self.text, cursor, line_end):
            if match.group("end"):
                break
            if match.group("prop"):
                continue
            if position == index:
                return match.start(), len(match.group(0))
            position += 1
        return cursor, 0


def first_string_arg(
    nodes: list[kdl.Node],
    name: str,
    default: Callable[[], str],
    *,
    locator: Locator,
) -> str:
    """Return the first argument of the first *name* node as a string.

    Calls *default* when no such node exists.  Raises ConfigError when the
    node has no argument or the argument is not a string.
    """
    node = find_node(nodes, name)
    if node is None:
        return default()
    if not node.args:
        raise ConfigError.missing_argument(locator.text, locator.argument(name, 0))
    value = native(node.args[0])
    if not isinstance(value, str):
        raise ConfigError.invalid_string(locator.text, locator.argument(name, 0))
    return value


def variables_from_nodes(nodes: list[kdl.Node], *, locator: Locator) -> dict[str, Scalar]:
    """Collect bindings from the children of the first ``variables`` node."""
    variables: dict[str, Scalar] = {}
    block = find_node(nodes, "variables")
    if block is None:
        return variables

    block_span = locator.node("variables")
    block_start = block_span[0] if block_span else 0
    seen: dict[str, int] = {}
    for child in block.nodes:
        occurrence = seen.get(child.name, 0)
        seen[child.name] = occurrence + 1
        if not child.args:
            span = locator.argument(
                child.name, 0, occurrence=occurrence, start=block_start, depth=1
            )
            raise ConfigError.missing_argument(locator.text, span)
        variables[child.name] = native(child.args[0])
    return variables
