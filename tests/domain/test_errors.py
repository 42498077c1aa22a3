"""Tests for the skel error taxonomy."""

from __future__ import annotations

from pathlib import Path

from skel.domain.errors import (
    ConfigError,
    ConfigErrorKind,
    CycleDetectedError,
    InvalidContentKindError,
    ParseError,
    SkelError,
    SkelIOError,
    UnknownDependencyError,
)


class TestErrorCodes:
    def test_codes(self) -> None:
        assert SkelError("x").code == "OTHER"
        assert SkelIOError(Path("f"), OSError("boom")).code == "IO_ERROR"
        assert ParseError("bad").code == "PARSE_ERROR"
        assert ConfigError(ConfigErrorKind.INVALID_FLOAT).code == "CONFIG_ERROR"
        assert InvalidContentKindError("x").code == "CONFIG_ERROR"
        assert UnknownDependencyError("a", "b").code == "CONFIG_ERROR"
        assert CycleDetectedError(["a"]).code == "CYCLE_DETECTED"

    def test_all_are_skel_errors(self) -> None:
        assert issubclass(SkelIOError, SkelError)
        assert issubclass(ParseError, SkelError)
        assert issubclass(InvalidContentKindError, ConfigError)
        assert issubclass(UnknownDependencyError, ConfigError)
        assert issubclass(CycleDetectedError, SkelError)


class TestSkelIOError:
    def test_message_uses_strerror(self) -> None:
        err = SkelIOError(Path("/etc/x"), PermissionError(13, "Permission denied"))
        assert str(err) == "cannot read /etc/x: Permission denied"
        assert err.detail() == {"path": "/etc/x"}


class TestParseError:
    def test_detail_omits_unknown_fields(self) -> None:
        assert ParseError("bad").detail() == {}

    def test_detail_with_location(self) -> None:
        err = ParseError("bad", path=Path("a.kdl"), line=3, column=7)
        assert err.detail() == {"path": "a.kdl", "line": 3, "column": 7}


class TestConfigError:
    CONFIG = 'root "."\nskeleton 1\n'

    def test_default_message_from_kind(self) -> None:
        assert str(ConfigError(ConfigErrorKind.MISSING_SOURCE)) == "missing source file"

    def test_location_is_one_based(self) -> None:
        err = ConfigError.invalid_string(self.CONFIG, (18, 1))
        assert err.location() == (2, 10)
        assert err.snippet() == "skeleton 1"

    def test_location_at_start(self) -> None:
        err = ConfigError.missing_argument(self.CONFIG, (0, 4))
        assert err.location() == (1, 1)
        assert err.snippet() == 'root "."'

    def test_no_span_no_location(self) -> None:
        err = ConfigError.missing_source(self.CONFIG, None)
        assert err.location() is None
        assert err.snippet() is None
        assert "line" not in err.detail()

    def test_missing_argument_annotations(self) -> None:
        err = ConfigError.missing_argument(self.CONFIG, (4, 0))
        assert err.kind is ConfigErrorKind.MISSING_ARGUMENT
        assert err.label == "insert an argument here"
        assert err.help_text == "this node requires an argument"

    def test_detail(self) -> None:
        err = ConfigError.invalid_string(self.CONFIG, (18, 1))
        assert err.detail() == {
            "kind": "invalid_string",
            "line": 2,
            "column": 10,
            "snippet": "skeleton 1",
            "help": "the indicated argument must be a string",
        }

    def test_missing_source_help(self) -> None:
        err = ConfigError.missing_source(self.CONFIG, None)
        assert err.help_text == "the file indicated does not exist"


class TestUnknownDependencyError:
    def test_message_and_detail(self) -> None:
        err = UnknownDependencyError("a.txt", "ghost.txt")
        assert "a.txt" in str(err)
        assert "ghost.txt" in str(err)
        detail = err.detail()
        assert detail["kind"] == "unknown_dependency"
        assert detail["source"] == "a.txt"
        assert detail["dependency"] == "ghost.txt"


class TestCycleDetectedError:
    def test_message_with_cycle(self) -> None:
        err = CycleDetectedError(["a", "b"], ["a", "b"])
        assert str(err) == "dependency cycle detected: a -> b -> a"

    def test_message_without_cycle(self) -> None:
        err = CycleDetectedError(["a", "b"])
        assert str(err) == "dependency cycle detected among: a, b"
        assert err.detail() == {"remaining": ["a", "b"], "cycle": []}
