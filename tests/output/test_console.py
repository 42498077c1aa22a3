"""Tests for the Rich console factory and theme."""

from __future__ import annotations

from rich.text import Text

from skel.output.console import SKEL_THEME, create_console, get_output, style_for_kind


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console()
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_no_ansi_outside_terminal(self) -> None:
        console = create_console()
        console.print(Text("ok", style="skel.ok"))
        assert "\x1b[" not in get_output(console)

    def test_width_override(self) -> None:
        assert create_console(width=40).width == 40

    def test_theme_styles(self) -> None:
        for name in ("skel.ok", "skel.error", "skel.path", "skel.kind.template"):
            assert name in SKEL_THEME.styles


class TestStyleForKind:
    def test_known_kinds(self) -> None:
        assert style_for_kind("file") == "skel.kind.file"
        assert style_for_kind("template") == "skel.kind.template"

    def test_unknown_kind(self) -> None:
        assert style_for_kind("other") == ""
