"""Tests for terminal output helpers."""

from __future__ import annotations

import io

import pytest

from jiwa.ux import Colors, colorize, print_table, render_table


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_colorize_with_tty_support(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM", "xterm-256color")
    result = colorize("test", Colors.CYAN, bold=True, stream=_TTY())
    assert result == f"{Colors.BOLD}{Colors.CYAN}test{Colors.RESET}"


def test_colorize_respects_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert colorize("test", Colors.CYAN, stream=_TTY()) == "test"


def test_colorize_no_tty() -> None:
    assert colorize("test", Colors.CYAN, stream=io.StringIO()) == "test"


def test_render_table_aligns_columns() -> None:
    lines = render_table(
        ["ID", "Summary", "URL"],
        [["OPS-1", "short", "u1"], ["OPS-10", "a longer summary", "u2"]],
        stream=io.StringIO(),
    )
    assert lines[0] == "ID      Summary           URL"
    assert lines[1] == "OPS-1   short             u1"
    assert lines[2] == "OPS-10  a longer summary  u2"


def test_print_table_empty_rows() -> None:
    stream = io.StringIO()
    print_table(["ID", "Summary", "URL"], [], stream=stream)
    assert stream.getvalue() == "ID  Summary  URL\n"
