"""Simple terminal output helpers - no external dependencies."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    CYAN = "\033[36m"


def _supports_color(stream: TextIO | None = None) -> bool:
    """Check if terminal supports color output."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return True


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    """Apply color to text if terminal supports it."""
    if not _supports_color(stream):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    stream: TextIO | None = None,
    padding: int = 2,
) -> list[str]:
    """Render rows as left-aligned columns, the last column unpadded.

    Widths are computed on the plain text; the header is colorized afterwards
    so escape codes never skew the alignment.
    """
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: Sequence[str]) -> str:
        padded = [
            cell.ljust(widths[i] + padding) if i < len(cells) - 1 else cell
            for i, cell in enumerate(cells)
        ]
        return "".join(padded)

    header = colorize(_line(headers), Colors.CYAN, bold=True, stream=stream)
    return [header, *(_line(row) for row in rows)]


def print_table(
    headers: Sequence[str], rows: Sequence[Sequence[str]], stream: TextIO | None = None
) -> None:
    stream = stream or sys.stdout
    for line in render_table(headers, rows, stream=stream):
        print(line, file=stream)
