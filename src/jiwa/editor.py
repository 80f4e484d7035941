"""Collect multi-line issue text through the user's editor.

The command layer only depends on :class:`LineSource`; tests hand in a fake
that returns canned lines instead of spawning a process.
"""

from __future__ import annotations

import os
import shlex
import subprocess  # nosec B404 - the editor is launched as a foreground child process
import tempfile
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol

from .logging import get_logger
from .parser import read_lines

DEFAULT_EDITOR = "vi"
BUFFER_SUFFIX = ".jiwa.md"


class EditorError(RuntimeError):
    pass


class LineSource(Protocol):
    def read_lines(self, prefill: str = "") -> list[str]: ...


def resolve_editor(explicit: str | None = None, environ: Mapping[str, str] | None = None) -> list[str]:
    env = os.environ if environ is None else environ
    command = explicit or env.get("VISUAL") or env.get("EDITOR") or DEFAULT_EDITOR
    argv = shlex.split(command)
    if not argv:
        raise EditorError("no editor configured, set $EDITOR")
    return argv


@contextmanager
def staged_buffer(prefill: str = "") -> Iterator[Path]:
    """Yield a temporary file holding ``prefill``; the file is removed on exit."""
    fd, name = tempfile.mkstemp(prefix="jiwa-", suffix=BUFFER_SUFFIX)
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(prefill)
        yield path
    finally:
        path.unlink(missing_ok=True)


class EditorLineSource:
    """Open the configured editor on a staged buffer and return what was saved."""

    def __init__(
        self,
        editor: str | None = None,
        *,
        runner: Callable[..., Any] = subprocess.run,
    ) -> None:
        self._editor = editor
        self._runner = runner

    def read_lines(self, prefill: str = "") -> list[str]:
        argv = resolve_editor(self._editor)
        with staged_buffer(prefill) as path:
            cmd = [*argv, str(path)]
            get_logger().debug("launching editor", command=cmd)
            try:
                result = self._runner(cmd, check=False)  # nosec B603 - user-configured editor
            except FileNotFoundError as exc:
                raise EditorError(f"editor {argv[0]!r} not found: {exc}") from exc
            returncode = getattr(result, "returncode", 0)
            if returncode:
                raise EditorError(f"editor {argv[0]!r} exited with status {returncode}")
            try:
                text = path.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                raise EditorError(f"editor buffer is not valid UTF-8: {exc}") from exc
            return read_lines(text)


__all__ = [
    "EditorError",
    "LineSource",
    "EditorLineSource",
    "resolve_editor",
    "staged_buffer",
]
