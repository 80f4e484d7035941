"""Turn a text buffer into an issue summary and description.

The same routine backs every input channel (editor buffer, ``-in FILE`` and
``-in -``): the first non-blank line is the summary, everything after it is
the description.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import IssueContent


class ParseError(ValueError):
    pass


class EmptySummaryError(ParseError):
    def __init__(self) -> None:
        super().__init__("the summary line needs to be filled at least")


def read_lines(text: str) -> list[str]:
    return text.splitlines()


def parse_summary_description(lines: Iterable[str]) -> IssueContent:
    summary: str | None = None
    description: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if summary is None:
            if line.strip():
                summary = line.rstrip()
            continue
        description.append(line)
    if summary is None:
        raise EmptySummaryError()
    while description and not description[-1].strip():
        description.pop()
    return IssueContent(summary=summary, description="\n".join(description))


__all__ = ["ParseError", "EmptySummaryError", "read_lines", "parse_summary_description"]
