"""Browse-URL helpers shared by every subcommand that prints or accepts a ticket."""

from __future__ import annotations

BROWSE_SEGMENT = "/browse/"


def construct_issue_url(issue_key: str, base_url: str) -> str:
    return f"{base_url}{BROWSE_SEGMENT}{issue_key}"


def strip_base_url(url: str, base_url: str) -> str:
    """Recover an issue key from a browse URL.

    Input that is not a browse URL for ``base_url`` (for example a bare key) is
    returned with surrounding whitespace removed, so piped output of
    ``jiwa create`` and hand-typed keys are handled the same way.
    """
    text = url.strip()
    prefix = f"{base_url}{BROWSE_SEGMENT}"
    if text.startswith(prefix):
        text = text[len(prefix) :]
    return text.rstrip("/")


__all__ = ["construct_issue_url", "strip_base_url"]
