"""Error taxonomy & redaction for CLI output.

Every failure a subcommand hits ends the invocation: the dispatcher prints a
one-line message to stdout and exits 1. This module holds the pieces shared by
that path:

- CommandError / UsageError: raised by subcommand handlers.
- redact(text, secrets) -> str: strips credentials before printing/logging.
- classify_error(exc) -> ErrorInfo: coarse bucket for structured log records.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(Authorization:\s*Basic\s+)[A-Za-z0-9+/=]+", re.IGNORECASE),
    re.compile(r"(Authorization:\s*Bearer\s+)[A-Za-z0-9._\-]+", re.IGNORECASE),
    re.compile(r"(https?://[^/\s:@]+:)[^@\s/]+(@)"),  # user:password@host
]

_REDACTION_PLACEHOLDER = "<redacted>"


class CommandError(RuntimeError):
    """Terminal failure of a subcommand; the message is shown to the user as-is."""


class UsageError(CommandError):
    """Invalid or missing arguments; the message is a usage line."""


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    details: dict[str, Any] | None = None


def redact(text: str, secrets: Iterable[str | None] = ()) -> str:
    """Mask credentials in arbitrary text.

    Known header/URL shapes are replaced by pattern; ``secrets`` adds literal
    values (the configured password) to scrub wherever they appear.
    """
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        if pat.groups >= 2:
            redacted = pat.sub(rf"\g<1>{_REDACTION_PLACEHOLDER}\g<2>", redacted)
        else:
            redacted = pat.sub(rf"\g<1>{_REDACTION_PLACEHOLDER}", redacted)
    for secret in secrets:
        if secret:
            redacted = redacted.replace(secret, _REDACTION_PLACEHOLDER)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception.

    - HTTP 401/403 or "unauthorized" -> 'auth'
    - HTTP 404 or "does not exist" -> 'not_found'
    - timeouts / refused connections -> 'network'
    - parser and config errors -> 'parse'
    - fallback -> 'generic'
    """
    msg = str(exc) if exc else ""
    low = msg.lower()
    status = getattr(exc, "status", None)
    kind = exc.__class__.__name__

    if status in (401, 403) or "unauthorized" in low or "forbidden" in low:
        return ErrorInfo("auth", redact(msg), kind, details={"status": status})
    if status == 404 or "does not exist" in low:
        return ErrorInfo("not_found", redact(msg), kind, details={"status": status})
    if any(k in low for k in ("timed out", "timeout", "connection refused", "connection reset")):
        return ErrorInfo("network", redact(msg), kind)
    if kind in {"ParseError", "EmptySummaryError", "ConfigError", "YAMLError"}:
        return ErrorInfo("parse", redact(msg), kind)
    return ErrorInfo("generic", redact(msg), kind)


__all__ = ["CommandError", "UsageError", "ErrorInfo", "classify_error", "redact"]
