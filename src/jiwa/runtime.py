"""Runtime helpers for jiwa CLI orchestration."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TextIO

from .config import JiwaConfig, load_config
from .editor import LineSource
from .errors import CommandError, classify_error, redact
from .jira_rest import JiraRestClient
from .logging import get_logger


class _HandlerCallable(Protocol):
    def __call__(self) -> Any: ...


@dataclass(frozen=True)
class CommandContext:
    """Everything a subcommand handler may touch, fixed for one invocation."""

    config: JiwaConfig
    client: JiraRestClient
    line_source: LineSource
    stdin: TextIO | None = None


def prepare_config(
    args: argparse.Namespace, *, loader: Callable[[str | None], JiwaConfig] = load_config
) -> JiwaConfig:
    """Load JiwaConfig for the given argparse namespace."""
    return loader(getattr(args, "config", None))


def execute_command(handler: _HandlerCallable, cfg: JiwaConfig, command: str) -> int:
    """Run a handler, turning a CommandError into a printed message and exit code 1."""
    logger = get_logger()
    try:
        with logger.timed_operation(command):
            result = handler()
    except CommandError as exc:
        message = redact(str(exc), secrets=(cfg.password,))
        cause = exc.__cause__ or exc
        info = classify_error(cause)
        logger.log_error(
            f"command {command} failed",
            error=redact(info.message, secrets=(cfg.password,)),
            category=info.category,
            error_type=info.original_type,
        )
        print(message)
        return 1
    return int(result) if result is not None else 0


__all__ = ["CommandContext", "prepare_config", "execute_command"]
