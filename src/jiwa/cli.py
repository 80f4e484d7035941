"""jiwa CLI.

Subcommands:
  create    -> create an issue from the editor, a file, or stdin
  edit      -> edit summary/description of an issue in the editor
  ls        -> list issues by project, status and assignee (alias: list)
  reassign  -> assign an issue to a user
  label     -> add labels to an issue
  move      -> transition an issue to another status (alias: mv)

``reassign``, ``label`` and ``move`` read the issue ID (or browse URL) from
stdin when it is piped, so ``jiwa create | jiwa reassign alice`` works.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, NoReturn, TextIO

import requests

from .config import ConfigError, JiwaConfig
from .editor import EditorError, EditorLineSource, LineSource
from .errors import CommandError, UsageError
from .jira_rest import JiraAPIError, JiraRestClient
from .jql import DEFAULT_STATUS, build_list_jql
from .logging import configure_logging, get_logger
from .models import IssueContent, IssueRef
from .parser import ParseError, parse_summary_description, read_lines
from .runtime import CommandContext, execute_command, prepare_config
from .urls import strip_base_url
from .ux import print_table

PROG = "jiwa"
STDIN_MARKER = "-"

USAGE = "Usage: jiwa {create|edit|ls|move|reassign|label}"
CREATE_USAGE = "Usage: jiwa create [-project]"
EDIT_USAGE = "Usage: jiwa edit <issue ID>"
REASSIGN_USAGE = "Usage: jiwa reassign <issue ID> <username>"
REASSIGN_STDIN_USAGE = "Usage: jiwa reassign <username>"
LABEL_USAGE = "Usage: jiwa label <issue ID> <label> <label>..."
LABEL_STDIN_USAGE = "Usage: jiwa label <label> <label> ..."
MOVE_USAGE = "Usage: jiwa move <issue ID> <status>"
MOVE_STDIN_USAGE = "Usage: jiwa move <status>"

_API_ERRORS = (JiraAPIError, requests.RequestException)

_MAX_HELP_WIDTH = 100


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


class _FormatterArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors on stdout with exit status 1."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", _HelpFormatter)
        super().__init__(*args, **kwargs)

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stdout)
        print(f"{self.prog}: error: {message}")
        raise SystemExit(1)


def _build_parser() -> argparse.ArgumentParser:
    """Construct top-level CLI parser with subcommands.

    Flags keep their single-dash spelling (``-project``) next to the
    conventional double-dash one.
    """
    p = _FormatterArgumentParser(prog=PROG, description="Terminal client for the issue tracker")
    p.add_argument("--config", help="Configuration file (env: JIWA_CONFIG)")
    p.add_argument("--debug", action="store_true", help="Log HTTP calls to stderr")
    sub = p.add_subparsers(
        dest="cmd",
        required=True,
        parser_class=_FormatterArgumentParser,
        metavar="<command>",
    )

    pc = sub.add_parser("create", help="Create an issue")
    pc.add_argument(
        "-project",
        "--project",
        dest="project",
        help='Project to create the ticket in, defaults to the configured "defaultProject"',
    )
    pc.add_argument(
        "-in",
        "--in",
        dest="input",
        help='Where the ticket is filled in from: a file path or "-" for stdin',
    )
    pc.add_argument("-type", "--type", dest="issue_type", help="Issue type (default: issueType)")
    pc.add_argument(
        "-label", "--label", dest="labels", action="append", default=[], help="Label (repeatable)"
    )

    pe = sub.add_parser("edit", help="Edit an issue summary and description")
    pe.add_argument("issue", metavar="<issue ID>")

    pl = sub.add_parser("ls", aliases=["list"], help="List issues")
    pl.add_argument(
        "-user",
        "--user",
        dest="user",
        help='User name to filter on, "empty" lists unassigned tickets',
    )
    pl.add_argument(
        "-status", "--status", dest="status", default=DEFAULT_STATUS, help="Status to list"
    )
    pl.add_argument("-project", "--project", dest="project", help="Project to search in")

    pr = sub.add_parser("reassign", help="Assign an issue to a user")
    pr.add_argument("args", nargs="*", metavar="[<issue ID>] <username>")

    plb = sub.add_parser("label", help="Add labels to an issue")
    plb.add_argument("args", nargs="*", metavar="[<issue ID>] <label>")

    pm = sub.add_parser("move", aliases=["mv"], help="Transition an issue to another status")
    pm.add_argument("args", nargs="*", metavar="[<issue ID>] <status>")

    return p


# ---- input helpers ----------------------------------------------------
def _stdin_piped(ctx: CommandContext) -> bool:
    stream = ctx.stdin
    if stream is None or not hasattr(stream, "isatty"):
        return False
    return not stream.isatty()


def _read_stdin(ctx: CommandContext) -> str:
    if ctx.stdin is None:
        raise CommandError("failed to read stdin: no stdin available")
    try:
        return ctx.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise CommandError(f"failed to read stdin: {exc}") from exc


def _issue_key_from_stdin(ctx: CommandContext) -> str:
    for line in read_lines(_read_stdin(ctx)):
        if line.strip():
            return strip_base_url(line, ctx.config.base_url)
    raise CommandError("failed to read stdin: no issue ID found")


def _parse_content(lines: list[str]) -> IssueContent:
    try:
        return parse_summary_description(lines)
    except ParseError as exc:
        raise CommandError(f"failed to get summary and description: {exc}") from exc


def _content_from_editor(ctx: CommandContext, prefill: str = "") -> IssueContent:
    try:
        lines = ctx.line_source.read_lines(prefill)
    except (EditorError, OSError, UnicodeDecodeError) as exc:
        raise CommandError(f"failed to get summary and description: {exc}") from exc
    return _parse_content(lines)


def _content_for_create(ctx: CommandContext, source: str | None) -> IssueContent:
    if source is None:
        return _content_from_editor(ctx)
    if source == STDIN_MARKER:
        return _parse_content(read_lines(_read_stdin(ctx)))
    try:
        text = Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CommandError(f"failed to read file contents: {exc}") from exc
    return _parse_content(read_lines(text))


def _key_and_rest(
    ctx: CommandContext, positional: list[str], usage: str, stdin_usage: str, *, exact: bool
) -> tuple[str, list[str]]:
    """Split positional args into (issue key, remaining args).

    With piped stdin the key comes from stdin and every positional is kept.
    ``exact`` requires exactly one remaining argument, otherwise at least one.
    """
    if _stdin_piped(ctx):
        if not positional or (exact and len(positional) != 1):
            raise UsageError(stdin_usage)
        return _issue_key_from_stdin(ctx), list(positional)
    if len(positional) < 2 or (exact and len(positional) != 2):
        raise UsageError(usage)
    return strip_base_url(positional[0], ctx.config.base_url), list(positional[1:])


# ---- subcommands --------------------------------------------------------
def _cmd_create(ctx: CommandContext, args: argparse.Namespace) -> int:
    cfg = ctx.config
    project = args.project or cfg.default_project
    if not project:
        raise UsageError(CREATE_USAGE)
    content = _content_for_create(ctx, args.input)
    try:
        key = ctx.client.create_issue(
            project=project,
            summary=content.summary,
            description=content.description,
            labels=args.labels or None,
            issue_type=args.issue_type or cfg.issue_type,
        )
    except _API_ERRORS as exc:
        raise CommandError(f"failed to create issue: {exc}") from exc
    get_logger().log_issue_action("create", key, project=project)
    print(IssueRef.for_key(key, cfg.base_url).url)
    return 0


def _cmd_edit(ctx: CommandContext, args: argparse.Namespace) -> int:
    key = strip_base_url(args.issue, ctx.config.base_url)
    if not key:
        raise UsageError(EDIT_USAGE)
    try:
        issue = ctx.client.get_issue(key)
    except _API_ERRORS as exc:
        raise CommandError(f"failed to get issue {key}: {exc}") from exc
    content = _content_from_editor(ctx, f"{issue.summary}\n{issue.description}")
    try:
        ctx.client.update_issue(
            key, {"summary": content.summary, "description": content.description}
        )
    except _API_ERRORS as exc:
        raise CommandError(f"failed to update issue: {exc}") from exc
    get_logger().log_issue_action("update", key)
    print(IssueRef.for_key(key, ctx.config.base_url).url)
    return 0


def _cmd_list(ctx: CommandContext, args: argparse.Namespace) -> int:
    cfg = ctx.config
    jql = build_list_jql(
        project=args.project or cfg.default_project,
        status=args.status,
        user=args.user,
    )
    get_logger().debug("searching issues", jql=jql)
    try:
        issues = ctx.client.search(jql)
    except _API_ERRORS as exc:
        raise CommandError(f"could not list issues: {exc}") from exc
    rows = [[i.key, i.summary, IssueRef.for_key(i.key, cfg.base_url).url] for i in issues]
    print_table(["ID", "Summary", "URL"], rows, stream=sys.stdout)
    return 0


def _cmd_reassign(ctx: CommandContext, args: argparse.Namespace) -> int:
    key, rest = _key_and_rest(ctx, args.args, REASSIGN_USAGE, REASSIGN_STDIN_USAGE, exact=True)
    user = rest[0]
    try:
        ctx.client.assign_issue(key, user)
    except _API_ERRORS as exc:
        raise CommandError(f"failed to assign issue {key} to {user}: {exc}") from exc
    get_logger().log_issue_action("assign", key, assignee=user)
    print(IssueRef.for_key(key, ctx.config.base_url).url)
    return 0


def _cmd_label(ctx: CommandContext, args: argparse.Namespace) -> int:
    key, labels = _key_and_rest(ctx, args.args, LABEL_USAGE, LABEL_STDIN_USAGE, exact=False)
    try:
        ctx.client.label_issue(key, *labels)
    except _API_ERRORS as exc:
        raise CommandError(f"failed to label issue: {exc}") from exc
    get_logger().log_issue_action("label", key, labels=labels)
    ref = IssueRef.for_key(key, ctx.config.base_url)
    print(ref.key)
    print(ref.url)
    return 0


def _cmd_move(ctx: CommandContext, args: argparse.Namespace) -> int:
    key, rest = _key_and_rest(ctx, args.args, MOVE_USAGE, MOVE_STDIN_USAGE, exact=True)
    status = rest[0]
    try:
        reached = ctx.client.transition_issue(key, status)
    except _API_ERRORS as exc:
        raise CommandError(f"failed to move issue {key}: {exc}") from exc
    get_logger().log_issue_action("move", key, status=reached)
    print(IssueRef.for_key(key, ctx.config.base_url).url)
    return 0


def _build_handlers(ctx: CommandContext, args: argparse.Namespace) -> dict[str, Any]:
    return {
        "create": lambda: _cmd_create(ctx, args),
        "edit": lambda: _cmd_edit(ctx, args),
        "ls": lambda: _cmd_list(ctx, args),
        "list": lambda: _cmd_list(ctx, args),
        "reassign": lambda: _cmd_reassign(ctx, args),
        "label": lambda: _cmd_label(ctx, args),
        "move": lambda: _cmd_move(ctx, args),
        "mv": lambda: _cmd_move(ctx, args),
    }


def main(
    argv: list[str] | None = None,
    *,
    stdin: TextIO | None = None,
    config: JiwaConfig | None = None,
    client: JiraRestClient | None = None,
    line_source: LineSource | None = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if config is None:
        try:
            config = prepare_config(args)
        except ConfigError as exc:
            print(exc)
            return 1
    configure_logging(
        json_logging=config.logging_json_enabled,
        level="DEBUG" if args.debug else config.logging_level,
    )
    ctx = CommandContext(
        config=config,
        client=client or JiraRestClient.from_config(config),
        line_source=line_source or EditorLineSource(),
        stdin=stdin if stdin is not None else sys.stdin,
    )
    handler = _build_handlers(ctx, args).get(args.cmd)
    if handler is None:  # pragma: no cover - argparse enforces valid choices
        print(USAGE)
        return 1
    return execute_command(handler, config, args.cmd)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
