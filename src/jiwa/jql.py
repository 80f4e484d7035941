from __future__ import annotations

DEFAULT_STATUS = "to do"
UNASSIGNED = "empty"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_list_jql(
    *, project: str | None, status: str = DEFAULT_STATUS, user: str | None = None
) -> str:
    """Render the ``ls`` filters as a JQL query.

    ``user == "empty"`` selects unassigned tickets; a missing project drops the
    project clause so the search spans every project the user can see.
    """
    clauses: list[str] = []
    if project:
        clauses.append(f"project={project}")
    clauses.append(f"status={_quote(status)}")
    if user == UNASSIGNED:
        clauses.append("assignee is EMPTY")
    elif user:
        clauses.append(f"assignee={_quote(user)}")
    return " AND ".join(clauses)


__all__ = ["DEFAULT_STATUS", "UNASSIGNED", "build_list_jql"]
