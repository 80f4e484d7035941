from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .urls import construct_issue_url


@dataclass(frozen=True)
class IssueContent:
    """Summary/description pair produced by the text-buffer parser."""

    summary: str
    description: str


@dataclass(frozen=True)
class IssueRef:
    key: str
    url: str

    @classmethod
    def for_key(cls, key: str, base_url: str) -> IssueRef:
        return cls(key=key, url=construct_issue_url(key, base_url))


@dataclass
class Issue:
    """Subset of a tracker issue document the CLI reads back.

    Only the fields surfaced by ``edit`` and ``ls`` are kept; everything else in
    the API payload is ignored.
    """

    key: str
    summary: str = ""
    description: str = ""
    status: str | None = None
    assignee: str | None = None
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Issue:
        fields = payload.get("fields") or {}
        status = fields.get("status") or {}
        assignee = fields.get("assignee") or {}
        labels = fields.get("labels") or []
        return cls(
            key=str(payload.get("key", "")),
            summary=fields.get("summary") or "",
            # description is null on tickets that never had one
            description=fields.get("description") or "",
            status=status.get("name") if isinstance(status, dict) else None,
            assignee=assignee.get("name") if isinstance(assignee, dict) else None,
            labels=[str(label) for label in labels if isinstance(label, str)],
        )


__all__ = ["IssueContent", "IssueRef", "Issue"]
