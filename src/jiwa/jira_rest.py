from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import requests

from .config import JiwaConfig
from .logging import get_logger
from .models import Issue

USER_AGENT = "jiwa-rest/0.2.0"
HTTP_ERROR_STATUS = 400
SEARCH_FIELDS = "summary,status,assignee,labels"


class JiraAPIError(RuntimeError):
    """Raised when the issue tracker answers with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        response_text: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.response_text = response_text


def _error_detail(response: requests.Response) -> str:
    """Flatten Jira's ``errorMessages`` / ``errors`` body into one line."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    parts: list[str] = [str(m) for m in data.get("errorMessages") or []]
    errors = data.get("errors") or {}
    if isinstance(errors, dict):
        parts.extend(f"{k}: {v}" for k, v in errors.items())
    return "; ".join(parts)


@dataclass
class JiraRestClient:
    """Thin REST client for the issue tracker (Jira REST API v2 shape)."""

    api_root: str
    username: str
    password: str
    timeout: float = 3.0
    session: requests.Session | None = None
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.api_root = self.api_root.rstrip("/")
        self._session = self.session or requests.Session()
        self._session.auth = (self.username, self.password)
        self._session.headers.setdefault("Accept", "application/json")
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    @classmethod
    def from_config(cls, cfg: JiwaConfig, session: requests.Session | None = None) -> JiraRestClient:
        return cls(
            api_root=cfg.api_root,
            username=cfg.username,
            password=cfg.password,
            timeout=cfg.timeout,
            session=session,
        )

    # ---- REST helpers -------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Any:
        url = f"{self.api_root}/{path.lstrip('/')}"
        response = self._session.request(
            method,
            url,
            params=params,
            json=json_body,
            timeout=self.timeout,
        )
        get_logger().log_request(method, url, response.status_code)
        if response.status_code >= HTTP_ERROR_STATUS:
            detail = _error_detail(response)
            message = f"{method} {url} failed with {response.status_code}"
            if detail:
                message = f"{message}: {detail}"
            raise JiraAPIError(
                message,
                status=response.status_code,
                response_text=response.text,
            )
        if response.text:
            try:
                return response.json()
            except ValueError:
                return response.text
        return None

    # ---- Issue operations --------------------------------------------
    def create_issue(
        self,
        *,
        project: str,
        summary: str,
        description: str,
        labels: Iterable[str] | None = None,
        issue_type: str = "Task",
    ) -> str:
        fields: dict[str, Any] = {
            "project": {"key": project},
            "summary": summary,
            "description": description,
            "issuetype": {"name": issue_type},
        }
        if labels:
            fields["labels"] = list(labels)
        data = self._request("POST", "/issue", json_body={"fields": fields})
        key = data.get("key") if isinstance(data, dict) else None
        if not isinstance(key, str) or not key:
            raise JiraAPIError("create issue response did not contain an issue key")
        return key

    def update_issue(self, key: str, fields: dict[str, Any]) -> None:
        self._request("PUT", f"/issue/{key}", json_body={"fields": fields})

    def get_issue(self, key: str) -> Issue:
        data = self._request("GET", f"/issue/{key}")
        if not isinstance(data, dict):
            raise JiraAPIError(f"unexpected response for issue {key}")
        return Issue.from_api(data)

    def search(self, jql: str, *, max_results: int = 50) -> list[Issue]:
        params = {"jql": jql, "fields": SEARCH_FIELDS, "maxResults": max_results}
        data = self._request("GET", "/search", params=params)
        entries = data.get("issues") if isinstance(data, dict) else None
        return [Issue.from_api(e) for e in entries or [] if isinstance(e, dict)]

    def assign_issue(self, key: str, username: str) -> None:
        self._request("PUT", f"/issue/{key}/assignee", json_body={"name": username})

    def label_issue(self, key: str, *labels: str) -> None:
        if not labels:
            return
        update = {"labels": [{"add": label} for label in labels]}
        self._request("PUT", f"/issue/{key}", json_body={"update": update})

    # ---- Workflow ----------------------------------------------------
    def list_transitions(self, key: str) -> list[dict[str, Any]]:
        data = self._request("GET", f"/issue/{key}/transitions")
        entries = data.get("transitions") if isinstance(data, dict) else None
        return [e for e in entries or [] if isinstance(e, dict)]

    def transition_issue(self, key: str, status: str) -> str:
        """Apply the transition named ``status`` (or leading to it); return its name."""
        wanted = status.strip().lower()
        for transition in self.list_transitions(key):
            name = str(transition.get("name", ""))
            target = transition.get("to") or {}
            target_name = str(target.get("name", "")) if isinstance(target, dict) else ""
            if wanted in (name.lower(), target_name.lower()):
                self._request(
                    "POST",
                    f"/issue/{key}/transitions",
                    json_body={"transition": {"id": transition.get("id")}},
                )
                return target_name or name
        raise JiraAPIError(f"no transition to status {status!r} available for {key}")


__all__ = ["JiraAPIError", "JiraRestClient"]
