"""jiwa - terminal client for an issue-tracking REST API.

High-level public API:

from jiwa import JiraRestClient, load_config, parse_summary_description

cfg = load_config()                       # ~/.config/jiwa/config.json
client = JiraRestClient.from_config(cfg)
content = parse_summary_description(["Fix login", "", "Steps to reproduce..."])
key = client.create_issue(project="OPS", summary=content.summary,
                          description=content.description)

The CLI (``jiwa`` / ``python -m jiwa``) delegates to these pieces.
"""

from __future__ import annotations

from .config import ConfigError, JiwaConfig, load_config
from .jira_rest import JiraAPIError, JiraRestClient
from .models import Issue, IssueContent, IssueRef
from .parser import EmptySummaryError, ParseError, parse_summary_description
from .urls import construct_issue_url, strip_base_url

# Version constant (sync manually with pyproject)
__version__ = "0.2.0"

__all__ = [
    "ConfigError",
    "JiwaConfig",
    "load_config",
    "JiraAPIError",
    "JiraRestClient",
    "Issue",
    "IssueContent",
    "IssueRef",
    "EmptySummaryError",
    "ParseError",
    "parse_summary_description",
    "construct_issue_url",
    "strip_base_url",
    "__version__",
]
