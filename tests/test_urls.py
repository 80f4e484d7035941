import pytest

from jiwa.models import IssueRef
from jiwa.urls import construct_issue_url, strip_base_url

BASE = "https://jira.example.com"


def test_construct_issue_url() -> None:
    assert construct_issue_url("OPS-12", BASE) == "https://jira.example.com/browse/OPS-12"


@pytest.mark.parametrize("key", ["OPS-1", "ABC-12345", "X_Y-7"])
@pytest.mark.parametrize("base", [BASE, "http://localhost:8080/jira"])
def test_strip_recovers_key(key: str, base: str) -> None:
    assert strip_base_url(construct_issue_url(key, base), base) == key


def test_strip_handles_piped_newline() -> None:
    assert strip_base_url(f"{BASE}/browse/OPS-3\n", BASE) == "OPS-3"


def test_strip_passes_bare_key_through() -> None:
    assert strip_base_url("  OPS-9 ", BASE) == "OPS-9"


def test_strip_leaves_foreign_url_alone() -> None:
    other = "https://other.example.com/browse/OPS-9"
    assert strip_base_url(other, BASE) == other


def test_issue_ref_for_key() -> None:
    ref = IssueRef.for_key("OPS-4", BASE)
    assert ref.key == "OPS-4"
    assert ref.url == f"{BASE}/browse/OPS-4"
