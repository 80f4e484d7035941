from jiwa.jql import build_list_jql


def test_default_filters() -> None:
    assert build_list_jql(project="OPS") == 'project=OPS AND status="to do"'


def test_assignee_filter_is_quoted() -> None:
    jql = build_list_jql(project="OPS", status="In Progress", user="alice")
    assert jql == 'project=OPS AND status="In Progress" AND assignee="alice"'


def test_empty_user_selects_unassigned() -> None:
    jql = build_list_jql(project="OPS", user="empty")
    assert jql.endswith("AND assignee is EMPTY")


def test_missing_project_drops_clause() -> None:
    assert build_list_jql(project=None, status="done") == 'status="done"'


def test_quotes_are_escaped() -> None:
    assert build_list_jql(project=None, status='say "hi"') == 'status="say \\"hi\\""'
