import pytest

from admin_console.domain.exceptions import ValidationError
from admin_console.domain.query import Column, ListQuery, Page, WhereBuilder, build_assignments


def test_list_query_clamps_page_and_limit():
    query = ListQuery(page=0, limit=500)
    assert query.sanitized_page() == 1
    assert query.sanitized_limit() == 100
    assert query.offset() == 0

    query = ListQuery(page=3, limit=-4)
    assert query.sanitized_limit() == 1
    assert query.offset() == 2


def test_list_query_offset_uses_page_and_limit():
    assert ListQuery(page=3, limit=10).offset() == 20


def test_where_builder_search_binds_single_parameter():
    where = WhereBuilder().search("  ali ", "u.username", "u.email")
    assert where.params == ["%ali%"]
    assert where.sql() == "WHERE (u.username ILIKE $1 OR u.email ILIKE $1)"


def test_where_builder_combines_search_and_equality():
    where = WhereBuilder().search("x", "e.name").equals("e.status", "active").equals("e.other", None)
    assert where.params == ["%x%", "active"]
    assert where.sql() == "WHERE (e.name ILIKE $1) AND e.status = $2"


def test_where_builder_empty_has_no_clause():
    assert WhereBuilder().search("   ", "g.name").sql() == ""


def test_build_assignments_follows_column_order_and_encodes():
    columns = {
        "name": Column("name"),
        "form": Column("form", cast="jsonb", encode=lambda value: f"<{value}>"),
    }
    params: list = ["existing"]
    assignments = build_assignments(columns, {"form": "f", "name": "n"}, params)
    assert assignments == ["name = $2", "form = $3::jsonb"]
    assert params == ["existing", "n", "<f>"]


def test_build_assignments_rejects_unknown_fields():
    with pytest.raises(ValidationError) as excinfo:
        build_assignments({"name": Column("name")}, {"password": "x"}, [])
    assert "password" in excinfo.value.detail


@pytest.mark.parametrize(
    ("total", "limit", "expected"),
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 7, 4)],
)
def test_page_total_pages(total, limit, expected):
    assert Page(items=[], page=1, limit=limit, total=total).total_pages == expected
