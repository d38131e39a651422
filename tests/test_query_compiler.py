import pytest
from sqlalchemy.dialects import sqlite

from app.mailadmin.core.query import (
    ColumnSort,
    InvalidRange,
    QuerySpec,
    RowRange,
    SortEntry,
    build_count,
    build_select,
    compile_query,
)
from app.mailadmin.repos.aliases import ALIAS_RESOURCE
from app.mailadmin.repos.users import USER_RESOURCE


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=sqlite.dialect()))


def _spec(start=0, end=20, sort=(), search="") -> QuerySpec:
    return QuerySpec(range=RowRange(start, end), sort=tuple(sort), search=search)


def test_sort_entry_parse() -> None:
    assert SortEntry.parse("3:desc") == SortEntry(3, ColumnSort.DESCENDING)
    assert SortEntry.parse("0") == SortEntry(0, ColumnSort.ASCENDING)
    with pytest.raises(ValueError):
        SortEntry.parse("x:asc")
    with pytest.raises(ValueError):
        SortEntry.parse("1:sideways")


@pytest.mark.parametrize("search", ["alice", "'; DROP TABLE users; --", "100%_done", "ünïcode"])
def test_statement_text_independent_of_search(search) -> None:
    baseline = build_select(_spec(search="bob"), ALIAS_RESOURCE)
    candidate = build_select(_spec(search=search), ALIAS_RESOURCE)
    assert _sql(candidate) == _sql(baseline)
    assert search not in _sql(candidate)


def test_search_value_is_bound_not_inlined() -> None:
    compiled = build_select(_spec(search="evil'--"), USER_RESOURCE).compile(dialect=sqlite.dialect())
    assert "evil" not in str(compiled)
    assert any("evil" in str(value) for value in compiled.params.values())


def test_blank_search_has_no_filter() -> None:
    compiled = compile_query(_spec(search="   "), USER_RESOURCE)
    assert compiled.filter_clause is None
    assert "WHERE" not in _sql(build_select(_spec(search="   "), USER_RESOURCE))


def test_search_covers_only_searchable_columns() -> None:
    sql = _sql(build_select(_spec(search="x"), ALIAS_RESOURCE))
    where = sql.split("WHERE", 1)[1]
    assert "aliases.address" in where
    assert "aliases.comment" in where
    assert "aliases.target" not in where


def test_order_clause_priority_and_whitelist() -> None:
    spec = _spec(sort=[SortEntry(3, ColumnSort.DESCENDING), SortEntry(99), SortEntry(0), SortEntry(3)])
    sql = _sql(build_select(spec, USER_RESOURCE))
    assert "ORDER BY users.created_at DESC, users.username ASC" in sql


def test_empty_sort_has_no_order_by() -> None:
    assert "ORDER BY" not in _sql(build_select(_spec(), USER_RESOURCE))


def test_limit_and_offset_follow_range() -> None:
    compiled = compile_query(_spec(start=40, end=60), USER_RESOURCE)
    assert compiled.limit == 20
    assert compiled.offset == 40


def test_empty_range_is_valid() -> None:
    compiled = compile_query(_spec(start=5, end=5), USER_RESOURCE)
    assert compiled.limit == 0


def test_inverted_range_raises() -> None:
    with pytest.raises(InvalidRange):
        compile_query(_spec(start=10, end=5), USER_RESOURCE)


def test_count_shares_filter_and_ignores_sort() -> None:
    sql = _sql(build_count("bob", USER_RESOURCE))
    assert "count(*)" in sql
    assert "lower(users.username) LIKE" in sql
    assert "ORDER BY" not in sql
    assert "LIMIT" not in sql
