"""Page requests and their translation into parameterized statements.

A ``QuerySpec`` describes one window of a resource listing. ``compile_query`` turns it
into SQLAlchemy clause objects; user supplied text only ever travels as bound values, and
sort indices are resolved against the resource's whitelisted columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy import ColumnElement, Select, func, or_, select

from app.mailadmin.core.resources import ResourceDefinition


class ColumnSort(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class InvalidRange(ValueError):
    pass


@dataclass(frozen=True)
class SortEntry:
    index: int
    direction: ColumnSort = ColumnSort.ASCENDING

    @classmethod
    def parse(cls, raw: str) -> "SortEntry":
        index_part, _, direction_part = raw.strip().partition(":")
        index = int(index_part)
        direction = ColumnSort((direction_part or "asc").strip().lower())
        return cls(index=index, direction=direction)


@dataclass(frozen=True)
class RowRange:
    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    @property
    def is_valid(self) -> bool:
        return 0 <= self.start <= self.end


@dataclass(frozen=True)
class QuerySpec:
    range: RowRange
    sort: tuple[SortEntry, ...] = field(default_factory=tuple)
    search: str = ""

    @property
    def search_term(self) -> str:
        return self.search.strip()


@dataclass(frozen=True)
class CompiledQuery:
    filter_clause: ColumnElement[bool] | None
    order_clause: tuple[ColumnElement, ...]
    limit: int
    offset: int


def search_clause(search: str, resource: ResourceDefinition) -> ColumnElement[bool] | None:
    term = search.strip()
    columns = resource.searchable_columns
    if not term or not columns:
        return None
    return or_(*(column.icontains(term, autoescape=True) for column in columns))


def order_clause(sort: tuple[SortEntry, ...], resource: ResourceDefinition) -> tuple[ColumnElement, ...]:
    seen: set[int] = set()
    clauses: list[ColumnElement] = []
    for entry in sort:
        if entry.index in seen:
            continue
        column = resource.sortable_column(entry.index)
        if column is None:
            continue
        seen.add(entry.index)
        clauses.append(column.desc() if entry.direction == ColumnSort.DESCENDING else column.asc())
    return tuple(clauses)


def compile_query(spec: QuerySpec, resource: ResourceDefinition) -> CompiledQuery:
    if not spec.range.is_valid:
        raise InvalidRange(f"invalid row range {spec.range.start}..{spec.range.end}")
    return CompiledQuery(
        filter_clause=search_clause(spec.search, resource),
        order_clause=order_clause(spec.sort, resource),
        limit=len(spec.range),
        offset=spec.range.start,
    )


def build_select(spec: QuerySpec, resource: ResourceDefinition) -> Select:
    compiled = compile_query(spec, resource)
    stmt = select(resource.model)
    if compiled.filter_clause is not None:
        stmt = stmt.where(compiled.filter_clause)
    if compiled.order_clause:
        stmt = stmt.order_by(*compiled.order_clause)
    return stmt.limit(compiled.limit).offset(compiled.offset)


def build_count(search: str, resource: ResourceDefinition) -> Select:
    stmt = select(func.count()).select_from(resource.model)
    clause = search_clause(search, resource)
    if clause is not None:
        stmt = stmt.where(clause)
    return stmt
