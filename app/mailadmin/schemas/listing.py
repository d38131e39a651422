from fastapi import Query
from pydantic import BaseModel

from app.mailadmin.core.config import settings
from app.mailadmin.core.error_catalog import AppError, ErrorCatalog
from app.mailadmin.core.query import QuerySpec, RowRange, SortEntry


class RangeMeta(BaseModel):
    start: int
    end: int


class ColumnMeta(BaseModel):
    index: int
    key: str
    title: str
    sortable: bool
    searchable: bool


class ColumnsResponse(BaseModel):
    resource: str
    identity: str
    columns: list[ColumnMeta]
    trace_id: str


class CountResponse(BaseModel):
    count: int
    trace_id: str


class MutationResponse(BaseModel):
    ok: bool = True
    resource: str
    resource_id: str
    trace_id: str


def _parse_sort(raw_entries: list[str]) -> tuple[SortEntry, ...]:
    entries = []
    for raw in raw_entries:
        try:
            entries.append(SortEntry.parse(raw))
        except ValueError as exc:
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"field": "sort", "message": f"Invalid sort entry '{raw}'. Expected '<index>:asc|desc'."},
            ) from exc
    return tuple(entries)


def query_spec_params(
    start: int = Query(0, ge=0),
    end: int = Query(20, ge=0),
    search: str = Query(""),
    sort: list[str] | None = Query(None),
) -> QuerySpec:
    row_range = RowRange(start=start, end=end)
    if not row_range.is_valid:
        raise AppError(ErrorCatalog.INVALID_RANGE, details={"start": start, "end": end})
    if len(row_range) > settings.LIST_MAX_PAGE_SIZE:
        raise AppError(
            ErrorCatalog.VALIDATION_ERROR,
            details={"field": "end", "message": f"At most {settings.LIST_MAX_PAGE_SIZE} rows per request"},
        )
    return QuerySpec(range=row_range, sort=_parse_sort(sort or []), search=search)
