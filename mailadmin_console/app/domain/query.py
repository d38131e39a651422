from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ColumnSort(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> "ColumnSort":
        return ColumnSort.DESCENDING if self is ColumnSort.ASCENDING else ColumnSort.ASCENDING


@dataclass(frozen=True)
class SortEntry:
    index: int
    direction: ColumnSort = ColumnSort.ASCENDING

    def to_param(self) -> str:
        return f"{self.index}:{self.direction.value}"


@dataclass(frozen=True)
class RowRange:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid row range {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class QuerySpec:
    range: RowRange
    sort: tuple[SortEntry, ...] = field(default_factory=tuple)
    search: str = ""

    def to_params(self) -> list[tuple[str, str | int]]:
        params: list[tuple[str, str | int]] = [("start", self.range.start), ("end", self.range.end)]
        search = self.search.strip()
        if search:
            params.append(("search", search))
        params.extend(("sort", entry.to_param()) for entry in self.sort)
        return params


@dataclass(frozen=True)
class PageResult(Generic[T]):
    rows: tuple[T, ...]
    range: RowRange

    @classmethod
    def empty(cls, start: int = 0) -> "PageResult[T]":
        return cls(rows=(), range=RowRange(start, start))
