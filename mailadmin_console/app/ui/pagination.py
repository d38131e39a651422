from __future__ import annotations

import math
from dataclasses import dataclass

from mailadmin_console.app.domain.query import RowRange


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 20

    @property
    def row_range(self) -> RowRange:
        start = (self.page - 1) * self.page_size
        return RowRange(start, start + self.page_size)


def total_pages(row_count: int | None, page_size: int) -> int | None:
    if row_count is None:
        return None
    return max(1, math.ceil(row_count / page_size))


def has_next_page(state: PaginationState, row_count: int | None, rows_on_page: int) -> bool:
    if row_count is None:
        # Unknown total: a full page may have a successor, a short page is the end.
        return rows_on_page >= state.page_size
    return state.page * state.page_size < row_count


def next_page(state: PaginationState, has_next: bool) -> PaginationState:
    if not has_next:
        return state
    state.page += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int, row_count: int | None = None) -> PaginationState:
    last = total_pages(row_count, state.page_size)
    page = max(1, page)
    state.page = min(page, last) if last is not None else page
    return state
