from __future__ import annotations

import asyncio
import logging
from typing import Generic, Iterable, TypeVar

from mailadmin_console.app.domain.query import ColumnSort, PageResult, RowRange, SortEntry
from mailadmin_console.app.domain.records import ColumnDef
from mailadmin_console.app.providers import ProviderError, ResourceProvider
from mailadmin_console.app.reload import ReloadController
from mailadmin_console.app.ui.debounce import Debouncer
from mailadmin_console.app.ui import pagination
from mailadmin_console.app.ui.pagination import PaginationState

T = TypeVar("T")

logger = logging.getLogger(__name__)

SORT_MARKERS = {ColumnSort.ASCENDING: "↑", ColumnSort.DESCENDING: "↓"}


class TableController(Generic[T]):
    """Interactive state of one paginated, sortable, searchable table.

    Each fetch is tagged with a generation number. Only responses from the newest generation
    are applied, so a slow earlier request can never overwrite a later one.
    """

    def __init__(
        self,
        provider: ResourceProvider[T],
        columns: tuple[ColumnDef, ...],
        *,
        reload_controller: ReloadController | None = None,
        page_size: int = 20,
        debounce_ms: int = 300,
        default_sort: Iterable[SortEntry] = (),
    ) -> None:
        self.provider = provider
        self.columns = columns
        self.sorting: list[SortEntry] = list(default_sort)
        self.provider.set_sorting(self.sorting)
        self.pagination = PaginationState(page=1, page_size=page_size)
        self.page: PageResult[T] = PageResult.empty()
        self.row_count: int | None = None
        self.error: str | None = None
        self.loading = False
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._search_debouncer: Debouncer[str] = Debouncer(debounce_ms, provider.set_search)
        self._unsubscribe = [provider.subscribe(self._on_filter_change)]
        if reload_controller is not None:
            self._unsubscribe.append(reload_controller.subscribe(self._on_reload))

    @property
    def rows(self) -> tuple[T, ...]:
        return self.page.rows

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_range(self) -> RowRange:
        return self.pagination.row_range

    # search

    def on_search_input(self, text: str) -> None:
        self._search_debouncer(text)

    def flush_search(self) -> None:
        self._search_debouncer.flush()

    def _on_filter_change(self) -> None:
        self.pagination.page = 1
        self.refresh()

    def _on_reload(self, _token: int) -> None:
        self.refresh()

    # sorting

    def on_header_click(self, index: int) -> bool:
        if index < 0 or index >= len(self.columns) or not self.columns[index].sortable:
            return False
        existing = next((entry for entry in self.sorting if entry.index == index), None)
        if existing is None:
            promoted = SortEntry(index, ColumnSort.ASCENDING)
        else:
            promoted = SortEntry(index, existing.direction.toggled())
        self.sorting = [promoted] + [entry for entry in self.sorting if entry.index != index]
        self.provider.set_sorting(self.sorting)
        self.refresh()
        return True

    def sort_priority(self, index: int) -> int | None:
        for priority, entry in enumerate(self.sorting):
            if entry.index == index:
                return priority
        return None

    def header_label(self, index: int) -> str:
        title = self.columns[index].title
        priority = self.sort_priority(index)
        if priority is None:
            return title
        return f"{title} {SORT_MARKERS[self.sorting[priority].direction]}"

    # pagination

    @property
    def has_next(self) -> bool:
        return pagination.has_next_page(self.pagination, self.row_count, len(self.rows))

    @property
    def has_prev(self) -> bool:
        return self.pagination.page > 1

    @property
    def can_go_last(self) -> bool:
        return self.row_count is not None

    @property
    def total_pages(self) -> int | None:
        return pagination.total_pages(self.row_count, self.pagination.page_size)

    def next_page(self) -> bool:
        if not self.has_next:
            return False
        pagination.next_page(self.pagination, True)
        self.refresh()
        return True

    def prev_page(self) -> bool:
        if not self.has_prev:
            return False
        pagination.prev_page(self.pagination)
        self.refresh()
        return True

    def goto_page(self, page: int) -> None:
        pagination.goto_page(self.pagination, page, self.row_count)
        self.refresh()

    def last_page(self) -> bool:
        last = self.total_pages
        if last is None:
            return False
        pagination.goto_page(self.pagination, last, self.row_count)
        self.refresh()
        return True

    def results_label(self) -> str:
        if self.row_count is None:
            return "… results"
        return f"{self.row_count} results"

    # fetching

    def refresh(self) -> asyncio.Task:
        self._generation += 1
        self.loading = True
        task = asyncio.get_running_loop().create_task(self._fetch(self._generation, self.current_range))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        self._search_debouncer.cancel()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _fetch(self, generation: int, row_range: RowRange) -> None:
        try:
            await asyncio.gather(self._fetch_rows(generation, row_range), self._fetch_count(generation))
        finally:
            if self._is_current(generation):
                self.loading = False

    async def _fetch_rows(self, generation: int, row_range: RowRange) -> None:
        try:
            page = await self.provider.get_rows(row_range)
        except ProviderError as exc:
            if not self._is_current(generation):
                logger.debug("Dropping stale row error for generation %s", generation)
                return
            logger.warning("Failed to load rows %s..%s: %s", row_range.start, row_range.end, exc.message)
            self.error = exc.message
            return
        if not self._is_current(generation):
            logger.debug("Dropping stale rows for generation %s", generation)
            return
        self.page = page
        self.error = None

    async def _fetch_count(self, generation: int) -> None:
        count = await self.provider.row_count()
        if not self._is_current(generation):
            logger.debug("Dropping stale row count for generation %s", generation)
            return
        self.row_count = count
