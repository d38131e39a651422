from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, TypeVar

from mailadmin_console.app.domain.query import PageResult, QuerySpec, RowRange, SortEntry
from mailadmin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from mailadmin_console.clients.http_client import APIError
from mailadmin_console.clients.resource_client import ResourceClient

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ResourceProvider(Generic[T]):
    """Server-backed row source for one list view.

    The provider holds the filter state (sort and search) but never the row window: every
    ``get_rows`` call names its own range. Search changes are published to
    subscribers, sort changes are not.
    """

    def __init__(self, client: ResourceClient, record_type: type[T], sort: Iterable[SortEntry] = ()) -> None:
        self.client = client
        self.record_type = record_type
        self._sort: tuple[SortEntry, ...] = tuple(sort)
        self._search = ""
        self._version = 0
        self._subscribers: list[Callable[[], None]] = []

    @property
    def sort(self) -> tuple[SortEntry, ...]:
        return self._sort

    @property
    def search(self) -> str:
        return self._search

    @property
    def version(self) -> int:
        return self._version

    def query_spec(self, row_range: RowRange) -> QuerySpec:
        return QuerySpec(range=row_range, sort=self._sort, search=self._search.strip())

    async def get_rows(self, row_range: RowRange) -> PageResult[T]:
        try:
            payload = await self.client.list(self.query_spec(row_range))
            rows = tuple(self.record_type.from_payload(item) for item in payload.get("rows", []))
        except APIError as exc:
            raise ProviderError(ErrorMapper.to_display_message(exc), exc) from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError(f"Malformed {self.client.resource} payload", exc) from exc
        rows = rows[: len(row_range)]
        return PageResult(rows=rows, range=RowRange(row_range.start, row_range.start + len(rows)))

    async def row_count(self) -> int | None:
        try:
            return await self.client.count(self._search)
        except (APIError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Row count for %s unavailable: %s", self.client.resource, exc)
            return None

    def set_sorting(self, entries: Iterable[SortEntry]) -> None:
        self._sort = tuple(entries)

    def set_search(self, text: str) -> None:
        if text == self._search:
            return
        self._search = text
        self._version += 1
        for callback in list(self._subscribers):
            callback()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
