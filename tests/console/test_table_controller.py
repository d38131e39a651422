import asyncio

import pytest

from mailadmin_console.app.domain.query import ColumnSort, SortEntry
from mailadmin_console.app.domain.records import ColumnDef, UserRecord
from mailadmin_console.app.providers import ResourceProvider
from mailadmin_console.app.reload import ReloadController
from mailadmin_console.app.ui.table_controller import TableController
from tests.console.fakes import FakeResourceClient, api_error, user_payload


def _table(count: int = 5, page_size: int = 2, **kwargs):
    client = FakeResourceClient([user_payload(f"user{i}") for i in range(count)])
    provider = ResourceProvider(client, UserRecord)
    table = TableController(provider, UserRecord.COLUMNS, page_size=page_size, debounce_ms=0, **kwargs)
    return table, provider, client


def _names(table) -> list[str]:
    return [row.username for row in table.rows]


@pytest.mark.anyio
async def test_refresh_loads_rows_and_count() -> None:
    table, _, _ = _table()

    table.refresh()
    assert table.loading
    await table.wait_idle()

    assert _names(table) == ["user0", "user1"]
    assert table.row_count == 5
    assert table.results_label() == "5 results"
    assert table.loading is False
    assert table.error is None


@pytest.mark.anyio
async def test_header_click_promotes_and_toggles() -> None:
    table, provider, _ = _table(default_sort=[SortEntry(3, ColumnSort.DESCENDING)])

    assert table.on_header_click(0)
    assert table.sorting == [SortEntry(0, ColumnSort.ASCENDING), SortEntry(3, ColumnSort.DESCENDING)]

    assert table.on_header_click(3)
    assert table.sorting == [SortEntry(3, ColumnSort.ASCENDING), SortEntry(0, ColumnSort.ASCENDING)]

    assert table.on_header_click(3)
    assert table.sorting[0] == SortEntry(3, ColumnSort.DESCENDING)
    assert provider.sort == tuple(table.sorting)

    assert table.header_label(3) == "Created ↓"
    assert table.header_label(0) == "Username ↑"
    assert table.header_label(1) == "Admin"
    await table.wait_idle()


@pytest.mark.anyio
async def test_header_click_ignores_unsortable_and_unknown_columns() -> None:
    client = FakeResourceClient([])
    provider = ResourceProvider(client, UserRecord)
    columns = (ColumnDef("username", "Username"), ColumnDef("admin", "Admin", sortable=False))
    table = TableController(provider, columns)

    assert table.on_header_click(1) is False
    assert table.on_header_click(7) is False
    assert table.sorting == []
    assert client.list_calls == []


@pytest.mark.anyio
async def test_stale_generation_never_overwrites_newer_state() -> None:
    table, _, client = _table()
    slow_gate, fast_gate = asyncio.Event(), asyncio.Event()
    client.list_gates = [slow_gate, fast_gate]

    table.refresh()
    while not client.list_calls:
        await asyncio.sleep(0)
    client.rows = [user_payload("fresh")]
    table.refresh()

    fast_gate.set()
    await asyncio.sleep(0.01)
    assert _names(table) == ["fresh"]
    assert table.loading is False

    slow_gate.set()
    await table.wait_idle()
    assert _names(table) == ["fresh"]
    assert table.row_count == 1


@pytest.mark.anyio
async def test_row_error_keeps_previous_rows() -> None:
    table, _, client = _table()
    table.refresh()
    await table.wait_idle()

    client.list_error = api_error(code="DB_UNAVAILABLE", status_code=503)
    table.refresh()
    await table.wait_idle()

    assert _names(table) == ["user0", "user1"]
    assert table.error == "The database is unavailable, try again shortly"

    client.list_error = None
    table.refresh()
    await table.wait_idle()
    assert table.error is None


@pytest.mark.anyio
async def test_unknown_count_disables_last_page() -> None:
    table, _, client = _table(count=5, page_size=2)
    client.count_error = api_error()

    table.refresh()
    await table.wait_idle()

    assert table.row_count is None
    assert table.results_label() == "… results"
    assert table.can_go_last is False
    assert table.last_page() is False

    assert table.next_page()
    await table.wait_idle()
    assert table.next_page()
    await table.wait_idle()
    assert _names(table) == ["user4"]
    assert table.next_page() is False


@pytest.mark.anyio
async def test_known_count_pagination() -> None:
    table, _, _ = _table(count=5, page_size=2)
    table.refresh()
    await table.wait_idle()

    assert table.total_pages == 3
    assert table.last_page()
    await table.wait_idle()
    assert table.pagination.page == 3
    assert table.has_next is False
    assert table.prev_page()
    await table.wait_idle()
    assert _names(table) == ["user2", "user3"]

    table.goto_page(99)
    await table.wait_idle()
    assert table.pagination.page == 3


@pytest.mark.anyio
async def test_search_resets_to_first_page() -> None:
    table, provider, client = _table(count=12, page_size=2)
    table.refresh()
    await table.wait_idle()
    table.next_page()
    await table.wait_idle()

    table.on_search_input("user1")
    await table.wait_idle()

    assert provider.search == "user1"
    assert table.pagination.page == 1
    assert client.list_calls[-1].search == "user1"
    assert table.row_count == 3


@pytest.mark.anyio
async def test_debounced_search_reaches_provider_once() -> None:
    client = FakeResourceClient([user_payload("alice"), user_payload("bob")])
    provider = ResourceProvider(client, UserRecord)
    table = TableController(provider, UserRecord.COLUMNS, debounce_ms=20)
    seen: list[str] = []
    provider.subscribe(lambda: seen.append(provider.search))

    for text in ["b", "bo", "bob"]:
        table.on_search_input(text)
    await asyncio.sleep(0.08)
    await table.wait_idle()

    assert seen == ["bob"]
    assert len(client.list_calls) == 1
    assert [row.username for row in table.rows] == ["bob"]


@pytest.mark.anyio
async def test_reload_signal_refetches_current_range() -> None:
    reload_controller = ReloadController()
    table, _, client = _table(reload_controller=reload_controller)
    table.refresh()
    await table.wait_idle()
    calls_before = len(client.list_calls)

    reload_controller.reload()
    await table.wait_idle()

    assert len(client.list_calls) == calls_before + 1
    assert client.list_calls[-1].range == table.current_range

    table.close()
    reload_controller.reload()
    await table.wait_idle()
    assert len(client.list_calls) == calls_before + 1


@pytest.mark.anyio
async def test_flush_search_applies_pending_text_immediately() -> None:
    client = FakeResourceClient([user_payload("alice"), user_payload("bob")])
    provider = ResourceProvider(client, UserRecord)
    table = TableController(provider, UserRecord.COLUMNS, debounce_ms=10_000)

    table.on_search_input("ali")
    assert provider.search == ""
    table.flush_search()
    await table.wait_idle()

    assert provider.search == "ali"
    assert [row.username for row in table.rows] == ["alice"]
    table.close()
