import asyncio

import pytest

from mailadmin_console.app.ui.debounce import Debouncer


@pytest.mark.anyio
async def test_keystrokes_inside_window_collapse_to_last_value() -> None:
    calls: list[str] = []
    debouncer = Debouncer(30, calls.append)

    for text in ["a", "al", "ali", "alic", "alice"]:
        debouncer(text)
        await asyncio.sleep(0.005)

    assert calls == []
    await asyncio.sleep(0.1)
    assert calls == ["alice"]


@pytest.mark.anyio
async def test_separate_bursts_fire_separately() -> None:
    calls: list[str] = []
    debouncer = Debouncer(10, calls.append)

    debouncer("first")
    await asyncio.sleep(0.05)
    debouncer("second")
    await asyncio.sleep(0.05)

    assert calls == ["first", "second"]


@pytest.mark.anyio
async def test_flush_and_cancel() -> None:
    calls: list[str] = []
    debouncer = Debouncer(1000, calls.append)

    debouncer("now")
    assert debouncer.pending
    debouncer.flush()
    assert calls == ["now"]
    assert not debouncer.pending

    debouncer("dropped")
    debouncer.cancel()
    await asyncio.sleep(0.01)
    assert calls == ["now"]


def test_zero_wait_fires_synchronously() -> None:
    calls: list[str] = []
    Debouncer(0, calls.append)("instant")
    assert calls == ["instant"]
