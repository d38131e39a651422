from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Trailing-edge debounce on the running event loop.

    Every call restarts the timer; only the last value seen when the timer expires reaches
    ``callback``.
    """

    def __init__(self, wait_ms: int, callback: Callable[[T], None]) -> None:
        self.wait_ms = wait_ms
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._pending: tuple[T] | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, value: T) -> None:
        self.cancel()
        if self.wait_ms <= 0:
            self.callback(value)
            return
        self._pending = (value,)
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.wait_ms / 1000, self._fire)

    def flush(self) -> None:
        if self._handle is None:
            return
        self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def _fire(self) -> None:
        pending = self._pending
        self.cancel()
        if pending is not None:
            self.callback(pending[0])
