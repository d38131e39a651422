from __future__ import annotations

from typing import Callable


class ReloadController:
    """Monotonic token shared by mutation flows and the tables they invalidate."""

    def __init__(self) -> None:
        self._token = 0
        self._subscribers: list[Callable[[int], None]] = []

    @property
    def token(self) -> int:
        return self._token

    def reload(self) -> int:
        self._token += 1
        for callback in list(self._subscribers):
            callback(self._token)
        return self._token

    def subscribe(self, callback: Callable[[int], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
