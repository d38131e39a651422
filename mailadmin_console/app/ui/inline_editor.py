from __future__ import annotations

import dataclasses
import logging
from typing import Any, Awaitable, Callable, Generic, Iterable, TypeVar

from mailadmin_console.app.infrastructure.logging.logger import log_action
from mailadmin_console.app.reload import ReloadController
from mailadmin_console.clients.http_client import APIError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class InlineEditor(Generic[T]):
    """Fire a single-record mutation for an edited cell, then reload.

    Reload happens exactly once per toggle whatever the outcome; failures only reach the log.
    """

    def __init__(
        self,
        *,
        mutate: Callable[[T], Awaitable[Any]],
        reload_controller: ReloadController,
        editable_fields: Iterable[str],
        module: str,
        actor: str | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._mutate = mutate
        self._reload = reload_controller
        self.editable_fields = frozenset(editable_fields)
        self.module = module
        self.actor = actor
        self._logger = log or logger

    async def toggle(self, row: T, field: str, value: Any) -> bool:
        if field not in self.editable_fields:
            raise ValueError(f"{field} is not editable inline")
        changed = dataclasses.replace(row, **{field: value})
        try:
            await self._mutate(changed)
        except APIError as exc:
            log_action(
                self._logger,
                module=self.module,
                action=f"set_{field}",
                actor=self.actor,
                trace_id=exc.trace_id,
                outcome="failure",
                detail=f"Failed to update {field} of {changed.identity}: {exc.message}",
            )
            return False
        finally:
            self._reload.reload()
        return True
