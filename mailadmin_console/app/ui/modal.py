from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

from mailadmin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from mailadmin_console.app.infrastructure.logging.logger import log_action
from mailadmin_console.app.reload import ReloadController
from mailadmin_console.clients.http_client import APIError

T = TypeVar("T")
D = TypeVar("D")

logger = logging.getLogger(__name__)


class ModalPhase(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"
    FAILED = "failed"


class EditModal(Generic[T, D]):
    """Create/update workflow over a mutable draft.

    ``target`` is ``None`` when creating. Every open, cancel and submit starts a new attempt;
    a result that arrives for an older attempt leaves the current modal state alone.
    """

    def __init__(
        self,
        *,
        what: str,
        draft_factory: Callable[[T | None], D],
        validate: Callable[[D, bool], list[str]],
        submit: Callable[[T | None, D], Awaitable[Any]],
        get_title: Callable[[T], str] | None = None,
        reload_controller: ReloadController | None = None,
        title: str | None = None,
    ) -> None:
        self.what = what
        self._title = title
        self._draft_factory = draft_factory
        self._validate = validate
        self._submit = submit
        self._get_title = get_title
        self._reload = reload_controller
        self.phase = ModalPhase.CLOSED
        self.target: T | None = None
        self.draft: D | None = None
        self.server_error: str | None = None
        self._attempt = 0

    @property
    def is_open(self) -> bool:
        return self.phase != ModalPhase.CLOSED

    @property
    def is_new(self) -> bool:
        return self.target is None

    @property
    def title(self) -> str:
        if self._title is not None:
            return self._title
        if self.target is None:
            return f"New {self.what}"
        name = self._get_title(self.target) if self._get_title is not None else str(self.target)
        return f"Edit {name}"

    @property
    def errors(self) -> list[str]:
        if self.draft is None:
            return []
        return self._validate(self.draft, self.is_new)

    @property
    def submit_enabled(self) -> bool:
        return self.phase in (ModalPhase.OPEN, ModalPhase.FAILED) and not self.errors

    def open(self, target: T | None = None) -> None:
        self._attempt += 1
        self.target = target
        self.draft = self._draft_factory(target)
        self.server_error = None
        self.phase = ModalPhase.OPEN

    def update(self, **fields: Any) -> None:
        if self.draft is None:
            raise RuntimeError("modal is not open")
        for name, value in fields.items():
            if not hasattr(self.draft, name):
                raise AttributeError(f"{type(self.draft).__name__} has no field '{name}'")
            setattr(self.draft, name, value)

    def cancel(self) -> None:
        self._attempt += 1
        self.phase = ModalPhase.CLOSED
        self.target = None
        self.draft = None
        self.server_error = None

    async def submit(self) -> bool:
        if not self.submit_enabled:
            return False
        self._attempt += 1
        attempt = self._attempt
        target = self.target
        draft = dataclasses.replace(self.draft)
        self.phase = ModalPhase.SUBMITTING
        try:
            await self._submit(target, draft)
        except APIError as exc:
            if attempt == self._attempt:
                self.server_error = ErrorMapper.to_display_message(exc)
                self.phase = ModalPhase.FAILED
            else:
                logger.debug("Dropping failure of superseded %s submission", self.what)
            return False
        except Exception as exc:
            if attempt == self._attempt:
                self.server_error = ErrorMapper.to_display_message(exc)
                self.phase = ModalPhase.FAILED
            raise
        if self._reload is not None:
            self._reload.reload()
        if attempt == self._attempt:
            self.cancel()
        return True


class DeleteModal:
    """Confirmation for deleting one record by identity."""

    def __init__(
        self,
        *,
        delete: Callable[[str], Awaitable[Any]],
        reload_controller: ReloadController | None,
        text: str,
        module: str,
        actor: str | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._delete = delete
        self._reload = reload_controller
        self.text = text
        self.module = module
        self.actor = actor
        self._logger = log or logger
        self.target: str | None = None
        self.waiting = False

    @property
    def is_open(self) -> bool:
        return self.target is not None

    def open(self, identity: str) -> None:
        if self.waiting:
            return
        self.target = identity

    def cancel(self) -> None:
        if self.waiting:
            return
        self.target = None

    async def confirm(self) -> bool:
        if self.target is None or self.waiting:
            return False
        identity = self.target
        self.waiting = True
        try:
            await self._delete(identity)
        except APIError as exc:
            log_action(
                self._logger,
                module=self.module,
                action="delete",
                actor=self.actor,
                trace_id=exc.trace_id,
                outcome="failure",
                detail=f"Failed to delete {identity}: {exc.message}",
            )
            return False
        finally:
            self.waiting = False
            self.target = None
        if self._reload is not None:
            self._reload.reload()
        return True
