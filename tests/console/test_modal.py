import asyncio

import pytest

from mailadmin_console.app.config import ConsoleConfig
from mailadmin_console.app.domain.records import UserRecord
from mailadmin_console.app.ui.forms import CURRENT_PASSWORD_REQUIRED, PASSWORD_LENGTH, PASSWORD_MISMATCH, USERNAME_REQUIRED
from mailadmin_console.app.ui.modal import ModalPhase
from mailadmin_console.app.ui.views.account_settings_view import AccountSettingsView
from mailadmin_console.app.ui.views.users_view import UsersView
from tests.console.fakes import FakeUsersClient, api_error, user_payload

CONFIG = ConsoleConfig(SEARCH_DEBOUNCE_MS=0, PAGE_SIZE=10)


def _view(rows=None) -> tuple[UsersView, FakeUsersClient]:
    client = FakeUsersClient(rows or [user_payload("bob", admin=True)])
    return UsersView(client, CONFIG, actor="admin"), client


@pytest.mark.anyio
async def test_create_user_scenario() -> None:
    view, client = _view()
    modal = view.edit_modal

    view.open_new()
    assert modal.phase == ModalPhase.OPEN
    assert modal.title == "New User"

    modal.update(username="alice", password="short", password_repeat="short")
    assert view.has_invalid_password
    assert PASSWORD_LENGTH in modal.errors
    assert modal.submit_enabled is False

    modal.update(password="a" * 20, password_repeat="b" * 20)
    assert view.has_invalid_password is False
    assert view.has_password_mismatch
    assert modal.errors == [PASSWORD_MISMATCH]
    assert modal.submit_enabled is False

    modal.update(password_repeat="a" * 20)
    assert modal.errors == []
    assert modal.submit_enabled

    assert await modal.submit()
    await view.table.wait_idle()

    assert modal.phase == ModalPhase.CLOSED
    assert view.reload_controller.token == 1
    assert client.saved == [(None, "alice", "a" * 20, False, True)]
    assert len(client.list_calls) == 1


@pytest.mark.anyio
async def test_submit_while_disabled_is_noop() -> None:
    view, client = _view()
    view.open_new()

    assert USERNAME_REQUIRED in view.edit_modal.errors
    assert await view.edit_modal.submit() is False
    assert client.saved == []
    assert view.reload_controller.token == 0


@pytest.mark.anyio
async def test_edit_seeds_draft_and_keeps_source_record() -> None:
    view, client = _view()
    bob = UserRecord.from_payload(user_payload("bob", admin=True))

    view.open_edit(bob)
    modal = view.edit_modal
    assert modal.title == "Edit bob"
    assert modal.draft.username == "bob"
    assert modal.draft.admin is True
    assert modal.draft.password == ""
    assert modal.errors == []

    modal.update(username="robert", active=False)
    assert bob.username == "bob"
    assert bob.active is True

    assert await modal.submit()
    await view.table.wait_idle()
    assert client.saved == [("bob", "robert", "", True, False)]


@pytest.mark.anyio
async def test_failed_submit_keeps_draft_and_allows_retry() -> None:
    view, client = _view()
    client.mutation_error = api_error(code="CONFLICT", status_code=409)

    view.open_new()
    view.edit_modal.update(username="bob", password="x" * 12, password_repeat="x" * 12)
    assert await view.edit_modal.submit() is False

    modal = view.edit_modal
    assert modal.phase == ModalPhase.FAILED
    assert modal.is_open
    assert modal.server_error == "A record with this name already exists"
    assert modal.draft.username == "bob"
    assert view.reload_controller.token == 0

    client.mutation_error = None
    modal.update(username="bobby")
    assert modal.submit_enabled
    assert await modal.submit()
    await view.table.wait_idle()
    assert modal.phase == ModalPhase.CLOSED
    assert client.saved[-1][1] == "bobby"


@pytest.mark.anyio
async def test_authorization_failure_displays_unauthorized() -> None:
    view, client = _view()
    client.mutation_error = api_error(code="UNAUTHORIZED", status_code=403, message="Forbidden for you")

    view.open_new()
    view.edit_modal.update(username="eve", password="x" * 12, password_repeat="x" * 12)
    await view.edit_modal.submit()

    assert view.edit_modal.server_error == "Unauthorized"


@pytest.mark.anyio
async def test_late_success_after_cancel_reloads_without_touching_new_modal() -> None:
    view, client = _view()
    client.mutation_gate = asyncio.Event()
    modal = view.edit_modal

    view.open_new()
    modal.update(username="carol", password="x" * 12, password_repeat="x" * 12)
    pending = asyncio.ensure_future(modal.submit())
    await asyncio.sleep(0)
    assert modal.phase == ModalPhase.SUBMITTING
    assert modal.submit_enabled is False

    modal.cancel()
    bob = UserRecord.from_payload(user_payload("bob"))
    view.open_edit(bob)

    client.mutation_gate.set()
    assert await pending
    await view.table.wait_idle()

    assert view.reload_controller.token == 1
    assert modal.phase == ModalPhase.OPEN
    assert modal.title == "Edit bob"


@pytest.mark.anyio
async def test_late_failure_after_cancel_is_dropped() -> None:
    view, client = _view()
    client.mutation_gate = asyncio.Event()
    client.mutation_error = api_error()
    modal = view.edit_modal

    view.open_new()
    modal.update(username="carol", password="x" * 12, password_repeat="x" * 12)
    pending = asyncio.ensure_future(modal.submit())
    await asyncio.sleep(0)
    modal.cancel()

    client.mutation_gate.set()
    assert await pending is False
    assert modal.phase == ModalPhase.CLOSED
    assert modal.server_error is None


class _PasswordClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def change_password(self, current_password: str, new_password: str) -> dict:
        self.calls.append((current_password, new_password))
        return {"ok": True}


@pytest.mark.anyio
async def test_change_password_modal_has_fixed_title() -> None:
    client = _PasswordClient()
    settings_view = AccountSettingsView(client, "jane")
    modal = settings_view.password_modal

    settings_view.open_change_password()
    assert modal.title == "Edit password"
    assert modal.target is None
    assert CURRENT_PASSWORD_REQUIRED in modal.errors
    assert PASSWORD_LENGTH in modal.errors

    modal.update(current_password="old-password-1", password="n" * 16, password_repeat="n" * 16)
    assert settings_view.has_invalid_password is False
    assert await modal.submit()

    assert client.calls == [("old-password-1", "n" * 16)]
    assert modal.is_open is False
