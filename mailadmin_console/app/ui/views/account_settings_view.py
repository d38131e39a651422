from __future__ import annotations

from mailadmin_console.app.ui.forms import (
    PasswordChangeDraft,
    has_invalid_password,
    has_password_mismatch,
    validate_password_change,
)
from mailadmin_console.app.ui.modal import EditModal
from mailadmin_console.clients.auth_client import AuthClient

PASSWORD_MODAL_TITLE = "Edit password"


class AccountSettingsView:
    """Change-password flow for the signed-in principal. Nothing is listed, so nothing reloads."""

    def __init__(self, client: AuthClient, username: str) -> None:
        self.client = client
        self.username = username
        self.password_modal: EditModal[None, PasswordChangeDraft] = EditModal(
            what="Password",
            draft_factory=PasswordChangeDraft.from_target,
            validate=validate_password_change,
            submit=self._change_password,
            title=PASSWORD_MODAL_TITLE,
        )

    @property
    def has_password_mismatch(self) -> bool:
        draft = self.password_modal.draft
        return draft is not None and has_password_mismatch(draft.password, draft.password_repeat)

    @property
    def has_invalid_password(self) -> bool:
        draft = self.password_modal.draft
        return draft is not None and has_invalid_password(draft.password)

    def open_change_password(self) -> None:
        self.password_modal.open()

    async def _change_password(self, _target: None, draft: PasswordChangeDraft) -> None:
        await self.client.change_password(draft.current_password, draft.password)
