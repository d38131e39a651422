from __future__ import annotations

from mailadmin_console.app.config import ConsoleConfig
from mailadmin_console.app.domain.query import ColumnSort, SortEntry
from mailadmin_console.app.domain.records import UserRecord
from mailadmin_console.app.infrastructure.logging.logger import get_logger
from mailadmin_console.app.providers import ResourceProvider
from mailadmin_console.app.reload import ReloadController
from mailadmin_console.app.ui.forms import UserDraft, has_invalid_password, has_password_mismatch, validate_user_draft
from mailadmin_console.app.ui.inline_editor import InlineEditor
from mailadmin_console.app.ui.modal import DeleteModal, EditModal
from mailadmin_console.app.ui.table_controller import TableController
from mailadmin_console.clients.users_client import UsersClient

DEFAULT_SORT = (SortEntry(3, ColumnSort.DESCENDING),)
DELETE_TEXT = "Are you sure you want to delete this user? This action cannot be undone."

logger = get_logger("mailadmin_console.users")


class UsersView:
    def __init__(self, client: UsersClient, config: ConsoleConfig | None = None, actor: str | None = None) -> None:
        config = config or ConsoleConfig()
        self.client = client
        self.reload_controller = ReloadController()
        self.provider: ResourceProvider[UserRecord] = ResourceProvider(client, UserRecord, DEFAULT_SORT)
        self.table: TableController[UserRecord] = TableController(
            self.provider,
            UserRecord.COLUMNS,
            reload_controller=self.reload_controller,
            page_size=config.PAGE_SIZE,
            debounce_ms=config.SEARCH_DEBOUNCE_MS,
            default_sort=DEFAULT_SORT,
        )
        self.edit_modal: EditModal[UserRecord, UserDraft] = EditModal(
            what="User",
            draft_factory=UserDraft.from_target,
            validate=validate_user_draft,
            submit=self._save,
            get_title=lambda user: user.username,
            reload_controller=self.reload_controller,
        )
        self.delete_modal = DeleteModal(
            delete=client.delete,
            reload_controller=self.reload_controller,
            text=DELETE_TEXT,
            module="users",
            actor=actor,
            log=logger,
        )
        self.inline_editor: InlineEditor[UserRecord] = InlineEditor(
            mutate=lambda row: client.set_flags(row.username, row.admin, row.active),
            reload_controller=self.reload_controller,
            editable_fields=("admin", "active"),
            module="users",
            actor=actor,
            log=logger,
        )

    @property
    def has_password_mismatch(self) -> bool:
        draft = self.edit_modal.draft
        return draft is not None and has_password_mismatch(draft.password, draft.password_repeat)

    @property
    def has_invalid_password(self) -> bool:
        draft = self.edit_modal.draft
        return draft is not None and has_invalid_password(draft.password, is_new=self.edit_modal.is_new)

    async def load(self) -> None:
        self.table.refresh()
        await self.table.wait_idle()

    def open_new(self) -> None:
        self.edit_modal.open(None)

    def open_edit(self, user: UserRecord) -> None:
        self.edit_modal.open(user)

    def open_delete(self, user: UserRecord) -> None:
        self.delete_modal.open(user.username)

    async def toggle(self, user: UserRecord, field: str, value: bool) -> bool:
        return await self.inline_editor.toggle(user, field, value)

    async def _save(self, target: UserRecord | None, draft: UserDraft) -> None:
        await self.client.create_or_update(
            target.username if target is not None else None,
            draft.username.strip(),
            draft.password,
            draft.admin,
            draft.active,
        )

    def close(self) -> None:
        self.table.close()
