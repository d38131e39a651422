from __future__ import annotations

from mailadmin_console.app.config import ConsoleConfig
from mailadmin_console.app.domain.query import ColumnSort, SortEntry
from mailadmin_console.app.domain.records import AliasRecord
from mailadmin_console.app.infrastructure.logging.logger import get_logger
from mailadmin_console.app.providers import ResourceProvider
from mailadmin_console.app.reload import ReloadController
from mailadmin_console.app.ui.forms import AliasDraft, validate_alias_draft
from mailadmin_console.app.ui.inline_editor import InlineEditor
from mailadmin_console.app.ui.modal import DeleteModal, EditModal
from mailadmin_console.app.ui.table_controller import TableController
from mailadmin_console.clients.aliases_client import AliasesClient

DEFAULT_SORT = (SortEntry(5, ColumnSort.DESCENDING),)
DELETE_TEXT = "Are you sure you want to delete this alias? This action cannot be undone."

logger = get_logger("mailadmin_console.aliases")


class AliasesView:
    def __init__(self, client: AliasesClient, config: ConsoleConfig | None = None, actor: str | None = None) -> None:
        config = config or ConsoleConfig()
        self.client = client
        self.reload_controller = ReloadController()
        self.provider: ResourceProvider[AliasRecord] = ResourceProvider(client, AliasRecord, DEFAULT_SORT)
        self.table: TableController[AliasRecord] = TableController(
            self.provider,
            AliasRecord.COLUMNS,
            reload_controller=self.reload_controller,
            page_size=config.PAGE_SIZE,
            debounce_ms=config.SEARCH_DEBOUNCE_MS,
            default_sort=DEFAULT_SORT,
        )
        self.edit_modal: EditModal[AliasRecord, AliasDraft] = EditModal(
            what="Alias",
            draft_factory=AliasDraft.from_target,
            validate=validate_alias_draft,
            submit=self._save,
            get_title=lambda alias: alias.address,
            reload_controller=self.reload_controller,
        )
        self.delete_modal = DeleteModal(
            delete=client.delete,
            reload_controller=self.reload_controller,
            text=DELETE_TEXT,
            module="aliases",
            actor=actor,
            log=logger,
        )
        self.inline_editor: InlineEditor[AliasRecord] = InlineEditor(
            mutate=lambda row: client.set_active(row.address, row.active),
            reload_controller=self.reload_controller,
            editable_fields=("active",),
            module="aliases",
            actor=actor,
            log=logger,
        )

    async def load(self) -> None:
        self.table.refresh()
        await self.table.wait_idle()

    def open_new(self) -> None:
        self.edit_modal.open(None)

    def open_edit(self, alias: AliasRecord) -> None:
        self.edit_modal.open(alias)

    def open_delete(self, alias: AliasRecord) -> None:
        self.delete_modal.open(alias.address)

    async def toggle_active(self, alias: AliasRecord, value: bool) -> bool:
        return await self.inline_editor.toggle(alias, "active", value)

    async def _save(self, target: AliasRecord | None, draft: AliasDraft) -> None:
        await self.client.create_or_update(
            target.address if target is not None else None,
            draft.address.strip(),
            draft.target.strip(),
            draft.comment,
            draft.active,
        )

    def close(self) -> None:
        self.table.close()
