from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import InstrumentedAttribute


@dataclass(frozen=True)
class ResourceColumn:
    key: str
    column: InstrumentedAttribute
    title: str | None = None
    sortable: bool = True
    searchable: bool = False

    @property
    def display_title(self) -> str:
        return self.title or self.key.replace("_", " ").title()


@dataclass(frozen=True)
class ResourceDefinition:
    """Capability set shared by every listable record type.

    Column positions are the public sort indices, so the order of ``columns`` is part of
    the wire contract.
    """

    name: str
    model: type
    identity: InstrumentedAttribute
    columns: tuple[ResourceColumn, ...]

    @property
    def identity_key(self) -> str:
        return self.identity.key

    def sortable_column(self, index: int) -> InstrumentedAttribute | None:
        if index < 0 or index >= len(self.columns):
            return None
        entry = self.columns[index]
        return entry.column if entry.sortable else None

    @property
    def searchable_columns(self) -> tuple[InstrumentedAttribute, ...]:
        return tuple(entry.column for entry in self.columns if entry.searchable)

    def to_item(self, record: Any) -> dict[str, Any]:
        return {entry.key: getattr(record, entry.key) for entry in self.columns}

    def describe(self) -> list[dict[str, Any]]:
        return [
            {
                "index": index,
                "key": entry.key,
                "title": entry.display_title,
                "sortable": entry.sortable,
                "searchable": entry.searchable,
            }
            for index, entry in enumerate(self.columns)
        ]
