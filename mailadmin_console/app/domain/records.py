from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Protocol


@dataclass(frozen=True)
class ColumnDef:
    key: str
    title: str
    sortable: bool = True
    searchable: bool = False


class Record(Protocol):
    RESOURCE: ClassVar[str]
    COLUMNS: ClassVar[tuple[ColumnDef, ...]]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Record": ...

    @property
    def identity(self) -> str: ...

    @property
    def title(self) -> str: ...


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class UserRecord:
    RESOURCE: ClassVar[str] = "users"
    COLUMNS: ClassVar[tuple[ColumnDef, ...]] = (
        ColumnDef("username", "Username", searchable=True),
        ColumnDef("admin", "Admin"),
        ColumnDef("active", "Active"),
        ColumnDef("created_at", "Created"),
    )

    username: str
    admin: bool
    active: bool
    created_at: datetime

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "UserRecord":
        return cls(
            username=str(payload["username"]),
            admin=bool(payload.get("admin", False)),
            active=bool(payload.get("active", True)),
            created_at=_parse_datetime(payload["created_at"]),
        )

    @property
    def identity(self) -> str:
        return self.username

    @property
    def title(self) -> str:
        return self.username


@dataclass(frozen=True)
class AliasRecord:
    RESOURCE: ClassVar[str] = "aliases"
    COLUMNS: ClassVar[tuple[ColumnDef, ...]] = (
        ColumnDef("address", "Address", searchable=True),
        ColumnDef("target", "Target"),
        ColumnDef("comment", "Comment", searchable=True),
        ColumnDef("n_recv", "Received"),
        ColumnDef("n_sent", "Sent"),
        ColumnDef("created_at", "Created"),
        ColumnDef("active", "Active"),
    )

    address: str
    target: str
    comment: str
    n_recv: int
    n_sent: int
    created_at: datetime
    active: bool

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AliasRecord":
        return cls(
            address=str(payload["address"]),
            target=str(payload.get("target", "")),
            comment=str(payload.get("comment") or ""),
            n_recv=int(payload.get("n_recv", 0)),
            n_sent=int(payload.get("n_sent", 0)),
            created_at=_parse_datetime(payload["created_at"]),
            active=bool(payload.get("active", True)),
        )

    @property
    def identity(self) -> str:
        return self.address

    @property
    def title(self) -> str:
        return self.address
