from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.mailadmin.schemas.listing import RangeMeta


class AliasItem(BaseModel):
    address: str
    target: str
    comment: str
    n_recv: int
    n_sent: int
    created_at: datetime
    active: bool


class AliasListResponse(BaseModel):
    rows: list[AliasItem]
    range: RangeMeta
    trace_id: str


class AliasSaveRequest(BaseModel):
    old_address: str | None = Field(
        default=None,
        description="Current address of the alias being edited. Omit to create a new alias.",
    )
    address: str = Field(..., min_length=1, max_length=255)
    target: str = Field(..., min_length=1, max_length=255)
    comment: str = ""
    active: bool = True

    @field_validator("address", "target")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return value


class AliasActiveRequest(BaseModel):
    active: bool
