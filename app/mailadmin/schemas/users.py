from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.mailadmin.schemas.listing import RangeMeta


class UserItem(BaseModel):
    username: str
    admin: bool
    active: bool
    created_at: datetime


class UserListResponse(BaseModel):
    rows: list[UserItem]
    range: RangeMeta
    trace_id: str


class UserSaveRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"old_username": None, "username": "alice", "password": "correct horse battery", "admin": False, "active": True},
                {"old_username": "bob", "username": "robert", "password": "", "admin": True, "active": True},
            ]
        }
    }

    old_username: str | None = Field(
        default=None,
        description="Current username of the record being edited. Omit to create a new user.",
    )
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(
        default="",
        max_length=1024,
        description="Required on create. On update an empty value keeps the current password.",
    )
    admin: bool = False
    active: bool = True

    @field_validator("username")
    @classmethod
    def _username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value


class UserFlagsRequest(BaseModel):
    admin: bool
    active: bool
