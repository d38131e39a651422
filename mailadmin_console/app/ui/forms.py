from __future__ import annotations

from dataclasses import dataclass

from mailadmin_console.app.domain.records import AliasRecord, UserRecord

PASSWORD_MIN_LENGTH = 12
PASSWORD_MAX_LENGTH = 1024

PASSWORD_MISMATCH = "Passwords don't match"
PASSWORD_LENGTH = f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters"
USERNAME_REQUIRED = "Username is required"
CURRENT_PASSWORD_REQUIRED = "Current password is required"
ADDRESS_REQUIRED = "Address is required"
TARGET_REQUIRED = "Target is required"


def is_valid_password(password: str) -> bool:
    return PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH


def has_password_mismatch(password: str, password_repeat: str) -> bool:
    return password != password_repeat


def has_invalid_password(password: str, *, is_new: bool = True) -> bool:
    # On edit an empty password keeps the current one.
    if not is_new and password == "":
        return False
    return not is_valid_password(password)


@dataclass
class UserDraft:
    username: str = ""
    password: str = ""
    password_repeat: str = ""
    admin: bool = False
    active: bool = True

    @classmethod
    def from_target(cls, target: UserRecord | None) -> "UserDraft":
        if target is None:
            return cls()
        return cls(username=target.username, admin=target.admin, active=target.active)


@dataclass
class AliasDraft:
    address: str = ""
    target: str = ""
    comment: str = ""
    active: bool = True

    @classmethod
    def from_target(cls, target: AliasRecord | None) -> "AliasDraft":
        if target is None:
            return cls()
        return cls(address=target.address, target=target.target, comment=target.comment, active=target.active)


@dataclass
class PasswordChangeDraft:
    current_password: str = ""
    password: str = ""
    password_repeat: str = ""

    @classmethod
    def from_target(cls, _target: object = None) -> "PasswordChangeDraft":
        return cls()


def validate_user_draft(draft: UserDraft, is_new: bool) -> list[str]:
    errors = []
    if not draft.username.strip():
        errors.append(USERNAME_REQUIRED)
    if has_password_mismatch(draft.password, draft.password_repeat):
        errors.append(PASSWORD_MISMATCH)
    if has_invalid_password(draft.password, is_new=is_new):
        errors.append(PASSWORD_LENGTH)
    return errors


def validate_alias_draft(draft: AliasDraft, is_new: bool) -> list[str]:
    errors = []
    if not draft.address.strip():
        errors.append(ADDRESS_REQUIRED)
    if not draft.target.strip():
        errors.append(TARGET_REQUIRED)
    return errors


def validate_password_change(draft: PasswordChangeDraft, is_new: bool = True) -> list[str]:
    errors = []
    if not draft.current_password:
        errors.append(CURRENT_PASSWORD_REQUIRED)
    if has_password_mismatch(draft.password, draft.password_repeat):
        errors.append(PASSWORD_MISMATCH)
    if has_invalid_password(draft.password):
        errors.append(PASSWORD_LENGTH)
    return errors
