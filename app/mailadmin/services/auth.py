import logging

from app.mailadmin.core.error_catalog import AppError, ErrorCatalog
from app.mailadmin.core.logging import log_action
from app.mailadmin.core.security import create_user_access_token, get_password_hash, verify_password
from app.mailadmin.repos.users import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db):
        self.repo = UserRepository(db)

    def login(self, username: str, password: str, *, trace_id: str | None = None):
        user = self.repo.get_by_username(username)
        # Unknown user, inactive user and wrong password all look the same to the caller.
        if user is None or not user.active or not verify_password(password, user.password_hash):
            log_action(
                logger,
                action="auth.login",
                actor=username,
                entity_id=username,
                trace_id=trace_id,
                result="failure",
            )
            raise AppError(ErrorCatalog.INVALID_CREDENTIALS)
        log_action(
            logger,
            action="auth.login",
            actor=user.username,
            entity_id=user.username,
            trace_id=trace_id,
            result="success",
        )
        return user, create_user_access_token(user)

    def change_password(self, user, current_password: str, new_password: str, *, trace_id: str | None = None):
        if not verify_password(current_password, user.password_hash):
            log_action(
                logger,
                action="auth.change_password",
                actor=user.username,
                entity_id=user.username,
                trace_id=trace_id,
                result="failure",
                metadata={"error_code": ErrorCatalog.CURRENT_PASSWORD_INVALID.code},
            )
            raise AppError(ErrorCatalog.CURRENT_PASSWORD_INVALID)
        hashed = get_password_hash(new_password)
        updated = self.repo.update_password(user, hashed)
        log_action(
            logger,
            action="auth.change_password",
            actor=updated.username,
            entity_id=updated.username,
            trace_id=trace_id,
            result="success",
        )
        return updated
