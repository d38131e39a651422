import logging

from app.mailadmin.core.context import RequestContext
from app.mailadmin.core.error_catalog import AppError, ErrorCatalog
from app.mailadmin.core.logging import log_action
from app.mailadmin.core.query import QuerySpec
from app.mailadmin.core.security import get_password_hash
from app.mailadmin.repos.listing import ResourceRepository
from app.mailadmin.repos.users import USER_RESOURCE, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Admin operations over user accounts.

    Every call receives the request context explicitly; the admin gate itself is enforced by
    the router dependency.
    """

    def __init__(self, db):
        self.repo = UserRepository(db)
        self.listing = ResourceRepository(db, USER_RESOURCE)

    def list(self, spec: QuerySpec):
        return self.listing.list_page(spec)

    def count(self, search: str = "") -> int:
        return self.listing.count(search)

    def create_or_update(
        self,
        context: RequestContext,
        *,
        old_username: str | None,
        username: str,
        password: str,
        admin: bool,
        active: bool,
    ):
        if old_username is None:
            return self._create(context, username=username, password=password, admin=admin, active=active)
        return self._update(
            context,
            old_username=old_username,
            username=username,
            password=password,
            admin=admin,
            active=active,
        )

    def set_flags(self, context: RequestContext, username: str, *, admin: bool, active: bool):
        user = self._get_or_404(username)
        before = {"admin": user.admin, "active": user.active}
        user.admin = admin
        user.active = active
        user = self.repo.save(user)
        self._log(context, "admin.user.set_flags", username, before=before, after={"admin": admin, "active": active})
        return user

    def delete(self, context: RequestContext, username: str) -> None:
        user = self._get_or_404(username)
        self.repo.delete(user)
        self._log(context, "admin.user.delete", username)

    def _create(self, context: RequestContext, *, username: str, password: str, admin: bool, active: bool):
        if self.repo.get_by_username(username) is not None:
            raise AppError(ErrorCatalog.CONFLICT, details={"field": "username"})
        user = self.repo.create(
            username=username,
            password_hash=get_password_hash(password),
            admin=admin,
            active=active,
        )
        self._log(context, "admin.user.create", username, after={"admin": admin, "active": active})
        return user

    def _update(
        self,
        context: RequestContext,
        *,
        old_username: str,
        username: str,
        password: str,
        admin: bool,
        active: bool,
    ):
        user = self._get_or_404(old_username)
        if username != old_username and self.repo.get_by_username(username) is not None:
            raise AppError(ErrorCatalog.CONFLICT, details={"field": "username"})
        # Empty password keeps the stored hash.
        if password:
            user.password_hash = get_password_hash(password)
        user.username = username
        user.admin = admin
        user.active = active
        user = self.repo.save(user)
        self._log(
            context,
            "admin.user.update",
            username,
            metadata={"old_username": old_username, "password_changed": bool(password)},
        )
        return user

    def _get_or_404(self, username: str):
        user = self.repo.get_by_username(username)
        if user is None:
            raise AppError(ErrorCatalog.NOT_FOUND, details={"resource": "users", "id": username})
        return user

    @staticmethod
    def _log(context: RequestContext, action: str, entity_id: str, *, before=None, after=None, metadata=None):
        payload = dict(metadata or {})
        if before is not None:
            payload["before"] = before
        if after is not None:
            payload["after"] = after
        log_action(
            logger,
            action=action,
            actor=context.actor,
            entity_id=entity_id,
            trace_id=context.trace_id,
            result="success",
            metadata=payload or None,
        )
