import logging

from app.mailadmin.core.context import RequestContext
from app.mailadmin.core.error_catalog import AppError, ErrorCatalog
from app.mailadmin.core.logging import log_action
from app.mailadmin.core.query import QuerySpec
from app.mailadmin.repos.aliases import ALIAS_RESOURCE, AliasRepository
from app.mailadmin.repos.listing import ResourceRepository

logger = logging.getLogger(__name__)


class AliasService:
    def __init__(self, db):
        self.repo = AliasRepository(db)
        self.listing = ResourceRepository(db, ALIAS_RESOURCE)

    def list(self, spec: QuerySpec):
        return self.listing.list_page(spec)

    def count(self, search: str = "") -> int:
        return self.listing.count(search)

    def create_or_update(
        self,
        context: RequestContext,
        *,
        old_address: str | None,
        address: str,
        target: str,
        comment: str,
        active: bool,
    ):
        if old_address is None:
            if self.repo.get_by_address(address) is not None:
                raise AppError(ErrorCatalog.CONFLICT, details={"field": "address"})
            alias = self.repo.create(address=address, target=target, comment=comment, active=active)
            self._log(context, "admin.alias.create", address)
            return alias

        alias = self._get_or_404(old_address)
        if address != old_address and self.repo.get_by_address(address) is not None:
            raise AppError(ErrorCatalog.CONFLICT, details={"field": "address"})
        alias.address = address
        alias.target = target
        alias.comment = comment
        alias.active = active
        alias = self.repo.save(alias)
        self._log(context, "admin.alias.update", address, metadata={"old_address": old_address})
        return alias

    def set_active(self, context: RequestContext, address: str, active: bool):
        alias = self._get_or_404(address)
        alias.active = active
        alias = self.repo.save(alias)
        self._log(context, "admin.alias.set_active", address, metadata={"active": active})
        return alias

    def delete(self, context: RequestContext, address: str) -> None:
        alias = self._get_or_404(address)
        self.repo.delete(alias)
        self._log(context, "admin.alias.delete", address)

    def _get_or_404(self, address: str):
        alias = self.repo.get_by_address(address)
        if alias is None:
            raise AppError(ErrorCatalog.NOT_FOUND, details={"resource": "aliases", "id": address})
        return alias

    @staticmethod
    def _log(context: RequestContext, action: str, entity_id: str, metadata: dict | None = None) -> None:
        log_action(
            logger,
            action=action,
            actor=context.actor,
            entity_id=entity_id,
            trace_id=context.trace_id,
            result="success",
            metadata=metadata,
        )
