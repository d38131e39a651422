from sqlalchemy import select

from app.mailadmin.core.resources import ResourceColumn, ResourceDefinition
from app.mailadmin.db.models import Alias

ALIAS_RESOURCE = ResourceDefinition(
    name="aliases",
    model=Alias,
    identity=Alias.address,
    columns=(
        ResourceColumn("address", Alias.address, searchable=True),
        ResourceColumn("target", Alias.target),
        ResourceColumn("comment", Alias.comment, searchable=True),
        ResourceColumn("n_recv", Alias.n_recv, title="Received"),
        ResourceColumn("n_sent", Alias.n_sent, title="Sent"),
        ResourceColumn("created_at", Alias.created_at, title="Created"),
        ResourceColumn("active", Alias.active),
    ),
)


class AliasRepository:
    def __init__(self, db):
        self.db = db

    def get_by_address(self, address: str):
        stmt = select(Alias).where(Alias.address == address)
        return self.db.execute(stmt).scalars().first()

    def create(self, *, address: str, target: str, comment: str, active: bool):
        alias = Alias(address=address, target=target, comment=comment, active=active)
        return self.save(alias)

    def save(self, alias: Alias):
        self.db.add(alias)
        self.db.commit()
        self.db.refresh(alias)
        return alias

    def delete(self, alias: Alias) -> None:
        self.db.delete(alias)
        self.db.commit()
