from app.mailadmin.core.query import QuerySpec, build_count, build_select
from app.mailadmin.core.resources import ResourceDefinition


class ResourceRepository:
    def __init__(self, db, resource: ResourceDefinition):
        self.db = db
        self.resource = resource

    def list_page(self, spec: QuerySpec):
        stmt = build_select(spec, self.resource)
        return self.db.execute(stmt).scalars().all()

    def count(self, search: str = "") -> int:
        return int(self.db.execute(build_count(search, self.resource)).scalar_one())
