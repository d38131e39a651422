from typing import Any

from mailadmin_console.app.domain.query import QuerySpec
from mailadmin_console.clients.auth_store import AuthStore
from mailadmin_console.clients.http_client import HttpClient


class ResourceClient:
    """List, count and column metadata for one server-side resource."""

    resource: str = ""

    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    @property
    def base_path(self) -> str:
        return f"/api/{self.resource}"

    async def list(self, spec: QuerySpec) -> dict[str, Any]:
        return await self.http.request("GET", self.base_path, token=self.auth_store.get_token(), params=spec.to_params())

    async def count(self, search: str = "") -> int:
        params = {"search": search.strip()} if search.strip() else None
        result = await self.http.request("GET", f"{self.base_path}/count", token=self.auth_store.get_token(), params=params)
        return int(result["count"])

    async def columns(self) -> dict[str, Any]:
        return await self.http.request("GET", f"{self.base_path}/columns", token=self.auth_store.get_token())
