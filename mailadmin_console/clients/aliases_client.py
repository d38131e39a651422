from typing import Any
from urllib.parse import quote

from mailadmin_console.clients.resource_client import ResourceClient


class AliasesClient(ResourceClient):
    resource = "aliases"

    async def create_or_update(
        self,
        old_address: str | None,
        address: str,
        target: str,
        comment: str,
        active: bool,
    ) -> dict[str, Any]:
        return await self.http.request(
            "POST",
            self.base_path,
            token=self.auth_store.get_token(),
            json={
                "old_address": old_address,
                "address": address,
                "target": target,
                "comment": comment,
                "active": active,
            },
        )

    async def set_active(self, address: str, active: bool) -> dict[str, Any]:
        return await self.http.request(
            "PATCH",
            f"{self.base_path}/{quote(address, safe='@')}/active",
            token=self.auth_store.get_token(),
            json={"active": active},
        )

    async def delete(self, address: str) -> dict[str, Any]:
        return await self.http.request(
            "DELETE",
            f"{self.base_path}/{quote(address, safe='@')}",
            token=self.auth_store.get_token(),
        )
