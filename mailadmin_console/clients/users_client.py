from typing import Any
from urllib.parse import quote

from mailadmin_console.clients.resource_client import ResourceClient


class UsersClient(ResourceClient):
    resource = "users"

    async def create_or_update(
        self,
        old_username: str | None,
        username: str,
        password: str,
        admin: bool,
        active: bool,
    ) -> dict[str, Any]:
        return await self.http.request(
            "POST",
            self.base_path,
            token=self.auth_store.get_token(),
            json={
                "old_username": old_username,
                "username": username,
                "password": password,
                "admin": admin,
                "active": active,
            },
        )

    async def set_flags(self, username: str, admin: bool, active: bool) -> dict[str, Any]:
        return await self.http.request(
            "PATCH",
            f"{self.base_path}/{quote(username, safe='@')}/flags",
            token=self.auth_store.get_token(),
            json={"admin": admin, "active": active},
        )

    async def delete(self, username: str) -> dict[str, Any]:
        return await self.http.request(
            "DELETE",
            f"{self.base_path}/{quote(username, safe='@')}",
            token=self.auth_store.get_token(),
        )
