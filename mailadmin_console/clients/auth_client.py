from typing import Any

from mailadmin_console.clients.auth_store import AuthStore
from mailadmin_console.clients.http_client import HttpClient


class AuthClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    async def login(self, username: str, password: str) -> dict[str, Any]:
        result = await self.http.request("POST", "/api/auth/login", json={"username": username, "password": password})
        token = result.get("access_token")
        if token:
            self.auth_store.set_token(token)
        return result

    async def me(self) -> dict[str, Any]:
        return await self.http.request("GET", "/api/auth/me", token=self.auth_store.get_token())

    async def change_password(self, current_password: str, new_password: str) -> dict[str, Any]:
        return await self.http.request(
            "POST",
            "/api/auth/change-password",
            token=self.auth_store.get_token(),
            json={"current_password": current_password, "new_password": new_password},
        )

    def logout(self) -> None:
        self.auth_store.clear()
