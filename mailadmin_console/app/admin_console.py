from __future__ import annotations

from typing import Any

import httpx

from mailadmin_console.app.config import ConsoleConfig
from mailadmin_console.app.infrastructure.logging.logger import get_logger, log_action
from mailadmin_console.app.ui.views.account_settings_view import AccountSettingsView
from mailadmin_console.app.ui.views.aliases_view import AliasesView
from mailadmin_console.app.ui.views.users_view import UsersView
from mailadmin_console.clients.aliases_client import AliasesClient
from mailadmin_console.clients.auth_client import AuthClient
from mailadmin_console.clients.auth_store import AuthStore
from mailadmin_console.clients.http_client import APIError, HttpClient
from mailadmin_console.clients.users_client import UsersClient

logger = get_logger("mailadmin_console.session")


class AdminConsole:
    """Signed-in console session: one HTTP client, one token, views built on demand."""

    def __init__(self, config: ConsoleConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        config.validate()
        self.config = config
        self.auth_store = AuthStore()
        self.http = HttpClient(
            config.BASE_URL,
            timeout_seconds=config.TIMEOUT_SECONDS,
            verify_ssl=config.VERIFY_SSL,
            retry_max_attempts=config.RETRY_MAX_ATTEMPTS,
            retry_backoff_ms=config.RETRY_BACKOFF_MS,
            transport=transport,
        )
        self.auth = AuthClient(self.http, self.auth_store)
        self.users = UsersClient(self.http, self.auth_store)
        self.aliases = AliasesClient(self.http, self.auth_store)
        self.principal: dict[str, Any] | None = None

    @property
    def actor(self) -> str | None:
        return self.principal["username"] if self.principal else None

    @property
    def is_admin(self) -> bool:
        return bool(self.principal and self.principal.get("admin"))

    async def login(self, username: str, password: str) -> dict[str, Any]:
        try:
            result = await self.auth.login(username, password)
        except APIError as exc:
            log_action(logger, "auth", "login", username, exc.trace_id, "failure", detail=exc.code)
            raise
        self.principal = await self.auth.me()
        log_action(logger, "auth", "login", username, result.get("trace_id"), "success")
        return self.principal

    def logout(self) -> None:
        self.auth.logout()
        self.principal = None

    def users_view(self) -> UsersView:
        return UsersView(self.users, self.config, actor=self.actor)

    def aliases_view(self) -> AliasesView:
        return AliasesView(self.aliases, self.config, actor=self.actor)

    def account_settings_view(self) -> AccountSettingsView:
        if self.principal is None:
            raise RuntimeError("not signed in")
        return AccountSettingsView(self.auth, self.principal["username"])

    async def aclose(self) -> None:
        await self.http.aclose()
