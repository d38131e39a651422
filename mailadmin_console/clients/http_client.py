import asyncio
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class APIError(Exception):
    code: str
    message: str
    details: Any = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class HttpClient:
    """Async JSON client for the admin API.

    Only GET requests are retried, on 5xx responses and transport failures. Mutations are
    sent once.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 20,
        verify_ssl: bool = True,
        retry_max_attempts: int = 3,
        retry_backoff_ms: int = 150,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.retry_max_attempts = max(1, retry_max_attempts)
        self.retry_backoff_ms = max(0, retry_backoff_ms)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            verify=verify_ssl,
            transport=transport,
        )

    async def request(self, method: str, path: str, token: str | None = None, **kwargs: Any) -> dict[str, Any]:
        headers = dict(kwargs.pop("headers", None) or {})
        if token:
            headers["Authorization"] = f"Bearer {token}"

        allow_retry = method.upper() == "GET"

        for attempt in range(1, self.retry_max_attempts + 1):
            try:
                response = await self._client.request(method, path, headers=headers, **kwargs)
            except httpx.TimeoutException as exc:
                if (not allow_retry) or attempt >= self.retry_max_attempts:
                    raise APIError(
                        code="TIMEOUT_ERROR",
                        message="The request timed out. Check the network and try again.",
                    ) from exc
                await self._backoff(attempt)
                continue
            except httpx.TransportError as exc:
                if (not allow_retry) or attempt >= self.retry_max_attempts:
                    raise APIError(
                        code="NETWORK_ERROR",
                        message="Could not reach the admin API.",
                    ) from exc
                await self._backoff(attempt)
                continue

            if response.status_code >= 400:
                if allow_retry and self._is_retryable_status(response.status_code) and attempt < self.retry_max_attempts:
                    await self._backoff(attempt)
                    continue
                payload = self._safe_json(response)
                raise APIError(
                    code=payload.get("code", "HTTP_ERROR"),
                    message=payload.get("message", response.text),
                    details=payload.get("details"),
                    trace_id=payload.get("trace_id") or response.headers.get("X-Trace-ID"),
                    status_code=response.status_code,
                )
            return self._safe_json(response)
        raise APIError(code="INTERNAL_ERROR", message="Max retry attempts reached")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _backoff(self, attempt: int) -> None:
        await asyncio.sleep((self.retry_backoff_ms * attempt) / 1000)

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return 500 <= status_code <= 599

    @staticmethod
    def _safe_json(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
            return payload if isinstance(payload, dict) else {"items": payload}
        except ValueError:
            return {"message": response.text}
