"""MemOS REST API client.

Four JSON-over-HTTP POST operations: search, add, get_all, delete_memory.
The client holds only its configuration; every call opens its own
httpx.AsyncClient, so concurrent calls share nothing.
"""

from typing import Any

import httpx
import logfire

from .config import MemosConfig

# Configured keys may be pasted with this prefix; the header wants the bare secret
API_KEY_PREFIX = "Bearer "
API_KEY_HEADER = "X-API-Key"

# Search flags the plugin always sends
SEARCH_MODE = "fast"


class MemosApiError(Exception):
    """Raised when MemOS answers with a non-2xx status or an unreadable body."""

    def __init__(self, operation: str, status_code: int | None = None, reason: str = "") -> None:
        self.operation = operation
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            message = f"MemOS {operation} failed: {reason}"
        else:
            message = f"MemOS {operation} failed: {status_code} {reason}".rstrip()
        super().__init__(message)


def auth_headers(api_key: str | None) -> dict[str, str]:
    """Build the optional shared-secret header."""
    if not api_key:
        return {}
    secret = api_key[len(API_KEY_PREFIX):] if api_key.startswith(API_KEY_PREFIX) else api_key
    secret = secret.strip()
    return {API_KEY_HEADER: secret} if secret else {}


class MemosApi:
    """Async client for the MemOS product API."""

    def __init__(
        self,
        config: MemosConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.base_url = config.api_url.rstrip("/")
        self.default_user_id = config.user_id
        self._transport = transport

    async def search(
        self,
        query: str,
        top_k: int | None = None,
        user_id: str | None = None,
    ) -> Any:
        """Semantic search across text, preference and tool memories."""
        return await self._post(
            "search",
            "/product/search",
            {
                "query": query,
                "user_id": user_id or self.default_user_id,
                "top_k": self.config.top_k if top_k is None else top_k,
                "mode": SEARCH_MODE,
                "include_preference": True,
                "search_tool_memory": True,
            },
        )

    async def add(
        self,
        content: str,
        user_id: str | None = None,
        session_id: str | None = None,
    ) -> Any:
        """Store content as a single user message."""
        return await self._post(
            "add",
            "/product/add",
            {
                "user_id": user_id or self.default_user_id,
                "session_id": session_id or self.config.session_id,
                "async_mode": self.config.async_mode,
                "mode": SEARCH_MODE,
                "messages": [{"role": "user", "content": content}],
            },
        )

    async def get_all(
        self,
        memory_type: str = "text_mem",
        user_id: str | None = None,
    ) -> Any:
        """List every memory of one category for a user."""
        return await self._post(
            "get_all",
            "/product/get_all",
            {
                "user_id": user_id or self.default_user_id,
                "memory_type": memory_type,
            },
        )

    async def delete(
        self,
        memory_ids: list[str],
        user_id: str | None = None,
        cube_ids: list[str] | None = None,
    ) -> Any:
        """Delete memories by id from the writable cubes."""
        return await self._post(
            "delete",
            "/product/delete_memory",
            {
                "user_id": user_id or self.default_user_id,
                "writable_cube_ids": cube_ids or ["default"],
                "memory_ids": list(memory_ids),
            },
        )

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **auth_headers(self.config.api_key)}

    async def _post(self, operation: str, path: str, payload: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        with logfire.span("memos.api.{operation}", operation=operation, url=url) as span:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload, headers=self._headers())

            span.set_attribute("status_code", response.status_code)
            if not response.is_success:
                logfire.warning(
                    "MemOS request failed",
                    operation=operation,
                    status_code=response.status_code,
                    body=response.text[:200],
                )
                raise MemosApiError(operation, response.status_code, response.reason_phrase)

            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise MemosApiError(operation, reason=f"invalid JSON response ({e})") from e
