"""MemOS plugin configuration.

One immutable MemosConfig is built at startup and handed to the API client,
the tools and the CLI. This is the only module that looks at the environment.

Lookup order for each field: host plugin config, then environment, then default.
- apiUrl / MEMOS_API_URL
- userId / MEMOS_USER_ID
- topK / MEMOS_TOP_K
- INTERNAL_SERVICE_SECRET or MEMOS_API_KEY (shared secret, optional)
- MEMOS_SESSION_ID, MEMOS_ASYNC_MODE, MEMOS_TIMEOUT
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_API_URL = "http://memos-api:8000"
DEFAULT_USER_ID = "default"
DEFAULT_TOP_K = 10
DEFAULT_SESSION_ID = "default_session"
DEFAULT_ASYNC_MODE = "sync"
DEFAULT_TIMEOUT = 30.0

# JSON schema the host validates plugin config against
CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "apiUrl": {
            "type": "string",
            "description": "MemOS API URL",
            "default": DEFAULT_API_URL,
        },
        "userId": {
            "type": "string",
            "description": "Default user ID for memory operations",
            "default": DEFAULT_USER_ID,
        },
        "topK": {
            "type": "number",
            "description": "Number of results to return from search",
            "default": DEFAULT_TOP_K,
        },
    },
}


@dataclass(frozen=True)
class MemosConfig:
    """Connection parameters for the MemOS backend."""

    api_url: str = DEFAULT_API_URL
    user_id: str = DEFAULT_USER_ID
    top_k: int = DEFAULT_TOP_K
    api_key: str | None = None
    session_id: str = DEFAULT_SESSION_ID
    async_mode: str = DEFAULT_ASYNC_MODE
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def load(
        cls,
        plugin_config: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "MemosConfig":
        """Build the config from host plugin config with environment fallback."""
        plugin_config = plugin_config or {}
        env = os.environ if environ is None else environ

        return cls(
            api_url=plugin_config.get("apiUrl") or env.get("MEMOS_API_URL") or DEFAULT_API_URL,
            user_id=plugin_config.get("userId") or env.get("MEMOS_USER_ID") or DEFAULT_USER_ID,
            top_k=_as_int(plugin_config.get("topK") or env.get("MEMOS_TOP_K"), DEFAULT_TOP_K),
            api_key=env.get("INTERNAL_SERVICE_SECRET") or env.get("MEMOS_API_KEY") or None,
            session_id=env.get("MEMOS_SESSION_ID") or DEFAULT_SESSION_ID,
            async_mode=env.get("MEMOS_ASYNC_MODE") or DEFAULT_ASYNC_MODE,
            timeout=_as_float(env.get("MEMOS_TIMEOUT"), DEFAULT_TIMEOUT),
        )


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default
