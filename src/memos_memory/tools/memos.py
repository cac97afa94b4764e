"""MemOS memory tools - MCP server for Claude Agent SDK hosts.

Replaces the default memory tools with MemOS-backed semantic memory.
Every tool returns the operation's envelope as JSON text, including on
backend failure.

Usage:
    from memos_memory.config import MemosConfig
    from memos_memory.tools import create_memos_server

    mcp_servers = {"memos": create_memos_server(MemosConfig.load(plugin_config))}
"""

import json
import math
from typing import Any

import logfire

from claude_agent_sdk import tool, create_sdk_mcp_server

from ..api import MemosApi
from ..config import MemosConfig
from ..memories import Envelope, get_all, save, search
from ..memories.envelope import degraded

SERVER_NAME = "memos"
TOOL_NAMES = ("memory_search", "memory_get", "memory_save")

SEARCH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "Natural language search query",
        },
        "maxResults": {
            "type": "number",
            "description": "Maximum number of results to return (default: 10)",
        },
        "minScore": {
            "type": "number",
            "description": "Minimum relevance score threshold (0-1)",
        },
    },
    "required": ["query"],
}

GET_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "filter": {
            "type": "string",
            "description": "Optional filter string to narrow results",
        },
    },
    "required": [],
}

SAVE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "content": {
            "type": "string",
            "description": "The information to remember",
            "minLength": 1,
        },
    },
    "required": ["content"],
}


def _json_result(envelope: Envelope) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(envelope.to_dict())}]}


def _number(value: Any, default: float) -> float:
    try:
        number = float(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def create_memos_tools(config: MemosConfig, api: MemosApi | None = None) -> list:
    """Build the memory_search / memory_get / memory_save tools.

    Args:
        config: Plugin configuration
        api: Optional prebuilt client (tests inject one with a fake transport)

    Returns:
        List of SdkMcpTool definitions
    """
    api = api or MemosApi(config)

    @tool(
        "memory_search",
        "Semantic memory search using MemOS. Searches all stored memories (facts, preferences, context) "
        "ranked by semantic similarity. ALWAYS use at conversation start to recall user context.",
        SEARCH_SCHEMA,
    )
    async def memory_search(args: dict[str, Any]) -> dict[str, Any]:
        query = str(args.get("query") or "")
        max_results = int(_number(args.get("maxResults"), config.top_k))
        min_score = _number(args.get("minScore"), 0.0)
        logfire.info("memory_search called", query_preview=query[:50], max_results=max_results)

        return _json_result(await search(api, query, max_results=max_results, min_score=min_score))

    @tool(
        "memory_get",
        "Retrieve stored memories from MemOS. Returns memory collection for current user. "
        "Use to get full overview of remembered context.",
        GET_SCHEMA,
    )
    async def memory_get(args: dict[str, Any]) -> dict[str, Any]:
        filter_text = args.get("filter")
        if not isinstance(filter_text, str):
            filter_text = None

        return _json_result(await get_all(api, filter=filter_text))

    @tool(
        "memory_save",
        "Save important information to persistent MemOS memory. Use to remember user preferences, facts, "
        "decisions, context. Information is semantically indexed and retrievable via memory_search.",
        SAVE_SCHEMA,
    )
    async def memory_save(args: dict[str, Any]) -> dict[str, Any]:
        content = args.get("content")
        if not isinstance(content, str) or not content.strip():
            logfire.warning("memory_save called without content")
            return _json_result(degraded("content is required", success=False))

        return _json_result(await save(api, content))

    return [memory_search, memory_get, memory_save]


def create_memos_server(config: MemosConfig | None = None, api: MemosApi | None = None):
    """Create the MemOS MCP server.

    Args:
        config: Plugin configuration. Loaded from the environment if omitted.
        api: Optional prebuilt MemOS client

    Returns:
        MCP server configuration dict
    """
    config = config or MemosConfig.load()

    logfire.info("Initializing MemOS memory tools", api_url=config.api_url, user_id=config.user_id)
    if config.api_key:
        logfire.info("MemOS API authentication enabled", key_preview=config.api_key[:8])
    else:
        logfire.warning("MemOS API: no INTERNAL_SERVICE_SECRET found - requests may fail with 401")

    return create_sdk_mcp_server(
        name=SERVER_NAME,
        version="1.0.0",
        tools=create_memos_tools(config, api),
    )
