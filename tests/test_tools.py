"""Tests for the MCP tool surface."""

import asyncio
import json

from conftest import search_payload
from memos_memory.tools import TOOL_NAMES, create_memos_server, create_memos_tools


def call(tool, args):
    """Run a tool handler and decode its JSON envelope."""
    result = asyncio.run(tool.handler(args))
    (block,) = result["content"]
    assert block["type"] == "text"
    return json.loads(block["text"])


def tools_by_name(config, api):
    return {t.name: t for t in create_memos_tools(config, api)}


def test_tool_names_and_schemas(config, api):
    tools = tools_by_name(config, api)

    assert tuple(tools) == TOOL_NAMES
    assert tools["memory_search"].input_schema["required"] == ["query"]
    assert set(tools["memory_search"].input_schema["properties"]) == {"query", "maxResults", "minScore"}
    assert tools["memory_get"].input_schema["required"] == []
    assert tools["memory_save"].input_schema["properties"]["content"]["minLength"] == 1


def test_search_tool_returns_json_envelope(config, api, memos):
    memos.respond(
        "/product/search",
        search_payload(text=[{"id": "t1", "memory": "Drinks coffee", "score": 0.9}, {"id": "t2", "memory": "x", "score": 0.1}]),
    )

    data = call(tools_by_name(config, api)["memory_search"], {"query": "coffee", "maxResults": 5, "minScore": 0.5})

    assert data["fallback"] is False
    assert data["provider"] == "memos"
    assert data["model"] == "semantic-search"
    assert [r["id"] for r in data["results"]] == ["t1"]
    assert data["results"][0]["path"] == "memos://memory/text"


def test_search_tool_defaults_to_configured_top_k(config, api, memos):
    memos.respond("/product/search", search_payload())

    call(tools_by_name(config, api)["memory_search"], {"query": "coffee"})

    assert memos.bodies("/product/search")[0]["top_k"] == config.top_k


def test_search_tool_tolerates_junk_numbers(config, api, memos):
    memos.respond("/product/search", search_payload(text=[{"memory": "a", "score": 0.2}]))

    data = call(tools_by_name(config, api)["memory_search"], {"query": "q", "maxResults": "lots", "minScore": None})

    assert data["total"] == 1
    assert memos.bodies("/product/search")[0]["top_k"] == config.top_k


def test_search_tool_degrades_on_backend_error(config, api, memos):
    memos.respond("/product/search", {}, status_code=500)

    data = call(tools_by_name(config, api)["memory_search"], {"query": "x"})

    assert data == {
        "results": [],
        "query": "x",
        "total": 0,
        "provider": "memos",
        "fallback": True,
        "error": "MemOS search failed: 500 Internal Server Error",
    }


def test_get_tool_filters(config, api, memos):
    memos.respond("/product/get_all", {"data": [{"content": "I like coffee"}, {"content": "I like tea"}]})

    data = call(tools_by_name(config, api)["memory_get"], {"filter": "coffee"})

    assert data["memories"] == [{"content": "I like coffee"}]


def test_get_tool_ignores_non_string_filter(config, api, memos):
    memos.respond("/product/get_all", {"data": [{"content": "a"}, {"content": "b"}]})

    data = call(tools_by_name(config, api)["memory_get"], {"filter": 42})

    assert data["total"] == 2


def test_save_tool(config, api, memos):
    memos.respond("/product/add")

    data = call(tools_by_name(config, api)["memory_save"], {"content": "remember this"})

    assert data["success"] is True
    assert data["fallback"] is False


def test_save_tool_rejects_missing_content_without_calling_backend(config, api, memos):
    save_tool = tools_by_name(config, api)["memory_save"]

    for args in ({}, {"content": ""}, {"content": "   "}, {"content": 12}):
        data = call(save_tool, args)
        assert data["success"] is False
        assert data["fallback"] is True
        assert data["error"] == "content is required"

    assert memos.requests == []


def test_save_tool_degrades_on_401(config, api, memos):
    memos.respond("/product/add", {"detail": "unauthorized"}, status_code=401)

    data = call(tools_by_name(config, api)["memory_save"], {"content": "remember this"})

    assert data["success"] is False
    assert data["error"] == "MemOS add failed: 401 Unauthorized"


def test_create_server(config, api):
    server = create_memos_server(config, api)

    assert server["type"] == "sdk"
    assert server["name"] == "memos"
