"""Memory operations - search, get, save, forget.

Each operation makes one MemOS round-trip and always returns an Envelope.
Backend failures are logged and folded into a degraded envelope; nothing
is retried.
"""

from typing import Any

import logfire

from ..api import MemosApi
from .envelope import Envelope, degraded, success
from .normalize import normalize, record_content

DEFAULT_LIMIT = 10
MIN_SCORE = 0.0

# memory_get matches against any of these fields
GET_CONTENT_ALIASES = ("memory", "memory_content", "memory_value", "content")


async def search(
    api: MemosApi,
    query: str,
    max_results: int = DEFAULT_LIMIT,
    min_score: float = MIN_SCORE,
) -> Envelope:
    """Semantic search over all memory categories.

    Args:
        api: MemOS client
        query: Natural language query
        max_results: Maximum items returned
        min_score: Items scoring below this are dropped

    Returns:
        Envelope with results, query, total
    """
    try:
        max_results = max(0, int(max_results))
    except (TypeError, ValueError, OverflowError):
        max_results = DEFAULT_LIMIT

    with logfire.span("memos.search", query_preview=query[:50], limit=max_results) as span:
        try:
            payload = await api.search(query, top_k=max_results)
        except Exception as e:
            logfire.error("MemOS search failed", error=str(e))
            return degraded(e, results=[], query=query, total=0)

        # Filter before truncating so late high scorers aren't crowded out
        items = [item for item in normalize(payload, query) if item.score >= min_score]
        results = [item.as_dict() for item in items[:max_results]]

        span.set_attribute("result_count", len(results))
        logfire.debug("MemOS search complete", query_preview=query[:30], results=len(results))
        return success(
            results=results,
            query=query,
            model="semantic-search",
            total=len(results),
        )


async def get_all(api: MemosApi, filter: str | None = None) -> Envelope:
    """All textual memories for the configured user.

    Args:
        api: MemOS client
        filter: Optional case-insensitive substring the content must contain

    Returns:
        Envelope with memories (records as MemOS sent them) and total
    """
    with logfire.span("memos.get_all", filter=filter or "none") as span:
        try:
            payload = await api.get_all(memory_type="text_mem")
        except Exception as e:
            logfire.error("MemOS get_all failed", error=str(e))
            return degraded(e, memories=[], total=0)

        data = payload.get("data") if isinstance(payload, dict) else None
        memories: list[Any] = data if isinstance(data, list) else []

        if filter:
            needle = filter.lower()
            memories = [
                m for m in memories
                if needle in record_content(m, GET_CONTENT_ALIASES).lower()
            ]

        span.set_attribute("result_count", len(memories))
        logfire.debug("MemOS get_all complete", results=len(memories))
        return success(memories=memories, total=len(memories))


async def save(api: MemosApi, content: str) -> Envelope:
    """Store a note in MemOS.

    Whether it is searchable right away depends on the backend's async_mode.

    Args:
        api: MemOS client
        content: The information to remember

    Returns:
        Envelope with success flag
    """
    with logfire.span("memos.save", memory_preview=content[:50]):
        try:
            await api.add(content)
        except Exception as e:
            logfire.error("MemOS save failed", error=str(e))
            return degraded(e, success=False)

        logfire.info("Memory saved", memory_len=len(content))
        return success(success=True, message="Memory saved successfully")


async def forget(api: MemosApi, memory_ids: list[str]) -> Envelope:
    """Delete memories by id.

    Args:
        api: MemOS client
        memory_ids: Ids to delete

    Returns:
        Envelope with success flag and the ids sent
    """
    if not memory_ids:
        return success(success=True, deleted=[])

    with logfire.span("memos.forget", count=len(memory_ids)):
        try:
            await api.delete(memory_ids)
        except Exception as e:
            logfire.error("MemOS delete failed", error=str(e))
            return degraded(e, success=False, deleted=[])

        logfire.info("Memories forgotten", count=len(memory_ids))
        return success(success=True, deleted=list(memory_ids))
