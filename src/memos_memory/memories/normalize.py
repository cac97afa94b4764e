"""Turn MemOS search payloads into uniform memory items.

MemOS returns { code, message, data: { text_mem, act_mem, para_mem, pref_mem, tool_mem } }
where each *_mem bucket is a list of cubes: [{ cube_id, memories: [...] }].
Record fields differ per bucket and per MemOS version, so every level is
read with a default and nothing here raises.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Mapping, Sequence

SOURCE = "memos"

Category = Literal["text", "preference", "action"]


@dataclass(frozen=True)
class CategoryDecoder:
    """How to read one MemOS bucket."""

    category: Category
    bucket: str
    memory_type: str
    id_prefix: str
    content_aliases: tuple[str, ...]
    default_score: float
    reads_relativity: bool = False


# Output order is the order of this tuple
DECODERS: tuple[CategoryDecoder, ...] = (
    CategoryDecoder(
        category="text",
        bucket="text_mem",
        memory_type="text_mem",
        id_prefix="mem",
        content_aliases=("memory", "memory_content", "content"),
        default_score=0.5,
        reads_relativity=True,
    ),
    CategoryDecoder(
        category="preference",
        bucket="pref_mem",
        memory_type="preference",
        id_prefix="pref",
        content_aliases=("preference", "memory", "content"),
        default_score=0.8,  # Preferences are stated by the user, not inferred
    ),
    CategoryDecoder(
        category="action",
        bucket="act_mem",
        memory_type="act_mem",
        id_prefix="act",
        content_aliases=("memory", "memory_content", "action"),
        default_score=0.5,
    ),
)


@dataclass(frozen=True)
class MemoryItem:
    """One normalized memory, as handed to the host."""

    id: str
    content: str
    score: float
    category: Category
    source: str = SOURCE
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return f"memos://memory/{self.category}"

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["path"] = self.path
        data["lines"] = {"start": 1, "end": 1}
        return data


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return ()
    return value


def record_content(record: Any, aliases: Sequence[str]) -> str:
    """First non-empty content alias of a record, or ''."""
    if isinstance(record, str):
        return record
    fields = _mapping(record)
    for alias in aliases:
        value = fields.get(alias)
        if isinstance(value, str):
            text = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            text = str(value)
        else:
            # Missing, boolean or nested values are not content
            continue
        if text:
            return text
    return ""


def _score(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    score = float(value)
    if not math.isfinite(score):
        return None
    return min(max(score, 0.0), 1.0)


def _record_id(record: Mapping[str, Any], fallback: str) -> str:
    for key in ("id", "memory_id"):
        value = record.get(key)
        if value is not None and value != "":
            return str(value)
    return fallback


def decode_record(
    decoder: CategoryDecoder,
    record: Any,
    cube_id: Any,
    position: int,
) -> MemoryItem:
    """Decode one raw record. position is the item's index in the whole pass."""
    fields = _mapping(record)
    meta = _mapping(fields.get("metadata"))

    score = None
    if decoder.reads_relativity:
        score = _score(meta.get("relativity"))
    if score is None:
        score = _score(fields.get("score"))
    if score is None:
        score = decoder.default_score

    metadata: dict[str, Any] = {
        "memory_type": decoder.memory_type,
        "cube_id": cube_id,
        "tags": list(_sequence(meta.get("tags"))),
    }
    if meta.get("created_at") is not None:
        metadata["created_at"] = meta["created_at"]

    return MemoryItem(
        id=_record_id(fields, f"{decoder.id_prefix}-{position}"),
        content=record_content(record, decoder.content_aliases),
        score=score,
        category=decoder.category,
        metadata=metadata,
    )


def normalize(payload: Any, query: str | None = None) -> list[MemoryItem]:
    """Flatten a MemOS search response into memory items.

    Categories come out text, then preference, then action; within a
    category cube and record order is kept. Nothing is re-ranked or dropped.

    Args:
        payload: The decoded /product/search response, any shape.
        query: The query that produced it (unused by the decoding itself).

    Returns:
        One MemoryItem per record found.
    """
    data = _mapping(_mapping(payload).get("data"))
    items: list[MemoryItem] = []

    for decoder in DECODERS:
        for cube in _sequence(data.get(decoder.bucket)):
            cube_fields = _mapping(cube)
            cube_id = cube_fields.get("cube_id")
            for record in _sequence(cube_fields.get("memories")):
                items.append(decode_record(decoder, record, cube_id, len(items)))

    return items
