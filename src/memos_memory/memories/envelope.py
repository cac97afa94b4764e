"""Result envelope shared by every memory operation.

Operations never raise; a failed backend call comes back as a degraded
envelope carrying the error text and fallback=True, so the host can tell
"no results" from "MemOS unavailable".
"""

from dataclasses import dataclass, field
from typing import Any, Literal

PROVIDER = "memos"


@dataclass(frozen=True)
class Envelope:
    status: Literal["ok", "degraded"]
    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def fallback(self) -> bool:
        return not self.ok

    def to_dict(self) -> dict[str, Any]:
        """Flat JSON shape returned to the host."""
        result = {**self.data, "provider": PROVIDER, "fallback": self.fallback}
        if self.error is not None:
            result["error"] = self.error
        return result


def success(**data: Any) -> Envelope:
    return Envelope(status="ok", data=data)


def degraded(error: BaseException | str, **data: Any) -> Envelope:
    message = str(error)
    if not message:
        # httpx transport errors often stringify to ''
        message = type(error).__name__ if isinstance(error, BaseException) else "unknown error"
    return Envelope(status="degraded", data=data, error=message)
