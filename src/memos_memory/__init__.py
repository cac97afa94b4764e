"""memos_memory - MemOS-backed memory tools for agent hosts."""

from .api import MemosApi, MemosApiError
from .config import CONFIG_SCHEMA, MemosConfig
from .memories import Envelope, MemoryItem, normalize
from .observability import configure as configure_observability

__all__ = [
    "MemosApi",
    "MemosApiError",
    "MemosConfig",
    "CONFIG_SCHEMA",
    "Envelope",
    "MemoryItem",
    "normalize",
    "configure_observability",
]
__version__ = "0.1.0"
