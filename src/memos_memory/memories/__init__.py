"""Memory operations backed by MemOS.

- normalize flattens MemOS search payloads into MemoryItems
- search/get_all/save/forget wrap one MemOS call each and return an Envelope
"""

from .envelope import Envelope, PROVIDER
from .normalize import MemoryItem, normalize
from .operations import search, get_all, save, forget

__all__ = [
    "Envelope",
    "PROVIDER",
    "MemoryItem",
    "normalize",
    "search",
    "get_all",
    "save",
    "forget",
]
