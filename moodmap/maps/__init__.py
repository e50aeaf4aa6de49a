"""Map surface implementations for MoodMap."""

from moodmap.maps.base import BaseMap, MarkerHandle, MarkerStyle
from moodmap.maps.memory import MemoryMap

__all__ = [
    "BaseMap",
    "MarkerHandle",
    "MarkerStyle",
    "MemoryMap",
]
