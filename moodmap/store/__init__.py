"""Entry storage for MoodMap."""

from moodmap.store.entries import EntryStore

__all__ = ["EntryStore"]
