"""Error types for MoodMap."""

from typing import Optional


class MoodMapError(Exception):
    """Base class for all MoodMap errors."""


class ValidationError(MoodMapError, ValueError):
    """A draft is missing a required field or carries an invalid value."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class NotFoundError(MoodMapError, LookupError):
    """An operation referenced an entry id that does not exist."""

    def __init__(self, entry_id: int):
        super().__init__(f"No journal entry with id {entry_id}")
        self.entry_id = entry_id
