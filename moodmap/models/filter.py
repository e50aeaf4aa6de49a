"""FilterState data model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FilterState(BaseModel):
    """Current search text, mood selector and date range."""

    search: str = Field(default="", description="Case-insensitive title substring")
    mood: str = Field(default="", description="Mood to match, empty for any")
    start: Optional[datetime] = Field(default=None, description="Inclusive lower bound")
    end: Optional[datetime] = Field(default=None, description="Inclusive upper bound")

    model_config = {"frozen": True}

    def with_search(self, search: str) -> "FilterState":
        return self.model_copy(update={"search": search})

    def with_mood(self, mood: str) -> "FilterState":
        return self.model_copy(update={"mood": mood})

    def with_range(
        self, start: Optional[datetime], end: Optional[datetime]
    ) -> "FilterState":
        return self.model_copy(update={"start": start, "end": end})

    @property
    def is_active(self) -> bool:
        """Whether any clause restricts the visible set."""
        return bool(self.search or self.mood or self.start or self.end)
