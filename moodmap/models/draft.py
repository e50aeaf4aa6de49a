"""Draft data model."""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from moodmap.models.entry import SimpleEntry, TemplatedEntry
from moodmap.models.location import Location


class Draft(BaseModel):
    """A partial journal entry being composed or edited.

    With ``editing`` unset the draft is an in-progress creation at a
    pending location; with ``editing`` set it is an in-progress edit of
    the entry identified by ``entry_id``.
    """

    title: str = Field(default="", description="Entry title")
    mood: str = Field(default="", description="Selected mood, empty if none")
    location: Optional[Location] = Field(default=None, description="Entry location")
    date: Optional[datetime] = Field(default=None, description="Entry timestamp")
    description: str = Field(default="", description="Free-text description")
    template_id: Optional[str] = Field(default=None, description="Selected template")
    answers: dict[str, str] = Field(default_factory=dict, description="Template answers")
    editing: bool = Field(default=False, description="Whether an existing entry is edited")
    entry_id: Optional[int] = Field(default=None, description="Id of the edited entry")

    model_config = {"frozen": True}

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are not filled in."""
        missing = []
        if not self.title:
            missing.append("title")
        if not self.mood:
            missing.append("mood")
        if self.location is None:
            missing.append("location")
        return missing

    @classmethod
    def from_entry(cls, entry: Union[SimpleEntry, TemplatedEntry]) -> "Draft":
        """Load an existing entry into an editing draft."""
        template_id = None
        answers: dict[str, str] = {}
        if isinstance(entry, TemplatedEntry):
            template_id = entry.template_id
            answers = dict(entry.answers)
        return cls(
            title=entry.title,
            mood=entry.mood,
            location=entry.location,
            date=entry.date,
            description=entry.description,
            template_id=template_id,
            answers=answers,
            editing=True,
            entry_id=entry.id,
        )
