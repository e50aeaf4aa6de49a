"""JournalEntry data models.

A journal entry is either a plain entry with a free-text description or
an entry created from a template, which carries the template id and the
answers to each of its prompts.
"""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from moodmap.models.location import Location
from moodmap.models.mood import Mood


class _EntryBase(BaseModel):
    """Attributes shared by every journal entry."""

    id: int = Field(..., gt=0, description="Unique entry id, derived from creation time")
    title: str = Field(..., min_length=1, description="Entry title")
    mood: Mood = Field(..., description="Mood from the fixed vocabulary")
    location: Location = Field(..., description="Where the entry was logged")
    date: datetime = Field(default_factory=datetime.now, description="Entry timestamp")
    description: str = Field(default="", description="Free-text description")

    model_config = {"frozen": True}


class SimpleEntry(_EntryBase):
    """An entry written without a template."""

    kind: Literal["simple"] = "simple"


class TemplatedEntry(_EntryBase):
    """An entry written from a journal template."""

    kind: Literal["templated"] = "templated"
    template_id: str = Field(..., min_length=1, description="Originating template id")
    answers: dict[str, str] = Field(
        default_factory=dict, description="Prompt label to answer, in template order"
    )


JournalEntry = Annotated[Union[SimpleEntry, TemplatedEntry], Field(discriminator="kind")]
