"""Data models for MoodMap."""

from moodmap.models.location import Location
from moodmap.models.mood import MOODS, Mood, is_mood
from moodmap.models.template import JournalTemplate, TemplateField
from moodmap.models.entry import JournalEntry, SimpleEntry, TemplatedEntry
from moodmap.models.draft import Draft
from moodmap.models.filter import FilterState

__all__ = [
    "Draft",
    "FilterState",
    "JournalEntry",
    "JournalTemplate",
    "Location",
    "MOODS",
    "Mood",
    "SimpleEntry",
    "TemplateField",
    "TemplatedEntry",
    "is_mood",
]
