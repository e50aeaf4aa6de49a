"""Entry visibility filters for MoodMap."""

from moodmap.filters.predicate import (
    filter_entries,
    parse_bound,
    parse_range,
    visible,
)

__all__ = [
    "filter_entries",
    "parse_bound",
    "parse_range",
    "visible",
]
