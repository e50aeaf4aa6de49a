"""Filter predicate deciding which journal entries are visible.

All functions here are pure; they never touch the store or the map.
"""

from datetime import date, datetime, time
from typing import Iterable, Optional

from moodmap.errors import ValidationError
from moodmap.models import FilterState, JournalEntry


def _naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def visible(entry: JournalEntry, state: FilterState) -> bool:
    """Check whether an entry passes every active filter clause.

    Clauses are conjunctive:

    - the title contains the search text, ignoring case
    - the mood filter is empty or equals the entry mood
    - the start bound is unset or the entry date is on/after it
    - the end bound is unset or the entry date is on/before it

    Args:
        entry: Journal entry to test.
        state: Current filter state.

    Returns:
        True if the entry should be shown.
    """
    if state.search.lower() not in entry.title.lower():
        return False
    if state.mood and entry.mood != state.mood:
        return False

    entry_date = _naive(entry.date)
    if state.start is not None and entry_date < _naive(state.start):
        return False
    if state.end is not None and entry_date > _naive(state.end):
        return False
    return True


def filter_entries(
    entries: Iterable[JournalEntry], state: FilterState
) -> list[JournalEntry]:
    """Return the visible entries, preserving input order."""
    return [entry for entry in entries if visible(entry, state)]


def parse_bound(
    text: str,
    upper: bool = False,
    inclusive_end_day: bool = True,
) -> Optional[datetime]:
    """Parse a date-range bound as typed into a form.

    An empty string means the bound is open. A bare date (``2024-01-15``
    or ``20240115``) is a lower bound at midnight; as an upper bound it
    covers the whole day when ``inclusive_end_day`` is set, otherwise it
    is midnight too.
    A value with a time of day is used as-is.

    Args:
        text: Bound text, ISO date or datetime.
        upper: Whether this is the upper bound of the range.
        inclusive_end_day: Stretch bare-date upper bounds to end of day.

    Returns:
        The bound, or None for an open bound.

    Raises:
        ValidationError: If the text is not a valid date or datetime.
    """
    text = text.strip()
    if not text:
        return None

    try:
        day = date.fromisoformat(text)
    except ValueError:
        day = None
    if day is not None:
        if upper and inclusive_end_day:
            return datetime.combine(day, time.max)
        return datetime.combine(day, time.min)

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {text}", missing=["date"])


def parse_range(
    start: str,
    end: str,
    inclusive_end_day: bool = True,
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Parse both bounds of a date range.

    Raises:
        ValidationError: If either bound is invalid.
    """
    return (
        parse_bound(start),
        parse_bound(end, upper=True, inclusive_end_day=inclusive_end_day),
    )
