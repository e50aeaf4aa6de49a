"""In-memory entry store for MoodMap."""

import logging
from datetime import datetime
from typing import Callable, Optional

from moodmap.catalog import get_template
from moodmap.errors import NotFoundError, ValidationError
from moodmap.models import Draft, JournalEntry, SimpleEntry, TemplatedEntry, is_mood

logger = logging.getLogger(__name__)


class EntryStore:
    """Authoritative collection of journal entries for one session.

    Entries are kept in insertion order, which is also the fallback
    display order. Ids are derived from the creation timestamp in
    milliseconds and bumped when needed so they stay unique and
    strictly increasing.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """Initialize the store.

        Args:
            clock: Returns the current time; used for ids and default dates.
        """
        self._clock = clock
        self._entries: dict[int, JournalEntry] = {}
        self._last_id = 0

    def _next_id(self, now: datetime) -> int:
        """Derive a new unique id from a creation timestamp."""
        candidate = int(now.timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _build(self, entry_id: int, draft: Draft, date: datetime) -> JournalEntry:
        """Validate a draft and turn it into an entry.

        Raises:
            ValidationError: If a required field is missing or invalid.
        """
        missing = draft.missing_fields()
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", missing=missing
            )
        if not is_mood(draft.mood):
            raise ValidationError(f"Unknown mood: {draft.mood}", missing=["mood"])

        if draft.template_id:
            template = get_template(draft.template_id)
            if template is None:
                raise ValidationError(f"Unknown template: {draft.template_id}")
            unknown = template.unknown_labels(draft.answers)
            if unknown:
                raise ValidationError(
                    f"Answers not in template '{template.id}': {', '.join(unknown)}"
                )
            return TemplatedEntry(
                id=entry_id,
                title=draft.title,
                mood=draft.mood,
                location=draft.location,
                date=date,
                description=draft.description,
                template_id=template.id,
                answers=template.ordered_answers(draft.answers),
            )

        if draft.answers:
            raise ValidationError("Template answers given without a template")
        return SimpleEntry(
            id=entry_id,
            title=draft.title,
            mood=draft.mood,
            location=draft.location,
            date=date,
            description=draft.description,
        )

    def create(self, draft: Draft) -> int:
        """Add a new entry from a draft.

        Args:
            draft: Draft with title, mood and location filled in.

        Returns:
            Id of the new entry.

        Raises:
            ValidationError: If the draft is incomplete. The store is left
                unchanged.
        """
        now = self._clock()
        # Validate before consuming an id
        self._build(1, draft, draft.date or now)

        entry_id = self._next_id(now)
        entry = self._build(entry_id, draft, draft.date or now)
        self._entries[entry_id] = entry
        logger.debug("Created entry %s (%s)", entry_id, entry.title)
        return entry_id

    def update(self, entry_id: int, draft: Draft) -> None:
        """Replace the fields of an existing entry in place.

        The entry keeps its id and its position. A draft without a date
        keeps the entry's current date.

        Raises:
            NotFoundError: If no entry has this id.
            ValidationError: If the draft is incomplete.
        """
        existing = self._entries.get(entry_id)
        if existing is None:
            raise NotFoundError(entry_id)
        self._entries[entry_id] = self._build(entry_id, draft, draft.date or existing.date)
        logger.debug("Updated entry %s", entry_id)

    def delete(self, entry_id: int) -> None:
        """Remove an entry.

        Raises:
            NotFoundError: If no entry has this id.
        """
        if entry_id not in self._entries:
            raise NotFoundError(entry_id)
        del self._entries[entry_id]
        logger.debug("Deleted entry %s", entry_id)

    def get(self, entry_id: int) -> Optional[JournalEntry]:
        """Get an entry by id, or None if it does not exist."""
        return self._entries.get(entry_id)

    def list(self) -> tuple[JournalEntry, ...]:
        """Snapshot of all entries in insertion order."""
        return tuple(self._entries.values())

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries
