"""Interaction controller for MoodMap.

Translates map clicks, marker clicks and form actions into entry store
and draft transitions. The controller is a small state machine:

- ``IDLE``: no draft
- ``COMPOSING``: a new entry is drafted at a pending location
- ``EDITING``: an existing entry is loaded into the draft

Every transition applies its store mutation first and then re-converges
the map markers. Starting a new draft discards any unsaved one.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from moodmap.catalog import get_template
from moodmap.errors import NotFoundError, ValidationError
from moodmap.filters import filter_entries, parse_bound
from moodmap.models import Draft, FilterState, JournalEntry, Location, is_mood
from moodmap.reconciler import MarkerReconciler
from moodmap.store import EntryStore

logger = logging.getLogger(__name__)

# Draft attributes the form surface may change directly
EDITABLE_FIELDS = ("title", "mood", "date", "description")

DateBound = Union[str, datetime, None]


class ControllerState(str, Enum):
    """Interaction states."""

    IDLE = "idle"
    COMPOSING = "composing"
    EDITING = "editing"


class InteractionController:
    """Drives the entry store and marker reconciler from user events."""

    def __init__(
        self,
        store: EntryStore,
        reconciler: MarkerReconciler,
        inclusive_end_day: bool = True,
    ):
        """Initialize the controller.

        Args:
            store: Entry store for this session.
            reconciler: Reconciler drawing this session's markers.
            inclusive_end_day: Stretch bare-date upper bounds to end of day.
        """
        self._store = store
        self._reconciler = reconciler
        self._inclusive_end_day = inclusive_end_day
        self._filter = FilterState()
        self._draft: Optional[Draft] = None
        self._pending: Optional[Location] = None

        reconciler.on_marker_activated(self.marker_activated)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ControllerState:
        if self._draft is None:
            return ControllerState.IDLE
        if self._draft.editing:
            return ControllerState.EDITING
        return ControllerState.COMPOSING

    @property
    def draft(self) -> Optional[Draft]:
        return self._draft

    @property
    def pending_location(self) -> Optional[Location]:
        return self._pending

    @property
    def editing_id(self) -> Optional[int]:
        if self._draft is not None and self._draft.editing:
            return self._draft.entry_id
        return None

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    def visible_entries(self) -> list[JournalEntry]:
        """Entries passing the current filter, in insertion order."""
        return filter_entries(self._store.list(), self._filter)

    def _reconcile(self) -> None:
        self._reconciler.sync(self.visible_entries(), self._pending)

    def _reset(self) -> None:
        self._draft = None
        self._pending = None

    def _require_draft(self) -> Draft:
        if self._draft is None:
            raise ValidationError("No entry is being composed or edited", missing=["location"])
        return self._draft

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def map_clicked(self, point: Location) -> None:
        """Start composing a new entry at a clicked point.

        Any unsaved draft is discarded.
        """
        if self._draft is not None:
            logger.debug("Discarding unsaved %s draft", self.state.value)
        self._draft = Draft(location=point)
        self._pending = point
        self._reconcile()

    def marker_activated(self, entry_id: int) -> None:
        """Load an entry into the draft for editing and focus the map on it.

        Raises:
            NotFoundError: If no entry has this id.
        """
        entry = self._store.get(entry_id)
        if entry is None:
            raise NotFoundError(entry_id)
        if self._draft is not None:
            logger.debug("Discarding unsaved %s draft", self.state.value)
        self._draft = Draft.from_entry(entry)
        self._pending = None
        self._reconcile()
        self._reconciler.focus(entry.location)

    def submit(self) -> int:
        """Save the current draft.

        Creates a new entry when composing, updates the edited entry when
        editing, then returns to idle.

        Returns:
            Id of the saved entry.

        Raises:
            ValidationError: If there is no draft or it is incomplete. The
                draft is kept so the form can be corrected.
        """
        draft = self._require_draft()
        if draft.editing:
            self._store.update(draft.entry_id, draft)
            entry_id = draft.entry_id
        else:
            entry_id = self._store.create(draft)

        self._reset()
        self._reconcile()
        return entry_id

    def cancel(self) -> None:
        """Discard the draft and the pending marker."""
        self._reset()
        self._reconcile()

    def delete_requested(self, entry_id: int) -> None:
        """Delete an entry and its marker.

        If the entry is being edited the controller returns to idle.

        Raises:
            NotFoundError: If no entry has this id. Nothing is changed.
        """
        self._store.delete(entry_id)
        self._reconciler.drop(entry_id)
        if self.editing_id == entry_id:
            self._reset()
        self._reconcile()

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------

    def update_draft(self, **values) -> Draft:
        """Change editable draft fields (title, mood, date, description).

        Raises:
            ValidationError: If there is no draft, a field is not editable or
                a value has the wrong type.
        """
        draft = self._require_draft()
        unknown = [name for name in values if name not in EDITABLE_FIELDS]
        if unknown:
            raise ValidationError(f"Not editable: {', '.join(unknown)}")

        try:
            self._draft = Draft.model_validate({**draft.model_dump(), **values})
        except PydanticValidationError as e:
            raise ValidationError(str(e), missing=[str(err["loc"][0]) for err in e.errors()])
        return self._draft

    def select_template(self, template_id: Optional[str]) -> Draft:
        """Switch the draft to a template, or back to a plain entry.

        Selecting a template resets every prompt answer to an empty string.

        Raises:
            ValidationError: If there is no draft or the template is unknown.
        """
        draft = self._require_draft()
        if template_id is None:
            self._draft = draft.model_copy(update={"template_id": None, "answers": {}})
            return self._draft

        template = get_template(template_id)
        if template is None:
            raise ValidationError(f"Unknown template: {template_id}")
        self._draft = draft.model_copy(
            update={"template_id": template.id, "answers": template.blank_answers()}
        )
        return self._draft

    def set_answer(self, label: str, answer: str) -> Draft:
        """Answer one prompt of the selected template.

        Raises:
            ValidationError: If no template is selected or the label is not
                one of its prompts.
        """
        draft = self._require_draft()
        template = get_template(draft.template_id) if draft.template_id else None
        if template is None:
            raise ValidationError("No template selected")
        if label not in template.labels:
            raise ValidationError(f"'{label}' is not a prompt of {template.name}")
        self._draft = draft.model_copy(update={"answers": {**draft.answers, label: answer}})
        return self._draft

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def set_search(self, search: str) -> None:
        self._filter = self._filter.with_search(search)
        self._reconcile()

    def set_mood_filter(self, mood: str) -> None:
        """Show only entries with this mood; an empty string shows all.

        Raises:
            ValidationError: If the mood is not in the vocabulary.
        """
        if mood and not is_mood(mood):
            raise ValidationError(f"Unknown mood: {mood}", missing=["mood"])
        self._filter = self._filter.with_mood(mood)
        self._reconcile()

    def set_date_range(self, start: DateBound = None, end: DateBound = None) -> None:
        """Restrict entries to a date range.

        Bounds may be datetimes, form strings or None. Empty strings and
        None leave that side of the range open.

        Raises:
            ValidationError: If a string bound is not a valid date.
        """
        if isinstance(start, str):
            start = parse_bound(start)
        if isinstance(end, str):
            end = parse_bound(end, upper=True, inclusive_end_day=self._inclusive_end_day)
        self._filter = self._filter.with_range(start, end)
        self._reconcile()

    def clear_filters(self) -> None:
        self._filter = FilterState()
        self._reconcile()
