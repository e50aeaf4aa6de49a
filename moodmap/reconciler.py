"""Marker reconciliation for MoodMap.

Keeps the markers drawn on a map surface in step with the visible
entries and the pending location. Reconciliation is split in two: the
pure :func:`reconcile` computes what has to change, and
:class:`MarkerReconciler` applies that diff through the map surface.
"""

import logging
from typing import Callable, Iterable, Iterator, Optional, Union

from pydantic import BaseModel, Field

from moodmap.config import MarkerSettings
from moodmap.maps.base import BaseMap, MarkerHandle
from moodmap.models import JournalEntry, Location, SimpleEntry, TemplatedEntry

logger = logging.getLogger(__name__)

ActivationListener = Callable[[int], None]


class MarkerRegistry:
    """Marker handles owned by the reconciler.

    Maps entry ids to the handle drawn for them, plus at most one
    handle for the pending location. Handles are back-references only;
    the entry store owns the entries.
    """

    def __init__(self):
        self._markers: dict[int, MarkerHandle] = {}
        self.pending: Optional[MarkerHandle] = None

    def get(self, entry_id: int) -> Optional[MarkerHandle]:
        return self._markers.get(entry_id)

    def set(self, entry_id: int, handle: MarkerHandle) -> None:
        self._markers[entry_id] = handle

    def pop(self, entry_id: int) -> Optional[MarkerHandle]:
        return self._markers.pop(entry_id, None)

    def ids(self) -> list[int]:
        return list(self._markers)

    def items(self) -> Iterator[tuple[int, MarkerHandle]]:
        return iter(list(self._markers.items()))

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._markers

    def __len__(self) -> int:
        return len(self._markers)


class MarkerDiff(BaseModel):
    """Marker operations needed to converge the map."""

    remove: tuple[int, ...] = Field(default=(), description="Entry ids to un-draw")
    place: tuple[Union[SimpleEntry, TemplatedEntry], ...] = Field(
        default=(), description="Entries to draw"
    )
    remove_pending: bool = Field(default=False, description="Drop the pending marker")
    place_pending: Optional[Location] = Field(
        default=None, description="Where to draw a new pending marker"
    )

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not (self.remove or self.place or self.remove_pending or self.place_pending)


def reconcile(
    registry: MarkerRegistry,
    visible_entries: Iterable[JournalEntry],
    pending: Optional[Location],
    settings: MarkerSettings,
) -> MarkerDiff:
    """Compute the marker changes that make the map match the desired state.

    A drawn entry marker is kept only if its entry is still visible and
    its location and mood style are unchanged; otherwise it is removed
    and, if still visible, drawn again. The pending marker is kept only
    while the pending location stays the same.

    Args:
        registry: Markers currently drawn.
        visible_entries: Entries that should have a marker.
        pending: Location being composed, if any.
        settings: Marker appearance used to detect style changes.

    Returns:
        The diff to apply. Empty when the map already matches.
    """
    desired = {entry.id: entry for entry in visible_entries}

    remove = []
    for entry_id, handle in registry.items():
        entry = desired.get(entry_id)
        if (
            entry is None
            or handle.location != entry.location
            or handle.style != settings.for_mood(entry.mood)
        ):
            remove.append(entry_id)

    stale = set(remove)
    place = [
        entry
        for entry in desired.values()
        if entry.id not in registry or entry.id in stale
    ]

    current = registry.pending
    remove_pending = current is not None and (pending is None or current.location != pending)
    place_pending = None
    if pending is not None and (current is None or remove_pending):
        place_pending = pending

    return MarkerDiff(
        remove=tuple(remove),
        place=tuple(place),
        remove_pending=remove_pending,
        place_pending=place_pending,
    )


class MarkerReconciler:
    """Applies marker diffs to a map surface.

    Entry markers are bound to report a ``marker_activated(entry_id)``
    event to every registered listener when clicked.
    """

    DEFAULT_FOCUS_ZOOM = 17.0

    def __init__(
        self,
        surface: BaseMap,
        registry: Optional[MarkerRegistry] = None,
        settings: Optional[MarkerSettings] = None,
        focus_zoom: float = DEFAULT_FOCUS_ZOOM,
    ):
        """Initialize the reconciler.

        Args:
            surface: Map surface to draw on.
            registry: Registry of drawn markers. A new one is created if omitted.
            settings: Marker appearance.
            focus_zoom: Zoom level used by :meth:`focus`.
        """
        self._surface = surface
        self.registry = registry if registry is not None else MarkerRegistry()
        self.settings = settings or MarkerSettings()
        self._focus_zoom = focus_zoom
        self._listeners: list[ActivationListener] = []

    def on_marker_activated(self, listener: ActivationListener) -> None:
        """Register a listener for clicks on entry markers."""
        self._listeners.append(listener)

    def _emit(self, entry_id: int) -> None:
        for listener in list(self._listeners):
            listener(entry_id)

    def diff(
        self,
        visible_entries: Iterable[JournalEntry],
        pending: Optional[Location] = None,
    ) -> MarkerDiff:
        """Compute the diff against the current registry without applying it."""
        return reconcile(self.registry, visible_entries, pending, self.settings)

    def apply(self, diff: MarkerDiff) -> None:
        """Apply a diff: removals first, then placements."""
        for entry_id in diff.remove:
            handle = self.registry.pop(entry_id)
            if handle is not None:
                self._surface.remove_marker(handle)

        if diff.remove_pending and self.registry.pending is not None:
            self._surface.remove_marker(self.registry.pending)
            self.registry.pending = None

        for entry in diff.place:
            handle = self._surface.place_marker(
                entry.location,
                self.settings.for_mood(entry.mood),
                on_activate=lambda entry_id=entry.id: self._emit(entry_id),
            )
            self.registry.set(entry.id, handle)

        if diff.place_pending is not None:
            self.registry.pending = self._surface.place_marker(
                diff.place_pending, self.settings.pending_style
            )

    def sync(
        self,
        visible_entries: Iterable[JournalEntry],
        pending: Optional[Location] = None,
    ) -> MarkerDiff:
        """Converge the map to the visible entries plus the pending location.

        Args:
            visible_entries: Entries that should have a marker.
            pending: Location being composed, if any.

        Returns:
            The diff that was applied.
        """
        diff = self.diff(visible_entries, pending)
        if not diff.is_empty:
            logger.debug(
                "Reconciling markers: -%d +%d pending=%s",
                len(diff.remove),
                len(diff.place),
                diff.place_pending.as_pair() if diff.place_pending else diff.remove_pending,
            )
            self.apply(diff)
        return diff

    def drop(self, entry_id: int) -> bool:
        """Tear down the marker of one entry.

        Returns:
            True if a marker was removed.
        """
        handle = self.registry.pop(entry_id)
        if handle is None:
            return False
        self._surface.remove_marker(handle)
        return True

    def focus(self, location: Location) -> None:
        """Recenter the view on a location at the focus zoom level."""
        self._surface.recenter(location, self._focus_zoom)

    def clear(self) -> None:
        """Remove every marker, including the pending one."""
        for entry_id in self.registry.ids():
            self.drop(entry_id)
        if self.registry.pending is not None:
            self._surface.remove_marker(self.registry.pending)
            self.registry.pending = None
