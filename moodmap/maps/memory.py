"""In-memory map surface for sessions without a rendering backend."""

import logging
import uuid
from typing import Optional

from moodmap.maps.base import (
    ActivateHandler,
    BaseMap,
    ClickHandler,
    MarkerHandle,
    MarkerStyle,
)
from moodmap.models import Location

logger = logging.getLogger(__name__)


class MemoryMap(BaseMap):
    """Map surface that keeps markers in memory.

    Records every place/remove operation so callers can inspect what
    would have been drawn, and lets callers simulate clicks on the map
    background and on markers.
    """

    DEFAULT_CENTER = Location(lng=-122.2585, lat=37.8719)
    DEFAULT_ZOOM = 14.0

    def __init__(
        self,
        center: Optional[Location] = None,
        zoom: float = DEFAULT_ZOOM,
    ):
        """Initialize the in-memory map.

        Args:
            center: Initial view center.
            zoom: Initial zoom level.
        """
        self._center = center or self.DEFAULT_CENTER
        self._zoom = zoom
        self._markers: dict[str, MarkerHandle] = {}
        self._activators: dict[str, ActivateHandler] = {}
        self._click_handlers: list[ClickHandler] = []
        self.history: list[tuple[str, str]] = []

    @property
    def center(self) -> Location:
        return self._center

    @property
    def zoom(self) -> float:
        return self._zoom

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handlers.append(handler)

    def place_marker(
        self,
        location: Location,
        style: MarkerStyle,
        on_activate: Optional[ActivateHandler] = None,
    ) -> MarkerHandle:
        handle = MarkerHandle(
            id=f"MARKER_{uuid.uuid4().hex[:12].upper()}",
            location=location,
            style=style,
        )
        self._markers[handle.id] = handle
        if on_activate is not None:
            self._activators[handle.id] = on_activate
        self.history.append(("place", handle.id))
        logger.debug("Placed marker %s at %s", handle.id, location.as_pair())
        return handle

    def remove_marker(self, handle: MarkerHandle) -> None:
        if handle.id not in self._markers:
            raise ValueError(f"Marker {handle.id} is not on this map")
        del self._markers[handle.id]
        self._activators.pop(handle.id, None)
        self.history.append(("remove", handle.id))
        logger.debug("Removed marker %s", handle.id)

    def recenter(self, location: Location, zoom: float) -> None:
        self._center = location
        self._zoom = zoom
        self.history.append(("recenter", f"{location.lng},{location.lat}@{zoom}"))

    def click(self, location: Location) -> None:
        """Simulate a click on the map background."""
        for handler in list(self._click_handlers):
            handler(location)

    def activate(self, handle: MarkerHandle) -> None:
        """Simulate a click on a marker.

        Raises:
            ValueError: If the handle is not drawn on this surface.
        """
        if handle.id not in self._markers:
            raise ValueError(f"Marker {handle.id} is not on this map")
        activator = self._activators.get(handle.id)
        if activator is not None:
            activator()

    def markers(self) -> list[MarkerHandle]:
        """Get all markers currently drawn, in placement order."""
        return list(self._markers.values())

    def marker_at(self, location: Location) -> Optional[MarkerHandle]:
        """Find the first drawn marker at an exact location."""
        return next((m for m in self._markers.values() if m.location == location), None)

    def reset(self) -> None:
        """Remove every marker and clear the operation history."""
        self._markers.clear()
        self._activators.clear()
        self.history.clear()
