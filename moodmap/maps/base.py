"""Base map surface interface for MoodMap."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from pydantic import BaseModel, Field

from moodmap.models import Location

ClickHandler = Callable[[Location], None]
ActivateHandler = Callable[[], None]


class MarkerStyle(BaseModel):
    """Visual style of a marker dot."""

    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$", description="Hex fill color")
    opacity: float = Field(default=1.0, ge=0, le=1, description="Fill opacity")
    size: int = Field(default=20, gt=0, description="Diameter in pixels")

    model_config = {"frozen": True}


class MarkerHandle(BaseModel):
    """Opaque reference to a marker drawn on a map surface."""

    id: str = Field(..., min_length=1, description="Surface-assigned marker id")
    location: Location = Field(..., description="Where the marker is drawn")
    style: MarkerStyle = Field(..., description="How the marker is drawn")

    model_config = {"frozen": True}


class BaseMap(ABC):
    """Abstract base class for map surfaces.

    The journaling core never manages tiles, projection or hit-testing;
    it only places and removes markers, moves the view, and listens for
    clicks on the map background.
    """

    @abstractmethod
    def on_click(self, handler: ClickHandler) -> None:
        """Register a handler for clicks on the map background.

        Args:
            handler: Called with the clicked location.
        """
        pass

    @abstractmethod
    def place_marker(
        self,
        location: Location,
        style: MarkerStyle,
        on_activate: Optional[ActivateHandler] = None,
    ) -> MarkerHandle:
        """Draw a marker.

        Args:
            location: Marker position.
            style: Marker style.
            on_activate: Called when the user clicks the marker.

        Returns:
            Handle for later removal.
        """
        pass

    @abstractmethod
    def remove_marker(self, handle: MarkerHandle) -> None:
        """Remove a marker from the map.

        Args:
            handle: Handle returned by :meth:`place_marker`.

        Raises:
            ValueError: If the handle is not drawn on this surface.
        """
        pass

    @abstractmethod
    def recenter(self, location: Location, zoom: float) -> None:
        """Move the view to a location at a zoom level.

        Args:
            location: New view center.
            zoom: Target zoom level.
        """
        pass
