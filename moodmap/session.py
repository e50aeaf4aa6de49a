"""Journal session wiring for MoodMap."""

from datetime import datetime
from typing import Callable, Optional

from moodmap.config import Settings
from moodmap.controller import InteractionController
from moodmap.maps.base import BaseMap
from moodmap.maps.memory import MemoryMap
from moodmap.reconciler import MarkerReconciler, MarkerRegistry
from moodmap.store import EntryStore


class JournalSession:
    """One journaling session: store, markers and controller on a map.

    All state lives in this object for the lifetime of the session;
    nothing is persisted.
    """

    def __init__(
        self,
        surface: Optional[BaseMap] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Create a session.

        Args:
            surface: Map surface. Defaults to an in-memory map.
            settings: Settings. Defaults to built-in defaults.
            clock: Time source for entry ids and default dates.
        """
        self.settings = settings or Settings()
        self.surface = surface or MemoryMap(
            center=self.settings.map.center_location,
            zoom=self.settings.map.zoom,
        )
        self.store = EntryStore(clock=clock)
        self.registry = MarkerRegistry()
        self.reconciler = MarkerReconciler(
            self.surface,
            self.registry,
            settings=self.settings.markers,
            focus_zoom=self.settings.map.focus_zoom,
        )
        self.controller = InteractionController(
            self.store,
            self.reconciler,
            inclusive_end_day=self.settings.filters.inclusive_end_day,
        )
        self.surface.on_click(self.controller.map_clicked)
