"""Shared fixtures for MoodMap tests."""

from datetime import datetime, timedelta

import pytest

from moodmap.models import Location
from moodmap.session import JournalSession

MORNING_SPOT = Location(lng=-122.2585, lat=37.8719)
RUN_SPOT = Location(lng=-122.26, lat=37.87)


class StepClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0)):
        self._now = start

    def __call__(self) -> datetime:
        now = self._now
        self._now += timedelta(seconds=1)
        return now


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def session(clock: StepClock) -> JournalSession:
    """A session on an in-memory map with a deterministic clock."""
    return JournalSession(clock=clock)
