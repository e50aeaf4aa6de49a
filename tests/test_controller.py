"""Tests for the interaction controller state machine.

**Feature: moodmap**
"""

from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from moodmap.controller import ControllerState
from moodmap.errors import NotFoundError, ValidationError
from moodmap.models import MOODS, Location, TemplatedEntry
from moodmap.session import JournalSession

from conftest import MORNING_SPOT, RUN_SPOT, StepClock


def add_entry(session, location, title, mood, date=None):
    """Compose and save an entry through the map like a user would."""
    session.surface.click(location)
    session.controller.update_draft(title=title, mood=mood, date=date)
    return session.controller.submit()


@pytest.fixture
def scenario(session):
    """Session holding the Morning and Run entries."""
    morning = add_entry(session, MORNING_SPOT, "Morning", "Calmness", datetime(2024, 1, 1))
    run = add_entry(session, RUN_SPOT, "Run", "Energy", datetime(2024, 2, 1))
    return session, morning, run


class TestComposeAndCancel:
    """
    **Feature: moodmap, Property 9: Cancel Discards Composition**

    A map click with no draft starts composing with a pending marker;
    cancel returns to idle, removes the pending marker and creates nothing.
    """

    def test_click_then_cancel(self, session):
        controller = session.controller
        assert controller.state == ControllerState.IDLE

        session.surface.click(Location(lng=-122.25, lat=37.87))

        assert controller.state == ControllerState.COMPOSING
        assert controller.pending_location == Location(lng=-122.25, lat=37.87)
        assert session.registry.pending.location == Location(lng=-122.25, lat=37.87)
        assert session.registry.pending.style == session.settings.markers.pending_style

        controller.cancel()

        assert controller.state == ControllerState.IDLE
        assert controller.draft is None
        assert session.registry.pending is None
        assert session.surface.markers() == []
        assert len(session.store) == 0

    def test_second_click_moves_pending_marker_and_discards_draft(self, session):
        session.surface.click(MORNING_SPOT)
        session.controller.update_draft(title="unsaved")

        session.surface.click(RUN_SPOT)

        assert session.controller.draft.title == ""
        assert [m.location for m in session.surface.markers()] == [RUN_SPOT]


class TestSubmit:
    """Committing drafts."""

    def test_submit_creates_entry_and_swaps_markers(self, session):
        entry_id = add_entry(session, MORNING_SPOT, "Morning", "Calmness")

        assert session.controller.state == ControllerState.IDLE
        assert session.store.get(entry_id).title == "Morning"
        assert session.registry.pending is None
        (marker,) = session.surface.markers()
        assert marker.location == MORNING_SPOT
        assert marker == session.registry.get(entry_id)

    def test_incomplete_submit_keeps_draft(self, session):
        session.surface.click(MORNING_SPOT)
        session.controller.update_draft(title="No mood yet")

        with pytest.raises(ValidationError) as exc_info:
            session.controller.submit()

        assert exc_info.value.missing == ["mood"]
        assert session.controller.state == ControllerState.COMPOSING
        assert session.controller.draft.title == "No mood yet"
        assert session.registry.pending is not None
        assert len(session.store) == 0

    def test_submit_while_idle_is_rejected(self, session):
        with pytest.raises(ValidationError):
            session.controller.submit()

    def test_submit_templated_entry(self, session):
        session.surface.click(MORNING_SPOT)
        session.controller.update_draft(title="Thanks", mood="Warmth")
        session.controller.select_template("gratitude")
        session.controller.set_answer("Gratitude level", "9")

        entry_id = session.controller.submit()

        entry = session.store.get(entry_id)
        assert isinstance(entry, TemplatedEntry)
        assert entry.answers["Gratitude level"] == "9"
        assert entry.answers["How did this make you feel?"] == ""


class TestEditing:
    """Selecting markers for edit."""

    def test_marker_click_loads_entry(self, scenario):
        session, morning, run = scenario

        session.surface.activate(session.registry.get(run))

        controller = session.controller
        assert controller.state == ControllerState.EDITING
        assert controller.editing_id == run
        assert controller.draft.title == "Run"
        assert session.surface.center == RUN_SPOT
        assert session.surface.zoom == session.settings.map.focus_zoom

    def test_marker_click_discards_composition(self, scenario):
        session, morning, run = scenario
        session.surface.click(Location(lng=0, lat=0))
        session.controller.update_draft(title="half written")

        session.controller.marker_activated(morning)

        assert session.controller.draft.title == "Morning"
        assert session.registry.pending is None
        assert len(session.surface.markers()) == 2

    def test_submit_updates_in_place(self, scenario):
        session, morning, run = scenario
        session.controller.marker_activated(morning)
        session.controller.update_draft(title="Early morning", mood="Serenity")

        saved = session.controller.submit()

        assert saved == morning
        assert session.controller.state == ControllerState.IDLE
        assert [e.title for e in session.store.list()] == ["Early morning", "Run"]
        assert session.store.get(morning).date == datetime(2024, 1, 1)
        assert session.registry.get(morning).style.color == "#40E0D0"
        assert len(session.surface.markers()) == 2

    def test_activating_unknown_entry_raises(self, session):
        with pytest.raises(NotFoundError):
            session.controller.marker_activated(404)

    def test_template_cleared_when_deselected(self, scenario):
        session, morning, _ = scenario
        session.controller.marker_activated(morning)
        session.controller.select_template("goal-tracking")

        draft = session.controller.select_template(None)

        assert draft.template_id is None
        assert draft.answers == {}


class TestDelete:
    """Deleting entries."""

    def test_delete_removes_entry_and_marker(self, scenario):
        session, morning, run = scenario

        session.controller.delete_requested(morning)

        assert [e.id for e in session.store.list()] == [run]
        assert set(session.registry.ids()) == {run}
        assert len(session.surface.markers()) == 1

    def test_delete_edit_target_returns_to_idle(self, scenario):
        session, morning, run = scenario
        session.controller.marker_activated(run)

        session.controller.delete_requested(run)

        assert session.controller.state == ControllerState.IDLE
        assert session.controller.draft is None

    def test_delete_other_entry_keeps_editing(self, scenario):
        session, morning, run = scenario
        session.controller.marker_activated(run)

        session.controller.delete_requested(morning)

        assert session.controller.state == ControllerState.EDITING
        assert session.controller.editing_id == run

    def test_delete_while_composing_keeps_pending_marker(self, scenario):
        session, morning, run = scenario
        session.surface.click(Location(lng=1, lat=1))

        session.controller.delete_requested(morning)

        assert session.controller.state == ControllerState.COMPOSING
        assert session.registry.pending.location == Location(lng=1, lat=1)

    def test_delete_missing_id_changes_nothing(self, scenario):
        session, morning, run = scenario
        entries_before = session.store.list()
        markers_before = session.surface.markers()

        with pytest.raises(NotFoundError):
            session.controller.delete_requested(1)

        assert session.store.list() == entries_before
        assert session.surface.markers() == markers_before


class TestFilters:
    """Filters drive the drawn markers."""

    def test_mood_filter_hides_markers(self, scenario):
        session, morning, run = scenario

        session.controller.set_mood_filter("Energy")

        assert [e.title for e in session.controller.visible_entries()] == ["Run"]
        assert set(session.registry.ids()) == {run}

    def test_search_filter(self, scenario):
        session, morning, run = scenario

        session.controller.set_search("morn")

        assert set(session.registry.ids()) == {morning}

    def test_date_range_from_form_strings(self, scenario):
        session, morning, run = scenario

        session.controller.set_date_range("2024-01-15", "")

        assert set(session.registry.ids()) == {run}

    def test_end_of_day_upper_bound(self, scenario):
        session, morning, run = scenario

        session.controller.set_date_range("", "2024-01-01")

        assert set(session.registry.ids()) == {morning}

    def test_clear_filters_restores_markers(self, scenario):
        session, morning, run = scenario
        session.controller.set_mood_filter("Energy")

        session.controller.clear_filters()

        assert set(session.registry.ids()) == {morning, run}

    def test_unknown_mood_filter_rejected(self, scenario):
        session, _, _ = scenario
        with pytest.raises(ValidationError):
            session.controller.set_mood_filter("Joy")

    def test_filter_keeps_pending_marker(self, scenario):
        session, _, _ = scenario
        session.surface.click(Location(lng=5, lat=5))

        session.controller.set_search("nothing matches")

        assert session.registry.ids() == []
        assert session.registry.pending.location == Location(lng=5, lat=5)


class TestDraftEditing:
    """Form surface helpers."""

    def test_update_draft_requires_a_draft(self, session):
        with pytest.raises(ValidationError):
            session.controller.update_draft(title="x")

    def test_update_draft_rejects_location(self, session):
        session.surface.click(MORNING_SPOT)
        with pytest.raises(ValidationError):
            session.controller.update_draft(location=RUN_SPOT)

    def test_set_answer_requires_template(self, session):
        session.surface.click(MORNING_SPOT)
        with pytest.raises(ValidationError):
            session.controller.set_answer("Goal", "x")

    def test_set_answer_rejects_unknown_prompt(self, session):
        session.surface.click(MORNING_SPOT)
        session.controller.select_template("goal-tracking")
        with pytest.raises(ValidationError):
            session.controller.set_answer("Gratitude level", "x")

    def test_select_unknown_template(self, session):
        session.surface.click(MORNING_SPOT)
        with pytest.raises(ValidationError):
            session.controller.select_template("dream-log")


class TestEventSequences:
    """
    **Feature: moodmap, Property 10: Markers Follow Every Transition**

    *For any* sequence of user events, the drawn markers are exactly the
    visible entries plus the pending location, and stored entries stay
    complete.
    """

    @given(
        events=st.lists(
            st.one_of(
                st.tuples(st.just("click"), st.integers(-50, 50), st.integers(-50, 50)),
                st.tuples(st.just("fill"), st.sampled_from(["a", "b", ""]), st.sampled_from(("",) + MOODS)),
                st.tuples(st.just("submit")),
                st.tuples(st.just("cancel")),
                st.tuples(st.just("select"), st.integers(0, 5)),
                st.tuples(st.just("delete"), st.integers(0, 5)),
                st.tuples(st.just("search"), st.sampled_from(["", "a", "b"])),
                st.tuples(st.just("mood"), st.sampled_from(("",) + MOODS[:3])),
            ),
            max_size=25,
        )
    )
    @settings(max_examples=100)
    def test_markers_track_state(self, events):
        session = JournalSession(clock=StepClock())
        controller = session.controller

        for event in events:
            ids = [e.id for e in session.store.list()]
            try:
                if event[0] == "click":
                    session.surface.click(Location(lng=event[1], lat=event[2]))
                elif event[0] == "fill":
                    controller.update_draft(title=event[1], mood=event[2])
                elif event[0] == "submit":
                    controller.submit()
                elif event[0] == "cancel":
                    controller.cancel()
                elif event[0] == "select" and ids:
                    controller.marker_activated(ids[event[1] % len(ids)])
                elif event[0] == "delete" and ids:
                    controller.delete_requested(ids[event[1] % len(ids)])
                elif event[0] == "search":
                    controller.set_search(event[1])
                elif event[0] == "mood":
                    controller.set_mood_filter(event[1])
            except ValidationError:
                pass

            visible_ids = {e.id for e in controller.visible_entries()}
            assert set(session.registry.ids()) == visible_ids
            pending = controller.pending_location
            if pending is None:
                assert session.registry.pending is None
            else:
                assert session.registry.pending.location == pending
            assert len(session.surface.markers()) == len(visible_ids) + (pending is not None)
            for entry in session.store.list():
                assert entry.title and entry.mood and entry.location is not None
