"""Tests for the journaling shell and CLI commands.

**Feature: moodmap**
"""

import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from moodmap.cli import cli
from moodmap.cli.shell import ShellExit, run_command
from moodmap.controller import ControllerState
from moodmap.errors import NotFoundError, ValidationError
from moodmap.models import Location, TemplatedEntry

SCRIPT = """\
# two entries near campus
click -122.2585 37.8719
set title Morning
set mood Calmness
set date 2024-01-01
submit
click -122.26 37.87
set title Run
set mood Energy
set date 2024-02-01
submit
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_config(temp_dir: Path, monkeypatch):
    """Point the config path at a temporary file."""
    path = temp_dir / "config.toml"
    monkeypatch.setattr("moodmap.config.CONFIG_PATH", path)
    monkeypatch.setattr("moodmap.cli.configure.CONFIG_PATH", path)
    return path


def run_script(session, script: str) -> None:
    for line in script.splitlines():
        run_command(session, line)


class TestRunCommand:
    """Shell commands drive the controller."""

    def test_script_creates_entries(self, session):
        run_script(session, SCRIPT)

        titles = [entry.title for entry in session.store.list()]
        assert titles == ["Morning", "Run"]
        assert len(session.surface.markers()) == 2

    def test_filters(self, session):
        run_script(session, SCRIPT)

        run_command(session, "mood Energy")
        assert [e.title for e in session.controller.visible_entries()] == ["Run"]

        run_command(session, "mood")
        run_command(session, "search morn")
        assert [e.title for e in session.controller.visible_entries()] == ["Morning"]

        run_command(session, "clear-filters")
        run_command(session, "range 2024-01-15 -")
        assert [e.title for e in session.controller.visible_entries()] == ["Run"]

    def test_click_then_cancel(self, session):
        run_command(session, "click 1.5 2.5")
        assert session.registry.pending.location == Location(lng=1.5, lat=2.5)

        run_command(session, "cancel")

        assert session.controller.state == ControllerState.IDLE
        assert session.surface.markers() == []

    def test_select_and_delete(self, session):
        run_script(session, SCRIPT)
        morning_id = session.store.list()[0].id

        run_command(session, f"select {morning_id}")
        assert session.controller.editing_id == morning_id

        run_command(session, f"delete {morning_id}")
        assert session.controller.state == ControllerState.IDLE
        assert [e.title for e in session.store.list()] == ["Run"]

    def test_template_answers_with_quoted_labels(self, session):
        run_command(session, "click 0 0")
        run_command(session, "set title Goals")
        run_command(session, "set mood Confidence")
        run_command(session, "template goal-tracking")
        run_command(session, 'answer "Next steps" "Sign up for the race"')
        run_command(session, "submit")

        (entry,) = session.store.list()
        assert isinstance(entry, TemplatedEntry)
        assert entry.answers["Next steps"] == "Sign up for the race"

    def test_multi_word_values(self, session):
        run_command(session, "click 0 0")
        run_command(session, "set description walked along the bay")

        assert session.controller.draft.description == "walked along the bay"

    def test_blank_and_comment_lines_ignored(self, session):
        run_command(session, "")
        run_command(session, "   # nothing here")
        assert session.controller.state == ControllerState.IDLE

    @pytest.mark.parametrize(
        "line",
        [
            "dance",
            "click 1",
            "click east north",
            "click 200 0",
            "select abc",
            "range 2024-01-01",
            "set",
            'answer "unterminated',
        ],
    )
    def test_bad_commands_rejected(self, session, line: str):
        with pytest.raises(ValidationError):
            run_command(session, line)

    def test_delete_unknown_id(self, session):
        with pytest.raises(NotFoundError):
            run_command(session, "delete 77")

    def test_quit(self, session):
        with pytest.raises(ShellExit):
            run_command(session, "quit")

    def test_views_render(self, session):
        run_script(session, SCRIPT)
        run_command(session, "click 0 0")
        for line in ["list", "markers", "state", "help", "prompt"]:
            run_command(session, line)


class TestCliCommands:
    """Top-level click commands."""

    def test_replay(self, temp_dir: Path, isolated_config: Path):
        script = temp_dir / "walk.txt"
        script.write_text(SCRIPT + "mood Energy\n")

        result = CliRunner().invoke(cli, ["replay", str(script)])

        assert result.exit_code == 0, result.output
        assert "Run" in result.output
        assert "Morning" not in result.output

    def test_replay_reports_rejections(self, temp_dir: Path, isolated_config: Path):
        script = temp_dir / "bad.txt"
        script.write_text("submit\nclick 0 0\n")

        result = CliRunner().invoke(cli, ["replay", str(script)])

        assert result.exit_code == 0
        assert "1 command(s) rejected" in result.output

    def test_replay_strict_stops(self, temp_dir: Path, isolated_config: Path):
        script = temp_dir / "bad.txt"
        script.write_text("submit\n")

        result = CliRunner().invoke(cli, ["replay", "--strict", str(script)])

        assert result.exit_code == 1

    def test_shell_reads_until_quit(self, isolated_config: Path):
        result = CliRunner().invoke(
            cli, ["shell"], input="click 0 0\nset title Hi\nset mood Warmth\nsubmit\nquit\n"
        )

        assert result.exit_code == 0, result.output
        assert "Saved entry" in result.output

    def test_shell_survives_out_of_range_center(self, isolated_config: Path):
        isolated_config.write_text("[map]\ncenter = [500.0, 0.0]\n")

        result = CliRunner().invoke(cli, ["shell"], input="click 0 0\nquit\n")

        assert result.exit_code == 0, result.output
        assert "New entry" in result.output

    def test_moods(self, isolated_config: Path):
        result = CliRunner().invoke(cli, ["moods"])
        assert result.exit_code == 0
        assert "Calmness" in result.output

    def test_templates(self, isolated_config: Path):
        result = CliRunner().invoke(cli, ["templates"])
        assert result.exit_code == 0
        assert "Gratitude Journal" in result.output

    def test_prompt(self, isolated_config: Path):
        result = CliRunner().invoke(cli, ["prompt"])
        assert result.exit_code == 0
        assert "Journaling Prompt" in result.output

    def test_init_writes_config_once(self, isolated_config: Path):
        runner = CliRunner()

        first = runner.invoke(cli, ["init"])
        second = runner.invoke(cli, ["init"])

        assert first.exit_code == 0
        assert isolated_config.exists()
        assert "already exists" in second.output
