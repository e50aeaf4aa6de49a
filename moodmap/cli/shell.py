"""Interactive journaling commands for MoodMap CLI.

A session keeps its entries in memory only, so the journal is driven
from a small command language, either typed at the ``moodmap shell``
prompt or read from a file with ``moodmap replay``.
"""

import shlex
from pathlib import Path
from typing import Callable, Optional

import click
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from moodmap.catalog import MOOD_COLORS, random_prompt
from moodmap.config import Settings
from moodmap.errors import MoodMapError, ValidationError
from moodmap.filters import parse_bound
from moodmap.maps.memory import MemoryMap
from moodmap.models import Location, TemplatedEntry
from moodmap.session import JournalSession

console = Console()

SHELL_HELP = """\
[bold]Map[/bold]
  click LNG LAT          Start a new entry at a point
  select ID              Edit an entry
  delete ID              Delete an entry
[bold]Draft[/bold]
  set FIELD VALUE        Set title, mood, date or description
  template ID|none       Use a template for the draft
  answer LABEL VALUE     Answer a template prompt
  submit                 Save the draft
  cancel                 Discard the draft
[bold]Filters[/bold]
  search [TEXT]          Filter by title
  mood [MOOD]            Filter by mood
  range START END        Filter by date, use - for an open bound
  clear-filters          Show all entries
[bold]Views[/bold]
  list                   Visible entries
  markers                Markers on the map
  state                  Current draft and filters
  prompt                 A journaling prompt
  help                   This help
  quit                   Leave the shell"""


class ShellExit(Exception):
    """Raised by the quit command to end a shell session."""


def _parse_id(args: list[str]) -> int:
    if len(args) != 1:
        raise ValidationError("Expected exactly one entry id")
    try:
        return int(args[0])
    except ValueError:
        raise ValidationError(f"Invalid entry id: {args[0]}")


def _parse_location(args: list[str]) -> Location:
    if len(args) != 2:
        raise ValidationError("Expected LNG LAT", missing=["location"])
    try:
        return Location(lng=float(args[0]), lat=float(args[1]))
    except (ValueError, PydanticValidationError):
        raise ValidationError(f"Invalid location: {' '.join(args)}", missing=["location"])


def _open_bound(value: str) -> str:
    return "" if value == "-" else value


def build_entries_table(session: JournalSession) -> Table:
    """Build a table of the entries passing the current filter."""
    table = Table(
        title="Journal Entries",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Mood")
    table.add_column("Date", style="dim")
    table.add_column("Location", justify="right")
    table.add_column("Notes")

    for entry in session.controller.visible_entries():
        color = MOOD_COLORS.get(entry.mood, session.settings.markers.default_color)
        if isinstance(entry, TemplatedEntry):
            notes = "\n".join(f"{label}: {answer}" for label, answer in entry.answers.items())
        else:
            notes = entry.description
        table.add_row(
            str(entry.id),
            entry.title,
            f"[{color}]●[/] {entry.mood}",
            entry.date.strftime("%Y-%m-%d %H:%M"),
            f"{entry.location.lng:.4f}, {entry.location.lat:.4f}",
            notes,
        )

    return table


def build_markers_table(session: JournalSession) -> Table:
    """Build a table of the markers drawn by the session."""
    table = Table(
        title="Markers",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Entry", style="dim")
    table.add_column("Location", justify="right")
    table.add_column("Color")
    table.add_column("Opacity", justify="right")

    rows = [(str(entry_id), handle) for entry_id, handle in session.registry.items()]
    if session.registry.pending is not None:
        rows.append(("[yellow]pending[/yellow]", session.registry.pending))

    for label, handle in rows:
        table.add_row(
            label,
            f"{handle.location.lng:.4f}, {handle.location.lat:.4f}",
            f"[{handle.style.color}]●[/] {handle.style.color}",
            f"{handle.style.opacity:.1f}",
        )

    return table


def build_state_panel(session: JournalSession) -> Panel:
    """Build a panel describing the draft and the active filters."""
    controller = session.controller
    lines = [f"State:  [bold]{controller.state.value}[/bold]"]

    draft = controller.draft
    if draft is not None:
        if draft.editing:
            lines.append(f"Entry:  {draft.entry_id}")
        if draft.location is not None:
            lines.append(f"Where:  {draft.location.lng:.4f}, {draft.location.lat:.4f}")
        lines.append(f"Title:  {draft.title or '[dim]-[/dim]'}")
        lines.append(f"Mood:   {draft.mood or '[dim]-[/dim]'}")
        if draft.date is not None:
            lines.append(f"Date:   {draft.date:%Y-%m-%d %H:%M}")
        if draft.template_id:
            lines.append(f"Template: {draft.template_id}")
            lines.extend(f"  {label}: {answer}" for label, answer in draft.answers.items())
        elif draft.description:
            lines.append(f"Notes:  {draft.description}")

    state = controller.filter_state
    if state.is_active:
        lines.append("")
        lines.append(
            f"Filter: search='{state.search}' mood='{state.mood}' "
            f"start={state.start or '-'} end={state.end or '-'}"
        )

    return Panel("\n".join(lines), title="[bold]Session[/bold]", border_style="cyan")


def _cmd_click(session: JournalSession, args: list[str]) -> None:
    location = _parse_location(args)
    if isinstance(session.surface, MemoryMap):
        session.surface.click(location)
    else:
        session.controller.map_clicked(location)
    console.print(f"[green]✓ New entry at {location.lng:.4f}, {location.lat:.4f}[/green]")


def _cmd_select(session: JournalSession, args: list[str]) -> None:
    entry_id = _parse_id(args)
    session.controller.marker_activated(entry_id)
    console.print(f"[green]✓ Editing entry {entry_id}[/green]")


def _cmd_delete(session: JournalSession, args: list[str]) -> None:
    entry_id = _parse_id(args)
    session.controller.delete_requested(entry_id)
    console.print(f"[green]✓ Deleted entry {entry_id}[/green]")


def _cmd_set(session: JournalSession, args: list[str]) -> None:
    if not args:
        raise ValidationError("Expected FIELD VALUE")
    field, value = args[0].lower(), " ".join(args[1:])
    if field == "date":
        session.controller.update_draft(date=parse_bound(value))
    else:
        session.controller.update_draft(**{field: value})


def _cmd_template(session: JournalSession, args: list[str]) -> None:
    if len(args) != 1:
        raise ValidationError("Expected a template id or 'none'")
    session.controller.select_template(None if args[0].lower() == "none" else args[0])


def _cmd_answer(session: JournalSession, args: list[str]) -> None:
    if not args:
        raise ValidationError("Expected LABEL VALUE")
    session.controller.set_answer(args[0], " ".join(args[1:]))


def _cmd_submit(session: JournalSession, args: list[str]) -> None:
    entry_id = session.controller.submit()
    console.print(f"[green]✓ Saved entry {entry_id}[/green]")


def _cmd_cancel(session: JournalSession, args: list[str]) -> None:
    session.controller.cancel()


def _cmd_search(session: JournalSession, args: list[str]) -> None:
    session.controller.set_search(" ".join(args))


def _cmd_mood(session: JournalSession, args: list[str]) -> None:
    session.controller.set_mood_filter(args[0] if args else "")


def _cmd_range(session: JournalSession, args: list[str]) -> None:
    if len(args) != 2:
        raise ValidationError("Expected START END, use - for an open bound")
    session.controller.set_date_range(_open_bound(args[0]), _open_bound(args[1]))


def _cmd_clear_filters(session: JournalSession, args: list[str]) -> None:
    session.controller.clear_filters()


def _cmd_list(session: JournalSession, args: list[str]) -> None:
    console.print(build_entries_table(session))


def _cmd_markers(session: JournalSession, args: list[str]) -> None:
    console.print(build_markers_table(session))


def _cmd_state(session: JournalSession, args: list[str]) -> None:
    console.print(build_state_panel(session))


def _cmd_prompt(session: JournalSession, args: list[str]) -> None:
    console.print(f"[italic]{random_prompt()}[/italic]")


def _cmd_help(session: JournalSession, args: list[str]) -> None:
    console.print(Panel(SHELL_HELP, title="[bold]Commands[/bold]", border_style="dim"))


def _cmd_quit(session: JournalSession, args: list[str]) -> None:
    raise ShellExit()


COMMANDS: dict[str, Callable[[JournalSession, list[str]], None]] = {
    "click": _cmd_click,
    "select": _cmd_select,
    "delete": _cmd_delete,
    "set": _cmd_set,
    "template": _cmd_template,
    "answer": _cmd_answer,
    "submit": _cmd_submit,
    "cancel": _cmd_cancel,
    "search": _cmd_search,
    "mood": _cmd_mood,
    "range": _cmd_range,
    "clear-filters": _cmd_clear_filters,
    "list": _cmd_list,
    "markers": _cmd_markers,
    "state": _cmd_state,
    "prompt": _cmd_prompt,
    "help": _cmd_help,
    "quit": _cmd_quit,
    "exit": _cmd_quit,
}


def run_command(session: JournalSession, line: str) -> None:
    """Run one shell command against a session.

    Blank lines and lines starting with ``#`` are ignored.

    Args:
        session: Session to act on.
        line: Command line, split with shell quoting rules.

    Raises:
        MoodMapError: If the command is unknown or rejected.
        ShellExit: If the command ends the session.
    """
    try:
        tokens = shlex.split(line, comments=True)
    except ValueError as e:
        raise ValidationError(f"Could not parse command: {e}")
    if not tokens:
        return

    name, args = tokens[0].lower(), tokens[1:]
    handler = COMMANDS.get(name)
    if handler is None:
        raise ValidationError(f"Unknown command: {name}. Type 'help' for commands.")
    handler(session, args)


def _print_error(e: MoodMapError, where: Optional[str] = None) -> None:
    title = "[bold red]Rejected[/bold red]"
    if where:
        title = f"[bold red]Rejected ({where})[/bold red]"
    console.print(Panel(f"[red]{e}[/red]", title=title, border_style="red"))


def _new_session(ctx: click.Context) -> JournalSession:
    settings = (ctx.obj or {}).get("settings") or Settings()
    return JournalSession(settings=settings)


@click.command("shell")
@click.pass_context
def shell(ctx: click.Context) -> None:
    """Start an interactive journaling session.

    Entries live only for the length of the session.

    \b
    Examples:
      moodmap shell
      > click -122.2585 37.8719
      > set title Morning walk
      > set mood Calmness
      > submit
    """
    session = _new_session(ctx)
    console.print("[bold cyan]MoodMap[/bold cyan] [dim]Type 'help' for commands.[/dim]")

    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        try:
            run_command(session, line)
        except ShellExit:
            break
        except MoodMapError as e:
            _print_error(e)


@click.command("replay")
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    help="Stop at the first rejected command.",
)
@click.pass_context
def replay(ctx: click.Context, script: Path, strict: bool) -> None:
    """Run a file of shell commands and show the resulting journal.

    SCRIPT holds one shell command per line.

    \b
    Examples:
      moodmap replay walk.txt
      moodmap replay walk.txt --strict
    """
    session = _new_session(ctx)
    rejected = 0

    for number, line in enumerate(script.read_text().splitlines(), start=1):
        try:
            run_command(session, line)
        except ShellExit:
            break
        except MoodMapError as e:
            rejected += 1
            _print_error(e, where=f"line {number}")
            if strict:
                raise SystemExit(1)

    console.print(build_entries_table(session))
    console.print(build_markers_table(session))
    if rejected:
        console.print(f"\n[yellow]{rejected} command(s) rejected[/yellow]")
