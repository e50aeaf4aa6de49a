"""Catalog commands for MoodMap CLI.

Lists the mood palette and journal templates, and hands out
journaling prompts.
"""

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from moodmap.catalog import MOOD_COLORS, TEMPLATES, random_prompt

console = Console()


@click.command("moods")
def moods() -> None:
    """Show the mood vocabulary and marker colors."""
    table = Table(
        title="Moods",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Mood", style="bold")
    table.add_column("Color")
    table.add_column("Marker", justify="center")

    for mood, color in MOOD_COLORS.items():
        table.add_row(mood, color, f"[{color}]●[/]")

    console.print(table)


@click.command("templates")
def templates() -> None:
    """Show the journal templates and their prompts."""
    for template in TEMPLATES:
        lines = "\n".join(
            f"  • {prompt.name} [dim]({prompt.type})[/dim]" for prompt in template.prompts
        )
        console.print(Panel(
            f"[bold]{template.name}[/bold] [dim]id: {template.id}[/dim]\n\n{lines}",
            border_style="cyan",
        ))


@click.command("prompt")
def prompt() -> None:
    """Show a random journaling prompt."""
    console.print(Panel(
        f"[italic]{random_prompt()}[/italic]",
        title="[bold]Journaling Prompt[/bold]",
        border_style="yellow",
    ))
