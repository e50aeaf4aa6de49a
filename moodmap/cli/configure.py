"""Configuration commands for MoodMap CLI."""

import click
from rich.console import Console
from rich.panel import Panel

from moodmap.config import CONFIG_PATH, write_template

console = Console()


@click.command("init")
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite an existing config file.",
)
def init(force: bool) -> None:
    """Write a config file with the default settings.

    The file is created at ~/.config/moodmap/config.toml.

    \b
    Examples:
      moodmap init          # Create config if missing
      moodmap init --force  # Reset config to defaults
    """
    if CONFIG_PATH.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] [cyan]{CONFIG_PATH}[/cyan]\n\n"
            "Use [cyan]moodmap init --force[/cyan] to overwrite it.",
            title="[bold yellow]Config[/bold yellow]",
            border_style="yellow",
        ))
        return

    path = write_template()
    console.print(f"[green]✓ Wrote default config to {path}[/green]")
