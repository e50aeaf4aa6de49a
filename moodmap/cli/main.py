"""Main CLI entry point for MoodMap.

This module provides the main click group and lazy loading
of command modules.
"""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "shell": "moodmap.cli.shell",
    "replay": "moodmap.cli.shell",
    "moods": "moodmap.cli.catalog",
    "templates": "moodmap.cli.catalog",
    "prompt": "moodmap.cli.catalog",
    "init": "moodmap.cli.configure",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(level: str) -> None:
    """Send log records to the console through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="moodmap")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the log level from config.toml.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """MoodMap - journal moods and experiences on a map.

    Click a point, describe how you felt there, and browse your
    entries as colored markers filtered by text, mood and date.

    \b
    Quick Start:
      moodmap shell            # Start an interactive session
      moodmap replay FILE      # Run a file of shell commands
      moodmap moods            # Show the mood palette
    """
    from moodmap.config import load_settings

    ctx.ensure_object(dict)
    settings = load_settings()
    configure_logging((log_level or settings.logging.level).upper())
    ctx.obj["settings"] = settings


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
