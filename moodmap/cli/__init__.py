"""CLI commands for MoodMap.

This package provides the command-line interface for MoodMap, including
the interactive journaling shell, script replay and catalog listings.
"""

from moodmap.cli.main import cli, main

__all__ = ["cli", "main"]
