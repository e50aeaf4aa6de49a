"""MoodMap - geo-journaling core that keeps journal entries, map markers
and live filters in sync."""

__version__ = "0.1.0"
