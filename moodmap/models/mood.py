"""Mood vocabulary."""

from typing import Literal, get_args

Mood = Literal[
    "Happiness",
    "Calmness",
    "Energy",
    "Sadness",
    "Envy",
    "Creativity",
    "Warmth",
    "Serenity",
    "Passion",
    "Nostalgia",
    "Anger",
    "Confidence",
    "Peacefulness",
    "Mystery",
]

MOODS: tuple[str, ...] = get_args(Mood)


def is_mood(value: str) -> bool:
    """Check whether a string belongs to the mood vocabulary."""
    return value in MOODS
