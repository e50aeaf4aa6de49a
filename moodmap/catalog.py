"""Static lookup data for MoodMap: mood colors, templates and prompts."""

import random
from typing import Optional

from moodmap.models import JournalTemplate, TemplateField

# Marker color for each mood in the vocabulary
MOOD_COLORS: dict[str, str] = {
    "Happiness": "#FFFF00",
    "Calmness": "#0000FF",
    "Energy": "#FF0000",
    "Sadness": "#808080",
    "Envy": "#00FF00",
    "Creativity": "#800080",
    "Warmth": "#FFA500",
    "Serenity": "#40E0D0",
    "Passion": "#8B0000",
    "Nostalgia": "#8B4513",
    "Anger": "#000000",
    "Confidence": "#FFD700",
    "Peacefulness": "#98FB98",
    "Mystery": "#4B0082",
}

DEFAULT_MOOD_COLOR = "#708090"

TEMPLATES: tuple[JournalTemplate, ...] = (
    JournalTemplate(
        id="gratitude",
        name="Gratitude Journal",
        prompts=(
            TemplateField(name="What are you grateful for today?", type="textarea"),
            TemplateField(name="How did this make you feel?", type="text"),
            TemplateField(name="Gratitude level", type="number"),
        ),
    ),
    JournalTemplate(
        id="goal-tracking",
        name="Goal Tracking",
        prompts=(
            TemplateField(name="Goal", type="text"),
            TemplateField(name="Progress", type="textarea"),
            TemplateField(name="Obstacles", type="textarea"),
            TemplateField(name="Next steps", type="text"),
        ),
    ),
)

PROMPTS: tuple[str, ...] = (
    "What are three things you're grateful for today?",
    "Describe a challenge you overcame recently.",
    "What's a goal you're working towards? How are you progressing?",
    "Write about a person who has positively influenced your life.",
    "Describe your ideal day. What would you do?",
)


def get_template(template_id: str) -> Optional[JournalTemplate]:
    """Look up a template by id.

    Args:
        template_id: Template identifier.

    Returns:
        The template, or None if no template has that id.
    """
    return next((t for t in TEMPLATES if t.id == template_id), None)


def random_prompt(rng: Optional[random.Random] = None) -> str:
    """Pick a journaling prompt at random."""
    return (rng or random).choice(PROMPTS)
