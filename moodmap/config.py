"""Configuration loading for MoodMap.

Settings live in ``~/.config/moodmap/config.toml``. Every section and
key is optional; anything missing falls back to the defaults below.
"""

import logging
from pathlib import Path
from typing import Literal, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from moodmap.catalog import DEFAULT_MOOD_COLOR, MOOD_COLORS
from moodmap.maps.base import MarkerStyle
from moodmap.models import Location

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "moodmap"
CONFIG_PATH = CONFIG_DIR / "config.toml"


class MapSettings(BaseModel):
    """Initial view and navigation settings."""

    center: tuple[float, float] = Field(
        default=(-122.2585, 37.8719), description="Initial view center (lng, lat)"
    )
    zoom: float = Field(default=14, ge=0, le=24, description="Initial zoom level")
    focus_zoom: float = Field(
        default=17, ge=0, le=24, description="Zoom used when an entry is selected"
    )

    @field_validator("center")
    @classmethod
    def _center_is_a_location(cls, value: tuple[float, float]) -> tuple[float, float]:
        try:
            Location.from_pair(value)
        except ValidationError as e:
            raise ValueError(f"center {value} is not a valid (lng, lat) pair: {e}")
        return value

    @property
    def center_location(self) -> Location:
        return Location.from_pair(self.center)


class MarkerSettings(BaseModel):
    """Marker appearance."""

    size: int = Field(default=20, gt=0, description="Marker diameter in pixels")
    default_color: str = Field(
        default=DEFAULT_MOOD_COLOR,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Color for moods without a palette entry",
    )
    pending_color: str = Field(
        default="#C0C0C0",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Color of the uncommitted location marker",
    )
    pending_opacity: float = Field(
        default=0.7, ge=0, le=1, description="Opacity of the uncommitted location marker"
    )

    @model_validator(mode="after")
    def _pending_is_distinct(self) -> "MarkerSettings":
        committed = {c.upper() for c in MOOD_COLORS.values()} | {self.default_color.upper()}
        if self.pending_color.upper() in committed:
            raise ValueError(
                f"pending_color {self.pending_color} is also used for a mood"
            )
        return self

    def for_mood(self, mood: str) -> MarkerStyle:
        """Style of a committed entry marker for a mood."""
        color = MOOD_COLORS.get(mood, self.default_color)
        return MarkerStyle(color=color, opacity=1.0, size=self.size)

    @property
    def pending_style(self) -> MarkerStyle:
        """Style of the pending location marker."""
        return MarkerStyle(
            color=self.pending_color, opacity=self.pending_opacity, size=self.size
        )


class FilterSettings(BaseModel):
    """Filter behaviour."""

    inclusive_end_day: bool = Field(
        default=True,
        description="Treat a bare-date upper bound as the end of that day",
    )


class LoggingSettings(BaseModel):
    """Logging output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Root log level"
    )


class Settings(BaseModel):
    """All MoodMap settings."""

    map: MapSettings = Field(default_factory=MapSettings)
    markers: MarkerSettings = Field(default_factory=MarkerSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Config file path. Defaults to ``~/.config/moodmap/config.toml``.

    Returns:
        Parsed settings, or defaults if the file is missing or invalid.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        return Settings()

    try:
        return Settings.model_validate(toml.load(config_path))
    except (OSError, UnicodeDecodeError, toml.TomlDecodeError, ValidationError) as e:
        logger.warning("Ignoring invalid config %s: %s", config_path, e)
        return Settings()


def write_template(path: Optional[Path] = None) -> Path:
    """Write a config file holding every default setting.

    Args:
        path: Destination. Defaults to ``~/.config/moodmap/config.toml``.

    Returns:
        Path of the written file.
    """
    config_path = path or CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(Settings().model_dump(mode="json"), f)

    return config_path
