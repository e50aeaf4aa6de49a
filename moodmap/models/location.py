"""Location data model."""

from pydantic import BaseModel, Field


class Location(BaseModel):
    """A point on the map as a longitude/latitude pair."""

    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False, description="Longitude")
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False, description="Latitude")

    model_config = {"frozen": True}

    @classmethod
    def from_pair(cls, pair: tuple[float, float]) -> "Location":
        """Build a location from a ``(lng, lat)`` pair."""
        lng, lat = pair
        return cls(lng=lng, lat=lat)

    def as_pair(self) -> tuple[float, float]:
        """Return the location as a ``(lng, lat)`` pair."""
        return (self.lng, self.lat)
