"""Coordinate value object - immutable."""
from dataclasses import dataclass

from geosearch.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE


@dataclass(frozen=True)
class Coordinates:
    """Immutable WGS84 coordinate value object.

    Range checks are left to the consumer so the circle generator can report
    segment errors before coordinate errors.
    """
    latitude: float
    longitude: float

    def is_valid_latitude(self) -> bool:
        return MIN_LATITUDE <= self.latitude <= MAX_LATITUDE

    def is_valid_longitude(self) -> bool:
        return MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"lat": self.latitude, "lon": self.longitude}
