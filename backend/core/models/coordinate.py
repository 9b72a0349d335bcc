"""
Coordinate and waypoint data models.

This module defines the immutable geographic value types that every solver
and route calculation consumes.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict

from core.constants import MAX_LATITUDE_DEGREES, MAX_LONGITUDE_DEGREES
from core.validation import validate_latitude, validate_longitude


@dataclass(frozen=True)
class Coordinate:
    """
    Geographic position in decimal degrees.

    Latitude is negative south of the equator, longitude negative west of
    Greenwich. Construction fails with CoordinateRangeError outside
    [-90, 90] / [-180, 180].
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        object.__setattr__(self, 'latitude', validate_latitude(self.latitude))
        object.__setattr__(self, 'longitude', validate_longitude(self.longitude))

    @staticmethod
    def is_valid(latitude: float, longitude: float) -> bool:
        """Check raw values against the coordinate bounds without raising."""
        return (-MAX_LATITUDE_DEGREES <= latitude <= MAX_LATITUDE_DEGREES
                and -MAX_LONGITUDE_DEGREES <= longitude <= MAX_LONGITUDE_DEGREES)

    @property
    def latitude_hemisphere(self) -> str:
        """'N' or 'S'."""
        return 'N' if self.latitude >= 0 else 'S'

    @property
    def longitude_hemisphere(self) -> str:
        """'E' or 'W'."""
        return 'E' if self.longitude >= 0 else 'W'

    @property
    def abs_latitude(self) -> float:
        return abs(self.latitude)

    @property
    def abs_longitude(self) -> float:
        return abs(self.longitude)

    def to_dict(self) -> Dict[str, float]:
        return {'latitude': self.latitude, 'longitude': self.longitude}


@dataclass(frozen=True)
class Waypoint:
    """
    A named point on a route.

    The id identifies the waypoint across reorders and exports; two waypoints
    with the same name and position are still distinct.
    """
    id: uuid.UUID
    name: str
    coordinate: Coordinate

    @classmethod
    def create(cls, name: str, coordinate: Coordinate) -> 'Waypoint':
        """Create a waypoint with a freshly generated id."""
        return cls(id=uuid.uuid4(), name=name, coordinate=coordinate)

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self) -> Dict[str, Any]:
        """Convert waypoint to dictionary for DataFrame creation."""
        return {
            'id': str(self.id),
            'name': self.name,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }
