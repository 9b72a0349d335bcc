"""
Geodesic result models.

A solver never raises for a valid coordinate pair; instead the result carries
the method that produced it, so callers can tell an ellipsoidal solution from
a spherical fallback.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from core.calculations import meters_to_nautical_miles


class GeodesicMethod(str, Enum):
    """Calculation method used to produce a GeodesicResult."""
    ELLIPSOIDAL_ITERATIVE = "Vincenty"
    SPHERICAL_FALLBACK = "Haversine"
    RHUMB_LINE = "Rhumb Line"


@dataclass(frozen=True)
class GeodesicResult:
    """Distance and azimuths between two points."""
    distance_meters: float
    initial_azimuth: float  # Degrees (0-360)
    final_azimuth: float  # Degrees (0-360)
    converged: bool
    method: GeodesicMethod

    @property
    def distance_nm(self) -> float:
        """Distance in nautical miles."""
        return meters_to_nautical_miles(self.distance_meters)

    @property
    def is_fallback(self) -> bool:
        return self.method is GeodesicMethod.SPHERICAL_FALLBACK

    def to_dict(self) -> Dict[str, Any]:
        return {
            'distance_meters': self.distance_meters,
            'distance_nm': self.distance_nm,
            'initial_azimuth': self.initial_azimuth,
            'final_azimuth': self.final_azimuth,
            'converged': self.converged,
            'method': self.method.value,
        }
