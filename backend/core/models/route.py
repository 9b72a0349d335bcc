"""
Route and leg data models.

This module defines the computed legs between consecutive waypoints and the
route aggregate that owns them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Any
import pandas as pd

from core.models.coordinate import Waypoint
from core.geodesy.result import GeodesicMethod


@dataclass(frozen=True)
class MagneticCourse:
    """
    Declination and magnetic course for a leg.

    Only attached to a leg when the magnetic model is confident, so the two
    values are always present together.
    """
    declination: float  # Degrees, east positive
    magnetic_course: float  # Degrees (0-360)


@dataclass(frozen=True)
class Leg:
    """
    Navigation data between two consecutive waypoints.
    """
    from_waypoint: Waypoint
    to_waypoint: Waypoint

    distance_nm: float
    true_bearing: float  # Initial true bearing in degrees (0-360)
    cardinal: str  # 16-point compass label

    magnetic: Optional[MagneticCourse] = None

    # Timing (requires a positive speed; eta also requires a start time)
    leg_time: Optional[timedelta] = None
    eta: Optional[datetime] = None

    method: GeodesicMethod = GeodesicMethod.ELLIPSOIDAL_ITERATIVE

    @property
    def variation(self) -> Optional[float]:
        """Declination in degrees, or None when unavailable."""
        return self.magnetic.declination if self.magnetic else None

    @property
    def magnetic_course(self) -> Optional[float]:
        """Magnetic course in degrees, or None when unavailable."""
        return self.magnetic.magnetic_course if self.magnetic else None

    @property
    def leg_hours(self) -> Optional[float]:
        if self.leg_time is None:
            return None
        return self.leg_time.total_seconds() / 3600.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert leg to dictionary for DataFrame creation."""
        return {
            'from': self.from_waypoint.name,
            'to': self.to_waypoint.name,
            'distance_nm': self.distance_nm,
            'true_bearing': self.true_bearing,
            'cardinal': self.cardinal,
            'variation': self.variation,
            'magnetic_course': self.magnetic_course,
            'leg_hours': self.leg_hours,
            'eta': self.eta,
            'method': self.method.value,
        }


@dataclass
class Route:
    """
    Ordered waypoints and the legs calculated between them.

    Totals are derived from the legs on access.
    """
    name: str
    waypoints: List[Waypoint] = field(default_factory=list)
    legs: List[Leg] = field(default_factory=list)

    @classmethod
    def empty(cls, name: str) -> 'Route':
        return cls(name=name)

    @property
    def total_distance_nm(self) -> float:
        return sum(leg.distance_nm for leg in self.legs)

    @property
    def total_time(self) -> Optional[timedelta]:
        """Sum of leg times, or None if there are no legs or any leg is untimed."""
        if not self.legs or any(leg.leg_time is None for leg in self.legs):
            return None
        return sum((leg.leg_time for leg in self.legs), timedelta())

    @property
    def final_eta(self) -> Optional[datetime]:
        """ETA at the last waypoint."""
        return self.legs[-1].eta if self.legs else None

    def to_dict(self) -> Dict[str, Any]:
        total_time = self.total_time
        return {
            'name': self.name,
            'waypoints': [waypoint.to_dict() for waypoint in self.waypoints],
            'legs': [leg.to_dict() for leg in self.legs],
            'total_distance_nm': self.total_distance_nm,
            'total_hours': total_time.total_seconds() / 3600.0 if total_time is not None else None,
            'final_eta': self.final_eta,
        }


def legs_to_dataframe(legs: List[Leg]) -> pd.DataFrame:
    """
    Convert a list of legs to a pandas DataFrame.

    Args:
        legs: List of Leg objects

    Returns:
        pandas DataFrame with one row per leg
    """
    if not legs:
        return pd.DataFrame()

    data = [leg.to_dict() for leg in legs]
    return pd.DataFrame(data)
