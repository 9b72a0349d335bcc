"""
Shared calculations module.

Unit conversions and angle helpers used by the geodesy, magnetic and route
modules. Keeping them here gives a single source of truth for every
normalisation rule.
"""

import math
from datetime import timedelta

from core.constants import (
    FULL_CIRCLE_DEGREES, METERS_PER_NAUTICAL_MILE, NAUTICAL_MILES_PER_METER,
    MPH_PER_KNOT, STATUTE_MILES_PER_NAUTICAL_MILE, MAX_LONGITUDE_DEGREES,
    SECONDS_PER_HOUR
)


# =============================================================================
# ANGLES
# =============================================================================

def normalize_azimuth(degrees: float) -> float:
    """
    Normalize an azimuth into the half-open range [0, 360).

    Args:
        degrees: Any finite angle in degrees

    Returns:
        Equivalent azimuth in degrees (0 <= result < 360)
    """
    result = math.fmod(degrees, FULL_CIRCLE_DEGREES)
    if result < 0:
        result += FULL_CIRCLE_DEGREES
    # fmod of a tiny negative value can round back up to exactly 360
    if result >= FULL_CIRCLE_DEGREES:
        result = 0.0
    return result


def normalize_longitude(degrees: float) -> float:
    """Normalize a longitude into (-180, 180]."""
    result = normalize_azimuth(degrees + MAX_LONGITUDE_DEGREES) - MAX_LONGITUDE_DEGREES
    if result == -MAX_LONGITUDE_DEGREES:
        result = MAX_LONGITUDE_DEGREES
    return result


def angle_difference(angle1: float, angle2: float) -> float:
    """
    Smallest absolute difference between two bearings (0-180 degrees).

    Handles the 0/360 wraparound, so 359 and 1 are 2 degrees apart.
    """
    diff = abs(normalize_azimuth(angle1) - normalize_azimuth(angle2))
    return min(diff, FULL_CIRCLE_DEGREES - diff)


# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

def meters_to_nautical_miles(distance_m: float) -> float:
    """Convert meters to nautical miles."""
    return distance_m * NAUTICAL_MILES_PER_METER


def nautical_miles_to_meters(distance_nm: float) -> float:
    """Convert nautical miles to meters."""
    return distance_nm * METERS_PER_NAUTICAL_MILE


def nautical_to_statute_miles(distance_nm: float) -> float:
    """Convert nautical miles to statute miles."""
    return distance_nm * STATUTE_MILES_PER_NAUTICAL_MILE


def knots_to_mph(speed_knots: float) -> float:
    """Convert knots to miles per hour."""
    return speed_knots * MPH_PER_KNOT


def mph_to_knots(speed_mph: float) -> float:
    """Convert miles per hour to knots."""
    return speed_mph / MPH_PER_KNOT


def hours_to_timedelta(hours: float) -> timedelta:
    """Convert fractional hours to a timedelta."""
    return timedelta(seconds=hours * SECONDS_PER_HOUR)
