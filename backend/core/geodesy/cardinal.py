"""
Converts bearings to 16-point cardinal directions.
"""

import math
from typing import Tuple

from core.constants import (
    CARDINAL_POINTS_16, CARDINAL_SECTOR_DEGREES, CARDINAL_HALF_SECTOR_DEGREES,
    FULL_CIRCLE_DEGREES
)
from core.calculations import normalize_azimuth
from core.validation import ValidationError


def from_bearing(bearing: float) -> str:
    """
    Convert a bearing in degrees to a 16-point cardinal direction.

    Each point covers 22.5 degrees centred on its nominal bearing, so N spans
    348.75-11.25.
    """
    bearing = normalize_azimuth(bearing)
    index = int(math.floor((bearing + CARDINAL_HALF_SECTOR_DEGREES) / CARDINAL_SECTOR_DEGREES)) % len(CARDINAL_POINTS_16)
    return CARDINAL_POINTS_16[index]


def all_points() -> Tuple[str, ...]:
    """All 16 cardinal direction names, clockwise from N."""
    return CARDINAL_POINTS_16


def bearing_range(cardinal: str) -> Tuple[float, float]:
    """
    Get the bearing range (min, max) covered by a cardinal direction.

    For N the range wraps through 0, so min > max.

    Raises:
        ValidationError: If the label is not one of the 16 points
    """
    label = cardinal.strip().upper() if isinstance(cardinal, str) else cardinal
    if label not in CARDINAL_POINTS_16:
        raise ValidationError(f"Invalid cardinal direction: {cardinal}")

    center = CARDINAL_POINTS_16.index(label) * CARDINAL_SECTOR_DEGREES
    low = center - CARDINAL_HALF_SECTOR_DEGREES
    high = center + CARDINAL_HALF_SECTOR_DEGREES

    if low < 0:
        low += FULL_CIRCLE_DEGREES
    if high >= FULL_CIRCLE_DEGREES:
        high -= FULL_CIRCLE_DEGREES

    return low, high
