"""
Coordinate display formatting.

Renders decimal degrees as DD, DDM or DMS text with zero-padded degrees,
Unicode glyphs and an optional hemisphere letter.
"""

import math
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any, Tuple

from core.constants import (
    DEFAULT_DECIMAL_DEGREES_PRECISION, DEFAULT_DECIMAL_MINUTES_PRECISION,
    DEFAULT_SECONDS_PRECISION, MINUTES_PER_DEGREE
)
from core.models.coordinate import Coordinate
from core.parsing.parser import parse
from core.validation import ValidationError

logger = logging.getLogger(__name__)


class CoordinateFormat(str, Enum):
    """Display notations."""
    DECIMAL_DEGREES = "DD"
    DEGREES_DECIMAL_MINUTES = "DDM"
    DEGREES_MINUTES_SECONDS = "DMS"


@dataclass(frozen=True)
class CoordinatePrecision:
    """Number of decimal places used by each notation."""
    decimal_degrees: int = DEFAULT_DECIMAL_DEGREES_PRECISION
    decimal_minutes: int = DEFAULT_DECIMAL_MINUTES_PRECISION
    seconds: int = DEFAULT_SECONDS_PRECISION

    def __post_init__(self):
        for name, value in asdict(self).items():
            if not isinstance(value, int) or value < 0:
                raise ValidationError(f"Precision '{name}' must be a non-negative integer, got {value}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _hemisphere(value: float, is_latitude: bool) -> str:
    if is_latitude:
        return "N" if value >= 0 else "S"
    return "E" if value >= 0 else "W"


def _with_hemisphere(text: str, value: float, is_latitude: bool, include_hemisphere: bool) -> str:
    if not include_hemisphere:
        return text
    return f"{text} {_hemisphere(value, is_latitude)}"


class CoordinateFormatter:
    """
    Formats latitudes and longitudes for display.

    Example (default precision):
        DD:  "43.1234° N"
        DDM: "043° 07.404′ N"
        DMS: "043° 07′ 24.2″ N"
    """

    def __init__(self, precision: CoordinatePrecision = None):
        self.precision = precision or CoordinatePrecision()

    def format(self, value: float, is_latitude: bool,
               fmt: CoordinateFormat = CoordinateFormat.DEGREES_DECIMAL_MINUTES,
               include_hemisphere: bool = True) -> str:
        """
        Format a single latitude or longitude.

        Args:
            value: Decimal degrees
            is_latitude: Selects N/S (True) or E/W (False)
            fmt: Target notation
            include_hemisphere: Append the hemisphere letter

        Returns:
            Formatted text
        """
        fmt = CoordinateFormat(fmt)
        magnitude = abs(value)

        if fmt == CoordinateFormat.DECIMAL_DEGREES:
            text = self._format_decimal_degrees(magnitude)
        elif fmt == CoordinateFormat.DEGREES_DECIMAL_MINUTES:
            text = self._format_decimal_minutes(magnitude)
        else:
            text = self._format_dms(magnitude)

        return _with_hemisphere(text, value, is_latitude, include_hemisphere)

    def format_coordinate(self, coordinate: Coordinate,
                          fmt: CoordinateFormat = CoordinateFormat.DEGREES_DECIMAL_MINUTES,
                          include_hemisphere: bool = True) -> Tuple[str, str]:
        """Format a coordinate as a (latitude, longitude) text pair."""
        latitude = self.format(coordinate.latitude, True, fmt, include_hemisphere)
        longitude = self.format(coordinate.longitude, False, fmt, include_hemisphere)
        return latitude, longitude

    def convert(self, text: str, is_latitude: bool, fmt: CoordinateFormat,
                include_hemisphere: bool = True) -> str:
        """
        Parse text in any supported notation and re-format it.

        Raises:
            CoordinateFormatError, CoordinateRangeError: As raised by the parser
        """
        value = parse(text, is_latitude)
        logger.debug(f"Converting '{text}' ({value}) to {CoordinateFormat(fmt).value}")
        return self.format(value, is_latitude, fmt, include_hemisphere)

    def _format_decimal_degrees(self, magnitude: float) -> str:
        return f"{magnitude:.{self.precision.decimal_degrees}f}°"

    def _format_decimal_minutes(self, magnitude: float) -> str:
        places = self.precision.decimal_minutes
        degrees = int(math.floor(magnitude))
        minutes = (magnitude - degrees) * MINUTES_PER_DEGREE

        # Rounding can push minutes up to 60
        if float(f"{minutes:.{places}f}") >= MINUTES_PER_DEGREE:
            minutes = 0.0
            degrees += 1

        width = 2 + (places + 1 if places > 0 else 0)
        return f"{degrees:03d}° {minutes:0{width}.{places}f}′"

    def _format_dms(self, magnitude: float) -> str:
        places = self.precision.seconds
        degrees = int(math.floor(magnitude))
        total_minutes = (magnitude - degrees) * MINUTES_PER_DEGREE
        minutes = int(math.floor(total_minutes))
        seconds = (total_minutes - minutes) * 60

        if float(f"{seconds:.{places}f}") >= 60:
            seconds = 0.0
            minutes += 1
        if minutes >= 60:
            minutes = 0
            degrees += 1

        return f"{degrees:03d}° {minutes:02d}′ {seconds:.{places}f}″"


def format_coordinate(coordinate: Coordinate,
                      fmt: CoordinateFormat = CoordinateFormat.DEGREES_DECIMAL_MINUTES,
                      precision: CoordinatePrecision = None,
                      include_hemisphere: bool = True) -> Tuple[str, str]:
    """Format a coordinate pair with a one-off formatter."""
    return CoordinateFormatter(precision).format_coordinate(coordinate, fmt, include_hemisphere)


def convert(text: str, is_latitude: bool, fmt: CoordinateFormat,
            precision: CoordinatePrecision = None, include_hemisphere: bool = True) -> str:
    """Parse and re-format a coordinate text with a one-off formatter."""
    return CoordinateFormatter(precision).convert(text, is_latitude, fmt, include_hemisphere)
