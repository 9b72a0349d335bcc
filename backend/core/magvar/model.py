"""
Simplified magnetic declination model.

Degree-1 (dipole) approximation of the World Magnetic Model 2025. Accurate to
a few degrees at mid latitudes and degrading toward the magnetic poles, so
results are gated by a confidence check on latitude and date.
"""

import math
import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime, timezone
from typing import Any, Dict, Tuple, Union

from core.constants import (
    GAUSS_G10, GAUSS_G11, GAUSS_H11, GAUSS_G10_SV, GAUSS_G11_SV, GAUSS_H11_SV,
    MAGNETIC_MODEL_EPOCH, MAGNETIC_MODEL_VALID_FROM, MAGNETIC_MODEL_VALID_TO,
    MAGNETIC_REFERENCE_RADIUS_KM, DAYS_PER_YEAR, MAGNETIC_HIGH_CONFIDENCE_MAX_LATITUDE,
    DECLINATION_ZERO_DISPLAY_THRESHOLD, MAGNETIC_MODEL_NAME
)
from core.calculations import normalize_azimuth
from core.validation import ValidationError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class MagneticVariation:
    """Declination report for one position and date."""
    declination: float
    high_confidence: bool
    calculation_date: date
    latitude: float
    longitude: float
    model: str = MAGNETIC_MODEL_NAME

    @property
    def formatted_declination(self) -> str:
        return format_declination(self.declination)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['calculation_date'] = self.calculation_date.isoformat()
        data['formatted_declination'] = self.formatted_declination
        return data


def to_calculation_date(value: DateLike) -> date:
    """
    Reduce a date or datetime to a calendar date.

    Aware datetimes are converted to UTC first; naive ones are taken as-is.

    Raises:
        ValidationError: If value is not a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Calculation date must be a date, got {value!r}")


def _years_since_epoch(on_date: date) -> float:
    return (on_date - MAGNETIC_MODEL_EPOCH).days / DAYS_PER_YEAR


def declination(latitude: float, longitude: float, altitude_m: float = 0.0, *,
                on_date: DateLike) -> float:
    """
    Magnetic declination in degrees, east positive.

    Args:
        latitude: Geodetic latitude in degrees
        longitude: Longitude in degrees
        altitude_m: Height above sea level in meters
        on_date: Date the declination is evaluated for

    Returns:
        Declination in degrees; add to a magnetic bearing to get true
    """
    on_date = to_calculation_date(on_date)
    years = _years_since_epoch(on_date)

    # Secular variation
    g10 = GAUSS_G10 + GAUSS_G10_SV * years
    g11 = GAUSS_G11 + GAUSS_G11_SV * years
    h11 = GAUSS_H11 + GAUSS_H11_SV * years

    lat = math.radians(latitude)
    lon = math.radians(longitude)

    altitude_km = altitude_m / 1000.0
    ratio = MAGNETIC_REFERENCE_RADIUS_KM / (MAGNETIC_REFERENCE_RADIUS_KM + altitude_km)
    ratio_cubed = ratio ** 3

    # North and east field components of the dipole
    x = -g10 * 2 * math.sin(lat) * ratio_cubed
    y = (g11 * math.cos(lon) + h11 * math.sin(lon)) * math.cos(lat) * ratio_cubed

    return math.degrees(math.atan2(y, x))


def is_high_confidence(latitude: float, on_date: DateLike) -> bool:
    """
    Whether the model result can be trusted for navigation.

    True for |latitude| <= 80 on a date inside the validity window
    (both bounds inclusive).
    """
    on_date = to_calculation_date(on_date)
    if abs(latitude) > MAGNETIC_HIGH_CONFIDENCE_MAX_LATITUDE:
        return False
    return MAGNETIC_MODEL_VALID_FROM <= on_date <= MAGNETIC_MODEL_VALID_TO


def validity_period() -> Tuple[date, date]:
    """First and last date the coefficients are valid for."""
    return MAGNETIC_MODEL_VALID_FROM, MAGNETIC_MODEL_VALID_TO


def true_to_magnetic(true_bearing: float, declination_deg: float) -> float:
    """Magnetic = True - Declination, normalized to [0, 360)."""
    return normalize_azimuth(true_bearing - declination_deg)


def magnetic_to_true(magnetic_bearing: float, declination_deg: float) -> float:
    """True = Magnetic + Declination, normalized to [0, 360)."""
    return normalize_azimuth(magnetic_bearing + declination_deg)


def format_declination(declination_deg: float) -> str:
    """Format as "12.3° E" / "4.5° W", or "0.0°" when negligible."""
    if abs(declination_deg) < DECLINATION_ZERO_DISPLAY_THRESHOLD:
        return "0.0°"
    direction = "E" if declination_deg > 0 else "W"
    return f"{abs(declination_deg):.1f}° {direction}"


def calculate(latitude: float, longitude: float, on_date: DateLike,
              altitude_m: float = 0.0) -> MagneticVariation:
    """Evaluate declination and confidence together."""
    on_date = to_calculation_date(on_date)
    value = declination(latitude, longitude, altitude_m, on_date=on_date)
    confident = is_high_confidence(latitude, on_date)

    if not confident:
        logger.debug(f"Low confidence declination at ({latitude}, {longitude}) on {on_date}")

    return MagneticVariation(
        declination=value,
        high_confidence=confident,
        calculation_date=on_date,
        latitude=latitude,
        longitude=longitude,
    )
