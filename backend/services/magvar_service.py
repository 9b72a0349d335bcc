"""
Magnetic variation service.

This module provides business logic for declination lookups and true/magnetic
bearing conversion at a fixed calculation date, used by the API backend.
"""

import logging
from datetime import date
from typing import Optional, Tuple

from core.magvar import model as magvar
from core.magvar.model import MagneticVariation, DateLike
from core.models.coordinate import Coordinate
from core.constants import MAGNETIC_HIGH_CONFIDENCE_MAX_LATITUDE, MAGNETIC_MODEL_NAME

logger = logging.getLogger(__name__)


class MagneticVariationService:
    """
    Service for magnetic variation lookups.

    The calculation date is fixed when the service is created so every lookup
    made through one instance is consistent.
    """

    def __init__(self, calculation_date: DateLike):
        self.calculation_date: date = magvar.to_calculation_date(calculation_date)

    def get_declination(self, coordinate: Coordinate, altitude_m: float = 0.0) -> MagneticVariation:
        """
        Declination and confidence at a coordinate.

        Args:
            coordinate: Position to evaluate
            altitude_m: Height above sea level in meters

        Returns:
            MagneticVariation report
        """
        return magvar.calculate(coordinate.latitude, coordinate.longitude,
                                self.calculation_date, altitude_m)

    def true_to_magnetic(self, true_bearing: float, coordinate: Coordinate) -> Optional[float]:
        """Magnetic bearing, or None when the model is not confident here."""
        variation = self.get_declination(coordinate)
        if not variation.high_confidence:
            return None
        return magvar.true_to_magnetic(true_bearing, variation.declination)

    def magnetic_to_true(self, magnetic_bearing: float, coordinate: Coordinate) -> Optional[float]:
        """True bearing, or None when the model is not confident here."""
        variation = self.get_declination(coordinate)
        if not variation.high_confidence:
            return None
        return magvar.magnetic_to_true(magnetic_bearing, variation.declination)

    def check_availability(self, coordinate: Coordinate) -> Tuple[bool, Optional[str]]:
        """
        Whether reliable magnetic data is available at a coordinate.

        Returns:
            (available, reason) where reason explains why data is unavailable
        """
        if abs(coordinate.latitude) > MAGNETIC_HIGH_CONFIDENCE_MAX_LATITUDE:
            return False, "Latitude > ±80° - reduced magnetic model accuracy"

        valid_from, valid_to = magvar.validity_period()
        if not valid_from <= self.calculation_date <= valid_to:
            logger.warning(f"Calculation date {self.calculation_date} outside {MAGNETIC_MODEL_NAME} validity")
            return False, (f"Date outside {MAGNETIC_MODEL_NAME} validity period "
                           f"({valid_from.year}-{valid_to.year})")

        return True, None


def get_magvar_service(calculation_date: DateLike) -> MagneticVariationService:
    """
    Get a MagneticVariationService instance.

    Args:
        calculation_date: Date the model is evaluated for

    Returns:
        MagneticVariationService instance
    """
    return MagneticVariationService(calculation_date)
