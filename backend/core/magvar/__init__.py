"""
Magnetic variation package.
"""

from .model import (
    MagneticVariation,
    declination,
    is_high_confidence,
    validity_period,
    true_to_magnetic,
    magnetic_to_true,
    format_declination,
    calculate,
    to_calculation_date,
)

__all__ = [
    'MagneticVariation',
    'declination',
    'is_high_confidence',
    'validity_period',
    'true_to_magnetic',
    'magnetic_to_true',
    'format_declination',
    'calculate',
    'to_calculation_date',
]
