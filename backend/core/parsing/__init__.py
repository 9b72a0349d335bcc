"""
Coordinate parsing and formatting package.
"""

from .parser import parse, parse_coordinate, try_parse_coordinate
from .formatter import (
    CoordinateFormat,
    CoordinatePrecision,
    CoordinateFormatter,
    format_coordinate,
    convert,
)

__all__ = [
    # Parsing
    'parse',
    'parse_coordinate',
    'try_parse_coordinate',

    # Formatting
    'CoordinateFormat',
    'CoordinatePrecision',
    'CoordinateFormatter',
    'format_coordinate',
    'convert',
]
