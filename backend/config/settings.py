"""
Application settings and configuration.

This module contains application-specific configuration and defaults.
For algorithmic constants, see core.constants module.
"""

import logging
from typing import Dict, Any

# Import algorithmic constants from core module
from core.constants import (
    DEFAULT_DECIMAL_DEGREES_PRECISION,
    DEFAULT_DECIMAL_MINUTES_PRECISION,
    DEFAULT_SECONDS_PRECISION,
    EXPORT_COORDINATE_DECIMALS
)

# App information
APP_NAME = "Marine Nav"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Distance, bearing, magnetic course and ETA calculations for marine route planning"

# Route planning defaults
DEFAULT_SPEED_KNOTS = 6.0  # Knots - default cruising speed
MAX_SPEED_KNOTS = 100.0  # Knots - upper bound accepted by the API
DEFAULT_USE_RHUMB_LINE = False  # Great circle (geodesic) legs by default
PLANNING_MODES = ["arrival", "departure", "speed"]
DEFAULT_PLANNING_MODE = "arrival"
DEFAULT_ROUTE_NAME = "Marine Route"

# Coordinate display defaults
COORDINATE_FORMATS = ["DD", "DDM", "DMS"]
DEFAULT_COORDINATE_FORMAT = "DDM"
DEFAULT_INCLUDE_HEMISPHERE = True
# Precisions imported from core.constants

# Upload limits
MAX_UPLOAD_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
ALLOWED_GPX_SUFFIXES = ('.gpx',)
ALLOWED_CSV_SUFFIXES = ('.csv', '.txt')

# Export parameters
GPX_CREATOR = "Marine Navigation Utility"
CSV_FLOAT_FORMAT = f"%.{EXPORT_COORDINATE_DECIMALS}f"

# Frontend origins allowed by CORS
CORS_ORIGINS = [
    "http://localhost:3000",  # Dev server
    "http://localhost:5173",  # Vite dev server
]

# Logging configuration
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "handlers": [
        logging.StreamHandler(),
    ]
}


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class RouteConfig:
    """Configuration parameters for route planning."""
    SPEED_KNOTS = DEFAULT_SPEED_KNOTS
    MAX_SPEED_KNOTS = MAX_SPEED_KNOTS
    USE_RHUMB_LINE = DEFAULT_USE_RHUMB_LINE
    PLANNING_MODE = DEFAULT_PLANNING_MODE
    PLANNING_MODES = PLANNING_MODES

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get route configuration as a dictionary."""
        return {
            'speed_knots': cls.SPEED_KNOTS,
            'max_speed_knots': cls.MAX_SPEED_KNOTS,
            'use_rhumb_line': cls.USE_RHUMB_LINE,
            'planning_mode': cls.PLANNING_MODE,
            'planning_modes': list(cls.PLANNING_MODES),
        }


class FormatConfig:
    """Configuration parameters for coordinate display."""
    COORDINATE_FORMAT = DEFAULT_COORDINATE_FORMAT
    COORDINATE_FORMATS = COORDINATE_FORMATS
    INCLUDE_HEMISPHERE = DEFAULT_INCLUDE_HEMISPHERE
    DECIMAL_DEGREES_PRECISION = DEFAULT_DECIMAL_DEGREES_PRECISION  # From core.constants
    DECIMAL_MINUTES_PRECISION = DEFAULT_DECIMAL_MINUTES_PRECISION  # From core.constants
    SECONDS_PRECISION = DEFAULT_SECONDS_PRECISION  # From core.constants

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get display configuration as a dictionary."""
        return {
            'coordinate_format': cls.COORDINATE_FORMAT,
            'coordinate_formats': list(cls.COORDINATE_FORMATS),
            'include_hemisphere': cls.INCLUDE_HEMISPHERE,
            'decimal_degrees_precision': cls.DECIMAL_DEGREES_PRECISION,
            'decimal_minutes_precision': cls.DECIMAL_MINUTES_PRECISION,
            'seconds_precision': cls.SECONDS_PRECISION,
        }
