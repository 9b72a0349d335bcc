"""
Constants for the Marine Nav application.

This module contains all the mathematical, geodetic, and domain-specific
constants used throughout the codebase. Constants are grouped by their purpose
and documented with their units where applicable.
"""

from datetime import date

# =============================================================================
# WGS84 ELLIPSOID
# =============================================================================

WGS84_SEMI_MAJOR_AXIS_METERS = 6378137.0  # a, equatorial radius
WGS84_FLATTENING = 1 / 298.257223563  # f
WGS84_SEMI_MINOR_AXIS_METERS = WGS84_SEMI_MAJOR_AXIS_METERS * (1 - WGS84_FLATTENING)  # b, polar radius

# =============================================================================
# CONVERSION FACTORS
# =============================================================================

# Distance conversions
METERS_PER_NAUTICAL_MILE = 1852.0
NAUTICAL_MILES_PER_METER = 1 / METERS_PER_NAUTICAL_MILE
STATUTE_MILES_PER_NAUTICAL_MILE = 1.15078

# Speed conversions
MPH_PER_KNOT = 1.15078  # 1 knot = 1.15078 mph

# Time conversions
SECONDS_PER_HOUR = 3600
MINUTES_PER_DEGREE = 60
SECONDS_PER_DEGREE = 3600

# =============================================================================
# ANGLE CONSTANTS (all in degrees)
# =============================================================================

FULL_CIRCLE_DEGREES = 360
MAX_LATITUDE_DEGREES = 90.0
MAX_LONGITUDE_DEGREES = 180.0

# =============================================================================
# GEODESIC SOLVER
# =============================================================================

VINCENTY_MAX_ITERATIONS = 200
VINCENTY_CONVERGENCE_THRESHOLD = 1e-12  # radians, change in lambda between iterations
COINCIDENT_POINT_EPSILON = 1e-12  # sin(sigma) below this means no separation

# Rhumb line special cases (radians)
RHUMB_LINE_EPSILON = 1e-12

# =============================================================================
# CARDINAL DIRECTIONS
# =============================================================================

CARDINAL_POINTS_16 = (
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
)
CARDINAL_SECTOR_DEGREES = FULL_CIRCLE_DEGREES / len(CARDINAL_POINTS_16)  # 22.5
CARDINAL_HALF_SECTOR_DEGREES = CARDINAL_SECTOR_DEGREES / 2  # 11.25

# =============================================================================
# MAGNETIC MODEL (degree-1 approximation of WMM2025)
# =============================================================================

MAGNETIC_MODEL_NAME = "WMM2025"
MAGNETIC_MODEL_EPOCH = date(2025, 1, 1)
MAGNETIC_MODEL_VALID_FROM = date(2025, 1, 1)
MAGNETIC_MODEL_VALID_TO = date(2030, 12, 31)

# Gauss coefficients at epoch (nT)
GAUSS_G10 = -29404.5  # Main dipole
GAUSS_G11 = -1450.7
GAUSS_H11 = 4652.9

# Secular variation (nT/year)
GAUSS_G10_SV = 6.7
GAUSS_G11_SV = 7.7
GAUSS_H11_SV = -25.1

MAGNETIC_REFERENCE_RADIUS_KM = 6371.2  # Geomagnetic reference radius
DAYS_PER_YEAR = 365.25

MAGNETIC_HIGH_CONFIDENCE_MAX_LATITUDE = 80.0  # Degrees, inclusive
DECLINATION_ZERO_DISPLAY_THRESHOLD = 0.05  # Degrees, displayed as 0.0°

# =============================================================================
# COORDINATE TEXT
# =============================================================================

DEGREE_GLYPHS = "°º"
MINUTE_GLYPHS = "′'’"
SECOND_GLYPHS = "″\"”"
HEMISPHERE_LETTERS = "NSEW"
NEGATIVE_HEMISPHERES = "SW"

# Default decimal places per display format
DEFAULT_DECIMAL_DEGREES_PRECISION = 4
DEFAULT_DECIMAL_MINUTES_PRECISION = 3
DEFAULT_SECONDS_PRECISION = 1

# =============================================================================
# FILE EXCHANGE
# =============================================================================

EXPORT_COORDINATE_DECIMALS = 6
DUPLICATE_POINT_TOLERANCE_DEGREES = 0.0001
DEFAULT_WAYPOINT_NAME = "Waypoint"
