"""
Rhumb line (loxodrome) calculations for constant bearing navigation.

A rhumb line crosses every meridian at the same angle and appears as a
straight line on a Mercator chart. Distances are computed on a sphere of the
WGS84 equatorial radius.
"""

import math
import logging

from core.constants import (
    WGS84_SEMI_MAJOR_AXIS_METERS, RHUMB_LINE_EPSILON, MAX_LATITUDE_DEGREES
)
from core.calculations import normalize_azimuth, normalize_longitude
from core.geodesy.result import GeodesicResult, GeodesicMethod
from core.models.coordinate import Coordinate

logger = logging.getLogger(__name__)


def _isometric_latitude(lat: float) -> float:
    """Mercator-projected (isometric) latitude; input clamped short of the poles."""
    limit = math.pi / 2 - RHUMB_LINE_EPSILON
    lat = max(-limit, min(limit, lat))
    return math.log(math.tan(math.pi / 4 + lat / 2))


def _isometric_latitude_delta(lat1: float, lat2: float) -> float:
    """Difference in isometric latitude between two latitudes (radians)."""
    return _isometric_latitude(lat2) - _isometric_latitude(lat1)


def rhumb_line(origin: Coordinate, destination: Coordinate) -> GeodesicResult:
    """
    Calculate the rhumb line distance and bearing between two points.

    Args:
        origin: Starting point
        destination: End point

    Returns:
        GeodesicResult with identical initial and final azimuth
    """
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    delta_lat = lat2 - lat1
    delta_lon = math.radians(destination.longitude - origin.longitude)

    # Take the shorter way round across the antimeridian
    if abs(delta_lon) > math.pi:
        delta_lon = -(2 * math.pi - delta_lon) if delta_lon > 0 else (2 * math.pi + delta_lon)

    delta_psi = _isometric_latitude_delta(lat1, lat2)

    if abs(delta_psi) < RHUMB_LINE_EPSILON:
        # East-west line
        bearing = math.atan2(delta_lon, math.cos(lat1) * delta_lat)
    else:
        bearing = math.atan2(delta_lon, delta_psi)

    if abs(delta_lat) < RHUMB_LINE_EPSILON:
        # East-west line: distance along the parallel
        angular_distance = abs(delta_lon) * math.cos(lat1)
    elif abs(delta_psi) < RHUMB_LINE_EPSILON:
        angular_distance = abs(delta_lat)
    else:
        angular_distance = delta_lat / math.cos(bearing)

    distance_meters = abs(angular_distance) * WGS84_SEMI_MAJOR_AXIS_METERS
    bearing_deg = normalize_azimuth(math.degrees(bearing))

    return GeodesicResult(
        distance_meters=distance_meters,
        initial_azimuth=bearing_deg,
        final_azimuth=bearing_deg,
        converged=True,
        method=GeodesicMethod.RHUMB_LINE,
    )


def destination(start: Coordinate, bearing: float, distance_meters: float) -> Coordinate:
    """
    Project a point along a constant bearing.

    Args:
        start: Starting point
        bearing: True bearing in degrees
        distance_meters: Distance to travel in meters

    Returns:
        Destination coordinate; latitude is clamped at the poles and longitude
        normalized into (-180, 180]
    """
    lat1 = math.radians(start.latitude)
    lon1 = math.radians(start.longitude)
    theta = math.radians(bearing)
    angular_distance = distance_meters / WGS84_SEMI_MAJOR_AXIS_METERS

    delta_lat = angular_distance * math.cos(theta)
    lat2 = lat1 + delta_lat

    if abs(lat2) > math.pi / 2:
        logger.debug(f"Rhumb line from {start} passes the pole, clamping latitude")
        lat2 = math.copysign(math.pi / 2, lat2)

    # tan(pi/4 + lat/2) is unbounded at the poles, fall back to cos(lat1)
    if abs(abs(lat2) - math.pi / 2) < RHUMB_LINE_EPSILON:
        q = math.cos(lat1)
    else:
        delta_psi = _isometric_latitude_delta(lat1, lat2)
        q = delta_lat / delta_psi if abs(delta_psi) > RHUMB_LINE_EPSILON else math.cos(lat1)

    delta_lon = angular_distance * math.sin(theta) / q if q != 0 else 0.0
    lon2 = normalize_longitude(math.degrees(lon1 + delta_lon))

    lat2_deg = max(-MAX_LATITUDE_DEGREES, min(MAX_LATITUDE_DEGREES, math.degrees(lat2)))
    return Coordinate(lat2_deg, lon2)
