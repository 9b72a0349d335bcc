"""
Ellipsoidal geodesic calculations.

Distances and azimuths on the WGS84 ellipsoid via Vincenty's inverse formula,
falling back to the haversine great-circle formula when the iteration does
not converge (typically for nearly antipodal points). The direct problem
(destination from start, azimuth and distance) is delegated to geopy.
"""

import math
import logging
from geopy.distance import geodesic

from core.constants import (
    WGS84_SEMI_MAJOR_AXIS_METERS, WGS84_SEMI_MINOR_AXIS_METERS, WGS84_FLATTENING,
    VINCENTY_MAX_ITERATIONS, VINCENTY_CONVERGENCE_THRESHOLD, COINCIDENT_POINT_EPSILON
)
from core.calculations import normalize_azimuth, normalize_longitude
from core.geodesy.result import GeodesicResult, GeodesicMethod
from core.models.coordinate import Coordinate

logger = logging.getLogger(__name__)


def inverse(origin: Coordinate, destination: Coordinate) -> GeodesicResult:
    """
    Calculate the geodesic distance and azimuths between two points.

    Uses the Vincenty inverse formula and degrades to a spherical
    calculation if it fails to converge. Never raises for valid coordinates.

    Args:
        origin: Starting point
        destination: End point

    Returns:
        GeodesicResult tagged with the method that produced it
    """
    result = vincenty_inverse(origin, destination)

    if not result.converged:
        logger.debug(f"Vincenty did not converge for {origin} -> {destination}, "
                     f"using spherical fallback")
        result = haversine_inverse(origin, destination)

    return result


def vincenty_inverse(origin: Coordinate, destination: Coordinate) -> GeodesicResult:
    """
    Vincenty inverse formula on the WGS84 ellipsoid.

    Returns a result with converged=False when the lambda iteration does not
    settle within VINCENTY_MAX_ITERATIONS, or when the points are antipodal
    and the azimuth is undefined.
    """
    a = WGS84_SEMI_MAJOR_AXIS_METERS
    b = WGS84_SEMI_MINOR_AXIS_METERS
    f = WGS84_FLATTENING

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    L = math.radians(destination.longitude - origin.longitude)

    # Reduced latitudes
    U1 = math.atan((1 - f) * math.tan(lat1))
    U2 = math.atan((1 - f) * math.tan(lat2))
    sinU1, cosU1 = math.sin(U1), math.cos(U1)
    sinU2, cosU2 = math.sin(U2), math.cos(U2)

    lam = L
    cos_sq_alpha = sin_sigma = cos_sigma = cos_2sigma_m = sigma = 0.0
    converged = False

    for _ in range(VINCENTY_MAX_ITERATIONS):
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)
        sin_sigma = math.hypot(cosU2 * sin_lam,
                               cosU1 * sinU2 - sinU1 * cosU2 * cos_lam)
        cos_sigma = sinU1 * sinU2 + cosU1 * cosU2 * cos_lam

        if sin_sigma < COINCIDENT_POINT_EPSILON:
            if cos_sigma > 0:
                return _coincident_result()
            # Antipodal: the geodesic azimuth is undefined
            break

        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cosU1 * cosU2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha * sin_alpha

        if cos_sq_alpha != 0:
            cos_2sigma_m = cos_sigma - 2 * sinU1 * sinU2 / cos_sq_alpha
        else:
            cos_2sigma_m = 0.0  # Equatorial line

        C = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = L + (1 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m ** 2))
        )

        if abs(lam - lam_prev) <= VINCENTY_CONVERGENCE_THRESHOLD:
            converged = True
            break

    if not converged:
        return GeodesicResult(
            distance_meters=0.0,
            initial_azimuth=0.0,
            final_azimuth=0.0,
            converged=False,
            method=GeodesicMethod.ELLIPSOIDAL_ITERATIVE,
        )

    u_sq = cos_sq_alpha * (a * a - b * b) / (b * b)
    A = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    B = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = B * sin_sigma * (
        cos_2sigma_m + B / 4 * (
            cos_sigma * (-1 + 2 * cos_2sigma_m ** 2)
            - B / 6 * cos_2sigma_m * (-3 + 4 * sin_sigma ** 2) * (-3 + 4 * cos_2sigma_m ** 2)
        )
    )

    distance = b * A * (sigma - delta_sigma)

    alpha1 = math.atan2(cosU2 * math.sin(lam),
                        cosU1 * sinU2 - sinU1 * cosU2 * math.cos(lam))
    alpha2 = math.atan2(cosU1 * math.sin(lam),
                        -sinU1 * cosU2 + cosU1 * sinU2 * math.cos(lam))

    return GeodesicResult(
        distance_meters=distance,
        initial_azimuth=normalize_azimuth(math.degrees(alpha1)),
        final_azimuth=normalize_azimuth(math.degrees(alpha2)),
        converged=True,
        method=GeodesicMethod.ELLIPSOIDAL_ITERATIVE,
    )


def haversine_inverse(origin: Coordinate, destination: Coordinate) -> GeodesicResult:
    """
    Great-circle distance and initial bearing on a sphere of the WGS84
    equatorial radius.

    The final azimuth is reported equal to the initial azimuth.
    """
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(destination.longitude - origin.longitude)

    h = (math.sin(d_lat / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2)
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    distance = WGS84_SEMI_MAJOR_AXIS_METERS * c

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    bearing = normalize_azimuth(math.degrees(math.atan2(y, x)))

    return GeodesicResult(
        distance_meters=distance,
        initial_azimuth=bearing,
        final_azimuth=bearing,
        converged=True,
        method=GeodesicMethod.SPHERICAL_FALLBACK,
    )


def _coincident_result() -> GeodesicResult:
    return GeodesicResult(
        distance_meters=0.0,
        initial_azimuth=0.0,
        final_azimuth=0.0,
        converged=True,
        method=GeodesicMethod.ELLIPSOIDAL_ITERATIVE,
    )


def direct(start: Coordinate, azimuth: float, distance_meters: float) -> Coordinate:
    """
    Point reached by following the geodesic from start.

    Args:
        start: Starting point
        azimuth: Initial azimuth in degrees
        distance_meters: Distance along the geodesic

    Returns:
        Destination coordinate
    """
    point = geodesic(meters=distance_meters, ellipsoid='WGS-84').destination(
        (start.latitude, start.longitude), azimuth
    )
    return Coordinate(point.latitude, normalize_longitude(point.longitude))
