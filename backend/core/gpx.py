"""
GPX file parsing and export.

This module contains functions for loading waypoints from GPX 1.0/1.1 files
and writing routes back out as GPX 1.1.
"""

import os
import gpxpy
import gpxpy.gpx
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from config.settings import GPX_CREATOR
from core.constants import (
    EXPORT_COORDINATE_DECIMALS, DUPLICATE_POINT_TOLERANCE_DEGREES, DEFAULT_WAYPOINT_NAME
)
from core.models.coordinate import Coordinate, Waypoint
from core.models.route import Route
from core.validation import validate_file_upload, ValidationError

logger = logging.getLogger(__name__)


def _is_duplicate(waypoints: Sequence[Waypoint], name: str, latitude: float, longitude: float) -> bool:
    return any(
        w.name == name
        and abs(w.latitude - latitude) < DUPLICATE_POINT_TOLERANCE_DEGREES
        and abs(w.longitude - longitude) < DUPLICATE_POINT_TOLERANCE_DEGREES
        for w in waypoints
    )


def _to_waypoint(point, kind: str) -> Optional[Waypoint]:
    """Build a waypoint from a gpxpy point, or None if its position is invalid."""
    name = point.name or DEFAULT_WAYPOINT_NAME
    try:
        return Waypoint.create(name, Coordinate(point.latitude, point.longitude))
    except (ValidationError, TypeError) as e:
        logger.warning(f"Skipping invalid {kind} '{name}': {e}")
        return None


def load_gpx_waypoints(gpx_file) -> List[Waypoint]:
    """
    Load waypoints from a GPX file.

    Reads every <wpt>, then every <rtept> that does not repeat a waypoint
    already read (same name and position within 1e-4 degrees).

    Args:
        gpx_file: A file-like object or string containing GPX data

    Returns:
        List of waypoints in document order

    Raises:
        ValidationError: If file validation or parsing fails
    """
    try:
        if not isinstance(gpx_file, str):
            validate_file_upload(gpx_file)

        gpx = gpxpy.parse(gpx_file)

    except gpxpy.gpx.GPXException as e:
        raise ValidationError(f"Invalid GPX file format: {str(e)}") from e
    except Exception as e:
        if isinstance(e, ValidationError):
            raise
        raise ValidationError(f"Failed to parse GPX file: {str(e)}") from e

    waypoints: List[Waypoint] = []

    for point in gpx.waypoints:
        waypoint = _to_waypoint(point, "waypoint")
        if waypoint is not None:
            waypoints.append(waypoint)

    for route in gpx.routes:
        for point in route.points:
            waypoint = _to_waypoint(point, "route point")
            if waypoint is None:
                continue
            if _is_duplicate(waypoints, waypoint.name, waypoint.latitude, waypoint.longitude):
                continue
            waypoints.append(waypoint)

    logger.info(f"Successfully loaded GPX file with {len(waypoints)} waypoints")
    return waypoints


def load_gpx_from_path(file_path: str) -> List[Waypoint]:
    """
    Load GPX waypoints from disk path.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"GPX file not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        return load_gpx_waypoints(f)


def route_to_gpx(route: Union[Route, Sequence[Waypoint]], name: Optional[str] = None) -> str:
    """
    Serialize a route (or a bare waypoint list) as a GPX 1.1 document.

    Every waypoint is written as a <wpt>; with two or more waypoints an <rte>
    repeats them as route points.

    Args:
        route: Route or ordered waypoints
        name: Document and route name; defaults to the route's name

    Returns:
        GPX XML text
    """
    if isinstance(route, Route):
        waypoints = route.waypoints
        name = name or route.name
    else:
        waypoints = list(route)
    name = name or "Marine Route"

    gpx = gpxpy.gpx.GPX()
    gpx.creator = GPX_CREATOR
    gpx.name = name
    gpx.time = datetime.now(timezone.utc)

    for waypoint in waypoints:
        gpx.waypoints.append(gpxpy.gpx.GPXWaypoint(
            latitude=round(waypoint.latitude, EXPORT_COORDINATE_DECIMALS),
            longitude=round(waypoint.longitude, EXPORT_COORDINATE_DECIMALS),
            name=waypoint.name,
        ))

    if len(waypoints) > 1:
        gpx_route = gpxpy.gpx.GPXRoute(name=name)
        for waypoint in waypoints:
            gpx_route.points.append(gpxpy.gpx.GPXRoutePoint(
                latitude=round(waypoint.latitude, EXPORT_COORDINATE_DECIMALS),
                longitude=round(waypoint.longitude, EXPORT_COORDINATE_DECIMALS),
                name=waypoint.name,
            ))
        gpx.routes.append(gpx_route)

    logger.info(f"Exported {len(waypoints)} waypoints to GPX '{name}'")
    return gpx.to_xml(version="1.1")
