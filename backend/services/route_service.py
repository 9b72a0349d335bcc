"""
Route planning service.

This module turns user-entered waypoint text into calculated routes and
exports, and wraps the point-to-point calculations used by the API backend.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from config.settings import DEFAULT_PLANNING_MODE, DEFAULT_ROUTE_NAME
from core.calculations import nautical_miles_to_meters
from core.csv_io import route_to_csv
from core.geodesy import inverse, direct, rhumb_line, destination, from_bearing, GeodesicResult
from core.gpx import route_to_gpx
from core.magvar import to_calculation_date
from core.models.coordinate import Coordinate, Waypoint
from core.parsing import parse_coordinate
from core.route.planning import PlanningParams, RoutePlan, plan_route_factory
from core.validation import ValidationError, validate_speed

logger = logging.getLogger(__name__)


@dataclass
class WaypointInput:
    """A waypoint as entered: a name and free-form coordinate text."""
    name: str
    latitude: str
    longitude: str


@dataclass
class RouteRequest:
    """Everything needed to plan a route from text input."""
    waypoints: List[WaypointInput]
    name: str = DEFAULT_ROUTE_NAME
    mode: str = DEFAULT_PLANNING_MODE
    speed_knots: Optional[float] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    use_rhumb_line: bool = False
    calculation_date: Optional[date] = None


class RouteService:
    """
    Service for route planning and point-to-point navigation.

    This class centralizes parsing of waypoint text, planning-mode dispatch
    and export, so the API layer only maps requests and responses.
    """

    @staticmethod
    def parse_waypoints(entries: Sequence[WaypointInput]) -> List[Waypoint]:
        """
        Parse waypoint text into waypoints.

        Raises:
            ValidationError: Naming the first waypoint whose text cannot be parsed
        """
        waypoints = []
        for index, entry in enumerate(entries, start=1):
            name = entry.name or f"WPT{index}"
            try:
                coordinate = parse_coordinate(entry.latitude, entry.longitude)
            except ValidationError as e:
                raise type(e)(f"Waypoint {index} ({name}): {e}") from e
            waypoints.append(Waypoint.create(name, coordinate))
        return waypoints

    @staticmethod
    def resolve_calculation_date(request: RouteRequest, today: Optional[date] = None) -> date:
        """
        Date for the magnetic model: the request's date, else the departure
        time's UTC date, else today's UTC date.
        """
        if request.calculation_date is not None:
            return to_calculation_date(request.calculation_date)
        if request.departure_time is not None:
            return to_calculation_date(request.departure_time)
        return today or datetime.now(timezone.utc).date()

    def plan(self, request: RouteRequest) -> RoutePlan:
        """
        Parse waypoints and plan a route in the requested mode.

        Raises:
            ValidationError: If waypoint text, speed or times are invalid
        """
        waypoints = self.parse_waypoints(request.waypoints)
        params = PlanningParams(
            speed_knots=validate_speed(request.speed_knots),
            departure_time=request.departure_time,
            arrival_time=request.arrival_time,
            use_rhumb_line=request.use_rhumb_line,
            calculation_date=self.resolve_calculation_date(request),
        )

        plan = plan_route_factory(request.name, waypoints, request.mode, params)
        logger.info(f"Planned route '{request.name}' ({plan.mode}): {len(plan.route.legs)} legs, "
                    f"{plan.route.total_distance_nm:.1f} NM")
        return plan

    def export_csv(self, request: RouteRequest) -> str:
        return route_to_csv(self.plan(request).route)

    def export_gpx(self, request: RouteRequest) -> str:
        # Waypoints only; timing is not part of GPX route points
        waypoints = self.parse_waypoints(request.waypoints)
        return route_to_gpx(waypoints, request.name)

    @staticmethod
    def solve(origin: Coordinate, target: Coordinate, use_rhumb_line: bool = False) -> GeodesicResult:
        """Distance and bearings between two coordinates."""
        if use_rhumb_line:
            return rhumb_line(origin, target)
        return inverse(origin, target)

    @staticmethod
    def cardinal(bearing: float) -> str:
        return from_bearing(bearing)

    @staticmethod
    def project(start: Coordinate, bearing: float, distance_nm: float,
                use_rhumb_line: bool = False) -> Coordinate:
        """
        Destination from a start point along a geodesic or a rhumb line.

        Raises:
            ValidationError: If the distance is negative
        """
        if distance_nm < 0:
            raise ValidationError(f"Distance must not be negative, got {distance_nm}")
        distance_meters = nautical_miles_to_meters(distance_nm)
        if use_rhumb_line:
            return destination(start, bearing, distance_meters)
        return direct(start, bearing, distance_meters)


def get_route_service() -> RouteService:
    """
    Get a RouteService instance.

    Returns:
        RouteService instance
    """
    return RouteService()
