"""
Route leg assembly.

Combines the distance solvers, compass mapper and magnetic model into the
ordered legs of a route, with optional leg times and running ETAs.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from core.calculations import hours_to_timedelta
from core.geodesy import inverse, rhumb_line, from_bearing, GeodesicResult
from core.magvar import model as magvar
from core.models.coordinate import Coordinate, Waypoint
from core.models.route import Leg, Route, MagneticCourse
from core.validation import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaypointBearing:
    """Distance and bearing from a position to a single waypoint."""
    distance_nm: float
    bearing: float
    cardinal: str
    eta: Optional[datetime] = None


def resolve_calculation_date(calculation_date: Optional[date] = None,
                             start_time: Optional[datetime] = None) -> date:
    """
    Pick the date the magnetic model is evaluated for.

    An explicit date wins, then the start time's UTC date. Callers with
    neither must resolve the current date themselves.

    Raises:
        ValidationError: If neither a date nor a start time is given
    """
    if calculation_date is not None:
        return magvar.to_calculation_date(calculation_date)
    if start_time is not None:
        return magvar.to_calculation_date(start_time)
    raise ValidationError("A calculation date is required when there is no start time")


def _solve(origin: Coordinate, destination: Coordinate, use_rhumb_line: bool) -> GeodesicResult:
    if use_rhumb_line:
        return rhumb_line(origin, destination)
    return inverse(origin, destination)


def _magnetic_course(origin: Coordinate, true_bearing: float,
                     calculation_date: date) -> Optional[MagneticCourse]:
    """Magnetic data at the leg origin, or None when the model is not confident."""
    variation = magvar.calculate(origin.latitude, origin.longitude, calculation_date)
    if not variation.high_confidence:
        return None
    return MagneticCourse(
        declination=variation.declination,
        magnetic_course=magvar.true_to_magnetic(true_bearing, variation.declination),
    )


def calculate_legs(waypoints: Sequence[Waypoint],
                   speed_knots: Optional[float] = None,
                   start_time: Optional[datetime] = None,
                   use_rhumb_line: bool = False,
                   calculation_date: Optional[date] = None) -> List[Leg]:
    """
    Calculate the legs between consecutive waypoints.

    Args:
        waypoints: Ordered waypoints
        speed_knots: Vessel speed; leg times are only set when positive
        start_time: Departure time; ETAs accumulate from it leg by leg
        use_rhumb_line: Constant-bearing legs instead of geodesics
        calculation_date: Date for the magnetic model (see resolve_calculation_date)

    Returns:
        One leg per consecutive pair, empty for fewer than two waypoints

    Raises:
        ValidationError: If legs are needed and neither calculation_date nor start_time is given
    """
    legs: List[Leg] = []
    if len(waypoints) < 2:
        return legs

    on_date = resolve_calculation_date(calculation_date, start_time)
    timed = speed_knots is not None and speed_knots > 0
    clock = start_time

    for origin, target in zip(waypoints[:-1], waypoints[1:]):
        result = _solve(origin.coordinate, target.coordinate, use_rhumb_line)
        distance_nm = result.distance_nm
        true_bearing = result.initial_azimuth

        leg_time = None
        eta = None
        if timed:
            leg_time = hours_to_timedelta(distance_nm / speed_knots)
            if clock is not None:
                clock = clock + leg_time
                eta = clock

        leg = Leg(
            from_waypoint=origin,
            to_waypoint=target,
            distance_nm=distance_nm,
            true_bearing=true_bearing,
            cardinal=from_bearing(true_bearing),
            magnetic=_magnetic_course(origin.coordinate, true_bearing, on_date),
            leg_time=leg_time,
            eta=eta,
            method=result.method,
        )
        logger.debug(f"Leg {origin.name} -> {target.name}: {distance_nm:.2f} NM "
                     f"@ {true_bearing:.1f}°T ({result.method.value})")
        legs.append(leg)

    return legs


def create_route(name: str,
                 waypoints: Sequence[Waypoint],
                 speed_knots: Optional[float] = None,
                 start_time: Optional[datetime] = None,
                 use_rhumb_line: bool = False,
                 calculation_date: Optional[date] = None) -> Route:
    """Build a route with its legs calculated."""
    legs = calculate_legs(waypoints, speed_knots, start_time, use_rhumb_line, calculation_date)
    return Route(name=name, waypoints=list(waypoints), legs=legs)


def recalculate_route(route: Route,
                      speed_knots: Optional[float] = None,
                      start_time: Optional[datetime] = None,
                      use_rhumb_line: bool = False,
                      calculation_date: Optional[date] = None) -> Route:
    """Rebuild a route from its waypoints with new speed/time inputs."""
    return create_route(route.name, route.waypoints, speed_knots, start_time,
                        use_rhumb_line, calculation_date)


def calculate_to_waypoint(position: Coordinate,
                          target: Waypoint,
                          speed_knots: Optional[float] = None,
                          current_time: Optional[datetime] = None) -> WaypointBearing:
    """
    Geodesic distance and bearing from a position to a waypoint.

    The ETA is set only when both a positive speed and the current time are given.
    """
    result = inverse(position, target.coordinate)
    distance_nm = result.distance_nm
    bearing = result.initial_azimuth

    eta = None
    if speed_knots is not None and speed_knots > 0 and current_time is not None:
        eta = current_time + hours_to_timedelta(distance_nm / speed_knots)

    return WaypointBearing(
        distance_nm=distance_nm,
        bearing=bearing,
        cardinal=from_bearing(bearing),
        eta=eta,
    )


def total_distance_nm(waypoints: Sequence[Waypoint], use_rhumb_line: bool = False) -> float:
    """Total route distance without building legs."""
    return sum(
        _solve(origin.coordinate, target.coordinate, use_rhumb_line).distance_nm
        for origin, target in zip(waypoints[:-1], waypoints[1:])
    )
