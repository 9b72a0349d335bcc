"""
Route planning modes and factory.

A planning mode decides which of speed, departure time and arrival time are
inputs and which one is solved for:

- 'arrival':   speed + departure time  -> ETAs at each waypoint
- 'departure': speed + arrival time    -> departure time
- 'speed':     departure + arrival time -> required speed
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Type, Optional, Sequence, Any

from core.calculations import hours_to_timedelta
from core.models.coordinate import Waypoint
from core.models.route import Route
from core.route.legs import create_route, total_distance_nm
from core.validation import ValidationError, validate_route_waypoints

logger = logging.getLogger(__name__)


@dataclass
class PlanningParams:
    """Inputs shared by all planning modes."""
    speed_knots: Optional[float] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    use_rhumb_line: bool = False
    calculation_date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and API responses."""
        return {
            'speed_knots': self.speed_knots,
            'departure_time': self.departure_time,
            'arrival_time': self.arrival_time,
            'use_rhumb_line': self.use_rhumb_line,
            'calculation_date': self.calculation_date,
        }


@dataclass
class RoutePlan:
    """A calculated route together with the resolved timing inputs."""
    route: Route
    mode: str
    speed_knots: Optional[float]
    departure_time: Optional[datetime]
    arrival_time: Optional[datetime]


def _require_speed(params: PlanningParams) -> float:
    if params.speed_knots is None or params.speed_knots <= 0:
        raise ValidationError("Speed must be greater than 0")
    return params.speed_knots


class RoutePlanner(ABC):
    """Abstract base class for planning modes."""

    @abstractmethod
    def plan(self, name: str, waypoints: Sequence[Waypoint], params: PlanningParams) -> RoutePlan:
        """
        Calculate a route for the given waypoints.

        Args:
            name: Route name
            waypoints: Ordered waypoints, at least two
            params: Timing and solver inputs

        Returns:
            RoutePlan with the route and resolved speed/times

        Raises:
            ValidationError: If the inputs this mode needs are missing or inconsistent
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the mode."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Description of the mode."""
        pass


class ArrivalPlanner(RoutePlanner):
    """Speed and departure time in, ETAs out."""

    def plan(self, name: str, waypoints: Sequence[Waypoint], params: PlanningParams) -> RoutePlan:
        speed = _require_speed(params)
        route = create_route(name, waypoints, speed, params.departure_time,
                             params.use_rhumb_line, params.calculation_date)
        return RoutePlan(
            route=route,
            mode='arrival',
            speed_knots=speed,
            departure_time=params.departure_time,
            arrival_time=route.final_eta,
        )

    @property
    def name(self) -> str:
        return "Arrival"

    @property
    def description(self) -> str:
        return "Enter speed and departure time to calculate arrival at each waypoint"


class DeparturePlanner(RoutePlanner):
    """Speed and arrival time in, departure time out."""

    def plan(self, name: str, waypoints: Sequence[Waypoint], params: PlanningParams) -> RoutePlan:
        if params.arrival_time is None:
            raise ValidationError("Arrival time is required for Departure mode")
        speed = _require_speed(params)

        distance = total_distance_nm(waypoints, params.use_rhumb_line)
        departure = params.arrival_time - hours_to_timedelta(distance / speed)
        logger.info(f"Departure mode: {distance:.2f} NM at {speed} kn, depart {departure.isoformat()}")

        route = create_route(name, waypoints, speed, departure,
                             params.use_rhumb_line, params.calculation_date)
        return RoutePlan(
            route=route,
            mode='departure',
            speed_knots=speed,
            departure_time=departure,
            arrival_time=params.arrival_time,
        )

    @property
    def name(self) -> str:
        return "Departure"

    @property
    def description(self) -> str:
        return "Enter speed and desired arrival time to calculate when to depart"


class RequiredSpeedPlanner(RoutePlanner):
    """Departure and arrival time in, required speed out."""

    def plan(self, name: str, waypoints: Sequence[Waypoint], params: PlanningParams) -> RoutePlan:
        if params.arrival_time is None:
            raise ValidationError("Arrival time is required for Speed mode")
        if params.departure_time is None:
            raise ValidationError("Departure time is required for Speed mode")

        hours = (params.arrival_time - params.departure_time).total_seconds() / 3600.0
        if hours <= 0:
            raise ValidationError("Arrival time must be after departure time")

        distance = total_distance_nm(waypoints, params.use_rhumb_line)
        speed = distance / hours
        logger.info(f"Speed mode: {distance:.2f} NM in {hours:.2f} h requires {speed:.2f} kn")

        route = create_route(name, waypoints, speed, params.departure_time,
                             params.use_rhumb_line, params.calculation_date)
        return RoutePlan(
            route=route,
            mode='speed',
            speed_knots=speed,
            departure_time=params.departure_time,
            arrival_time=params.arrival_time,
        )

    @property
    def name(self) -> str:
        return "Speed"

    @property
    def description(self) -> str:
        return "Enter departure and arrival times to calculate the speed needed"


class PlanningModeFactory:
    """Factory for creating route planners."""

    _planners: Dict[str, Type[RoutePlanner]] = {
        'arrival': ArrivalPlanner,
        'departure': DeparturePlanner,
        'speed': RequiredSpeedPlanner,
    }

    @classmethod
    def create_planner(cls, mode: str) -> RoutePlanner:
        """
        Create a planner for the specified mode.

        Args:
            mode: 'arrival', 'departure' or 'speed' (case-insensitive)

        Returns:
            RoutePlanner instance
        """
        mode_lower = (mode or '').lower()

        # Default to arrival for unknown modes
        if mode_lower not in cls._planners:
            logger.warning(f"Unknown planning mode '{mode}', using '{cls.get_default_mode()}'")
            mode_lower = cls.get_default_mode()

        return cls._planners[mode_lower]()

    @classmethod
    def get_available_modes(cls) -> Dict[str, str]:
        """Get available planning modes with descriptions."""
        result = {}
        for mode_name, planner_class in cls._planners.items():
            planner = planner_class()
            result[mode_name] = f"{planner.name}: {planner.description}"
        return result

    @classmethod
    def get_default_mode(cls) -> str:
        return 'arrival'


def plan_route_factory(
    name: str,
    waypoints: Sequence[Waypoint],
    mode: str = 'arrival',
    params: Optional[PlanningParams] = None
) -> RoutePlan:
    """
    Convenience function to plan a route in any mode.

    Raises:
        ValidationError: If fewer than two waypoints are given or the mode's
            inputs are missing
    """
    validate_route_waypoints(waypoints)
    if params is None:
        params = PlanningParams()

    planner = PlanningModeFactory.create_planner(mode)
    return planner.plan(name, waypoints, params)
