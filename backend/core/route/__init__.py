"""
Route calculation package.

Leg assembly plus the planning modes built on top of it.
"""

from .legs import (
    WaypointBearing,
    calculate_legs,
    create_route,
    recalculate_route,
    calculate_to_waypoint,
    total_distance_nm,
    resolve_calculation_date,
)
from .planning import (
    PlanningParams,
    RoutePlan,
    RoutePlanner,
    PlanningModeFactory,
    plan_route_factory,
)

__all__ = [
    # Legs
    'WaypointBearing',
    'calculate_legs',
    'create_route',
    'recalculate_route',
    'calculate_to_waypoint',
    'total_distance_nm',
    'resolve_calculation_date',

    # Planning modes
    'PlanningParams',
    'RoutePlan',
    'RoutePlanner',
    'PlanningModeFactory',
    'plan_route_factory',
]
