"""
Services package.

Provides business logic layer between API and core algorithms.

Modules:
    magvar_service: Declination lookups and true/magnetic conversion
    route_service: Route planning from waypoint text, exports, point-to-point solving
"""

from services.magvar_service import MagneticVariationService, get_magvar_service
from services.route_service import RouteService, RouteRequest, WaypointInput, get_route_service

__all__ = [
    'MagneticVariationService',
    'get_magvar_service',
    'RouteService',
    'RouteRequest',
    'WaypointInput',
    'get_route_service',
]
