"""
Geodesy package.

Distance and bearing solvers plus the compass-point mapper.
"""

from .result import GeodesicResult, GeodesicMethod
from .geodesic import inverse, vincenty_inverse, haversine_inverse, direct
from .rhumb import rhumb_line, destination
from .cardinal import from_bearing, bearing_range, all_points

__all__ = [
    # Results
    'GeodesicResult',
    'GeodesicMethod',

    # Ellipsoidal solver
    'inverse',
    'vincenty_inverse',
    'haversine_inverse',
    'direct',

    # Constant bearing
    'rhumb_line',
    'destination',

    # Compass points
    'from_bearing',
    'bearing_range',
    'all_points',
]
