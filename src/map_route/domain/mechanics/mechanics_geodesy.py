# map_route/domain/mechanics/mechanics_geodesy.py
"""
Surface distance on a slightly oblate spheroid (Lambert's formula).

Accurate to a few metres over regional extents, which is all the router needs:
the same function is the edge cost and the A* heuristic.

`spheroid_distance_m` feeds `(1 - f) * tan(lat)` straight into the correction
terms. `parametric_spheroid_distance_m` uses the textbook parametric latitude
`atan((1 - f) * tan(lat))` instead; on north-south legs around 47 degrees the two
differ by about 0.2%. Both are registered in `METRICS`.
"""

import math
from collections.abc import Callable

from map_route.domain.entities.geography import Point

FLATTENING = 1 / 298.25
RADIUS_M = 6378137.0


def _lambert(x1, y1, x2, y2, reduce: Callable[[float], float]) -> float:
    if x1 == x2 and y1 == y2:
        return 0.0

    lat1, lat2 = math.radians(y1), math.radians(y2)
    lon1, lon2 = math.radians(x1), math.radians(x2)

    r1, r2 = reduce(lat1), reduce(lat2)
    P = (r1 + r2) / 2
    Q = (r2 - r1) / 2

    # central angle, haversine form
    h = math.sin((lat1 - lat2) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(
        (lon1 - lon2) / 2
    ) ** 2
    sigma = 2 * math.asin(min(1.0, math.sqrt(h)))
    if sigma == 0.0:
        return 0.0

    X = (sigma - math.sin(sigma)) * (math.sin(P) ** 2 * math.cos(Q) ** 2) / math.cos(sigma / 2) ** 2
    Y = (sigma + math.sin(sigma)) * (math.sin(Q) ** 2 * math.cos(P) ** 2) / math.sin(sigma / 2) ** 2

    return RADIUS_M * (sigma - (FLATTENING / 2) * (X + Y))


def spheroid_distance_m(x1: float, y1: float, x2: float, y2: float) -> float:
    """Distance in meters between (x1, y1) and (x2, y2), given as lon/lat degrees."""
    return _lambert(x1, y1, x2, y2, lambda lat: (1 - FLATTENING) * math.tan(lat))


def parametric_spheroid_distance_m(x1: float, y1: float, x2: float, y2: float) -> float:
    """Same as `spheroid_distance_m` with reduced latitudes taken through atan."""
    return _lambert(x1, y1, x2, y2, lambda lat: math.atan((1 - FLATTENING) * math.tan(lat)))


METRICS = {
    "reference": spheroid_distance_m,
    "parametric": parametric_spheroid_distance_m,
}


def point_distance_m(a: Point, b: Point) -> float:
    return spheroid_distance_m(a.x, a.y, b.x, b.y)
