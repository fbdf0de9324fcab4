"""Planar geometry primitives over (lat, lon) coordinates.

All math treats degrees as a flat Euclidean plane. That is fine for yard-sized
areas and wrong for anything spanning a noticeable fraction of the globe.
"""

import math
from typing import List, Sequence, Tuple

from shapely.geometry import Polygon

from .config import COORDINATE_TOLERANCE

Coordinate = Tuple[float, float]
Ring = List[Coordinate]


def point_in_polygon(point: Coordinate, ring: Sequence[Coordinate]) -> bool:
    """Crossing-number test. Points exactly on an edge may go either way."""
    x, y = point
    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def is_in_any_hole(point: Coordinate, holes: Sequence[Sequence[Coordinate]]) -> bool:
    return any(point_in_polygon(point, hole) for hole in holes)


def polygon_area(ring: Sequence[Coordinate]) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    n = len(ring)
    if n < 3:
        return 0.0
    a = 0.0
    for i in range(n):
        j = (i + 1) % n
        a += ring[i][0] * ring[j][1] - ring[j][0] * ring[i][1]
    return abs(a) / 2


def centroid(ring: Sequence[Coordinate]) -> Coordinate:
    """Unweighted mean of the ring's vertices (not the area centroid)."""
    n = len(ring)
    return (sum(p[0] for p in ring) / n, sum(p[1] for p in ring) / n)


def coordinates_equal(a: Coordinate, b: Coordinate, tolerance: float = COORDINATE_TOLERANCE) -> bool:
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def distance(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance in degree space."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def is_finite(point: Coordinate) -> bool:
    return math.isfinite(point[0]) and math.isfinite(point[1])


def append_connector(path: List[Coordinate], coordinate: Coordinate, tolerance: float = COORDINATE_TOLERANCE) -> None:
    """Append a connector point unless the path already ends there."""
    if not path or not coordinates_equal(path[-1], coordinate, tolerance):
        path.append(tuple(coordinate))


def extend_path(path: List[Coordinate], points: Sequence[Coordinate], tolerance: float = COORDINATE_TOLERANCE) -> None:
    """Extend a path in place, skipping points equal to their predecessor."""
    for point in points:
        append_connector(path, point, tolerance)


def closest_point(previous: Sequence[Coordinate], target: Coordinate) -> Coordinate:
    """Stitch target when moving from ``previous`` onto a new loop.

    Returns ``target`` unchanged: loops are joined at the new loop's first
    point, with no search along the previous loop.
    """
    return tuple(target)


def to_shapely_polygon(ring: Sequence[Coordinate], holes: Sequence[Sequence[Coordinate]] = ()) -> Polygon:
    """Shapely polygon in (lat, lon) axis order.

    Shapely is axis-order agnostic for predicates and areas, so the package
    convention is kept. Swap to (lon, lat) only when writing GeoJSON.
    """
    return Polygon([tuple(p) for p in ring], [[tuple(p) for p in hole] for hole in holes])
