"""Obstacle (hole) filtering and edge blocking."""

from typing import Sequence

from shapely.geometry import LineString, Polygon

from .geometry import Coordinate, Ring, is_in_any_hole, midpoint


def filter_outside_holes(ring: Sequence[Coordinate], holes: Sequence[Sequence[Coordinate]]) -> Ring:
    """Return the ring's vertices that lie outside every hole, in order.

    Always returns a new list so callers can mutate it freely.
    """
    if not holes:
        return list(ring)
    return [point for point in ring if not is_in_any_hole(point, holes)]


def edge_blocked(a: Coordinate, b: Coordinate, holes: Sequence[Sequence[Coordinate]], mode: str = 'midpoint') -> bool:
    """Check whether the edge a -> b should be treated as impassable.

    In 'midpoint' mode only the edge midpoint is sampled. This misses a long
    edge that clips a small obstacle away from its middle, and it flags an
    edge whose midpoint happens to sit in a hole it otherwise barely touches.
    'segment' mode runs a real segment/polygon intersection test instead, at
    the cost of different (non-default) output paths.

    Args:
        a: Edge start
        b: Edge end
        holes: Obstacle rings
        mode: 'midpoint' or 'segment'

    Returns:
        True if the edge crosses an obstacle
    """
    if not holes:
        return False

    if mode == 'midpoint':
        return is_in_any_hole(midpoint(a, b), holes)

    if mode == 'segment':
        segment = LineString([a, b])
        return any(segment.intersects(Polygon(hole)) for hole in holes)

    raise ValueError(f"Invalid edge check mode '{mode}'. Must be 'midpoint' or 'segment'")
