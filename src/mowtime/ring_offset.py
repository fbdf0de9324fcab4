"""Inward ring offsetting toward a fixed center."""

import math
from typing import Optional, Sequence

from .config import COORDINATE_TOLERANCE
from .geometry import Coordinate, Ring, centroid, distance, is_finite, is_in_any_hole, point_in_polygon


def offset_inward(
    ring: Sequence[Coordinate],
    center: Coordinate,
    step: float,
    holes: Sequence[Sequence[Coordinate]] = (),
    tolerance: float = COORDINATE_TOLERANCE,
) -> Ring:
    """Move every vertex one step toward ``center``.

    Vertices closer to the center than one step are pruned rather than
    projected past it. A vertex that lands inside an obstacle is pushed back
    out radially from the obstacle's centroid, or dropped if that fails. The
    surviving vertices keep their relative order.

    Args:
        ring: Current ring
        center: Point all vertices move toward
        step: Step length in degrees
        holes: Obstacle rings
        tolerance: Distances below this count as zero

    Returns:
        The next ring (may have fewer than 3 vertices)
    """
    next_ring = []

    for vertex in ring:
        dx = center[0] - vertex[0]
        dy = center[1] - vertex[1]
        d = math.hypot(dx, dy)

        if not math.isfinite(d) or d < step:
            continue

        moved = (vertex[0] + step * dx / d, vertex[1] + step * dy / d)
        if not is_finite(moved):
            continue

        if holes and is_in_any_hole(moved, holes):
            moved = _push_out_of_hole(moved, step, holes, tolerance)
            if moved is None:
                continue

        next_ring.append(moved)

    return next_ring


def _push_out_of_hole(
    point: Coordinate,
    step: float,
    holes: Sequence[Sequence[Coordinate]],
    tolerance: float,
) -> Optional[Coordinate]:
    """Push a point one step away from the nearest containing hole's centroid.

    Returns None when the push is undefined (point on the hole centroid) or
    still ends inside an obstacle.
    """
    containing = [hole for hole in holes if point_in_polygon(point, hole)]
    hole_center = min((centroid(hole) for hole in containing), key=lambda c: distance(point, c))

    dx = point[0] - hole_center[0]
    dy = point[1] - hole_center[1]
    d = math.hypot(dx, dy)
    if not math.isfinite(d) or d < tolerance:
        return None

    pushed = (point[0] + step * dx / d, point[1] + step * dy / d)
    if not is_finite(pushed) or is_in_any_hole(pushed, holes):
        return None
    return pushed
