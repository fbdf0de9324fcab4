"""Inward spiral (concentric ring) coverage tracing."""

import warnings
from typing import List, Optional, Sequence

from .config import (
    MAX_ITERATIONS, CONVERGENCE_RATIO, COLLAPSE_AREA, MIN_RING_VERTICES, COORDINATE_TOLERANCE,
)
from .geometry import (
    Coordinate, Ring, centroid, polygon_area, coordinates_equal, is_in_any_hole,
    append_connector, extend_path, closest_point,
)
from .obstacles import filter_outside_holes, edge_blocked
from .ring_offset import offset_inward

# Termination reasons
TOO_FEW_VERTICES = 'too_few_vertices'
COLLAPSED = 'collapsed'
CONVERGED = 'converged'
ITERATION_LIMIT = 'iteration_limit'


class SpiralResult:
    """Outcome of tracing one area."""

    def __init__(self, path: List[Coordinate], rings: List[Ring], offsets: int, reason: str):
        """
        Args:
            path: Traced coordinates for the area
            rings: Every ring that was traced, outermost first
            offsets: Number of inward offsets computed
            reason: Why the spiral stopped
        """
        self.path = path
        self.rings = rings
        self.offsets = offsets
        self.reason = reason

    def __repr__(self):
        return f"SpiralResult(points={len(self.path)}, rings={len(self.rings)}, reason={self.reason!r})"


class SpiralTracer:
    """Trace an area as a sequence of shrinking rings."""

    def __init__(
        self,
        max_iterations: int = MAX_ITERATIONS,
        convergence_ratio: float = CONVERGENCE_RATIO,
        collapse_area: float = COLLAPSE_AREA,
        min_ring_vertices: int = MIN_RING_VERTICES,
        edge_check: str = 'midpoint',
        tolerance: float = COORDINATE_TOLERANCE,
    ):
        """Initialize the spiral tracer.

        Args:
            max_iterations: Iteration index at which the spiral stops regardless (default: 200)
            convergence_ratio: Stop when the next ring's area falls below this fraction of the current one (default: 0.1)
            collapse_area: Stop when the next ring's area falls below this, in square degrees (default: 1e-10)
            min_ring_vertices: Stop when the next ring has fewer vertices (default: 3)
            edge_check: Obstacle test for traced edges, 'midpoint' or 'segment' (default: 'midpoint')
            tolerance: Coordinate equality tolerance in degrees (default: 1e-10)
        """
        self.max_iterations = max_iterations
        self.convergence_ratio = convergence_ratio
        self.collapse_area = collapse_area
        self.min_ring_vertices = min_ring_vertices
        self.edge_check = edge_check
        self.tolerance = tolerance

    def trace(
        self,
        outer: Sequence[Coordinate],
        holes: Sequence[Sequence[Coordinate]],
        step: float,
        center: Optional[Coordinate] = None,
    ) -> SpiralResult:
        """Trace the outer ring, then keep offsetting inward and tracing.

        Every iteration traces the current ring (reversed on odd iterations),
        joins it onto the path, and offsets it one step toward ``center``. The
        loop stops on the first of: too few vertices, a collapsed ring, a ring
        that shrank below ``convergence_ratio`` of its predecessor, or the
        iteration ceiling.

        Args:
            outer: Outer boundary ring
            holes: Obstacle rings
            step: Offset per iteration in degrees
            center: Point rings shrink toward (default: centroid of ``outer``)

        Returns:
            SpiralResult for the area
        """
        holes = [list(hole) for hole in holes]
        if center is None:
            center = centroid(outer)

        current = filter_outside_holes(outer, holes)
        if len(current) < self.min_ring_vertices:
            return SpiralResult([], [], 0, TOO_FEW_VERTICES)

        path: List[Coordinate] = []
        rings: List[Ring] = []
        reason = ITERATION_LIMIT
        offsets = 0

        for iteration in range(self.max_iterations + 1):
            segment = self.trace_ring(current, holes, reverse=iteration % 2 == 1)
            if segment:
                if path:
                    append_connector(path, closest_point(path, segment[0]), self.tolerance)
                extend_path(path, segment, self.tolerance)
            rings.append(current)

            next_ring = offset_inward(current, center, step, holes, self.tolerance)
            offsets += 1

            reason = self._termination_reason(current, next_ring, iteration)
            if reason is not None:
                break
            current = next_ring

        if reason == ITERATION_LIMIT:
            warnings.warn(f"Spiral stopped at the iteration limit ({self.max_iterations}) before converging")

        return SpiralResult(path, rings, offsets, reason)

    def trace_ring(self, ring: Sequence[Coordinate], holes: Sequence[Sequence[Coordinate]], reverse: bool = False) -> List[Coordinate]:
        """Turn one ring into a path segment, leaving gaps where obstacles block edges.

        Args:
            ring: Ring to trace
            holes: Obstacle rings
            reverse: Walk the ring backwards

        Returns:
            Coordinates of the traced segment, closed when possible
        """
        ordered = list(reversed(ring)) if reverse else list(ring)

        if not holes:
            segment = ordered
        else:
            segment = []
            for a, b in zip(ordered, ordered[1:]):
                if is_in_any_hole(a, holes):
                    continue
                if not segment or not coordinates_equal(segment[-1], a, self.tolerance):
                    segment.append(a)
                # A blocked edge leaves a gap; its far end is only reached via the next edge
                if not is_in_any_hole(b, holes) and not edge_blocked(a, b, holes, self.edge_check):
                    segment.append(b)

        if len(segment) > 1 and not coordinates_equal(segment[0], segment[-1], self.tolerance):
            if not edge_blocked(segment[-1], segment[0], holes, self.edge_check):
                segment.append(segment[0])

        return segment

    def _termination_reason(self, current: Ring, next_ring: Ring, iteration: int) -> Optional[str]:
        if len(next_ring) < self.min_ring_vertices:
            return TOO_FEW_VERTICES

        next_area = polygon_area(next_ring)
        if next_area < self.collapse_area:
            return COLLAPSED
        if next_area < self.convergence_ratio * polygon_area(current):
            return CONVERGED

        if iteration >= self.max_iterations:
            return ITERATION_LIMIT
        return None
