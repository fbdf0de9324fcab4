"""Coverage path planning across one or more areas.

Coordinates are (latitude, longitude) pairs throughout.
"""

from typing import List, Optional, Sequence, Dict, Any

from .config import PlannerConfig
from .geometry import Coordinate, Ring, centroid, append_connector, extend_path
from .obstacles import filter_outside_holes
from .spiral import SpiralTracer
from .stripes import StripeGenerator
from .units import deck_width_to_degrees


class Area:
    """One mowable region: an outer ring minus zero or more obstacle rings."""

    def __init__(self, outer: Sequence[Coordinate], holes: Optional[Sequence[Sequence[Coordinate]]] = None):
        self.outer: Ring = [(float(p[0]), float(p[1])) for p in outer]
        self.holes: List[Ring] = [[(float(p[0]), float(p[1])) for p in hole] for hole in (holes or [])]

    @classmethod
    def from_rings(cls, rings: Sequence[Sequence[Coordinate]]) -> 'Area':
        """Build from a ring list where the first ring is the outer boundary."""
        if not rings:
            return cls([])
        return cls(rings[0], rings[1:])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'outer': [list(p) for p in self.outer],
            'holes': [[list(p) for p in hole] for hole in self.holes],
        }

    def __repr__(self):
        return f"Area(vertices={len(self.outer)}, holes={len(self.holes)})"


class PlanRequest:
    """Deck width plus the areas to mow, in order."""

    def __init__(self, deck_width_inches: float, areas: Sequence[Area]):
        self.deck_width_inches = float(deck_width_inches)
        self.areas = list(areas)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'deckWidthInches': self.deck_width_inches,
            'polygons': [[[list(p) for p in ring] for ring in [area.outer] + area.holes] for area in self.areas],
        }


class PlanResponse:
    """The concatenated mowing path."""

    def __init__(self, path: List[Coordinate]):
        self.path = path

    def to_dict(self) -> Dict[str, Any]:
        return {'path': [[lat, lon] for lat, lon in self.path]}

    def __len__(self):
        return len(self.path)


class CoveragePlanner:
    """Plan a mowing path for every area of a request."""

    def __init__(self, config: Optional[PlannerConfig] = None):
        """Initialize the planner.

        Args:
            config: Planner settings (default: PlannerConfig())
        """
        self.config = config or PlannerConfig()
        self.tracer = SpiralTracer(
            max_iterations=self.config.max_iterations,
            convergence_ratio=self.config.convergence_ratio,
            collapse_area=self.config.collapse_area,
            min_ring_vertices=self.config.min_ring_vertices,
            edge_check=self.config.edge_check,
            tolerance=self.config.coordinate_tolerance,
        )
        self.stripes = StripeGenerator(
            min_stripes=self.config.min_stripes,
            max_stripes=self.config.max_stripes,
            meters_per_degree_lat=self.config.meters_per_degree_lat,
            min_step_degrees=self.config.min_step_degrees,
        )

    def plan(self, request: PlanRequest) -> PlanResponse:
        """Plan the full path, joining areas in request order.

        Areas that produce nothing (degenerate or fully obstructed) are
        skipped without interrupting the rest of the path.
        """
        path: List[Coordinate] = []
        tolerance = self.config.coordinate_tolerance

        for area in request.areas:
            segment = self.plan_area(area, request.deck_width_inches)
            if not segment:
                continue
            append_connector(path, segment[0], tolerance)
            extend_path(path, segment, tolerance)

        return PlanResponse(path)

    def plan_area(self, area: Area, deck_width_inches: float) -> List[Coordinate]:
        """Path segment for a single area using the configured pattern.

        Both patterns start at the first outer vertex outside every obstacle.
        Areas left with fewer than ``min_ring_vertices`` such vertices produce
        nothing.
        """
        reachable = filter_outside_holes(area.outer, area.holes)
        if len(reachable) < self.config.min_ring_vertices:
            return []

        if self.config.pattern == 'stripes':
            segment: List[Coordinate] = [reachable[0]]
            extend_path(segment, self.stripes.generate(area.outer, area.holes, deck_width_inches),
                        self.config.coordinate_tolerance)
            return segment

        center = centroid(area.outer)
        step = deck_width_to_degrees(
            deck_width_inches,
            center[0],
            meters_per_degree_lat=self.config.meters_per_degree_lat,
            min_step_degrees=self.config.min_step_degrees,
        )
        return self.tracer.trace(area.outer, area.holes, step, center=center).path


def plan_coverage_path(request: PlanRequest, config: Optional[PlannerConfig] = None) -> PlanResponse:
    """Plan a coverage path for ``request``. Deterministic and side-effect free."""
    return CoveragePlanner(config).plan(request)
