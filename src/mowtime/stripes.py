"""Back-and-forth stripe pattern over an area's bounding box."""

import math
from typing import List, Sequence

from .config import MIN_STRIPES, MAX_STRIPES, METERS_PER_DEGREE_LAT, MIN_STEP_DEGREES
from .geometry import Coordinate, is_in_any_hole
from .units import deck_width_to_lat_degrees, deck_width_to_lon_degrees


class StripeGenerator:
    """Generate alternating stripes across an area's longer axis.

    Stripes run along constant latitude when the box is at least as tall as it
    is wide, otherwise along constant longitude. Only the bounding box is
    considered; a stripe with either endpoint inside an obstacle is dropped
    whole.
    """

    def __init__(
        self,
        min_stripes: int = MIN_STRIPES,
        max_stripes: int = MAX_STRIPES,
        meters_per_degree_lat: float = METERS_PER_DEGREE_LAT,
        min_step_degrees: float = MIN_STEP_DEGREES,
    ):
        self.min_stripes = min_stripes
        self.max_stripes = max_stripes
        self.meters_per_degree_lat = meters_per_degree_lat
        self.min_step_degrees = min_step_degrees

    def generate(self, outer: Sequence[Coordinate], holes: Sequence[Sequence[Coordinate]], deck_width_inches: float) -> List[Coordinate]:
        """Generate stripe endpoints for one area.

        Args:
            outer: Outer boundary ring
            holes: Obstacle rings
            deck_width_inches: Cutting deck width in inches

        Returns:
            Stripe endpoints in mowing order
        """
        if not outer:
            return []

        lat_min = min(p[0] for p in outer)
        lat_max = max(p[0] for p in outer)
        lon_min = min(p[1] for p in outer)
        lon_max = max(p[1] for p in outer)

        lat_span = lat_max - lat_min
        lon_span = lon_max - lon_min
        center_lat = (lat_max + lat_min) / 2

        if abs(lat_span) >= abs(lon_span):
            spacing = deck_width_to_lat_degrees(deck_width_inches, self.meters_per_degree_lat, self.min_step_degrees)
            stripes = self._horizontal(lat_min, lat_max, lon_min, lon_max, spacing)
        else:
            spacing = deck_width_to_lon_degrees(
                deck_width_inches, center_lat, self.meters_per_degree_lat, self.min_step_degrees
            )
            stripes = self._vertical(lat_min, lat_max, lon_min, lon_max, spacing)

        if holes:
            stripes = self._drop_obstructed(stripes, holes)
        return stripes

    def _drop_obstructed(self, stripes: List[Coordinate], holes: Sequence[Sequence[Coordinate]]) -> List[Coordinate]:
        kept = []
        for start, end in zip(stripes[::2], stripes[1::2]):
            if is_in_any_hole(start, holes) or is_in_any_hole(end, holes):
                continue
            kept.extend([start, end])
        return kept

    def stripe_count(self, span: float, preferred_spacing: float) -> int:
        """Number of stripes for a span, clamped to [min_stripes, max_stripes]."""
        if not math.isfinite(span) or span <= 0:
            return self.min_stripes

        spacing = preferred_spacing if preferred_spacing > 0 else span / self.min_stripes
        estimated = math.ceil(span / spacing) + 1
        return max(self.min_stripes, min(self.max_stripes, estimated))

    def _horizontal(self, lat_min, lat_max, lon_min, lon_max, spacing) -> List[Coordinate]:
        span = lat_max - lat_min
        if not math.isfinite(span) or span == 0:
            return [(lat_min, lon_min), (lat_max, lon_max)]

        count = self.stripe_count(span, spacing)
        actual_spacing = span / (count - 1) if count > 1 else span
        stripes = []
        for index in range(count):
            lat = lat_min + actual_spacing * index
            # West to east on even stripes
            if index % 2 == 0:
                stripes.extend([(lat, lon_min), (lat, lon_max)])
            else:
                stripes.extend([(lat, lon_max), (lat, lon_min)])
        return stripes

    def _vertical(self, lat_min, lat_max, lon_min, lon_max, spacing) -> List[Coordinate]:
        span = lon_max - lon_min
        if not math.isfinite(span) or span == 0:
            return [(lat_min, lon_min), (lat_max, lon_max)]

        count = self.stripe_count(span, spacing)
        actual_spacing = span / (count - 1) if count > 1 else span
        stripes = []
        for index in range(count):
            lon = lon_min + actual_spacing * index
            # South to north on even stripes
            if index % 2 == 0:
                stripes.extend([(lat_min, lon), (lat_max, lon)])
            else:
                stripes.extend([(lat_max, lon), (lat_min, lon)])
        return stripes
