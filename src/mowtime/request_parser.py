"""Plan request file parsing (service JSON or GeoJSON)."""

import json
from pathlib import Path
from typing import Any, List, Optional

from shapely.errors import ShapelyError
from shapely.geometry import shape, Polygon, MultiPolygon

from .planner import Area, PlanRequest

COORDINATE_ORDERS = ('latlon', 'lonlat')


class RequestError(ValueError):
    """Raised when a request file is structurally unusable."""


class RequestParser:
    """Parse a plan request file into a PlanRequest."""

    def __init__(self, file_path: Path, coordinate_order: str = 'latlon', deck_width_inches: Optional[float] = None):
        """Initialize the parser with a request file.

        Args:
            file_path: Path to a service JSON body or a GeoJSON file
            coordinate_order: Pair order in service JSON, 'latlon' (default) or 'lonlat'. GeoJSON is always lon/lat.
            deck_width_inches: Deck width overriding whatever the file declares
        """
        if coordinate_order not in COORDINATE_ORDERS:
            raise RequestError(f"Invalid coordinate order '{coordinate_order}'. Must be 'latlon' or 'lonlat'")
        self.file_path = Path(file_path)
        self.coordinate_order = coordinate_order
        self.deck_width_inches = deck_width_inches
        self.request: Optional[PlanRequest] = None

    def parse(self) -> PlanRequest:
        """Parse the file.

        Returns:
            PlanRequest with (lat, lon) coordinates
        """
        try:
            with open(self.file_path, 'r') as f:
                data = json.load(f)
        except OSError as e:
            raise RequestError(f"Could not read {self.file_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise RequestError(f"Could not parse {self.file_path.name}: {e}") from e

        if not isinstance(data, dict):
            raise RequestError("Request must be a JSON object")

        if 'polygons' in data:
            self.request = self.parse_body(data)
        elif data.get('type') in ('Feature', 'FeatureCollection', 'Polygon', 'MultiPolygon'):
            self.request = self.parse_geojson(data)
        else:
            raise RequestError("Request must have a 'polygons' list or be GeoJSON")

        return self.request

    def parse_body(self, data: dict) -> PlanRequest:
        """Parse the service body: {"deckWidthInches": w, "polygons": [[outer, hole, ...], ...]}."""
        polygons = data['polygons']
        if not isinstance(polygons, list):
            raise RequestError("'polygons' must be a list")

        areas = []
        for index, rings in enumerate(polygons):
            if not isinstance(rings, list):
                raise RequestError(f"Polygon {index} must be a list of rings")
            parsed = [self._parse_ring(ring, f"polygon {index} ring {ring_index}")
                      for ring_index, ring in enumerate(rings)]
            areas.append(Area.from_rings(parsed))

        return PlanRequest(self._deck_width(data.get('deckWidthInches')), areas)

    def parse_geojson(self, data: dict) -> PlanRequest:
        """Parse GeoJSON polygons. Interiors become obstacles."""
        if data['type'] == 'FeatureCollection':
            features = data.get('features') or []
        elif data['type'] == 'Feature':
            features = [data]
        else:
            features = [{'type': 'Feature', 'geometry': data, 'properties': {}}]

        deck_width = None
        areas = []
        for feature in features:
            properties = feature.get('properties') or {}
            if deck_width is None and 'deckWidthInches' in properties:
                deck_width = properties['deckWidthInches']

            try:
                geometry = shape(feature['geometry'])
            except (KeyError, TypeError, ValueError, AttributeError, ShapelyError) as e:
                raise RequestError(f"Invalid GeoJSON geometry: {e}") from e

            if isinstance(geometry, Polygon):
                polygons = [geometry]
            elif isinstance(geometry, MultiPolygon):
                polygons = list(geometry.geoms)
            else:
                raise RequestError(f"Unsupported GeoJSON geometry '{geometry.geom_type}'")

            for polygon in polygons:
                if polygon.is_empty:
                    continue
                areas.append(Area(
                    _swap(polygon.exterior.coords),
                    [_swap(interior.coords) for interior in polygon.interiors],
                ))

        return PlanRequest(self._deck_width(deck_width), areas)

    def get_bounds(self) -> tuple:
        """Get the bounding box of all outer rings.

        Returns:
            Tuple of (min_lat, min_lon, max_lat, max_lon)
        """
        if self.request is None:
            raise ValueError("Must call parse() before get_bounds()")

        points = [p for area in self.request.areas for p in area.outer]
        if not points:
            return (0, 0, 0, 0)

        lats = [p[0] for p in points]
        lons = [p[1] for p in points]
        return (min(lats), min(lons), max(lats), max(lons))

    def _deck_width(self, declared: Any) -> float:
        value = self.deck_width_inches if self.deck_width_inches is not None else declared
        if value is None:
            raise RequestError("No deck width given (set deckWidthInches or pass --deck-width)")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise RequestError(f"Deck width must be a number, got {value!r}") from e

    def _parse_ring(self, ring: Any, label: str) -> List[tuple]:
        if not isinstance(ring, list):
            raise RequestError(f"{label} must be a list of coordinate pairs")

        coords = []
        for point in ring:
            if not isinstance(point, (list, tuple)) or len(point) != 2:
                raise RequestError(f"{label} contains a malformed coordinate: {point!r}")
            try:
                a, b = float(point[0]), float(point[1])
            except (TypeError, ValueError) as e:
                raise RequestError(f"{label} contains a non-numeric coordinate: {point!r}") from e
            coords.append((a, b) if self.coordinate_order == 'latlon' else (b, a))
        return coords


def _swap(coords) -> List[tuple]:
    """(lon, lat) -> (lat, lon)"""
    return [(c[1], c[0]) for c in coords]
