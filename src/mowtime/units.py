"""Conversions between real-world distances and geographic degrees."""

import math
from typing import Sequence

import numpy as np

from .config import METERS_PER_INCH, METERS_PER_DEGREE_LAT, MIN_STEP_DEGREES
from .geometry import Coordinate


def meters_per_degree_lon(latitude: float, meters_per_degree_lat: float = METERS_PER_DEGREE_LAT) -> float:
    """Meters spanned by one degree of longitude at the given latitude."""
    return meters_per_degree_lat * math.cos(math.radians(latitude))


def deck_width_to_degrees(
    deck_width_inches: float,
    latitude: float,
    meters_per_degree_lat: float = METERS_PER_DEGREE_LAT,
    min_step_degrees: float = MIN_STEP_DEGREES,
) -> float:
    """Convert a deck width to one angular step usable on both axes.

    Offsetting moves points along mixed lat/lon directions with a single
    scalar, so the step uses the mean of the latitude and longitude scales at
    ``latitude``. The result never drops below ``min_step_degrees``, which also
    covers the polar case where the longitude scale vanishes.

    Args:
        deck_width_inches: Cutting deck width in inches
        latitude: Reference latitude in degrees (usually the area centroid)
        meters_per_degree_lat: Meters per degree of latitude
        min_step_degrees: Smallest step ever returned

    Returns:
        Step size in degrees
    """
    deck_width_meters = deck_width_inches * METERS_PER_INCH
    average_scale = (meters_per_degree_lat + meters_per_degree_lon(latitude, meters_per_degree_lat)) / 2
    step = deck_width_meters / average_scale if average_scale > 0 else math.nan
    if not math.isfinite(step):
        return min_step_degrees
    return max(step, min_step_degrees)


def deck_width_to_lat_degrees(
    deck_width_inches: float,
    meters_per_degree_lat: float = METERS_PER_DEGREE_LAT,
    min_step_degrees: float = MIN_STEP_DEGREES,
) -> float:
    """Deck width as degrees of latitude."""
    return max((deck_width_inches * METERS_PER_INCH) / meters_per_degree_lat, min_step_degrees)


def deck_width_to_lon_degrees(
    deck_width_inches: float,
    latitude: float,
    meters_per_degree_lat: float = METERS_PER_DEGREE_LAT,
    min_step_degrees: float = MIN_STEP_DEGREES,
) -> float:
    """Deck width as degrees of longitude at ``latitude``."""
    scale = meters_per_degree_lon(latitude, meters_per_degree_lat)
    if not math.isfinite(scale) or scale <= 0:
        return min_step_degrees
    return max((deck_width_inches * METERS_PER_INCH) / scale, min_step_degrees)


def path_length_meters(path: Sequence[Coordinate], meters_per_degree_lat: float = METERS_PER_DEGREE_LAT) -> float:
    """Approximate ground length of a path (equirectangular, per segment)."""
    if len(path) < 2:
        return 0.0

    coords = np.asarray(path, dtype=float)
    lat = coords[:, 0]
    lon = coords[:, 1]

    mid_lat = np.radians((lat[1:] + lat[:-1]) / 2)
    d_north = np.diff(lat) * meters_per_degree_lat
    d_east = np.diff(lon) * meters_per_degree_lat * np.cos(mid_lat)

    return float(np.sum(np.hypot(d_north, d_east)))
