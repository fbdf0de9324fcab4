"""Tests for deck width and distance conversions."""
import math
import pytest
from mowtime.units import (
    meters_per_degree_lon, deck_width_to_degrees,
    deck_width_to_lat_degrees, deck_width_to_lon_degrees, path_length_meters,
)


def test_meters_per_degree_lon_shrinks_with_latitude():
    assert meters_per_degree_lon(0) == pytest.approx(111_320)
    assert meters_per_degree_lon(60) == pytest.approx(55_660)
    assert meters_per_degree_lon(90) == pytest.approx(0, abs=1e-9)


def test_deck_width_to_degrees_equator():
    # Both scales agree at the equator
    assert deck_width_to_degrees(24, 0) == pytest.approx(24 * 0.0254 / 111_320)


def test_deck_width_to_degrees_averages_scales():
    average = (111_320 + 55_660) / 2
    assert deck_width_to_degrees(24, 60) == pytest.approx(24 * 0.0254 / average)


def test_deck_width_to_degrees_wider_deck_bigger_step():
    assert deck_width_to_degrees(240, 37.775) > deck_width_to_degrees(24, 37.775)


def test_deck_width_to_degrees_pole_stays_finite():
    step = deck_width_to_degrees(24, 90)
    assert math.isfinite(step)
    assert step == pytest.approx(24 * 0.0254 / 55_660)


def test_deck_width_to_degrees_floor():
    assert deck_width_to_degrees(0.001, 37.0) == 1e-6
    assert deck_width_to_degrees(0.001, 37.0, min_step_degrees=1e-12) < 1e-6


def test_deck_width_to_degrees_non_finite_latitude():
    assert deck_width_to_degrees(24, float("nan")) == 1e-6


def test_deck_width_to_degrees_custom_scale():
    assert deck_width_to_degrees(100, 0, meters_per_degree_lat=100_000) == pytest.approx(2.54 / 100_000)


def test_deck_width_to_lat_degrees():
    assert deck_width_to_lat_degrees(24) == pytest.approx(24 * 0.0254 / 111_320)


def test_deck_width_to_lon_degrees():
    assert deck_width_to_lon_degrees(24, 60) == pytest.approx(24 * 0.0254 / 55_660)
    # Longitude scale collapses at the pole
    assert deck_width_to_lon_degrees(24, 90) > deck_width_to_lat_degrees(24)


# --- path_length_meters ---

def test_path_length_north():
    assert path_length_meters([(0.0, 0.0), (0.001, 0.0)]) == pytest.approx(111.32)


def test_path_length_east_at_sixty():
    assert path_length_meters([(60.0, 0.0), (60.0, 0.001)]) == pytest.approx(55.66, rel=1e-6)


def test_path_length_sums_segments():
    path = [(0.0, 0.0), (0.001, 0.0), (0.0, 0.0)]
    assert path_length_meters(path) == pytest.approx(2 * 111.32)


def test_path_length_short_paths():
    assert path_length_meters([]) == 0.0
    assert path_length_meters([(1.0, 2.0)]) == 0.0
