"""Shared test fixtures for mowtime tests."""
import json

import matplotlib
matplotlib.use("Agg")

import pytest

from mowtime.planner import Area, PlanRequest


@pytest.fixture
def sf_rectangle():
    """About 1.1 km x 0.9 km block in San Francisco, (lat, lon)."""
    return [(37.77, -122.42), (37.78, -122.42), (37.78, -122.41), (37.77, -122.41)]


@pytest.fixture
def second_rectangle():
    """Disjoint block east of sf_rectangle."""
    return [(37.77, -122.40), (37.775, -122.40), (37.775, -122.395), (37.77, -122.395)]


@pytest.fixture
def unit_square():
    return [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


@pytest.fixture
def centered_square():
    """Side-2 square centered on the origin."""
    return [(-1.0, -1.0), (-1.0, 1.0), (1.0, 1.0), (1.0, -1.0)]


@pytest.fixture
def yard_with_shed():
    """Small yard (roughly 30 m x 30 m) with a shed near the north-east corner."""
    outer = [(40.0, -75.0), (40.0003, -75.0), (40.0003, -74.9996), (40.0, -74.9996)]
    shed = [(40.0002, -74.99975), (40.00025, -74.99975), (40.00025, -74.99968), (40.0002, -74.99968)]
    return Area(outer, [shed])


@pytest.fixture
def request_file(tmp_path, sf_rectangle):
    """Service-style request body written to disk."""
    body = {
        "deckWidthInches": 240,
        "polygons": [[[list(p) for p in sf_rectangle]]],
    }
    path = tmp_path / "request.json"
    path.write_text(json.dumps(body))
    return path


@pytest.fixture
def sf_request(sf_rectangle):
    return PlanRequest(24, [Area(sf_rectangle)])
