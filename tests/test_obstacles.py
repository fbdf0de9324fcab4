"""Tests for obstacle filtering and edge blocking."""
import pytest
from mowtime.obstacles import filter_outside_holes, edge_blocked


POND = [(1.0, 1.0), (1.0, 2.0), (2.0, 2.0), (2.0, 1.0)]


# --- filter_outside_holes ---

def test_filter_no_holes_returns_copy(unit_square):
    result = filter_outside_holes(unit_square, [])
    assert result == unit_square
    assert result is not unit_square


def test_filter_removes_vertices_in_holes_preserving_order():
    ring = [(0.0, 0.0), (1.5, 1.5), (0.0, 3.0), (3.0, 3.0), (1.2, 1.8), (3.0, 0.0)]
    assert filter_outside_holes(ring, [POND]) == [(0.0, 0.0), (0.0, 3.0), (3.0, 3.0), (3.0, 0.0)]


def test_filter_ring_inside_hole_is_emptied():
    ring = [(1.2, 1.2), (1.2, 1.8), (1.8, 1.8), (1.8, 1.2)]
    assert filter_outside_holes(ring, [POND]) == []


# --- edge_blocked ---

def test_edge_blocked_no_holes():
    assert not edge_blocked((0.0, 0.0), (3.0, 3.0), [])


def test_edge_blocked_midpoint_in_hole():
    # Midpoint (1.5, 1.5) is the middle of the pond
    assert edge_blocked((0.0, 0.0), (3.0, 3.0), [POND])


def test_edge_clear_of_hole():
    assert not edge_blocked((0.0, 0.0), (0.0, 3.0), [POND])


def test_midpoint_check_misses_small_obstacle_on_long_edge():
    # Small obstacle near one end of a long edge; the midpoint (0, 5) is clear
    rock = [(-0.5, 1.5), (-0.5, 2.5), (0.5, 2.5), (0.5, 1.5)]
    assert not edge_blocked((0.0, 0.0), (0.0, 10.0), [rock], mode='midpoint')


def test_segment_check_catches_small_obstacle_on_long_edge():
    rock = [(-0.5, 1.5), (-0.5, 2.5), (0.5, 2.5), (0.5, 1.5)]
    assert edge_blocked((0.0, 0.0), (0.0, 10.0), [rock], mode='segment')


def test_segment_check_clear_edge():
    assert not edge_blocked((0.0, 0.0), (0.0, 3.0), [POND], mode='segment')


def test_edge_blocked_invalid_mode():
    with pytest.raises(ValueError, match="Invalid edge check"):
        edge_blocked((0.0, 0.0), (1.0, 1.0), [POND], mode='raycast')
