"""Tests for the spiral tracer and its termination policy."""
import pytest
from mowtime.geometry import polygon_area, coordinates_equal, is_in_any_hole
from mowtime.spiral import (
    SpiralTracer, TOO_FEW_VERTICES, COLLAPSED, CONVERGED, ITERATION_LIMIT,
)


# --- first loop ---

def test_first_loop_is_closed_outer_ring(centered_square):
    result = SpiralTracer().trace(centered_square, [], 0.6)
    assert result.path[:5] == centered_square + [centered_square[0]]


def test_second_loop_is_reversed(centered_square):
    result = SpiralTracer().trace(centered_square, [], 0.6)
    second_ring = result.rings[1]
    # After closing the first loop the path jumps to the end of the next ring and walks it backwards
    assert result.path[5] == second_ring[-1]
    assert result.path[6] == second_ring[-2]


def test_closed_input_ring_not_double_closed(centered_square):
    closed = centered_square + [centered_square[0]]
    result = SpiralTracer().trace(closed, [], 0.6)
    assert result.path[:5] == closed
    assert result.path[5] != closed[0]


# --- termination ---

def test_converged(centered_square):
    # Corner distance 1.414 -> 0.814 (area ratio 0.33) -> 0.214 (ratio 0.07)
    result = SpiralTracer().trace(centered_square, [], 0.6)
    assert result.reason == CONVERGED
    assert len(result.rings) == 2
    assert result.offsets == 2


def test_too_few_vertices_after_offset(centered_square):
    # Every vertex is within one step of the center after the first loop
    result = SpiralTracer().trace(centered_square, [], 1.5)
    assert result.reason == TOO_FEW_VERTICES
    assert len(result.rings) == 1
    assert len(result.path) == 5


def test_too_few_vertices_at_start():
    result = SpiralTracer().trace([(0.0, 0.0), (1.0, 1.0)], [], 0.1)
    assert result.reason == TOO_FEW_VERTICES
    assert result.path == []
    assert result.offsets == 0


def test_collapsed_ring():
    # Collinear vertices have zero area
    line = [(0.0, 0.0), (0.0, 1.0), (0.0, 2.0), (0.0, 3.0)]
    result = SpiralTracer().trace(line, [], 0.1)
    assert result.reason == COLLAPSED
    assert result.offsets == 1


def test_iteration_limit(centered_square):
    tracer = SpiralTracer(max_iterations=3)
    with pytest.warns(UserWarning, match="iteration limit"):
        result = tracer.trace(centered_square, [], 0.01)
    assert result.reason == ITERATION_LIMIT
    assert len(result.rings) == 4
    assert result.offsets == 4


def test_bounded_iterations_default(sf_rectangle):
    with pytest.warns(UserWarning):
        result = SpiralTracer().trace(sf_rectangle, [], 1e-6)
    assert result.reason == ITERATION_LIMIT
    assert result.offsets == 201
    assert len(result.rings) == 201


def test_custom_convergence_ratio(centered_square):
    # A strict ratio stops after the first offset
    result = SpiralTracer(convergence_ratio=0.9).trace(centered_square, [], 0.6)
    assert result.reason == CONVERGED
    assert result.offsets == 1


def test_accepted_rings_shrink_by_at_most_ninety_percent(centered_square):
    result = SpiralTracer().trace(centered_square, [], 0.05)
    for current, following in zip(result.rings, result.rings[1:]):
        assert polygon_area(following) >= 0.1 * polygon_area(current)


def test_no_adjacent_duplicates(centered_square):
    result = SpiralTracer().trace(centered_square, [], 0.05)
    for a, b in zip(result.path, result.path[1:]):
        assert not coordinates_equal(a, b)


# --- obstacles ---

def test_outer_ring_inside_hole_yields_nothing(unit_square):
    hole = [(-1.0, -1.0), (-1.0, 2.0), (2.0, 2.0), (2.0, -1.0)]
    result = SpiralTracer().trace(unit_square, [hole], 0.01)
    assert result.path == []
    assert result.reason == TOO_FEW_VERTICES


@pytest.mark.filterwarnings("ignore")
def test_path_avoids_hole_vertices(yard_with_shed):
    # Enough iterations for the north-east corner to run into the shed
    tracer = SpiralTracer(max_iterations=80)
    result = tracer.trace(yard_with_shed.outer, yard_with_shed.holes, 2e-6)
    assert result.path
    assert result.path[0] == yard_with_shed.outer[0]
    for point in result.path:
        assert not is_in_any_hole(point, yard_with_shed.holes)


def test_trace_ring_blocked_closing_edge():
    ring = [(0.0, 0.0), (0.0, 4.0), (4.0, 4.0), (4.0, 0.0)]
    hole = [(1.5, -0.5), (1.5, 0.5), (2.5, 0.5), (2.5, -0.5)]
    segment = SpiralTracer().trace_ring(ring, [hole])
    assert segment == ring


def test_trace_ring_blocked_last_edge_drops_far_end():
    ring = [(0.0, 0.0), (0.0, 4.0), (4.0, 4.0), (4.0, 0.0)]
    # Sits on the midpoint of the (4, 4) -> (4, 0) edge
    hole = [(3.5, 1.5), (3.5, 2.5), (4.5, 2.5), (4.5, 1.5)]
    segment = SpiralTracer().trace_ring(ring, [hole])
    assert segment == [(0.0, 0.0), (0.0, 4.0), (4.0, 4.0), (0.0, 0.0)]


def test_trace_ring_skips_vertex_in_hole():
    ring = [(0.0, 0.0), (0.0, 4.0), (2.0, 2.0), (4.0, 4.0), (4.0, 0.0)]
    hole = [(1.5, 1.5), (1.5, 2.5), (2.5, 2.5), (2.5, 1.5)]
    segment = SpiralTracer().trace_ring(ring, [hole])
    assert (2.0, 2.0) not in segment
    assert segment[0] == (0.0, 0.0)


def test_trace_ring_reverse():
    ring = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    segment = SpiralTracer().trace_ring(ring, [], reverse=True)
    assert segment == [(1.0, 1.0), (0.0, 1.0), (0.0, 0.0), (1.0, 1.0)]


def test_trace_ring_segment_mode_blocks_long_closing_edge():
    # Closing edge (0, 0) -> (0, 10) clips a rock near one end; its midpoint (0, 5) is clear
    ring = [(0.0, 10.0), (1.0, 10.0), (1.0, 0.0), (0.0, 0.0)]
    rock = [(-0.5, 1.5), (-0.5, 2.5), (0.2, 2.5), (0.2, 1.5)]
    midpoint_segment = SpiralTracer(edge_check='midpoint').trace_ring(ring, [rock])
    exact_segment = SpiralTracer(edge_check='segment').trace_ring(ring, [rock])
    assert midpoint_segment == ring + [ring[0]]
    assert exact_segment == ring
