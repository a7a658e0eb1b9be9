"""
Unit tests for point-vs-polyline side classification.
"""

from street_sweep.geometry import closest_point, side_of_line
from street_sweep.models import LEFT, RIGHT

SOUTH_TO_NORTH = [(0.0, 0.0), (0.0, 1.0)]


def test_east_is_right_west_is_left():
    assert side_of_line(SOUTH_TO_NORTH, 0.001, 0.5) == RIGHT
    assert side_of_line(SOUTH_TO_NORTH, -0.001, 0.5) == LEFT


def test_reversed_line_flips_side():
    north_to_south = list(reversed(SOUTH_TO_NORTH))
    assert side_of_line(north_to_south, 0.001, 0.5) == LEFT


def test_degenerate_lines_are_undecidable():
    assert side_of_line([], 0.001, 0.5) is None
    assert side_of_line([(0.0, 0.0)], 0.001, 0.5) is None


def test_point_on_line_is_undecidable():
    assert side_of_line(SOUTH_TO_NORTH, 0.0, 0.5) is None


def test_uses_closest_segment_of_bent_line():
    # north, then east
    line = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    # just south of the eastbound leg -> right of it
    assert side_of_line(line, 0.6, 0.99) == RIGHT
    # just north of the eastbound leg -> left of it
    assert side_of_line(line, 0.6, 1.01) == LEFT


def test_projection_is_clamped_to_segment():
    i, cx, cy, d2 = closest_point(SOUTH_TO_NORTH, 0.5, 2.0)
    assert i == 0
    assert (cx, cy) == (0.0, 1.0)
    assert d2 == 0.25 + 1.0


def test_zero_length_segment_is_tolerated():
    line = [(0.0, 0.0), (0.0, 0.0), (0.0, 1.0)]
    assert side_of_line(line, 0.001, 0.5) == RIGHT
