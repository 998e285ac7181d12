"""Tests for point, line and segment distances."""

import math

import pytest

from rigidgeom.errors import DegenerateGeometryError, DimensionMismatchError, ParallelLinesError
from rigidgeom.metric.distance import (
    distance_line_point,
    distance_segment_point,
    distance_skew_lines,
)
from rigidgeom.struct.lines import LineParametric2D, LineParametric3D, LineSegment2D
from rigidgeom.struct.tuples import Point2D, Point3D, Vector2D, Vector3D


def test_line_point_3d():
    """Test distance from a point to the x axis."""
    line = LineParametric3D(Point3D(0.0, 0.0, 0.0), Vector3D(1.0, 0.0, 0.0))

    assert distance_line_point(line, Point3D(5.0, 3.0, 0.0)) == pytest.approx(3.0)


def test_line_point_2d():
    """Test distance to a diagonal line in the plane."""
    line = LineParametric2D(Point2D(0.0, 0.0), Vector2D(1.0, 1.0))

    assert distance_line_point(line, Point2D(2.0, 0.0)) == pytest.approx(math.sqrt(2.0))


def test_line_point_on_line():
    """Test a point on the line has zero distance."""
    line = LineParametric3D(Point3D(1.0, 2.0, 3.0), Vector3D(0.5, -1.0, 2.0))

    assert distance_line_point(line, line.point_on_line(-3.2)) == pytest.approx(0.0, abs=1e-12)


def test_line_point_dimension_mismatch():
    """Test a 2D point cannot be measured against a 3D line."""
    line = LineParametric3D(Point3D(), Vector3D(1.0, 0.0, 0.0))

    with pytest.raises(DimensionMismatchError):
        distance_line_point(line, Point2D(1.0, 1.0))


def test_segment_past_upper_end():
    """Test points past b measure to b itself."""
    segment = LineSegment2D(Point2D(0.0, 0.0), Point2D(10.0, 0.0))

    assert distance_segment_point(segment, Point2D(15.0, 5.0)) == pytest.approx(math.sqrt(50.0))


def test_segment_past_upper_end_uses_b_coordinates():
    """Test the upper clamp uses both coordinates of b."""
    segment = LineSegment2D(Point2D(0.0, 0.0), Point2D(10.0, 10.0))

    found = distance_segment_point(segment, Point2D(12.0, 12.0))

    assert found == pytest.approx(math.sqrt(8.0))


def test_segment_before_lower_end():
    """Test points before a measure to a."""
    segment = LineSegment2D(Point2D(1.0, 1.0), Point2D(5.0, 1.0))

    assert distance_segment_point(segment, Point2D(-2.0, 5.0)) == pytest.approx(5.0)


def test_segment_interior():
    """Test interior projections measure perpendicular to the segment."""
    segment = LineSegment2D(Point2D(0.0, 0.0), Point2D(10.0, 0.0))

    assert distance_segment_point(segment, Point2D(4.0, -3.0)) == pytest.approx(3.0)


def test_segment_degenerate():
    """Test a zero length segment is reported as degenerate."""
    segment = LineSegment2D(Point2D(1.0, 1.0), Point2D(1.0, 1.0))

    with pytest.raises(DegenerateGeometryError):
        distance_segment_point(segment, Point2D(0.0, 0.0))


def test_skew_lines_perpendicular():
    """Test perpendicular skew lines offset along z."""
    line0 = LineParametric3D(Point3D(0.0, 0.0, 0.0), Vector3D(1.0, 0.0, 0.0))
    line1 = LineParametric3D(Point3D(0.0, 0.0, 1.0), Vector3D(0.0, 1.0, 0.0))

    assert distance_skew_lines(line0, line1) == pytest.approx(1.0)


def test_skew_lines_general():
    """Test anchors away from the closest points."""
    line0 = LineParametric3D(Point3D(3.0, 0.0, 0.0), Vector3D(2.0, 0.0, 0.0))
    line1 = LineParametric3D(Point3D(0.0, -4.0, 2.5), Vector3D(1.0, 1.0, 0.0))

    # line1 passes over x=4 at y=0, z=2.5
    assert distance_skew_lines(line0, line1) == pytest.approx(2.5)


def test_intersecting_lines():
    """Test intersecting lines have zero distance."""
    line0 = LineParametric3D(Point3D(1.0, 1.0, 1.0), Vector3D(1.0, 2.0, 3.0))
    line1 = LineParametric3D(Point3D(1.0, 1.0, 1.0), Vector3D(-1.0, 0.0, 2.0))

    assert distance_skew_lines(line0, line1) == pytest.approx(0.0, abs=1e-12)


def test_parallel_lines_raise():
    """Test parallel lines are reported instead of returning NaN."""
    line0 = LineParametric3D(Point3D(0.0, 0.0, 0.0), Vector3D(1.0, 0.0, 0.0))
    line1 = LineParametric3D(Point3D(0.0, 2.0, 0.0), Vector3D(-3.0, 0.0, 0.0))

    with pytest.raises(ParallelLinesError):
        distance_skew_lines(line0, line1)


def test_parallel_lines_fallback():
    """Test the optional fallback measures between the parallel lines."""
    line0 = LineParametric3D(Point3D(0.0, 0.0, 0.0), Vector3D(1.0, 0.0, 0.0))
    line1 = LineParametric3D(Point3D(5.0, 2.0, 0.0), Vector3D(2.0, 0.0, 0.0))

    assert distance_skew_lines(line0, line1, parallel_fallback=True) == pytest.approx(2.0)


def test_skew_lines_zero_slope():
    """Test a zero slope is reported as degenerate."""
    line0 = LineParametric3D(Point3D(), Vector3D())
    line1 = LineParametric3D(Point3D(0.0, 0.0, 1.0), Vector3D(0.0, 1.0, 0.0))

    with pytest.raises(DegenerateGeometryError):
        distance_skew_lines(line0, line1)
