"""Tests for closest point queries."""

import pytest

from rigidgeom.errors import DegenerateGeometryError
from rigidgeom.metric.closest_point import closest_point, closest_point_t
from rigidgeom.struct.lines import LineParametric2D, LineParametric3D
from rigidgeom.struct.tuples import Point2D, Point3D, Vector2D, Vector3D
from rigidgeom.testing import assert_tuple_equal


def test_closest_point_t_2d():
    """Test the projection parameter scales with the slope length."""
    line = LineParametric2D(Point2D(1.0, 1.0), Vector2D(2.0, 0.0))

    assert closest_point_t(line, Point2D(5.0, 7.0)) == pytest.approx(2.0)


def test_closest_point_3d():
    """Test the projected point lies at the foot of the perpendicular."""
    line = LineParametric3D(Point3D(0.0, 0.0, 0.0), Vector3D(1.0, 1.0, 0.0))

    found = closest_point(line, Point3D(2.0, 0.0, 3.0))

    assert_tuple_equal(Point3D(1.0, 1.0, 0.0), found)


def test_closest_point_writes_output():
    """Test the result can be written into the query point."""
    line = LineParametric2D(Point2D(0.0, 2.0), Vector2D(1.0, 0.0))
    p = Point2D(4.0, -3.0)

    closest_point(line, p, p)

    assert_tuple_equal(Point2D(4.0, 2.0), p)


def test_degenerate_slope():
    """Test a zero slope is reported as degenerate."""
    line = LineParametric3D(Point3D(1.0, 2.0, 3.0), Vector3D(0.0, 0.0, 0.0))

    with pytest.raises(DegenerateGeometryError):
        closest_point_t(line, Point3D(0.0, 0.0, 0.0))
