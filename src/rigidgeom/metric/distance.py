"""Distances between points, lines and line segments.

Closely related to the closest point functions in
``rigidgeom.metric.closest_point``: most distances are found by locating the
closest point and measuring to it.
"""

import logging
import math

from rigidgeom.errors import DegenerateGeometryError, DimensionMismatchError, ParallelLinesError
from rigidgeom.geometry.vector_ops import dot, sub
from rigidgeom.metric.closest_point import Line, closest_point_t
from rigidgeom.struct.lines import LineParametric3D, LineSegment2D
from rigidgeom.struct.tuples import GeoTuple, Point2D

logger = logging.getLogger(__name__)

DEFAULT_PARALLEL_TOL = 1e-12


def distance_line_point(line: Line, point: GeoTuple) -> float:
    """Distance from ``point`` to the closest point on an infinite line.

    Works for 2D and 3D lines.

    Args:
        line: Parametric line. Not modified.
        point: The point. Not modified.

    Returns:
        Euclidean distance between ``point`` and its projection on the line

    Raises:
        DimensionMismatchError: If the point and line dimensions differ
        DegenerateGeometryError: If the line's slope is the zero vector
    """
    if point.DIMENSION != line.p.DIMENSION:
        raise DimensionMismatchError(
            f"{point.DIMENSION}D point cannot be measured against a {line.p.DIMENSION}D line"
        )
    t = closest_point_t(line, point)
    return line.point_on_line(t).distance(point)


def distance_segment_point(segment: LineSegment2D, point: Point2D) -> float:
    """Distance from ``point`` to the closest point on a line segment.

    The projection parameter is bounded to ``[0, 1]``; past either end the
    distance to that endpoint is returned.

    Args:
        segment: Line segment. Not modified.
        point: The point. Not modified.

    Returns:
        Euclidean distance to the closest point on the segment

    Raises:
        DegenerateGeometryError: If both endpoints coincide
    """
    slope = sub(segment.b, segment.a)
    denom = dot(slope, slope)
    if denom == 0.0:
        raise DegenerateGeometryError("Line segment endpoints are identical")

    t = dot(sub(point, segment.a), slope) / denom

    if t < 0.0:
        return segment.a.distance(point)
    if t > 1.0:
        return segment.b.distance(point)

    dx = segment.a.x + t * slope.x - point.x
    dy = segment.a.y + t * slope.y - point.y
    return math.sqrt(dx * dx + dy * dy)


def distance_skew_lines(
    line0: LineParametric3D,
    line1: LineParametric3D,
    parallel_tol: float = DEFAULT_PARALLEL_TOL,
    parallel_fallback: bool = False,
) -> float:
    """Distance between the closest points of two 3D lines.

    Solves the 2x2 normal equations for the parameters of the closest pair
    of points (see Paul Bourke, "The shortest line between two lines in 3D").

    Args:
        line0: First line. Not modified.
        line1: Second line. Not modified.
        parallel_tol: Lines are parallel when the normal equation determinant
            is at most ``parallel_tol * d00 * d11``
        parallel_fallback: If True, parallel lines return the distance from
            ``line0.p`` to ``line1`` instead of raising

    Returns:
        Distance between the two lines

    Raises:
        ParallelLinesError: If the lines are parallel and ``parallel_fallback``
            is False
        DegenerateGeometryError: If either slope is the zero vector
    """
    d00 = dot(line0.slope, line0.slope)
    d11 = dot(line1.slope, line1.slope)
    if d00 == 0.0 or d11 == 0.0:
        raise DegenerateGeometryError("Line slope is the zero vector")

    w0 = sub(line0.p, line1.p)
    d01 = dot(w0, line1.slope)
    d10 = dot(line1.slope, line0.slope)
    dw0 = dot(w0, line0.slope)

    denom = d00 * d11 - d10 * d10
    if abs(denom) <= parallel_tol * d00 * d11:
        if parallel_fallback:
            logger.warning("Lines are parallel, measuring from line0.p to line1")
            return distance_line_point(line1, line0.p)
        raise ParallelLinesError("Lines are parallel, closest points are not unique")

    t0 = (d01 * d10 - dw0 * d11) / denom
    t1 = (d01 + t0 * d10) / d11

    return line0.point_on_line(t0).distance(line1.point_on_line(t1))
