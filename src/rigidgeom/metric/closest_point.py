"""Closest points on lines."""

from typing import Optional, TypeVar, Union

from rigidgeom.errors import DegenerateGeometryError
from rigidgeom.geometry.vector_ops import add_scaled, dot, sub
from rigidgeom.struct.lines import LineParametric2D, LineParametric3D
from rigidgeom.struct.tuples import GeoTuple

P = TypeVar("P", bound=GeoTuple)

Line = Union[LineParametric2D, LineParametric3D]


def closest_point_t(line: Line, point: GeoTuple) -> float:
    """Parameter ``t`` of the orthogonal projection of ``point`` onto ``line``.

    Args:
        line: 2D or 3D parametric line. Not modified.
        point: Point with the same dimension as the line. Not modified.

    Returns:
        ``dot(point - p, slope) / dot(slope, slope)``

    Raises:
        DegenerateGeometryError: If the line's slope is the zero vector
    """
    denom = dot(line.slope, line.slope)
    if denom == 0.0:
        raise DegenerateGeometryError("Line slope is the zero vector")

    offset = sub(point, line.p)
    return dot(offset, line.slope) / denom


def closest_point(line: Line, point: P, out: Optional[P] = None) -> P:
    """Point on ``line`` closest to ``point``. ``out`` may be ``point``."""
    t = closest_point_t(line, point)
    return add_scaled(1.0, line.p, t, line.slope, out if out is not None else line.p.copy())
