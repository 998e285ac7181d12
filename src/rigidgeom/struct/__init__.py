"""Point/vector tuples and line primitives."""

from rigidgeom.struct.lines import LineParametric2D, LineParametric3D, LineSegment2D
from rigidgeom.struct.tuples import (
    GeoTuple,
    GeoTuple2D,
    GeoTuple3D,
    Point2D,
    Point3D,
    Vector2D,
    Vector3D,
    new_like,
)

__all__ = [
    "GeoTuple",
    "GeoTuple2D",
    "GeoTuple3D",
    "Point2D",
    "Point3D",
    "Vector2D",
    "Vector3D",
    "new_like",
    "LineParametric2D",
    "LineParametric3D",
    "LineSegment2D",
]
