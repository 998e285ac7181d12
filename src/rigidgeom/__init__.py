"""Rigid-transform algebra, metric queries and motion estimation in 2D/3D.

Subpackages:
- struct: point/vector tuples and lines
- geometry: tuple arithmetic and tuple-matrix products
- transform: SE2/SE3 transforms and invertible transform sequences
- metric: closest points and distances
- fitting: rigid motion estimation from point correspondences
"""

from rigidgeom.errors import (
    DegenerateGeometryError,
    DimensionMismatchError,
    GeometryError,
    InvalidIndexError,
    InvalidRotationError,
    MotionFitError,
    ParallelLinesError,
)
from rigidgeom.fitting.motion import fit_rms_error, fit_se2, fit_se3
from rigidgeom.metric.distance import (
    distance_line_point,
    distance_segment_point,
    distance_skew_lines,
)
from rigidgeom.struct.lines import LineParametric2D, LineParametric3D, LineSegment2D
from rigidgeom.struct.tuples import Point2D, Point3D, Vector2D, Vector3D
from rigidgeom.transform.se import SE2, SE3
from rigidgeom.transform.sequence import InvertibleTransformSequence

__version__ = "0.1.0"

__all__ = [
    "DegenerateGeometryError",
    "DimensionMismatchError",
    "GeometryError",
    "InvalidIndexError",
    "InvalidRotationError",
    "MotionFitError",
    "ParallelLinesError",
    "Point2D",
    "Point3D",
    "Vector2D",
    "Vector3D",
    "LineParametric2D",
    "LineParametric3D",
    "LineSegment2D",
    "SE2",
    "SE3",
    "InvertibleTransformSequence",
    "distance_line_point",
    "distance_segment_point",
    "distance_skew_lines",
    "fit_se2",
    "fit_se3",
    "fit_rms_error",
]
