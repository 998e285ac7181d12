"""Exception types raised by the geometry kernel.

Every failure is reported at the call site with a kind that callers can
branch on: shape problems, bad component indices, invalid rotations, and
degenerate geometry.
"""


class GeometryError(Exception):
    """Base class for all geometry kernel failures."""


class DimensionMismatchError(GeometryError, ValueError):
    """Raised when a matrix or tuple has the wrong shape for an operation."""


class InvalidIndexError(GeometryError, IndexError):
    """Raised when a tuple component index is outside its dimensionality."""


class InvalidRotationError(GeometryError, ValueError):
    """Raised when a rotation matrix is not orthonormal with determinant +1."""


class DegenerateGeometryError(GeometryError, ValueError):
    """Raised when the input geometry makes the result undefined."""


class ParallelLinesError(DegenerateGeometryError):
    """Raised when two lines are parallel and have no unique closest pair."""


class MotionFitError(DegenerateGeometryError):
    """Raised when point correspondences cannot determine a unique motion."""
