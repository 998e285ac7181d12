"""Rigid motion estimation from point correspondences.

Finds the rotation and translation that minimize the sum of squared
distances between the transformed source points and their matching
destination points. The rotation comes from the singular value
decomposition of the cross-covariance matrix of the centered point sets
(the absolute orientation problem). Every pair has equal weight; outliers
must be removed by the caller.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from rigidgeom.errors import DimensionMismatchError, MotionFitError
from rigidgeom.struct.tuples import GeoTuple
from rigidgeom.transform.se import SE2, SE3

logger = logging.getLogger(__name__)

MIN_POINTS = 3
DEFAULT_SINGULAR_TOL = 1e-10
COINCIDENT_TOL = 1e-12

PointSet = Union[np.ndarray, Sequence[GeoTuple]]


def _as_array(points: PointSet, dimension: int, name: str) -> np.ndarray:
    """Convert a point set into an (N, dimension) float64 array."""
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
    else:
        arr = np.array([np.asarray(p, dtype=np.float64) for p in points], dtype=np.float64)
        if arr.size == 0:
            arr = arr.reshape(0, dimension)

    if arr.ndim != 2 or arr.shape[1] != dimension:
        raise DimensionMismatchError(
            f"{name} must be {dimension}D points with shape (N, {dimension}), got {arr.shape}"
        )
    return arr


def _check_correspondences(src: np.ndarray, dst: np.ndarray) -> None:
    if src.shape[0] != dst.shape[0]:
        raise DimensionMismatchError(
            f"Point sets differ in length: {src.shape[0]} source vs {dst.shape[0]} destination"
        )
    if src.shape[0] < MIN_POINTS:
        raise MotionFitError(
            f"At least {MIN_POINTS} point pairs are required, got {src.shape[0]}"
        )
    if not (np.all(np.isfinite(src)) and np.all(np.isfinite(dst))):
        raise MotionFitError("Point sets contain non-finite values")


def _check_spread(centered: np.ndarray, points: np.ndarray, name: str) -> None:
    """Raise if every point of a set coincides with its centroid."""
    scale = max(1.0, float(np.max(np.abs(points))))
    spread = float(np.max(np.linalg.norm(centered, axis=1)))
    if spread <= COINCIDENT_TOL * scale:
        raise MotionFitError(f"All {name} points coincide, the motion is undetermined")


def _cross_covariance(src: np.ndarray, dst: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Centroids of both sets and ``H = sum (p_i - c_p)(q_i - c_q)^T``."""
    c_src = src.mean(axis=0)
    c_dst = dst.mean(axis=0)
    _check_spread(src - c_src, src, "src")
    _check_spread(dst - c_dst, dst, "dst")
    H = (src - c_src).T @ (dst - c_dst)
    return c_src, c_dst, H


def _rotation_from_covariance(H: np.ndarray, min_rank: int, singular_tol: float) -> np.ndarray:
    """Best proper rotation ``R = V*U^T`` from ``H = U*S*V^T``.

    Args:
        H: Square cross-covariance matrix
        min_rank: Number of singular values that must be non-negligible
        singular_tol: Relative threshold for a negligible singular value

    Returns:
        Rotation matrix with determinant +1

    Raises:
        MotionFitError: If ``H`` is rank deficient
    """
    U, S, Vt = np.linalg.svd(H)
    logger.debug(f"Cross-covariance singular values: {S}")

    # With min_rank=1 this only rejects S[0] == 0; coincident sets fail _check_spread first.
    if S[min_rank - 1] <= singular_tol * S[0]:
        raise MotionFitError(
            f"Correspondences are degenerate, singular values {S} leave the rotation undetermined"
        )

    R = Vt.T @ U.T
    if np.linalg.det(R) < 0:
        logger.warning("Fitted rotation is a reflection, flipping the smallest singular vector")
        Vt[-1, :] *= -1
        R = Vt.T @ U.T
    return R


def fit_se3(src: PointSet, dst: PointSet, config: Optional[dict] = None) -> SE3:
    """Estimate the 3D rigid motion that maps ``src`` onto ``dst``.

    Args:
        src: N source points, as 3D tuples or an (N, 3) array
        dst: N destination points, index aligned with ``src``
        config: Optional config with:
            - singular_tol: float, relative threshold below which a
              singular value of the cross-covariance counts as zero

    Returns:
        SE3 transform ``T`` minimizing ``sum ||T(src_i) - dst_i||^2``

    Raises:
        DimensionMismatchError: If the sets differ in length or are not 3D
        MotionFitError: If fewer than 3 pairs are given or the points are
            collinear or identical
    """
    if config is None:
        config = {}
    singular_tol = float(config.get("singular_tol", DEFAULT_SINGULAR_TOL))

    src_arr = _as_array(src, 3, "src")
    dst_arr = _as_array(dst, 3, "dst")
    _check_correspondences(src_arr, dst_arr)

    c_src, c_dst, H = _cross_covariance(src_arr, dst_arr)
    # Coplanar points still give a unique rotation once reflections are removed.
    R = _rotation_from_covariance(H, min_rank=2, singular_tol=singular_tol)
    t = c_dst - R @ c_src

    logger.debug(f"Fitted SE3 from {src_arr.shape[0]} pairs")
    return SE3(R, t)


def fit_se2(src: PointSet, dst: PointSet, config: Optional[dict] = None) -> SE2:
    """Estimate the planar rigid motion that maps ``src`` onto ``dst``.

    Args:
        src: N source points, as 2D tuples or an (N, 2) array
        dst: N destination points, index aligned with ``src``
        config: Optional config with:
            - singular_tol: float, relative threshold below which a
              singular value of the cross-covariance counts as zero

    Returns:
        SE2 transform ``T`` minimizing ``sum ||T(src_i) - dst_i||^2``

    Raises:
        DimensionMismatchError: If the sets differ in length or are not 2D
        MotionFitError: If fewer than 3 pairs are given or all points coincide
    """
    if config is None:
        config = {}
    singular_tol = float(config.get("singular_tol", DEFAULT_SINGULAR_TOL))

    src_arr = _as_array(src, 2, "src")
    dst_arr = _as_array(dst, 2, "dst")
    _check_correspondences(src_arr, dst_arr)

    c_src, c_dst, H = _cross_covariance(src_arr, dst_arr)
    R = _rotation_from_covariance(H, min_rank=1, singular_tol=singular_tol)
    t = c_dst - R @ c_src

    logger.debug(f"Fitted SE2 from {src_arr.shape[0]} pairs")
    return SE2(t[0], t[1], np.arctan2(R[1, 0], R[0, 0]))


def fit_residuals(transform: Union[SE2, SE3], src: PointSet, dst: PointSet) -> np.ndarray:
    """Per-pair distance between ``transform(src_i)`` and ``dst_i``.

    Args:
        transform: SE2 or SE3 transform
        src: Source points
        dst: Destination points

    Returns:
        Array of N Euclidean distances
    """
    dimension = 2 if isinstance(transform, SE2) else 3
    src_arr = _as_array(src, dimension, "src")
    dst_arr = _as_array(dst, dimension, "dst")
    if src_arr.shape[0] != dst_arr.shape[0]:
        raise DimensionMismatchError(
            f"Point sets differ in length: {src_arr.shape[0]} source vs {dst_arr.shape[0]} destination"
        )

    M = transform.to_matrix()
    R = M[:dimension, :dimension]
    t = M[:dimension, dimension]
    moved = src_arr @ R.T + t
    return np.linalg.norm(moved - dst_arr, axis=1)


def fit_rms_error(transform: Union[SE2, SE3], src: PointSet, dst: PointSet) -> float:
    """Root-mean-square of ``fit_residuals``."""
    residuals = fit_residuals(transform, src, dst)
    if residuals.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(residuals**2)))
