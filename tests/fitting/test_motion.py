"""Tests for rigid motion estimation."""

import logging
import math

import numpy as np
import pytest

from rigidgeom.errors import DimensionMismatchError, MotionFitError
from rigidgeom.fitting.motion import fit_residuals, fit_rms_error, fit_se2, fit_se3
from rigidgeom.struct.tuples import Point2D, Point3D
from rigidgeom.testing import assert_se2_equal, assert_se3_equal
from rigidgeom.transform.se import SE2, SE3


def _transform_points(T, points):
    return [T.apply(p) for p in points]


def test_fit_se3_recovers_transform(rng, random_se3):
    """Test a noise free round trip with 10 random points."""
    src = [Point3D(*rng.uniform(-5.0, 5.0, size=3)) for _ in range(10)]
    dst = _transform_points(random_se3, src)

    found = fit_se3(src, dst)

    assert_se3_equal(random_se3, found, tol_tran=1e-6, tol_rot=1e-6)
    assert fit_rms_error(found, src, dst) == pytest.approx(0.0, abs=1e-8)


def test_fit_se3_independent_of_ordering(rng, random_se3):
    """Test shuffling the pairs consistently gives the same transform."""
    src = rng.uniform(-5.0, 5.0, size=(10, 3))
    dst = np.array([random_se3.apply(Point3D(*p)).to_array() for p in src])
    order = rng.permutation(10)

    first = fit_se3(src, dst)
    second = fit_se3(src[order], dst[order])

    assert_se3_equal(first, second, tol_tran=1e-9, tol_rot=1e-9)


def test_fit_se3_coplanar_points(random_se3):
    """Test planar point sets still give a proper rotation."""
    src = [
        Point3D(0.0, 0.0, 0.0),
        Point3D(1.0, 0.0, 0.0),
        Point3D(0.0, 2.0, 0.0),
        Point3D(3.0, 1.0, 0.0),
    ]
    dst = _transform_points(random_se3, src)

    found = fit_se3(src, dst)

    assert_se3_equal(random_se3, found, tol_tran=1e-6, tol_rot=1e-6)
    assert np.linalg.det(found.rotation) == pytest.approx(1.0)


def test_fit_se3_mirrored_points_give_proper_rotation(caplog):
    """Test mirror image data is fit by the closest rotation, not the reflection."""
    src = np.array(
        [
            [10.0, 0.0, 0.0],
            [-10.0, 0.0, 0.0],
            [0.0, 5.0, 0.0],
            [0.0, -5.0, 0.0],
            [0.0, 0.0, 0.5],
            [0.0, 0.0, -0.5],
        ]
    )
    dst = src * np.array([1.0, 1.0, -1.0])

    with caplog.at_level(logging.WARNING, logger="rigidgeom.fitting.motion"):
        found = fit_se3(src, dst)

    assert "reflection" in caplog.text
    assert np.linalg.det(found.rotation) == pytest.approx(1.0)
    np.testing.assert_allclose(found.rotation, np.eye(3), atol=1e-9)
    np.testing.assert_allclose(found.translation.to_array(), np.zeros(3), atol=1e-9)
    # Only the two points on the mirror axis are left unmatched
    assert fit_rms_error(found, src, dst) == pytest.approx(math.sqrt(1.0 / 3.0))
    flipped_x = SE3(np.diag([1.0, -1.0, -1.0]))
    assert fit_rms_error(flipped_x, src, dst) > fit_rms_error(found, src, dst)


def test_fit_se3_with_noise(rng, random_se3):
    """Test noisy correspondences give a close estimate."""
    src = rng.uniform(-5.0, 5.0, size=(50, 3))
    dst = src @ random_se3.rotation.T + random_se3.translation.to_array()
    dst += rng.normal(scale=1e-3, size=dst.shape)

    found = fit_se3(src, dst)

    assert_se3_equal(random_se3, found, tol_tran=1e-2, tol_rot=1e-2)
    assert fit_rms_error(found, src, dst) < 5e-3


def test_fit_se3_identical_points():
    """Test identical points are a fitting failure."""
    src = [Point3D(1.0, 2.0, 3.0) for _ in range(5)]

    with pytest.raises(MotionFitError):
        fit_se3(src, src)


def test_fit_se3_collinear_points():
    """Test collinear points leave the rotation undetermined."""
    src = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [5.0, 5.0, 5.0]])
    dst = src + 1.0

    with pytest.raises(MotionFitError):
        fit_se3(src, dst)


def test_fit_se3_tightly_clustered_points(rng, random_se3):
    """Test a small but non-degenerate spread is still fit."""
    src = np.array([1.0, 2.0, 3.0]) + rng.uniform(-1e-4, 1e-4, size=(8, 3))
    dst = src @ random_se3.rotation.T + random_se3.translation.to_array()

    found = fit_se3(src, dst)

    assert_se3_equal(random_se3, found, tol_tran=1e-5, tol_rot=1e-5)


def test_fit_se3_too_few_points():
    """Test fewer than three pairs are rejected."""
    src = [Point3D(0.0, 0.0, 0.0), Point3D(1.0, 0.0, 0.0)]

    with pytest.raises(MotionFitError):
        fit_se3(src, src)


def test_fit_se3_mismatched_sets():
    """Test different lengths and dimensions are rejected."""
    src = np.zeros((4, 3))

    with pytest.raises(DimensionMismatchError):
        fit_se3(src, np.zeros((5, 3)))
    with pytest.raises(DimensionMismatchError):
        fit_se3(np.zeros((4, 2)), np.zeros((4, 2)))


def test_fit_se3_non_finite():
    """Test NaN inputs are rejected."""
    src = np.eye(3)
    dst = np.eye(3)
    dst[0, 0] = np.nan

    with pytest.raises(MotionFitError):
        fit_se3(src, dst)


def test_fit_se2_recovers_transform(rng):
    """Test a planar round trip."""
    expected = SE2(1.5, -0.7, 2.2)
    src = [Point2D(*rng.uniform(-5.0, 5.0, size=2)) for _ in range(10)]
    dst = _transform_points(expected, src)

    found = fit_se2(src, dst)

    assert_se2_equal(expected, found, tol_tran=1e-6, tol_yaw=1e-6)


def test_fit_se2_collinear_points():
    """Test collinear planar points still determine the motion."""
    expected = SE2(0.0, 3.0, -math.pi / 4)
    src = [Point2D(float(i), 2.0 * i) for i in range(4)]
    dst = _transform_points(expected, src)

    found = fit_se2(src, dst)

    assert_se2_equal(expected, found, tol_tran=1e-6, tol_yaw=1e-6)


def test_fit_se2_identical_points():
    """Test identical planar points are a fitting failure."""
    src = [Point2D(0.5, 0.5) for _ in range(4)]

    with pytest.raises(MotionFitError):
        fit_se2(src, src)


def test_fit_residuals():
    """Test residuals measure each pair separately."""
    T = SE3(translation=[1.0, 0.0, 0.0])
    src = np.zeros((3, 3))
    dst = np.array([[1.0, 0.0, 0.0], [1.0, 2.0, 0.0], [1.0, 0.0, -3.0]])

    np.testing.assert_allclose(fit_residuals(T, src, dst), [0.0, 2.0, 3.0])
