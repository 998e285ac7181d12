"""Tolerance-based assertions for tuples and transforms.

Used by test suites; the failures are ``AssertionError`` raised through
``numpy.testing`` so pytest reports them with the usual diff.
"""

import numpy as np

from rigidgeom.struct.tuples import GeoTuple
from rigidgeom.transform.se import SE2, SE3, normalize_angle


def assert_tuple_equal(expected: GeoTuple, found: GeoTuple, tol: float = 1e-8) -> None:
    """Assert both tuples have the same type and components within ``tol``."""
    assert type(expected) is type(found), (
        f"{type(expected).__name__} and {type(found).__name__} are not the same type"
    )
    np.testing.assert_allclose(found.to_array(), expected.to_array(), rtol=0.0, atol=tol)


def assert_tuple_not_equal(expected: GeoTuple, found: GeoTuple, tol: float = 1e-8) -> None:
    """Assert every component differs by more than ``tol``."""
    diff = np.abs(found.to_array() - expected.to_array())
    assert np.all(diff > tol), f"{found} has components equal to {expected} within {tol}"


def assert_se2_equal(expected: SE2, found: SE2, tol_tran: float = 1e-8, tol_yaw: float = 1e-8) -> None:
    np.testing.assert_allclose(
        found.translation.to_array(), expected.translation.to_array(), rtol=0.0, atol=tol_tran
    )
    yaw_error = abs(normalize_angle(found.yaw - expected.yaw))
    assert yaw_error <= tol_yaw, f"yaw differs by {yaw_error}: {expected.yaw} vs {found.yaw}"


def assert_se2_not_equal(expected: SE2, found: SE2, tol_tran: float = 1e-8, tol_yaw: float = 1e-8) -> None:
    """Assert the transforms differ in translation or in yaw."""
    if not expected.translation.is_identical(found.translation, tol_tran):
        return
    yaw_error = abs(normalize_angle(found.yaw - expected.yaw))
    assert yaw_error > tol_yaw, f"{found} is equal to {expected}"


def assert_se3_equal(expected: SE3, found: SE3, tol_tran: float = 1e-8, tol_rot: float = 1e-8) -> None:
    np.testing.assert_allclose(
        found.translation.to_array(), expected.translation.to_array(), rtol=0.0, atol=tol_tran
    )
    np.testing.assert_allclose(found.rotation, expected.rotation, rtol=0.0, atol=tol_rot)
