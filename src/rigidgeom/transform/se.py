"""Rigid body transforms in 2D (SE2) and 3D (SE3).

Both transforms map a point ``p`` to ``R*p + t``. ``a.compose(b)`` is the
transform that applies ``b`` first and then ``a``.
"""

import math
from typing import Optional, TypeVar

import cv2
import numpy as np

from rigidgeom.errors import DimensionMismatchError, InvalidRotationError
from rigidgeom.geometry.vector_ops import (
    add,
    add_mult,
    change_sign,
    mult,
    mult_transpose,
    rotate_2d,
)
from rigidgeom.struct.tuples import GeoTuple, GeoTuple3D, Vector2D, Vector3D

DEFAULT_ROTATION_TOL = 1e-6
DEFAULT_TRANSLATION_TOL = 1e-8
DEFAULT_YAW_TOL = 1e-8

P = TypeVar("P", bound=GeoTuple)


def normalize_angle(angle: float) -> float:
    """Wrap ``angle`` into the interval (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
    if wrapped <= 0.0:
        wrapped += 2.0 * math.pi
    return wrapped - math.pi


def check_rotation_matrix(R: np.ndarray, tol: float = DEFAULT_ROTATION_TOL) -> None:
    """Validate that ``R`` is a proper 3x3 rotation matrix.

    Args:
        R: Candidate rotation matrix
        tol: Absolute tolerance on ``R^T*R = I`` and ``det(R) = 1``

    Raises:
        DimensionMismatchError: If ``R`` is not 3x3
        InvalidRotationError: If ``R`` is not orthonormal or is a reflection
    """
    if np.shape(R) != (3, 3):
        raise DimensionMismatchError(f"Rotation matrix must be 3 by 3, not {np.shape(R)}")
    if not np.all(np.isfinite(R)):
        raise InvalidRotationError("Rotation matrix has non-finite elements")
    if not np.allclose(R.T @ R, np.eye(3), atol=tol):
        raise InvalidRotationError("Rotation matrix is not orthonormal")
    det = np.linalg.det(R)
    if abs(det - 1.0) > tol:
        raise InvalidRotationError(f"Rotation matrix determinant is {det:.6f}, expected +1")


class SE2:
    """Planar rigid transform made of a yaw angle and a 2D translation.

    Attributes:
        translation: Translation applied after the rotation
        yaw: Rotation angle in radians, kept in (-pi, pi]
    """

    def __init__(self, x: float = 0.0, y: float = 0.0, yaw: float = 0.0):
        self.translation = Vector2D(x, y)
        self.yaw = yaw

    @property
    def yaw(self) -> float:
        return self._yaw

    @yaw.setter
    def yaw(self, value: float) -> None:
        self._yaw = normalize_angle(float(value))

    @property
    def x(self) -> float:
        return self.translation.x

    @property
    def y(self) -> float:
        return self.translation.y

    def set(self, x: float, y: float, yaw: float) -> None:
        self.translation.set(x, y)
        self.yaw = yaw

    def set_from(self, other: "SE2") -> None:
        self.set(other.x, other.y, other.yaw)

    def reset(self) -> None:
        """Set to the identity transform."""
        self.set(0.0, 0.0, 0.0)

    def copy(self) -> "SE2":
        return SE2(self.x, self.y, self.yaw)

    def apply(self, point: P, out: Optional[P] = None) -> P:
        """Transform a point: ``out = R*point + t``. ``out`` may be ``point``."""
        out = rotate_2d(self._yaw, point, out)
        return add(out, self.translation, out)

    def apply_vector(self, vector: P, out: Optional[P] = None) -> P:
        """Rotate a vector without translating it."""
        return rotate_2d(self._yaw, vector, out)

    def invert(self, out: Optional["SE2"] = None) -> "SE2":
        """Inverse transform: ``R' = R^T``, ``t' = -R^T*t``. ``out`` may be ``self``."""
        if out is None:
            out = SE2()
        t = rotate_2d(-self._yaw, self.translation)
        change_sign(t)
        out.set(t.x, t.y, -self._yaw)
        return out

    def compose(self, other: "SE2", out: Optional["SE2"] = None) -> "SE2":
        """Transform equal to applying ``other`` and then ``self``.

        Rotations add and the translation is ``R_self*t_other + t_self``.
        ``out`` may be ``self`` or ``other``.
        """
        if out is None:
            out = SE2()
        t = self.apply(other.translation, Vector2D())
        out.set(t.x, t.y, self._yaw + other.yaw)
        return out

    def to_matrix(self) -> np.ndarray:
        """Homogeneous 3x3 matrix of this transform."""
        c = math.cos(self._yaw)
        s = math.sin(self._yaw)
        return np.array(
            [
                [c, -s, self.x],
                [s, c, self.y],
                [0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def from_matrix(cls, M: np.ndarray) -> "SE2":
        """Build from a homogeneous 3x3 matrix.

        Raises:
            DimensionMismatchError: If ``M`` is not 3x3
        """
        M = np.asarray(M, dtype=np.float64)
        if M.shape != (3, 3):
            raise DimensionMismatchError(f"Homogeneous 2D transform must be 3 by 3, not {M.shape}")
        return cls(M[0, 2], M[1, 2], math.atan2(M[1, 0], M[0, 0]))

    def is_identical(
        self,
        other: "SE2",
        tol_tran: float = DEFAULT_TRANSLATION_TOL,
        tol_yaw: float = DEFAULT_YAW_TOL,
    ) -> bool:
        if not self.translation.is_identical(other.translation, tol_tran):
            return False
        return abs(normalize_angle(self._yaw - other.yaw)) <= tol_yaw

    def __repr__(self) -> str:
        return f"SE2(x={self.x:g}, y={self.y:g}, yaw={self._yaw:g})"


class SE3:
    """Spatial rigid transform made of a rotation matrix and a 3D translation.

    Attributes:
        rotation: Read-only 3x3 rotation matrix
        translation: Translation applied after the rotation
    """

    def __init__(
        self,
        rotation: Optional[np.ndarray] = None,
        translation=None,
        tol: float = DEFAULT_ROTATION_TOL,
    ):
        self._tol = tol
        self.rotation = np.eye(3) if rotation is None else rotation
        if translation is None:
            self.translation = Vector3D()
        elif isinstance(translation, GeoTuple3D):
            self.translation = Vector3D(translation.x, translation.y, translation.z)
        else:
            self.translation = Vector3D.from_array(translation)

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation

    @rotation.setter
    def rotation(self, value: np.ndarray) -> None:
        R = np.array(value, dtype=np.float64)
        check_rotation_matrix(R, self._tol)
        R.flags.writeable = False
        self._rotation = R

    def set_from(self, other: "SE3") -> None:
        self._rotation = other.rotation
        self.translation.set_from(other.translation)

    def reset(self) -> None:
        """Set to the identity transform."""
        self.rotation = np.eye(3)
        self.translation.set(0.0, 0.0, 0.0)

    def copy(self) -> "SE3":
        return SE3(self._rotation, self.translation, tol=self._tol)

    def apply(self, point: P, out: Optional[P] = None) -> P:
        """Transform a point: ``out = R*point + t``. ``out`` may be ``point``."""
        return add_mult(self.translation, self._rotation, point, out)

    def apply_vector(self, vector: P, out: Optional[P] = None) -> P:
        """Rotate a vector without translating it."""
        return mult(self._rotation, vector, out)

    def invert(self, out: Optional["SE3"] = None) -> "SE3":
        """Inverse transform: ``R' = R^T``, ``t' = -R^T*t``. ``out`` may be ``self``."""
        if out is None:
            out = SE3()
        t = mult_transpose(self._rotation, self.translation)
        change_sign(t)
        out._set_unchecked(self._rotation.T, t)
        return out

    def compose(self, other: "SE3", out: Optional["SE3"] = None) -> "SE3":
        """Transform equal to applying ``other`` and then ``self``.

        ``R = R_self*R_other`` and ``t = R_self*t_other + t_self``.
        ``out`` may be ``self`` or ``other``.
        """
        if out is None:
            out = SE3()
        t = self.apply(other.translation)
        out._set_unchecked(self._rotation @ other.rotation, t)
        return out

    def _set_unchecked(self, R: np.ndarray, t: GeoTuple3D) -> None:
        # Products and transposes of valid rotations stay valid.
        R = np.array(R, dtype=np.float64)
        R.flags.writeable = False
        self._rotation = R
        self.translation.set_from(t)

    def to_matrix(self) -> np.ndarray:
        """Homogeneous 4x4 matrix of this transform."""
        M = np.eye(4)
        M[:3, :3] = self._rotation
        M[:3, 3] = self.translation.to_array()
        return M

    @classmethod
    def from_matrix(cls, M: np.ndarray, tol: float = DEFAULT_ROTATION_TOL) -> "SE3":
        """Build from a homogeneous 4x4 matrix.

        Raises:
            DimensionMismatchError: If ``M`` is not 4x4
            InvalidRotationError: If the upper-left block is not a rotation
        """
        M = np.asarray(M, dtype=np.float64)
        if M.shape != (4, 4):
            raise DimensionMismatchError(f"Homogeneous 3D transform must be 4 by 4, not {M.shape}")
        return cls(M[:3, :3], M[:3, 3], tol=tol)

    @classmethod
    def from_rotation_vector(cls, rvec, translation=None) -> "SE3":
        """Build from an axis-angle (Rodrigues) vector and a translation.

        Args:
            rvec: Rotation axis scaled by the angle in radians
            translation: Optional translation, zero if omitted

        Returns:
            New SE3 transform

        Raises:
            DimensionMismatchError: If ``rvec`` does not have 3 elements
        """
        rvec = np.asarray(rvec, dtype=np.float64).reshape(-1)
        if rvec.shape[0] != 3:
            raise DimensionMismatchError(f"Rotation vector must have 3 elements, not {rvec.shape[0]}")
        R, _ = cv2.Rodrigues(rvec.reshape(3, 1))
        return cls(R, translation)

    def rotation_vector(self) -> np.ndarray:
        """Axis-angle (Rodrigues) vector of the rotation."""
        rvec, _ = cv2.Rodrigues(np.array(self._rotation))
        return rvec.reshape(3)

    def is_identical(
        self,
        other: "SE3",
        tol_tran: float = DEFAULT_TRANSLATION_TOL,
        tol_rot: float = DEFAULT_ROTATION_TOL,
    ) -> bool:
        if not self.translation.is_identical(other.translation, tol_tran):
            return False
        return bool(np.allclose(self._rotation, other.rotation, atol=tol_rot, rtol=0.0))

    def __repr__(self) -> str:
        t = ", ".join(f"{v:g}" for v in self.translation)
        r = ", ".join(f"{v:g}" for v in self.rotation_vector())
        return f"SE3(rotation_vector=({r}), translation=({t}))"
