"""Arithmetic on point and vector tuples, and tuple-matrix products.

Functions write into an explicit ``out`` tuple when one is given and
allocate a new tuple of the input's concrete type otherwise. Where noted,
``out`` may be the same instance as an input.
"""

import math
from typing import Optional, TypeVar

import numpy as np

from rigidgeom.errors import DimensionMismatchError
from rigidgeom.struct.tuples import GeoTuple, GeoTuple2D, GeoTuple3D, new_like

T = TypeVar("T", bound=GeoTuple)


def _check_3x3(M: np.ndarray) -> None:
    """Raise if ``M`` is not exactly a 3x3 matrix."""
    shape = np.shape(M)
    if shape != (3, 3):
        raise DimensionMismatchError(f"Input matrix must be 3 by 3, not {shape}")


def _check_dimension(t: GeoTuple, dimension: int) -> None:
    if t.DIMENSION != dimension:
        raise DimensionMismatchError(
            f"Expected a {dimension}D tuple, got {t.DIMENSION}D"
        )


def _check_same_dimension(*tuples: GeoTuple) -> None:
    dims = {t.DIMENSION for t in tuples}
    if len(dims) != 1:
        raise DimensionMismatchError(f"Tuples have mixed dimensions {sorted(dims)}")


def dot(a: GeoTuple, b: GeoTuple) -> float:
    """Dot product ``a^T b``."""
    _check_same_dimension(a, b)
    return float(np.dot(a.to_array(), b.to_array()))


def cross(a: GeoTuple3D, b: GeoTuple3D, out: Optional[T] = None) -> T:
    """Cross product ``out = a x b``.

    ``out`` may be ``a`` or ``b``.
    """
    _check_same_dimension(a, b)
    if a.DIMENSION != 3:
        raise DimensionMismatchError("Cross product is only defined for 3D tuples")
    if out is None:
        out = new_like(a)

    ax, ay, az = a.x, a.y, a.z
    bx, by, bz = b.x, b.y, b.z
    out.set(ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)
    return out


def add(a: GeoTuple, b: GeoTuple, out: Optional[T] = None) -> T:
    """``out = a + b``. ``out`` may be ``a`` or ``b``."""
    _check_same_dimension(a, b)
    if out is None:
        out = new_like(a)
    out._data[:] = a.to_array() + b.to_array()
    return out


def add_scaled(
    a0: float,
    p0: GeoTuple,
    a1: float,
    p1: GeoTuple,
    out: Optional[T] = None,
) -> T:
    """``out = a0*p0 + a1*p1``. ``out`` may be ``p0`` or ``p1``."""
    _check_same_dimension(p0, p1)
    if out is None:
        out = new_like(p0)
    out._data[:] = a0 * p0.to_array() + a1 * p1.to_array()
    return out


def add_mult(p0: GeoTuple3D, M: np.ndarray, p1: GeoTuple3D, out: Optional[T] = None) -> T:
    """``out = p0 + M*p1``."""
    offset = p0.to_array()
    out = mult(M, p1, out)
    out._data[:] = out.to_array() + offset
    return out


def sub(a: GeoTuple, b: GeoTuple, out: Optional[T] = None) -> T:
    """``out = a - b``. ``out`` may be ``a`` or ``b``."""
    _check_same_dimension(a, b)
    if out is None:
        out = new_like(a)
    out._data[:] = a.to_array() - b.to_array()
    return out


def scale(p: GeoTuple, v: float) -> None:
    """Multiply every component of ``p`` by ``v`` in place."""
    p._data *= v


def change_sign(t: GeoTuple) -> None:
    """Negate the vector ``t`` in place."""
    np.negative(t._data, out=t._data)


def cross_matrix(v: GeoTuple3D, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Skew symmetric matrix ``[v]x`` such that ``[v]x * b = v x b``."""
    if out is None:
        out = np.zeros((3, 3))
    else:
        _check_3x3(out)
        out.fill(0.0)

    x, y, z = v.x, v.y, v.z
    out[0, 1] = -z
    out[0, 2] = y
    out[1, 0] = z
    out[1, 2] = -x
    out[2, 0] = -y
    out[2, 1] = x
    return out


def mult(M: np.ndarray, pt: GeoTuple3D, out: Optional[T] = None) -> T:
    """``out = M*pt`` for a 3x3 matrix. ``out`` may be ``pt``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3
    """
    _check_3x3(M)
    _check_dimension(pt, 3)
    if out is None:
        out = new_like(pt)
    out._data[:] = np.asarray(M, dtype=np.float64) @ pt.to_array()
    return out


def mult_transpose(M: np.ndarray, pt: GeoTuple3D, out: Optional[T] = None) -> T:
    """``out = M^T*pt`` for a 3x3 matrix. ``out`` may be ``pt``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3
    """
    _check_3x3(M)
    _check_dimension(pt, 3)
    if out is None:
        out = new_like(pt)
    out._data[:] = np.asarray(M, dtype=np.float64).T @ pt.to_array()
    return out


def mult_homogeneous(M: np.ndarray, pt: GeoTuple2D, out: Optional[T] = None) -> T:
    """Apply ``M`` to ``(x, y, 1)`` and divide by the third component.

    A zero third component is not guarded against; the result is then
    infinite or NaN. ``out`` may be ``pt``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3
    """
    _check_3x3(M)
    _check_dimension(pt, 2)
    if out is None:
        out = new_like(pt)

    h = np.asarray(M, dtype=np.float64) @ np.array([pt.x, pt.y, 1.0])
    with np.errstate(divide="ignore", invalid="ignore"):
        out.set(*(h[:2] / h[2]))
    return out


def mult_homogeneous_3d(M: np.ndarray, pt: GeoTuple2D, out: GeoTuple3D) -> GeoTuple3D:
    """``out = M*(x, y, 1)`` without the perspective divide.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3, ``pt`` is not 2D or
            ``out`` is not 3D
        ValueError: If ``out`` is not provided
    """
    _check_3x3(M)
    _check_dimension(pt, 2)
    if out is None:
        raise ValueError("Must provide a 3D output tuple")
    _check_dimension(out, 3)
    out._data[:] = np.asarray(M, dtype=np.float64) @ np.array([pt.x, pt.y, 1.0])
    return out


def mult_transpose_homogeneous(M: np.ndarray, pt: GeoTuple2D, out: GeoTuple3D) -> GeoTuple3D:
    """``out = M^T*(x, y, 1)``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3, ``pt`` is not 2D or
            ``out`` is not 3D
        ValueError: If ``out`` is not provided
    """
    _check_3x3(M)
    _check_dimension(pt, 2)
    if out is None:
        raise ValueError("Must provide a 3D output tuple")
    _check_dimension(out, 3)
    out._data[:] = np.asarray(M, dtype=np.float64).T @ np.array([pt.x, pt.y, 1.0])
    return out


def mult_project(M: np.ndarray, pt: GeoTuple3D, out: GeoTuple2D) -> GeoTuple2D:
    """``out = (M*pt)`` divided by its third component.

    Typical use is projecting a point in camera coordinates to pixels with
    an intrinsic matrix. A zero third component is not guarded against.

    Args:
        M: 3x3 matrix
        pt: 3D tuple. Not modified.
        out: 2D output tuple

    Returns:
        ``out``

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3, ``pt`` is not 3D or
            ``out`` is not 2D
        ValueError: If ``out`` is not provided
    """
    _check_3x3(M)
    _check_dimension(pt, 3)
    if out is None:
        raise ValueError("Must provide a 2D output tuple")
    _check_dimension(out, 2)

    h = np.asarray(M, dtype=np.float64) @ pt.to_array()
    with np.errstate(divide="ignore", invalid="ignore"):
        out.set(*(h[:2] / h[2]))
    return out


def mult_row(pt: GeoTuple, M: np.ndarray, out: Optional[T] = None) -> T:
    """Row vector product ``out = pt^T*M``.

    A 3D ``pt`` may be its own output and allocates a tuple of its type when
    ``out`` is None. A 2D ``pt`` is lifted to ``(x, y, 1)`` and needs a 3D
    ``out``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3 or ``out`` has the
            wrong dimension
        ValueError: If ``pt`` is 2D and ``out`` is not provided
    """
    _check_3x3(M)
    if pt.DIMENSION == 2:
        if out is None:
            raise ValueError("Must provide a 3D output tuple")
        _check_dimension(out, 3)
    elif out is None:
        out = new_like(pt)
    else:
        _check_dimension(out, 3)
    out._data[:] = _lift(pt) @ np.asarray(M, dtype=np.float64)
    return out


def rotate_2d(theta: float, pt: GeoTuple2D, out: Optional[T] = None) -> T:
    """Rotate a 2D tuple by ``theta`` radians. ``out`` may be ``pt``."""
    if out is None:
        out = new_like(pt)
    c = math.cos(theta)
    s = math.sin(theta)
    x, y = pt.x, pt.y
    out.set(c * x - s * y, s * x + c * y)
    return out


def rotate_3d(M: np.ndarray, pt: GeoTuple3D, out: Optional[T] = None, forward: bool = True) -> T:
    """Rotate by ``M`` when ``forward`` and by ``M^T`` otherwise."""
    if forward:
        return mult(M, pt, out)
    return mult_transpose(M, pt, out)


def inner_prod(a: GeoTuple, M: np.ndarray, b: GeoTuple) -> float:
    """``a^T*M*b``. 2D tuples are lifted to ``(x, y, 1)``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3 or ``a`` and ``b``
            differ in dimension
    """
    _check_3x3(M)
    _check_same_dimension(a, b)
    return float(_lift(a) @ np.asarray(M, dtype=np.float64) @ _lift(b))


def inner_prod_transpose(a: GeoTuple3D, M: np.ndarray, b: GeoTuple3D) -> float:
    """``a^T*M^T*b``.

    Raises:
        DimensionMismatchError: If ``M`` is not 3x3 or either tuple is not 3D
    """
    _check_3x3(M)
    _check_dimension(a, 3)
    _check_dimension(b, 3)
    return float(a.to_array() @ np.asarray(M, dtype=np.float64).T @ b.to_array())


def _lift(t: GeoTuple) -> np.ndarray:
    if t.DIMENSION == 2:
        return np.array([t.x, t.y, 1.0])
    if t.DIMENSION == 3:
        return t.to_array()
    raise DimensionMismatchError(f"Expected a 2D or 3D tuple, got {t.DIMENSION}D")
