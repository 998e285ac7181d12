"""Fixed-size point and vector tuples in 2D and 3D.

Points and vectors share the same storage, a small numpy array in either
float32 or float64. A point denotes a location and a vector a displacement
or direction; operations that only make sense for one role (cross product,
sign change) are written against vectors.
"""

import math
from typing import Iterator, Optional, Type, TypeVar

import numpy as np

from rigidgeom.errors import DimensionMismatchError, InvalidIndexError

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))
DEFAULT_DTYPE = np.float64
DEFAULT_EQUALS_TOL = 1e-8

T = TypeVar("T", bound="GeoTuple")


def _check_dtype(dtype) -> np.dtype:
    dtype = np.dtype(dtype)
    if dtype not in SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported tuple dtype {dtype}, expected float32 or float64")
    return dtype


class GeoTuple:
    """Base class for fixed-size real-valued tuples.

    Subclasses set ``DIMENSION``. Components are stored in ``self._data``,
    a 1D numpy array of length ``DIMENSION``.
    """

    DIMENSION = 0

    __slots__ = ("_data",)

    def __init__(self, *coords: float, dtype=DEFAULT_DTYPE):
        dtype = _check_dtype(dtype)
        if not coords:
            self._data = np.zeros(self.DIMENSION, dtype=dtype)
            return
        if len(coords) != self.DIMENSION:
            raise DimensionMismatchError(
                f"{type(self).__name__} expects {self.DIMENSION} components, "
                f"got {len(coords)}"
            )
        self._data = np.array(coords, dtype=dtype)

    @classmethod
    def from_array(cls: Type[T], values, dtype=None) -> T:
        """Create a tuple from any array-like of length ``DIMENSION``.

        Args:
            values: Array-like with exactly ``DIMENSION`` elements
            dtype: Storage dtype, defaults to float64

        Returns:
            New tuple of type ``cls``

        Raises:
            DimensionMismatchError: If ``values`` has the wrong length
        """
        arr = np.asarray(values).reshape(-1)
        if arr.shape[0] != cls.DIMENSION:
            raise DimensionMismatchError(
                f"{cls.__name__} expects {cls.DIMENSION} components, got {arr.shape[0]}"
            )
        return cls(*arr.tolist(), dtype=DEFAULT_DTYPE if dtype is None else dtype)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def get_dimension(self) -> int:
        return self.DIMENSION

    def get_index(self, index: int) -> float:
        """Return component ``index``.

        Raises:
            InvalidIndexError: If ``index`` is outside ``0..DIMENSION-1``
        """
        self._check_index(index)
        return float(self._data[index])

    def set_index(self, index: int, value: float) -> None:
        """Set component ``index`` to ``value``.

        Raises:
            InvalidIndexError: If ``index`` is outside ``0..DIMENSION-1``
        """
        self._check_index(index)
        self._data[index] = value

    def _check_index(self, index: int) -> None:
        if not isinstance(index, (int, np.integer)) or index < 0 or index >= self.DIMENSION:
            raise InvalidIndexError(
                f"Index {index} is out of range for a {self.DIMENSION}D tuple"
            )

    def set(self, *coords: float) -> None:
        if len(coords) != self.DIMENSION:
            raise DimensionMismatchError(
                f"Expected {self.DIMENSION} components, got {len(coords)}"
            )
        self._data[:] = coords

    def set_from(self, other: "GeoTuple") -> None:
        """Copy the components of ``other`` into this tuple."""
        if other.DIMENSION != self.DIMENSION:
            raise DimensionMismatchError(
                f"Cannot copy a {other.DIMENSION}D tuple into a {self.DIMENSION}D tuple"
            )
        self._data[:] = other._data

    def copy(self: T) -> T:
        out = new_like(self)
        out._data[:] = self._data
        return out

    def to_array(self) -> np.ndarray:
        """Return the components as a new float64 array."""
        return self._data.astype(np.float64)

    def norm_sq(self) -> float:
        return float(np.dot(self._data, self._data))

    def norm(self) -> float:
        return math.sqrt(self.norm_sq())

    def distance_sq(self, other: "GeoTuple") -> float:
        if other.DIMENSION != self.DIMENSION:
            raise DimensionMismatchError(
                f"Cannot measure between {self.DIMENSION}D and {other.DIMENSION}D tuples"
            )
        diff = self.to_array() - other.to_array()
        return float(np.dot(diff, diff))

    def distance(self, other: "GeoTuple") -> float:
        return math.sqrt(self.distance_sq(other))

    def is_identical(self, other: "GeoTuple", tol: float = DEFAULT_EQUALS_TOL) -> bool:
        """Check component-wise equality within ``tol``.

        Args:
            other: Tuple to compare against
            tol: Maximum absolute difference allowed per component

        Returns:
            True if every component differs by at most ``tol``
        """
        if other.DIMENSION != self.DIMENSION:
            return False
        return bool(np.all(np.abs(self.to_array() - other.to_array()) <= tol))

    def is_nan(self) -> bool:
        """Return True if any component is NaN."""
        return bool(np.any(np.isnan(self._data)))

    def __len__(self) -> int:
        return self.DIMENSION

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeoTuple):
            return NotImplemented
        return type(self) is type(other) and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        values = ", ".join(f"{v:g}" for v in self._data.tolist())
        return f"{type(self).__name__}({values}, dtype={self.dtype.name})"


class GeoTuple2D(GeoTuple):
    """Tuple with ``x`` and ``y`` components."""

    DIMENSION = 2

    __slots__ = ()

    def __init__(self, x: Optional[float] = None, y: Optional[float] = None, dtype=DEFAULT_DTYPE):
        if x is None and y is None:
            super().__init__(dtype=dtype)
        else:
            super().__init__(0.0 if x is None else x, 0.0 if y is None else y, dtype=dtype)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @x.setter
    def x(self, value: float) -> None:
        self._data[0] = value

    @property
    def y(self) -> float:
        return float(self._data[1])

    @y.setter
    def y(self, value: float) -> None:
        self._data[1] = value


class GeoTuple3D(GeoTuple):
    """Tuple with ``x``, ``y`` and ``z`` components."""

    DIMENSION = 3

    __slots__ = ()

    def __init__(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None,
        dtype=DEFAULT_DTYPE,
    ):
        if x is None and y is None and z is None:
            super().__init__(dtype=dtype)
        else:
            super().__init__(
                0.0 if x is None else x,
                0.0 if y is None else y,
                0.0 if z is None else z,
                dtype=dtype,
            )

    @property
    def x(self) -> float:
        return float(self._data[0])

    @x.setter
    def x(self, value: float) -> None:
        self._data[0] = value

    @property
    def y(self) -> float:
        return float(self._data[1])

    @y.setter
    def y(self, value: float) -> None:
        self._data[1] = value

    @property
    def z(self) -> float:
        return float(self._data[2])

    @z.setter
    def z(self, value: float) -> None:
        self._data[2] = value


class Point2D(GeoTuple2D):
    """Location in the plane."""

    __slots__ = ()


class Vector2D(GeoTuple2D):
    """Displacement or direction in the plane."""

    __slots__ = ()


class Point3D(GeoTuple3D):
    """Location in space."""

    __slots__ = ()


class Vector3D(GeoTuple3D):
    """Displacement or direction in space."""

    __slots__ = ()


def new_like(t: T) -> T:
    """Create a zeroed tuple with the same class and dtype as ``t``."""
    return type(t)(dtype=t.dtype)
