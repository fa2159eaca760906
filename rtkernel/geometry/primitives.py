"""
Geometric primitives: points and vectors in 3D space.

Points are locations, vectors are displacements. They are kept as two
separate classes so that only the algebraically meaningful combinations are
defined:

    Point - Point   -> Vector
    Point - Vector  -> Point
    Point + Vector  -> Point    (and Vector + Point)
    Vector +/- Vector -> Vector

Adding two points has no meaning and raises NonsensicalAdditionError.

Equality is approximate: each component is compared at a fixed resolution of
five decimal places (see core.constants.approx_key).
"""

from __future__ import annotations
from typing import Iterator, Tuple
import math
import torch

from ..core.constants import approx_key, ieee_divide
from ..core.types import Scalar


class NonsensicalAdditionError(TypeError):
    """Raised when two points are added together."""

    def __init__(self):
        super().__init__("It is meaningless to add two Points")


class _Triple:
    """Shared storage, comparison and conversion for 3-component values."""

    __slots__ = ('_x', '_y', '_z')

    def __init__(self, x: Scalar, y: Scalar, z: Scalar):
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    def __iter__(self) -> Iterator[float]:
        yield self._x
        yield self._y
        yield self._z

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self._x, self._y, self._z)

    def to_tensor(self, dtype: torch.dtype = torch.float64) -> torch.Tensor:
        """Components as a (3,) tensor."""
        return torch.tensor(self.as_tuple(), dtype=dtype)

    def _key(self) -> Tuple[float, float, float]:
        return (approx_key(self._x), approx_key(self._y), approx_key(self._z))

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(a == b for a, b in zip(self._key(), other._key()))

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._x}, {self._y}, {self._z})"


class Point(_Triple):
    """A location in 3D space."""

    __slots__ = ()

    @classmethod
    def origin(cls) -> 'Point':
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other):
        if isinstance(other, Vector):
            return Point(self._x + other.x, self._y + other.y, self._z + other.z)
        if isinstance(other, Point):
            raise NonsensicalAdditionError()
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector(self._x - other.x, self._y - other.y, self._z - other.z)
        if isinstance(other, Vector):
            return Point(self._x - other.x, self._y - other.y, self._z - other.z)
        return NotImplemented


class Vector(_Triple):
    """
    A displacement or direction in 3D space.

    Supports negation, scaling by a real, dot and cross products, magnitude
    and normalization.
    """

    __slots__ = ()

    @classmethod
    def zero(cls) -> 'Vector':
        return cls(0.0, 0.0, 0.0)

    # === Arithmetic ===

    def __add__(self, other):
        if isinstance(other, Vector):
            return Vector(self._x + other.x, self._y + other.y, self._z + other.z)
        if isinstance(other, Point):
            return Point(self._x + other.x, self._y + other.y, self._z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector):
            return Vector(self._x - other.x, self._y - other.y, self._z - other.z)
        return NotImplemented

    def __neg__(self) -> 'Vector':
        return Vector(-self._x, -self._y, -self._z)

    def __mul__(self, scalar):
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(self._x * scalar, self._y * scalar, self._z * scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(
            ieee_divide(self._x, scalar),
            ieee_divide(self._y, scalar),
            ieee_divide(self._z, scalar),
        )

    # === Products and norms ===

    def dot(self, other: 'Vector') -> float:
        """Scalar (inner) product."""
        return self._x * other.x + self._y * other.y + self._z * other.z

    def cross(self, other: 'Vector') -> 'Vector':
        """Right-handed cross product."""
        return Vector(
            self._y * other.z - self._z * other.y,
            self._z * other.x - self._x * other.z,
            self._x * other.y - self._y * other.x,
        )

    def magnitude(self) -> float:
        """Euclidean length sqrt(x² + y² + z²)."""
        return math.sqrt(self._x ** 2 + self._y ** 2 + self._z ** 2)

    mag = magnitude

    def normalize(self) -> 'Vector':
        """
        Unit vector in the same direction.

        Division follows IEEE 754, so the zero vector normalizes to NaN
        components rather than raising.
        """
        return self / self.magnitude()
