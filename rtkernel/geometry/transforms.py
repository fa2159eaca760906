"""
Tagged affine transformations built on 4x4 matrices.

A Transform pairs a 4x4 Matrix with the kind of transformation it was built
as (translation, rotation, scaling, shear, or a raw matrix). Composition is
the matrix product, with the rightmost transform applied first:

    (c * b * a) * p == c * (b * (a * p))

The kind of a composition is the kind of its left operand, unless the left
operand is a raw matrix, in which case the right operand's kind is used.
Only two raw matrices compose into a raw matrix.

Vectors are not displaced by translations: any transform tagged as a
translation, including a chain whose outer tag is translation, returns
vectors unchanged. Every other transform acts on vectors with w = 0. Use
the raw matrix to apply the full linear part of a translation-tagged chain.
"""

from __future__ import annotations
from enum import Enum
from functools import reduce
from typing import Optional, Union

from ..core.types import Scalar
from .matrix import Matrix
from .primitives import Point, Vector


class TransformKind(Enum):
    """Tag recording how a transform was built."""
    TRANSLATION = "translation"
    ROTATION = "rotation"
    SCALING = "scaling"
    SHEAR = "shear"
    MATRIX = "matrix"


class Transform:
    """
    A 4x4 transformation matrix tagged with its kind.

    Attributes:
        kind: TransformKind tag
        matrix: Copy-on-read 4x4 Matrix
    """

    __hash__ = None

    def __init__(self, matrix: Matrix, kind: TransformKind = TransformKind.MATRIX):
        if matrix.order != 4:
            raise ValueError(f"Transforms require a 4x4 matrix, got order {matrix.order}")
        self._matrix = matrix.copy()
        self.kind = kind

    @property
    def matrix(self) -> Matrix:
        return self._matrix.copy()

    # === Factories ===

    @classmethod
    def identity(cls) -> 'Transform':
        return cls(Matrix.identity())

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> 'Transform':
        return cls(matrix)

    @classmethod
    def translation(cls, x: Scalar, y: Scalar, z: Scalar) -> 'Transform':
        return cls(Matrix.translation(x, y, z), TransformKind.TRANSLATION)

    @classmethod
    def rotation_x(cls, radians: Scalar) -> 'Transform':
        return cls(Matrix.rotation_x(radians), TransformKind.ROTATION)

    @classmethod
    def rotation_y(cls, radians: Scalar) -> 'Transform':
        return cls(Matrix.rotation_y(radians), TransformKind.ROTATION)

    @classmethod
    def rotation_z(cls, radians: Scalar) -> 'Transform':
        return cls(Matrix.rotation_z(radians), TransformKind.ROTATION)

    @classmethod
    def scaling(cls, x: Scalar, y: Scalar, z: Scalar) -> 'Transform':
        return cls(Matrix.scaling(x, y, z), TransformKind.SCALING)

    @classmethod
    def shear(
        cls,
        xy: Scalar, xz: Scalar,
        yx: Scalar, yz: Scalar,
        zx: Scalar, zy: Scalar,
    ) -> 'Transform':
        return cls(Matrix.shear(xy, xz, yx, yz, zx, zy), TransformKind.SHEAR)

    # === Application and composition ===

    def __mul__(self, other):
        if isinstance(other, Transform):
            if self.kind is TransformKind.MATRIX:
                kind = other.kind
            else:
                kind = self.kind
            return Transform(self._matrix * other._matrix, kind)

        if isinstance(other, Vector):
            if self.kind is TransformKind.TRANSLATION:
                return other
            return self._matrix * other

        if isinstance(other, Point):
            return self._matrix * other

        return NotImplemented

    def then(self, other: 'Transform') -> 'Transform':
        """Transform applying self first, then other (other * self)."""
        return other * self

    def inverse(self) -> Optional['Transform']:
        """
        Inverse transform with the same kind.

        Returns:
            The inverse, or None when the underlying matrix is singular
        """
        inverted = self._matrix.inverse()
        if inverted is None:
            return None
        return Transform(inverted, self.kind)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return self.kind is other.kind and self._matrix == other._matrix

    def __repr__(self) -> str:
        return f"Transform({self.kind.value}, {self._matrix.tolist()})"


def compose(*transforms: Transform) -> Transform:
    """
    Compose transforms in application order.

    compose(a, b, c) applies a, then b, then c, and equals c * b * a.

    Raises:
        ValueError: if no transforms are given
    """
    if not transforms:
        raise ValueError("compose() requires at least one transform")
    return reduce(lambda acc, t: t * acc, transforms[1:], transforms[0])


def apply(transform: Transform, element: Union[Point, Vector]) -> Union[Point, Vector]:
    """Functional form of transform * element."""
    return transform * element
