"""
Square matrix algebra for orders 2, 3 and 4.

A single Matrix class covers every supported order; the order is the size of
its backing (N, N) float64 tensor. Every operation returns a new matrix and
never aliases the storage of its operands.

The determinant is computed by cofactor expansion along the first row, and
the inverse by the adjugate method:

    inverse[c][r] = cofactor(r, c) / determinant

4x4 matrices act on points and vectors through homogeneous columns: points
carry w = 1 (translation applies), vectors carry w = 0 (translation is
ignored). The w component is dropped from the result.
"""

from __future__ import annotations
from typing import List, Optional, Tuple, Union
import logging
import math
import torch

from ..core.constants import (
    EQUALITY_SCALE,
    MIN_MATRIX_ORDER,
    MAX_MATRIX_ORDER,
    HOMOGENEOUS_ORDER,
)
from ..core.types import MatrixRows, Scalar
from .primitives import Point, Vector

logger = logging.getLogger(__name__)


def _homogeneous(element: Union[Point, Vector]) -> torch.Tensor:
    """4x1 homogeneous column of a point (w=1) or vector (w=0)."""
    w = 1.0 if isinstance(element, Point) else 0.0
    return torch.tensor(
        [[element.x], [element.y], [element.z], [w]], dtype=torch.float64
    )


def _approx_keys(data: torch.Tensor) -> torch.Tensor:
    """Elementwise equality keys, rounding halves away from zero."""
    scaled = data * EQUALITY_SCALE
    magnitude = scaled.abs()
    floor = torch.floor(magnitude)
    rounded = floor + (magnitude - floor >= 0.5).to(scaled.dtype)
    return torch.sign(scaled) * rounded


class Matrix:
    """
    A square matrix of order 2, 3 or 4 over double precision reals.

    Elements are addressed as m[row, col]. Equality compares elements at five
    decimal places.
    """

    __hash__ = None

    def __init__(self, data: Union[MatrixRows, torch.Tensor]):
        """
        Initialize a matrix from row-major data.

        Args:
            data: Nested rows or an (N, N) tensor; always copied

        Raises:
            ValueError: if the data is not square or the order is unsupported
        """
        if isinstance(data, torch.Tensor):
            tensor = data.detach().to(torch.float64).clone()
        else:
            tensor = torch.tensor(data, dtype=torch.float64)

        if tensor.dim() != 2 or tensor.shape[0] != tensor.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {tuple(tensor.shape)}")
        if not MIN_MATRIX_ORDER <= tensor.shape[0] <= MAX_MATRIX_ORDER:
            raise ValueError(
                f"Matrix order must be between {MIN_MATRIX_ORDER} and "
                f"{MAX_MATRIX_ORDER}, got {tensor.shape[0]}"
            )
        self._data = tensor

    # === Construction ===

    @classmethod
    def zeros(cls, order: int = HOMOGENEOUS_ORDER) -> 'Matrix':
        return cls(torch.zeros(order, order, dtype=torch.float64))

    @classmethod
    def identity(cls, order: int = HOMOGENEOUS_ORDER) -> 'Matrix':
        return cls(torch.eye(order, dtype=torch.float64))

    @classmethod
    def translation(cls, x: Scalar, y: Scalar, z: Scalar) -> 'Matrix':
        """4x4 translation: identity with the last column set to (x, y, z)."""
        m = cls.identity()
        m[0, 3] = x
        m[1, 3] = y
        m[2, 3] = z
        return m

    @classmethod
    def scaling(cls, x: Scalar, y: Scalar, z: Scalar) -> 'Matrix':
        """4x4 scaling: identity with the diagonal set to (x, y, z)."""
        m = cls.identity()
        m[0, 0] = x
        m[1, 1] = y
        m[2, 2] = z
        return m

    @classmethod
    def rotation_x(cls, radians: Scalar) -> 'Matrix':
        c, s = math.cos(radians), math.sin(radians)
        return cls([
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def rotation_y(cls, radians: Scalar) -> 'Matrix':
        c, s = math.cos(radians), math.sin(radians)
        return cls([
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def rotation_z(cls, radians: Scalar) -> 'Matrix':
        c, s = math.cos(radians), math.sin(radians)
        return cls([
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def shear(
        cls,
        xy: Scalar, xz: Scalar,
        yx: Scalar, yz: Scalar,
        zx: Scalar, zy: Scalar,
    ) -> 'Matrix':
        """
        4x4 shear.

        Each coefficient moves one component in proportion to another, e.g.
        xy moves x in proportion to y.
        """
        return cls([
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    # === Element access ===

    @property
    def order(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: Tuple[int, int]) -> float:
        r, c = index
        return float(self._data[r, c])

    def __setitem__(self, index: Tuple[int, int], value: Scalar) -> None:
        r, c = index
        self._data[r, c] = float(value)

    def to_tensor(self) -> torch.Tensor:
        """Copy of the backing (N, N) tensor."""
        return self._data.clone()

    def tolist(self) -> List[List[float]]:
        return self._data.tolist()

    def copy(self) -> 'Matrix':
        return Matrix(self._data)

    # === Algebra ===

    def transpose(self) -> 'Matrix':
        return Matrix(self._data.t())

    def submatrix(self, row: int, col: int) -> 'Matrix':
        """
        Matrix of order N-1 with `row` and `col` removed.

        Remaining rows and columns keep their relative order and are
        reindexed contiguously.
        """
        n = self.order
        if n <= MIN_MATRIX_ORDER:
            raise ValueError(f"Cannot take a submatrix of an order {n} matrix")
        self._check_index(row, col)

        rows = [i for i in range(n) if i != row]
        cols = [j for j in range(n) if j != col]
        return Matrix(self._data[rows][:, cols])

    def _check_index(self, row: int, col: int) -> None:
        n = self.order
        if not (0 <= row < n and 0 <= col < n):
            raise IndexError(f"Index ({row}, {col}) out of range for order {n}")

    def minor(self, row: int, col: int) -> float:
        """Determinant of submatrix(row, col)."""
        self._check_index(row, col)
        if self.order == MIN_MATRIX_ORDER:
            # Removing one row and column of a 2x2 leaves a single element
            return self[1 - row, 1 - col]
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        m = self.minor(row, col)
        if (row + col) % 2 == 0:
            return m
        return -m

    def determinant(self) -> float:
        if self.order == MIN_MATRIX_ORDER:
            return self[0, 0] * self[1, 1] - self[0, 1] * self[1, 0]

        det = 0.0
        for col in range(self.order):
            det += self.cofactor(0, col) * self[0, col]
        return det

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Optional['Matrix']:
        """
        Inverse by the adjugate method.

        Returns:
            The inverse, or None when the matrix is singular
        """
        det = self.determinant()
        if det == 0.0:
            logger.debug("Matrix is singular, no inverse: %s", self.tolist())
            return None

        n = self.order
        result = Matrix.zeros(n)
        for r in range(n):
            for c in range(n):
                # Transposed write turns the cofactor matrix into the adjugate
                result[c, r] = self.cofactor(r, c) / det
        return result

    # === Products ===

    def __mul__(self, other):
        if isinstance(other, Matrix):
            if other.order != self.order:
                raise ValueError(
                    f"Cannot multiply order {self.order} and order {other.order} matrices"
                )
            return Matrix(self._data @ other._data)

        if isinstance(other, (Point, Vector)):
            if self.order != HOMOGENEOUS_ORDER:
                raise ValueError(
                    f"Only order {HOMOGENEOUS_ORDER} matrices transform points and vectors"
                )
            column = self._data @ _homogeneous(other)
            x, y, z = column[:3, 0].tolist()
            return type(other)(x, y, z)

        return NotImplemented

    __matmul__ = __mul__

    # === Comparison ===

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if other.order != self.order:
            return False
        return torch.equal(
            _approx_keys(self._data),
            _approx_keys(other._data),
        )

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()})"
