"""
Geometry module.

Points and vectors, square matrix algebra (orders 2-4), and tagged affine
transforms built on 4x4 homogeneous matrices.
"""

from .primitives import (
    Point,
    Vector,
    NonsensicalAdditionError,
)

from .matrix import Matrix

from .transforms import (
    Transform,
    TransformKind,
    compose,
    apply,
)

__all__ = [
    # Primitives
    "Point",
    "Vector",
    "NonsensicalAdditionError",
    # Matrices
    "Matrix",
    # Transforms
    "Transform",
    "TransformKind",
    "compose",
    "apply",
]
