"""
Core module for rtkernel.

Contains:
- Constants: the shared equality resolution and casting defaults
- Types: type aliases for scalars, identities and tensor dictionaries
"""

from .constants import (
    # Numeric constants
    EQUALITY_PLACES,
    EQUALITY_SCALE,
    TAU,
    MIN_MATRIX_ORDER,
    MAX_MATRIX_ORDER,
    HOMOGENEOUS_ORDER,
    round_half_away,
    approx_key,
    ieee_divide,
    # Casting defaults
    DEFAULT_RAY_ORIGIN,
    DEFAULT_WALL_Z,
    DEFAULT_WALL_SIZE,
    DEFAULT_CANVAS_PIXELS,
    NO_OBJECT,
    # Output keys
    OUTPUT_HIT_MASK,
    OUTPUT_DEPTH,
    OUTPUT_OBJECT_ID,
)

from .types import (
    Scalar,
    ObjectId,
    TensorDict,
    MatrixRows,
)

__all__ = [
    # Constants
    "EQUALITY_PLACES",
    "EQUALITY_SCALE",
    "TAU",
    "MIN_MATRIX_ORDER",
    "MAX_MATRIX_ORDER",
    "HOMOGENEOUS_ORDER",
    "round_half_away",
    "approx_key",
    "ieee_divide",
    "DEFAULT_RAY_ORIGIN",
    "DEFAULT_WALL_Z",
    "DEFAULT_WALL_SIZE",
    "DEFAULT_CANVAS_PIXELS",
    "NO_OBJECT",
    "OUTPUT_HIT_MASK",
    "OUTPUT_DEPTH",
    "OUTPUT_OBJECT_ID",
    # Types
    "Scalar",
    "ObjectId",
    "TensorDict",
    "MatrixRows",
]
