"""
Centralized constants for rtkernel.

This module defines the numeric resolution shared by every approximate
comparison in the kernel, plus the defaults used by the batched casting
helpers.

Usage:
    from rtkernel.core.constants import EQUALITY_SCALE, approx_key

    approx_key(0.1 + 0.2) == approx_key(0.3)  # True
"""

import math

# =============================================================================
# Numeric Constants
# =============================================================================

# Decimal places kept by approximate equality (points, vectors, matrices)
EQUALITY_PLACES: int = 5

# Multiplier applied before rounding to the nearest integer
EQUALITY_SCALE: float = 10.0 ** EQUALITY_PLACES

# Full turn in radians
TAU: float = 2.0 * math.pi

# Supported square matrix orders
MIN_MATRIX_ORDER: int = 2
MAX_MATRIX_ORDER: int = 4

# Order of the homogeneous matrices used by transforms
HOMOGENEOUS_ORDER: int = 4


def round_half_away(value: float) -> float:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() sends halves to the even neighbour (2.5 -> 2); the
    kernel needs 2.5 -> 3 and -2.5 -> -3. Infinities and NaN pass through.
    """
    if not math.isfinite(value):
        return value
    magnitude = abs(value)
    floor = math.floor(magnitude)
    if magnitude - floor >= 0.5:
        floor += 1
    return math.copysign(float(floor), value)


def approx_key(value: float) -> float:
    """
    Rounded key of a real value at the kernel's resolution.

    Two reals compare equal in the kernel iff their keys compare equal, so a
    NaN never equals anything.
    """
    return round_half_away(value * EQUALITY_SCALE)


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Division with IEEE 754 results instead of ZeroDivisionError.

    x / ±0 is ±inf for non-zero x, and 0 / 0 is NaN.
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


# =============================================================================
# Casting Defaults
# =============================================================================

# Ray origin used when casting a scene onto a wall
DEFAULT_RAY_ORIGIN = (0.0, 0.0, -5.0)

# Wall placement and extent (world units)
DEFAULT_WALL_Z: float = 10.0
DEFAULT_WALL_SIZE: float = 7.0

# Pixels per side of the square canvas
DEFAULT_CANVAS_PIXELS: int = 100

# Object id written where no sphere was hit
NO_OBJECT: int = -1


# =============================================================================
# Output Dictionary Keys
# =============================================================================

OUTPUT_HIT_MASK: str = "hit_mask"
OUTPUT_DEPTH: str = "depth"
OUTPUT_OBJECT_ID: str = "object_id"
