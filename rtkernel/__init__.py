"""
rtkernel: a geometric kernel for ray tracing experiments

Points and vectors, square matrix algebra, tagged affine transforms and
analytic ray-sphere intersection, with scene-owned objects identified by
stable integer ids.

Key Features:
- Separate Point and Vector types with only the meaningful arithmetic
- Matrices of order 2-4 with cofactor determinant and adjugate inverse
- Transforms that remember their kind through composition
- Ray-sphere intersection reporting ordered, labelled hit distances
- Batched (torch) silhouette casting of whole scenes

Equality of every derived value is approximate, at five decimal places.

Example:
    >>> import math
    >>> from rtkernel import Point, Vector, Ray, Scene, Transform
    >>> scene = Scene()
    >>> sphere = scene.sphere(Transform.scaling(2, 2, 2))
    >>> ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
    >>> sphere.intersect(ray).distances
    (3.0, 7.0)
"""

__version__ = "0.1.0"
__author__ = "rtkernel Contributors"

from . import core
from . import geometry
from . import utils
from . import rendering

from .geometry import (
    Point,
    Vector,
    NonsensicalAdditionError,
    Matrix,
    Transform,
    TransformKind,
    compose,
)
from .rendering import (
    Ray,
    Intersection,
    Collision,
    Miss,
    MISS,
    Scene,
    Sphere,
)

__all__ = [
    "core",
    "geometry",
    "utils",
    "rendering",
    # Geometry
    "Point",
    "Vector",
    "NonsensicalAdditionError",
    "Matrix",
    "Transform",
    "TransformKind",
    "compose",
    # Rendering
    "Ray",
    "Intersection",
    "Collision",
    "Miss",
    "MISS",
    "Scene",
    "Sphere",
]
