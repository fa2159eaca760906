"""
Rays and analytic ray-sphere intersection.

Provides:
- Ray: an origin point and a direction vector
- Intersection: a hit distance labelled with the identity of the object hit
- Interaction: either a Collision (two ordered intersections) or a Miss
- intersect_unit_sphere: the quadratic solve for a unit sphere at the origin
- Batched tensor counterparts for casting many rays at once
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple
import math
import torch
import torch.nn.functional as F

from ..core.constants import approx_key, ieee_divide
from ..core.types import ObjectId, Scalar
from ..geometry.primitives import Point, Vector
from ..geometry.transforms import Transform


# =============================================================================
# Rays
# =============================================================================

@dataclass(frozen=True)
class Ray:
    """A half-line with an origin and a (not necessarily unit) direction."""
    origin: Point
    direction: Vector

    def position(self, t: Scalar) -> Point:
        """Point reached after travelling t times the direction."""
        return self.origin + self.direction * t

    def transform(self, transform: Transform) -> 'Ray':
        """
        Ray with the transform applied to its origin and direction.

        A translation-tagged transform leaves the direction unchanged; use
        the transform's matrix to move directions through a full chain.
        """
        return Ray(transform * self.origin, transform * self.direction)


# =============================================================================
# Intersections
# =============================================================================

@dataclass(frozen=True, eq=False)
class Intersection:
    """A hit at distance t along a ray, on the object with identity object_id."""
    t: float
    object_id: ObjectId

    def __eq__(self, other) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return (
            self.object_id == other.object_id
            and approx_key(self.t) == approx_key(other.t)
        )

    def __hash__(self) -> int:
        return hash((approx_key(self.t), self.object_id))


class Interaction(ABC):
    """Outcome of intersecting a ray with an object."""

    @property
    @abstractmethod
    def is_hit(self) -> bool:
        """True when the ray meets the object."""
        pass


class Collision(Interaction):
    """
    The ray meets the object at two distances, t0 <= t1.

    Tangent rays report the same distance twice, and both distances are
    negative when the object lies behind the ray origin.
    """

    __hash__ = None

    def __init__(self, intersections: Iterable[Intersection]):
        self._intersections: Tuple[Intersection, ...] = tuple(intersections)

    @property
    def is_hit(self) -> bool:
        return True

    @property
    def intersections(self) -> Tuple[Intersection, ...]:
        return self._intersections

    @property
    def distances(self) -> Tuple[float, ...]:
        return tuple(i.t for i in self._intersections)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._intersections)

    def __len__(self) -> int:
        return len(self._intersections)

    def __getitem__(self, index: int) -> Intersection:
        return self._intersections[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Collision):
            return NotImplemented
        return self._intersections == other._intersections

    def __repr__(self) -> str:
        return f"Collision({list(self._intersections)})"


class Miss(Interaction):
    """The ray does not meet the object."""

    @property
    def is_hit(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def __iter__(self) -> Iterator[Intersection]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __eq__(self, other) -> bool:
        return isinstance(other, Miss)

    def __hash__(self) -> int:
        return hash(Miss)

    def __repr__(self) -> str:
        return "Miss"


MISS = Miss()


def intersect_unit_sphere(ray: Ray, object_id: ObjectId) -> Interaction:
    """
    Intersect a ray with the unit sphere centred at the origin.

    Solves |O + tD|² = 1 for t:

        a = D·D,  b = 2 D·(O - origin),  c = (O - origin)·(O - origin) - 1

    Args:
        ray: Ray in the sphere's local frame
        object_id: Identity attached to both intersections

    Returns:
        Collision with the two roots in increasing order, or MISS when the
        discriminant is negative. A zero direction gives a Collision with
        NaN distances, which hit() never selects.
    """
    ro = ray.origin - Point.origin()
    a = ray.direction.dot(ray.direction)
    b = 2.0 * ray.direction.dot(ro)
    c = ro.dot(ro) - 1.0
    discriminant = b ** 2 - 4.0 * a * c

    if discriminant < 0:
        return MISS

    root = math.sqrt(discriminant)
    return Collision([
        Intersection(ieee_divide(-b - root, 2.0 * a), object_id),
        Intersection(ieee_divide(-b + root, 2.0 * a), object_id),
    ])


def hit(intersections: Iterable[Intersection]) -> Optional[Intersection]:
    """Intersection with the smallest non-negative t, or None."""
    visible = [i for i in intersections if i.t >= 0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)


# =============================================================================
# Batched Rays
# =============================================================================

def generate_wall_rays(
    origin: Tuple[float, float, float],
    wall_z: float,
    wall_size: float,
    pixels: int,
    device: torch.device = torch.device('cpu')
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Generate one ray per pixel towards a square wall facing the origin.

    The wall is perpendicular to the z axis, centred on it at wall_z, and
    spans wall_size world units per side. Row 0 is the top of the wall.

    Args:
        origin: Shared ray origin (x, y, z)
        wall_z: z coordinate of the wall
        wall_size: Side length of the wall
        pixels: Pixels per side
        device: Device for tensors

    Returns:
        (origins, directions) each of shape (pixels, pixels, 3), directions
        normalized
    """
    pixel_size = wall_size / pixels
    half = wall_size / 2

    # Pixel centres, y flipped so that row 0 is the top of the wall
    i, j = torch.meshgrid(
        torch.arange(pixels, dtype=torch.float64, device=device) + 0.5,
        torch.arange(pixels, dtype=torch.float64, device=device) + 0.5,
        indexing='ij'
    )
    world_x = -half + pixel_size * j
    world_y = half - pixel_size * i
    world_z = torch.full_like(world_x, wall_z)

    targets = torch.stack([world_x, world_y, world_z], dim=-1)
    start = torch.tensor(origin, dtype=torch.float64, device=device)

    directions = F.normalize(targets - start, dim=-1)
    origins = start.expand(pixels, pixels, 3)

    return origins, directions


def transform_rays(
    origins: torch.Tensor,
    directions: torch.Tensor,
    matrix: torch.Tensor
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Apply a 4x4 homogeneous matrix to batched rays.

    Origins are treated as points (w = 1) and directions as vectors (w = 0),
    so translation only moves the origins.

    Args:
        origins: Ray origins (..., 3)
        directions: Ray directions (..., 3)
        matrix: Transformation matrix (4, 4)

    Returns:
        (transformed_origins, transformed_directions)
    """
    matrix = matrix.to(dtype=origins.dtype, device=origins.device)
    linear = matrix[:3, :3]
    translation = matrix[:3, 3]

    new_origins = torch.einsum('ij,...j->...i', linear, origins) + translation
    new_directions = torch.einsum('ij,...j->...i', linear, directions)

    return new_origins, new_directions


def rays_sphere_intersection(
    origins: torch.Tensor,
    directions: torch.Tensor,
    center: Optional[torch.Tensor] = None,
    radius: float = 1.0
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """
    Compute ray-sphere intersection for a batch of rays.

    No root is clamped: negative distances are kept so callers can decide
    what counts as visible.

    Args:
        origins: Ray origins (..., 3)
        directions: Ray directions (..., 3)
        center: Sphere center (3,), defaults to the origin
        radius: Sphere radius

    Returns:
        (t_near, t_far, mask) where mask marks rays with a real root; t
        values are NaN where mask is False
    """
    oc = origins if center is None else origins - center

    # Quadratic coefficients
    a = (directions ** 2).sum(dim=-1)
    b = 2 * (oc * directions).sum(dim=-1)
    c = (oc ** 2).sum(dim=-1) - radius ** 2

    discriminant = b ** 2 - 4 * a * c
    mask = discriminant >= 0

    sqrt_disc = torch.sqrt(torch.clamp(discriminant, min=0))
    nan = torch.full_like(discriminant, float('nan'))
    t_near = torch.where(mask, (-b - sqrt_disc) / (2 * a), nan)
    t_far = torch.where(mask, (-b + sqrt_disc) / (2 * a), nan)

    return t_near, t_far, mask
