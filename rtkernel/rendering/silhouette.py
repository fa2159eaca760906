"""
Batched silhouette casting.

Casts one ray per pixel from a shared origin towards a square wall and
records, for every pixel, whether any sphere was hit, the distance to the
nearest visible hit, and the identity of the sphere hit.
"""

from typing import Iterable, Tuple, Union
import logging
import torch

from ..core.constants import (
    DEFAULT_CANVAS_PIXELS,
    DEFAULT_RAY_ORIGIN,
    DEFAULT_WALL_SIZE,
    DEFAULT_WALL_Z,
    NO_OBJECT,
    OUTPUT_DEPTH,
    OUTPUT_HIT_MASK,
    OUTPUT_OBJECT_ID,
)
from ..core.types import TensorDict
from .rays import generate_wall_rays, rays_sphere_intersection, transform_rays

logger = logging.getLogger(__name__)


def _nearest_visible(t_near: torch.Tensor, t_far: torch.Tensor) -> torch.Tensor:
    """Smallest non-negative root per ray, +inf where there is none."""
    inf = torch.full_like(t_near, float('inf'))
    # NaN compares False, so rays that missed fall through to inf
    near_ok = t_near >= 0
    far_ok = t_far >= 0
    return torch.where(near_ok, t_near, torch.where(far_ok, t_far, inf))


def cast_silhouette(
    spheres: Iterable,
    origin: Tuple[float, float, float] = DEFAULT_RAY_ORIGIN,
    wall_z: float = DEFAULT_WALL_Z,
    wall_size: float = DEFAULT_WALL_SIZE,
    pixels: int = DEFAULT_CANVAS_PIXELS,
    device: Union[str, torch.device] = 'cpu',
) -> TensorDict:
    """
    Cast a scene's spheres onto a wall.

    Args:
        spheres: Spheres to cast (a Scene or any iterable of spheres)
        origin: Shared ray origin
        wall_z: z coordinate of the wall
        wall_size: Side length of the wall
        pixels: Pixels per side
        device: Device for tensors

    Returns:
        Dict with:
            'hit_mask': (pixels, pixels) bool
            'depth': (pixels, pixels) float64, +inf where nothing was hit
            'object_id': (pixels, pixels) long, -1 where nothing was hit
    """
    device = torch.device(device)
    origins, directions = generate_wall_rays(origin, wall_z, wall_size, pixels, device=device)

    depth = torch.full((pixels, pixels), float('inf'), dtype=torch.float64, device=device)
    object_id = torch.full((pixels, pixels), NO_OBJECT, dtype=torch.long, device=device)

    count = 0
    for sphere in spheres:
        inverse = sphere.inverse_transform.matrix.to_tensor().to(device)
        local_origins, local_directions = transform_rays(origins, directions, inverse)

        t_near, t_far, _ = rays_sphere_intersection(local_origins, local_directions)
        t = _nearest_visible(t_near, t_far)

        closer = t < depth
        depth = torch.where(closer, t, depth)
        object_id = torch.where(closer, torch.full_like(object_id, sphere.id), object_id)
        count += 1

    hit_mask = torch.isfinite(depth)
    logger.info(
        "Cast %d spheres onto %dx%d wall, %d pixels hit",
        count, pixels, pixels, int(hit_mask.sum())
    )

    return {
        OUTPUT_HIT_MASK: hit_mask,
        OUTPUT_DEPTH: depth,
        OUTPUT_OBJECT_ID: object_id,
    }
