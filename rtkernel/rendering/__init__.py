"""
Rendering module for rtkernel.

Includes rays, ray-sphere intersection, the scene registry and batched
silhouette casting.
"""

from .rays import (
    Ray,
    Intersection,
    Interaction,
    Collision,
    Miss,
    MISS,
    intersect_unit_sphere,
    hit,
    generate_wall_rays,
    transform_rays,
    rays_sphere_intersection,
)
from .silhouette import cast_silhouette
from .scene import Scene, Sphere

__all__ = [
    # Rays and intersections
    "Ray",
    "Intersection",
    "Interaction",
    "Collision",
    "Miss",
    "MISS",
    "intersect_unit_sphere",
    "hit",
    # Batched rays
    "generate_wall_rays",
    "transform_rays",
    "rays_sphere_intersection",
    "cast_silhouette",
    # Scene
    "Scene",
    "Sphere",
]
