"""
Scene-owned spheres with stable integer identities.

A Scene is the sole owner of the spheres it creates. Spheres are stored in an
append-only list and identified by their position in it, so identities are
assigned in creation order starting at 0 and are never reused. Intersection
results refer back to spheres by identity rather than by reference.
"""

from __future__ import annotations
from typing import Iterator, List, Optional
import logging
import threading

from ..core.types import ObjectId, TensorDict
from ..geometry.matrix import Matrix
from ..geometry.transforms import Transform
from ..utils.config import Config
from .rays import Intersection, Interaction, Ray, hit, intersect_unit_sphere
from .silhouette import cast_silhouette

logger = logging.getLogger(__name__)


class Sphere:
    """
    A unit sphere centred at the origin of its own frame.

    Spheres are owned by a Scene and created only through Scene.sphere(),
    which assigns their identity. The transform maps the sphere's frame into
    world space and must be invertible; rays are carried into the sphere's
    frame by the inverse matrix.
    """

    def __init__(self, *args, **kwargs):
        raise TypeError("Spheres are owned by a scene; create them with Scene.sphere()")

    @classmethod
    def _create(
        cls,
        scene: 'Scene',
        object_id: ObjectId,
        transform: Optional[Transform] = None,
    ) -> 'Sphere':
        """Build a sphere for `scene`. Only Scene.sphere() calls this."""
        sphere = cls.__new__(cls)
        sphere._scene = scene
        sphere._id = object_id
        sphere._transform = Transform.identity()
        sphere._inverse = Transform.identity()
        sphere._inverse_matrix = Matrix.identity()
        if transform is not None:
            sphere.transform = transform
        return sphere

    @property
    def id(self) -> ObjectId:
        return self._id

    @property
    def scene(self) -> 'Scene':
        return self._scene

    @property
    def transform(self) -> Transform:
        return self._transform

    @transform.setter
    def transform(self, transform: Transform) -> None:
        inverse = transform.inverse()
        if inverse is None:
            raise ValueError(f"Sphere {self._id} transform is not invertible")
        self._transform = transform
        self._inverse = inverse
        self._inverse_matrix = inverse.matrix

    @property
    def inverse_transform(self) -> Transform:
        return self._inverse

    def intersect(self, ray: Ray) -> Interaction:
        """Intersect a world-space ray with this sphere."""
        # The matrix, not the tagged transform, so translation-tagged chains
        # still scale and rotate the direction
        local = Ray(self._inverse_matrix * ray.origin, self._inverse_matrix * ray.direction)
        return intersect_unit_sphere(local, self._id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return (
            self._scene is other._scene
            and self._id == other._id
            and self._transform == other._transform
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Sphere(id={self._id}, transform={self._transform.kind.value})"


class Scene:
    """
    Exclusive, append-only registry of spheres.

    Allocation is serialized with a lock; everything else only reads the
    registry.
    """

    def __init__(self):
        self._objects: List[Sphere] = []
        self._lock = threading.Lock()

    def sphere(self, transform: Optional[Transform] = None) -> Sphere:
        """
        Allocate a new sphere owned by this scene.

        Args:
            transform: Optional object-to-world transform

        Returns:
            The sphere, with identity equal to the number of spheres
            allocated before it

        Raises:
            ValueError: if the transform is not invertible (nothing is
                allocated)
        """
        with self._lock:
            sphere = Sphere._create(self, len(self._objects), transform)
            self._objects.append(sphere)
        logger.debug("Allocated sphere %d", sphere.id)
        return sphere

    # === Lookup ===

    def __getitem__(self, object_id: ObjectId) -> Sphere:
        if not 0 <= object_id < len(self._objects):
            raise KeyError(f"No object with id {object_id} in this scene")
        return self._objects[object_id]

    def get(self, object_id: ObjectId) -> Optional[Sphere]:
        try:
            return self[object_id]
        except KeyError:
            return None

    def __contains__(self, item) -> bool:
        if isinstance(item, Sphere):
            return item.scene is self
        return isinstance(item, int) and 0 <= item < len(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(list(self._objects))

    # === Queries ===

    def intersect(self, ray: Ray) -> List[Intersection]:
        """All intersections of the ray with every sphere, sorted by t."""
        intersections = [i for sphere in self._objects for i in sphere.intersect(ray)]
        return sorted(intersections, key=lambda i: i.t)

    def hit(self, ray: Ray) -> Optional[Intersection]:
        """Nearest intersection in front of the ray origin, or None."""
        return hit(self.intersect(ray))

    def cast(self, config: Optional[Config] = None) -> TensorDict:
        """
        Batched silhouette of the scene on a wall.

        Args:
            config: Config with the ray origin, wall and canvas settings
                (defaults to Config())

        Returns:
            Dict with hit_mask, depth and object_id tensors of shape
            (pixels, pixels)
        """
        config = config or Config()
        return cast_silhouette(
            self,
            origin=config.ray_origin,
            wall_z=config.wall_z,
            wall_size=config.wall_size,
            pixels=config.canvas_pixels,
            device=config.device,
        )

    def __repr__(self) -> str:
        return f"Scene({len(self._objects)} objects)"
