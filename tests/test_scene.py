"""
Tests for scene-owned spheres and their identities.
"""

import math
import threading
import pytest
import torch

from rtkernel.core.constants import OUTPUT_DEPTH, OUTPUT_HIT_MASK, OUTPUT_OBJECT_ID
from rtkernel.geometry.matrix import Matrix
from rtkernel.geometry.primitives import Point, Vector
from rtkernel.geometry.transforms import Transform, TransformKind, compose
from rtkernel.rendering.rays import Collision, Intersection, MISS, Ray
from rtkernel.rendering.scene import Scene, Sphere
from rtkernel.rendering.silhouette import cast_silhouette
from rtkernel.utils.config import Config


# =============================================================================
# Identities
# =============================================================================

class TestSphereAllocation:
    """Tests for sequential identity assignment."""

    def test_identities_in_creation_order(self, scene):
        spheres = [scene.sphere() for _ in range(3)]
        assert [s.id for s in spheres] == [0, 1, 2]

    def test_identities_pairwise_distinct(self, scene):
        a, b, c = scene.sphere(), scene.sphere(), scene.sphere()
        assert a.id != b.id
        assert b.id != c.id
        assert a.id != c.id

    def test_scenes_number_independently(self):
        first, second = Scene(), Scene()
        first.sphere()
        first.sphere()
        assert second.sphere().id == 0

    def test_identity_is_read_only(self, scene):
        s = scene.sphere()
        with pytest.raises(AttributeError):
            s.id = 5

    def test_spheres_only_created_by_scenes(self):
        with pytest.raises(TypeError, match="Scene.sphere"):
            Sphere(3)

    def test_sphere_knows_its_scene(self, scene):
        assert scene.sphere().scene is scene

    def test_concurrent_allocation_unique(self, scene):
        """Parallel allocation never hands out the same identity twice."""
        def allocate():
            for _ in range(50):
                scene.sphere()

        threads = [threading.Thread(target=allocate) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [s.id for s in scene]
        assert len(ids) == 200
        assert sorted(ids) == list(range(200))


# =============================================================================
# Lookup
# =============================================================================

class TestSceneLookup:
    """Tests for resolving identities back to spheres."""

    def test_lookup_by_id(self, scene):
        a = scene.sphere()
        b = scene.sphere()
        assert scene[0] is a
        assert scene[1] is b
        assert scene.get(1) is b

    def test_unknown_id(self, scene):
        scene.sphere()
        with pytest.raises(KeyError):
            scene[1]
        with pytest.raises(KeyError):
            scene[-1]
        assert scene.get(7) is None

    def test_len_iter_contains(self, scene):
        a = scene.sphere()
        scene.sphere()
        assert len(scene) == 2
        assert [s.id for s in scene] == [0, 1]
        assert a in scene
        assert 1 in scene
        assert 2 not in scene

    def test_foreign_sphere_not_contained(self, scene):
        other = Scene().sphere()
        scene.sphere()
        assert other not in scene

    def test_intersection_resolves_to_owner(self, scene, z_ray):
        scene.sphere(Transform.translation(5.0, 0.0, 0.0))
        target = scene.sphere(Transform.translation(0.0, 0.0, 3.0))
        nearest = scene.hit(z_ray)
        assert scene[nearest.object_id] is target


# =============================================================================
# Sphere Transforms and Intersection
# =============================================================================

class TestSphereIntersection:
    """Tests for intersecting transformed spheres."""

    def test_default_transform_is_identity(self, scene):
        s = scene.sphere()
        assert s.transform == Transform.identity()
        assert s.transform.kind is TransformKind.MATRIX

    def test_unit_sphere(self, scene, z_ray):
        s = scene.sphere()
        assert s.intersect(z_ray) == Collision([Intersection(4.0, s.id), Intersection(6.0, s.id)])

    def test_tangent_and_miss(self, scene):
        s = scene.sphere()
        tangent = Ray(Point(0.0, 1.0, -5.0), Vector(0.0, 0.0, 1.0))
        away = Ray(Point(0.0, 2.0, -5.0), Vector(0.0, 0.0, 1.0))
        assert s.intersect(tangent).distances == (5.0, 5.0)
        assert s.intersect(away) == MISS

    def test_scaled_sphere(self, scene, z_ray):
        s = scene.sphere(Transform.scaling(2.0, 2.0, 2.0))
        assert s.intersect(z_ray).distances == (3.0, 7.0)

    def test_translation_tagged_chain(self, scene, z_ray):
        """Scaling inside a chain tagged as a translation still shapes the sphere."""
        s = scene.sphere(compose(
            Transform.scaling(2.0, 2.0, 2.0),
            Transform.translation(0.0, 0.0, 1.0),
        ))
        assert s.transform.kind is TransformKind.TRANSLATION
        assert s.intersect(z_ray).distances == (4.0, 8.0)

    def test_translated_sphere(self, scene, z_ray):
        s = scene.sphere()
        s.transform = Transform.translation(5.0, 0.0, 0.0)
        assert s.intersect(z_ray) == MISS

    def test_singular_transform_rejected(self, scene):
        s = scene.sphere()
        with pytest.raises(ValueError, match="not invertible"):
            s.transform = Transform.scaling(0.0, 1.0, 1.0)
        assert s.transform == Transform.identity()

    def test_singular_transform_allocates_nothing(self, scene):
        with pytest.raises(ValueError):
            scene.sphere(Transform.from_matrix(Matrix.zeros()))
        assert len(scene) == 0
        assert scene.sphere().id == 0

    def test_inverse_transform_cached(self, scene):
        s = scene.sphere(Transform.translation(1.0, 2.0, 3.0))
        assert s.inverse_transform == Transform.translation(-1.0, -2.0, -3.0)


class TestSceneQueries:
    """Tests for whole-scene intersection."""

    def test_intersections_sorted(self, scene, z_ray):
        scene.sphere()
        scene.sphere(Transform.scaling(0.5, 0.5, 0.5))
        xs = scene.intersect(z_ray)
        assert [i.t for i in xs] == [4.0, 4.5, 5.5, 6.0]
        assert [i.object_id for i in xs] == [0, 1, 1, 0]

    def test_hit_is_nearest_in_front(self, scene, z_ray):
        scene.sphere(Transform.translation(0.0, 0.0, 3.0))
        scene.sphere()
        assert scene.hit(z_ray) == Intersection(4.0, 1)

    def test_empty_scene(self, scene, z_ray):
        assert scene.intersect(z_ray) == []
        assert scene.hit(z_ray) is None


# =============================================================================
# Batched Casting
# =============================================================================

class TestSilhouette:
    """Tests for casting a scene onto a wall."""

    def test_output_shapes(self, scene):
        scene.sphere()
        result = scene.cast(Config(canvas_pixels=12))
        assert set(result) == {OUTPUT_HIT_MASK, OUTPUT_DEPTH, OUTPUT_OBJECT_ID}
        for value in result.values():
            assert value.shape == (12, 12)

    def test_centre_hit_and_corner_miss(self, scene):
        scene.sphere()
        result = scene.cast(Config(canvas_pixels=21))
        assert result[OUTPUT_HIT_MASK][10, 10]
        assert not result[OUTPUT_HIT_MASK][0, 0]
        assert result[OUTPUT_OBJECT_ID][0, 0] == -1
        assert math.isinf(result[OUTPUT_DEPTH][0, 0].item())

    def test_centre_depth_matches_scalar(self, scene):
        """The centre pixel of an odd canvas looks straight down +z."""
        scene.sphere()
        result = scene.cast(Config(canvas_pixels=21))
        assert result[OUTPUT_DEPTH][10, 10].item() == pytest.approx(4.0)

    def test_nearest_object_wins(self, scene):
        scene.sphere(Transform.translation(0.0, 0.0, 2.0))
        scene.sphere(Transform.scaling(0.5, 0.5, 0.5))
        result = scene.cast(Config(canvas_pixels=21))
        assert result[OUTPUT_OBJECT_ID][10, 10] == 1
        assert result[OUTPUT_DEPTH][10, 10].item() == pytest.approx(4.5)

    def test_agrees_with_scalar_hits(self, scene):
        scene.sphere(Transform.translation(0.5, 0.0, 0.0) * Transform.scaling(1.0, 0.5, 1.0))
        config = Config(canvas_pixels=9)
        result = cast_silhouette(
            scene, config.ray_origin, config.wall_z, config.wall_size, config.canvas_pixels
        )

        pixel_size = config.wall_size / config.canvas_pixels
        half = config.wall_size / 2
        origin = Point(*config.ray_origin)
        for row in range(config.canvas_pixels):
            for col in range(config.canvas_pixels):
                target = Point(
                    -half + pixel_size * (col + 0.5),
                    half - pixel_size * (row + 0.5),
                    config.wall_z,
                )
                ray = Ray(origin, (target - origin).normalize())
                expected = scene.hit(ray)
                assert bool(result[OUTPUT_HIT_MASK][row, col]) == (expected is not None)
                if expected is not None:
                    assert result[OUTPUT_DEPTH][row, col].item() == pytest.approx(expected.t)

    def test_empty_scene_casts_nothing(self, scene):
        result = cast_silhouette(scene, pixels=4)
        assert not result[OUTPUT_HIT_MASK].any()
        assert torch.all(result[OUTPUT_OBJECT_ID] == -1)

    def test_accepts_plain_sphere_list(self, scene):
        scene.sphere(Transform.translation(5.0, 0.0, 0.0))
        scene.sphere()
        result = cast_silhouette(list(scene)[1:], pixels=5)
        assert result[OUTPUT_OBJECT_ID][2, 2] == 1

    @pytest.mark.gpu
    def test_cast_on_cuda(self, scene):
        scene.sphere()
        result = scene.cast(Config(canvas_pixels=21, device='cuda'))
        assert result[OUTPUT_HIT_MASK].device.type == 'cuda'
        assert result[OUTPUT_DEPTH][10, 10].item() == pytest.approx(4.0)
