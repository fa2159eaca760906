"""
Example 02: Sphere Silhouette

Demonstrates:
1. Allocating transformed spheres in a scene.
2. Intersecting a single ray with the scene and resolving hits by id.
3. Casting the whole scene onto a wall with batched rays.
"""

import math
import torch
import matplotlib.pyplot as plt

from rtkernel import Point, Ray, Scene, Transform, Vector, compose
from rtkernel.utils import Config, setup_logging, plot_silhouette


def build_scene() -> Scene:
    scene = Scene()
    # Squashed sphere, tilted and pushed left
    scene.sphere(compose(
        Transform.scaling(1.0, 0.5, 1.0),
        Transform.rotation_z(math.pi / 4),
        Transform.translation(-1.0, 0.0, 0.0),
    ))
    # Small sphere in front, to the right
    scene.sphere(compose(
        Transform.scaling(0.5, 0.5, 0.5),
        Transform.translation(1.0, 0.5, -1.0),
    ))
    # Stretched sphere behind
    scene.sphere(compose(
        Transform.scaling(3.0, 0.3, 0.3),
        Transform.translation(0.0, -1.0, 2.0),
    ))
    return scene


def single_ray(scene: Scene):
    print("\n" + "="*60)
    print("Single Ray")
    print("="*60)

    ray = Ray(Point(0.0, 0.0, -5.0), Vector(0.0, 0.0, 1.0))
    for intersection in scene.intersect(ray):
        print(f"  t = {intersection.t:8.4f} on {scene[intersection.object_id]}")

    nearest = scene.hit(ray)
    if nearest is None:
        print("  No visible hit")
    else:
        print(f"  Visible: sphere {nearest.object_id} at t = {nearest.t:.4f}")


def silhouette(scene: Scene, config: Config):
    print("\n" + "="*60)
    print("Batched Silhouette")
    print("="*60)

    result = scene.cast(config)
    for sphere in scene:
        pixels = int((result['object_id'] == sphere.id).sum())
        print(f"  Sphere {sphere.id}: {pixels} pixels")

    plot_silhouette(result, title='Three spheres')
    plt.savefig("02_sphere_silhouette.png")
    print("Saved 02_sphere_silhouette.png")


def main():
    device = 'cuda' if torch.cuda.is_available() else 'cpu'
    config = Config(canvas_pixels=200, device=device, log_level='INFO')
    setup_logging(config.log_level)
    print(f"Using device: {device}")

    scene = build_scene()
    single_ray(scene)
    silhouette(scene, config)

    print("\nDone!")


if __name__ == "__main__":
    main()
