"""
Example 01: Clock Face

Demonstrates:
1. Rotating a point about the z axis in twelfths of a turn.
2. Chaining a rotation with a translation to place the hours on a canvas.
3. Truncating point coordinates to pixel indices.
"""

import matplotlib.pyplot as plt

from rtkernel import Point, Transform, compose
from rtkernel.core.constants import TAU
from rtkernel.utils import setup_logging, plot_points_xy

WIDTH, HEIGHT = 640, 480
RADIUS = 200.0


def clock_hours():
    """The twelve hour marks, noon first, in canvas coordinates."""
    noon = Point(0.0, RADIUS, 0.0)
    centre = Transform.translation(WIDTH / 2, HEIGHT / 2, 0.0)
    return [compose(Transform.rotation_z(TAU / 12 * hour), centre) * noon for hour in range(12)]


def main():
    setup_logging('INFO')

    hours = clock_hours()
    for hour, p in enumerate(hours):
        # Canvas rows grow downwards
        col, row = int(p.x), HEIGHT - 1 - int(p.y)
        print(f"  {hour:2d} o'clock -> pixel ({col}, {row})")

    plot_points_xy(hours, bounds=(0, WIDTH, 0, HEIGHT), title='Clock face')
    plt.savefig("01_clock_face.png")
    print("Saved 01_clock_face.png")

    print("\nDone!")


if __name__ == "__main__":
    main()
