"""
Pytest configuration and fixtures for rtkernel tests.
"""

import math
import pytest
import torch

from rtkernel.geometry import Matrix, Point, Vector
from rtkernel.rendering import Ray, Scene


@pytest.fixture
def cpu_device():
    """Force CPU device for consistent testing."""
    return torch.device('cpu')


@pytest.fixture
def half_sqrt2():
    """√2 / 2, the sine and cosine of an eighth turn."""
    return math.sqrt(2.0) / 2.0


@pytest.fixture
def z_ray():
    """Ray starting 5 units before the origin, travelling along +z."""
    return Ray(Point(0.0, 0.0, -5.0), Vector(0.0, 0.0, 1.0))


@pytest.fixture
def scene():
    """Empty scene."""
    return Scene()


@pytest.fixture
def invertible_m4():
    """4x4 matrix with determinant -4071."""
    return Matrix([
        [-2.0, -8.0, 3.0, 5.0],
        [-3.0, 1.0, 7.0, 3.0],
        [1.0, 2.0, -9.0, 6.0],
        [-6.0, 7.0, 7.0, -9.0],
    ])


@pytest.fixture
def singular_m4():
    """4x4 matrix whose last row is all zero."""
    return Matrix([
        [-4.0, 2.0, -2.0, -3.0],
        [9.0, 6.0, 2.0, 6.0],
        [0.0, -5.0, 1.0, -5.0],
        [0.0, 0.0, 0.0, 0.0],
    ])


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "gpu: marks tests that require GPU"
    )


def pytest_collection_modifyitems(config, items):
    """Skip GPU tests if no GPU available."""
    if not torch.cuda.is_available():
        skip_gpu = pytest.mark.skip(reason="No GPU available")
        for item in items:
            if "gpu" in item.keywords:
                item.add_marker(skip_gpu)
