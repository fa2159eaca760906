"""
Visualization utilities for rtkernel.

Plotting helpers for:
- Silhouettes produced by batched casting (hit mask, depth, object ids)
- Points projected onto the xy plane (e.g. the output of a transform chain)
"""

import torch
import numpy as np
from typing import Any, Iterable, Optional, Tuple, Union
from dataclasses import dataclass

from ..core.constants import OUTPUT_DEPTH, OUTPUT_HIT_MASK, OUTPUT_OBJECT_ID
from ..core.types import TensorDict


# =============================================================================
# Configuration and Style
# =============================================================================

@dataclass
class PlotStyle:
    """Global plotting style configuration."""
    figsize: Tuple[int, int] = (10, 8)
    dpi: int = 100
    cmap_depth: str = 'plasma'
    cmap_objects: str = 'tab10'
    point_color: str = '#4ECDC4'
    background_color: str = '#1a1a2e'
    font_size: int = 12


DEFAULT_STYLE = PlotStyle()


def _ensure_matplotlib():
    """Ensure matplotlib is available."""
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install matplotlib"
        )


def _ensure_numpy(tensor: Union[torch.Tensor, np.ndarray]) -> np.ndarray:
    """Convert tensor to numpy array."""
    if isinstance(tensor, torch.Tensor):
        return tensor.detach().cpu().numpy()
    return tensor


# =============================================================================
# Silhouettes
# =============================================================================

def plot_silhouette(
    result: TensorDict,
    style: PlotStyle = None,
    title: str = 'Silhouette',
):
    """
    Plot the hit mask, depth and object ids of a cast.

    Args:
        result: Output of cast_silhouette / Scene.cast
        style: PlotStyle configuration
        title: Overall title

    Returns:
        Tuple of (figure, axes)
    """
    plt = _ensure_matplotlib()
    style = style or DEFAULT_STYLE

    mask = _ensure_numpy(result[OUTPUT_HIT_MASK])
    depth = np.where(mask, _ensure_numpy(result[OUTPUT_DEPTH]), np.nan)
    objects = np.where(mask, _ensure_numpy(result[OUTPUT_OBJECT_ID]), np.nan)

    fig, axes = plt.subplots(1, 3, figsize=(15, 5), dpi=style.dpi)

    axes[0].imshow(mask, cmap='gray')
    axes[0].set_title('Hit mask', fontsize=style.font_size + 2)

    im = axes[1].imshow(depth, cmap=style.cmap_depth)
    plt.colorbar(im, ax=axes[1], shrink=0.8)
    axes[1].set_title('Depth', fontsize=style.font_size + 2)

    axes[2].imshow(objects, cmap=style.cmap_objects, interpolation='nearest')
    axes[2].set_title('Object id', fontsize=style.font_size + 2)

    for ax in axes:
        ax.axis('off')

    plt.suptitle(title, fontsize=style.font_size + 4)
    plt.tight_layout()
    return fig, axes


# =============================================================================
# Points
# =============================================================================

def plot_points_xy(
    points: Iterable,
    ax: Any = None,
    bounds: Optional[Tuple[float, float, float, float]] = None,
    style: PlotStyle = None,
    title: str = None,
):
    """
    Scatter points on the xy plane.

    Args:
        points: Iterable of Points (anything with x and y)
        ax: Existing axes to draw on
        bounds: Optional (xmin, xmax, ymin, ymax)
        style: PlotStyle configuration
        title: Axes title

    Returns:
        The axes drawn on
    """
    plt = _ensure_matplotlib()
    style = style or DEFAULT_STYLE

    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64).reshape(-1, 2)

    if ax is None:
        _, ax = plt.subplots(figsize=style.figsize, dpi=style.dpi)

    ax.set_facecolor(style.background_color)
    ax.scatter(coords[:, 0], coords[:, 1], c=style.point_color, s=40)
    ax.set_aspect('equal')
    if bounds is not None:
        ax.set_xlim(bounds[0], bounds[1])
        ax.set_ylim(bounds[2], bounds[3])
    if title:
        ax.set_title(title, fontsize=style.font_size + 2)
    return ax
