"""
Utility functions for rtkernel.

Includes configuration management, logging setup and visualization helpers.
"""

from .config import Config, load_config, save_config
from .logging_config import setup_logging
from .visualization import (
    PlotStyle,
    plot_silhouette,
    plot_points_xy,
)

__all__ = [
    # Config
    "Config",
    "load_config",
    "save_config",
    # Logging
    "setup_logging",
    # Visualization
    "PlotStyle",
    "plot_silhouette",
    "plot_points_xy",
]
