"""
Configuration management for rtkernel.

Provides the configuration dataclass for batched casting and logging, and
JSON helpers to load and save it.
"""

import json
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple
from pathlib import Path

from ..core.constants import (
    DEFAULT_CANVAS_PIXELS,
    DEFAULT_RAY_ORIGIN,
    DEFAULT_WALL_SIZE,
    DEFAULT_WALL_Z,
)


@dataclass
class Config:
    """
    Configuration for casting scenes and for logging.

    Attributes:
        # Casting
        ray_origin: Shared origin of the cast rays
        wall_z: z coordinate of the wall rays are cast towards
        wall_size: Side length of the wall in world units
        canvas_pixels: Pixels per side of the square canvas

        # Runtime
        device: Device for batched tensors ('cpu', 'cuda', 'mps')
        log_level: Level name for setup_logging ('DEBUG', 'INFO', ...)
    """

    # Casting
    ray_origin: Tuple[float, float, float] = DEFAULT_RAY_ORIGIN
    wall_z: float = DEFAULT_WALL_Z
    wall_size: float = DEFAULT_WALL_SIZE
    canvas_pixels: int = DEFAULT_CANVAS_PIXELS

    # Runtime
    device: str = 'cpu'
    log_level: str = 'WARNING'

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.ray_origin = tuple(float(v) for v in self.ray_origin)
        if len(self.ray_origin) != 3:
            raise ValueError(f"ray_origin needs 3 components, got {len(self.ray_origin)}")
        if self.canvas_pixels <= 0:
            raise ValueError(f"canvas_pixels must be positive, got {self.canvas_pixels}")
        if self.wall_size <= 0:
            raise ValueError(f"wall_size must be positive, got {self.wall_size}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields and k != 'extra'}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}
        extra_kwargs.update(config_dict.get('extra', {}))

        config = cls(**known_kwargs)
        config.extra = extra_kwargs
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)


def load_config(filepath: str) -> Config:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        Config object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        config_dict = json.load(f)
    return Config.from_dict(config_dict)


def save_config(config: Config, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Config object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
