"""
Type aliases for rtkernel.

Shape Conventions:
==================

Batched ray tensors follow the (..., 3) convention: any number of leading
batch dimensions followed by the x, y, z components. Homogeneous batches use
(..., 4) with w = 1 for points and w = 0 for directions.

Example:
    origins: Tensor[H, W, 3]     # one origin per pixel
    directions: Tensor[H, W, 3]  # one direction per pixel
    t_near: Tensor[H, W]         # nearer root per pixel
"""

from typing import Dict, Sequence, Union
import torch


# Real-valued scalar accepted by the scalar-facing API
Scalar = Union[int, float]

# Identity of a scene-owned object
ObjectId = int

# Output dictionary of batched casting
TensorDict = Dict[str, torch.Tensor]

# Nested row-major sequence used to build matrices
MatrixRows = Sequence[Sequence[Scalar]]
