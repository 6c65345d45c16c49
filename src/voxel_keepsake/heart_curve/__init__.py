"""
Heart Curve: implicit curve rasterization.

Samples the cardioid-like heart inequality on a fixed grid and commits a
two-ply (front + backing) voxel silhouette.
"""

__version__ = "1.0.0"

from .build import (
    GRID_HALF_EXTENT,
    SAMPLE_STEP,
    heart_mask,
    build_heart,
)

__all__ = [
    "GRID_HALF_EXTENT",
    "SAMPLE_STEP",
    "heart_mask",
    "build_heart",
]
