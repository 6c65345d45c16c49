"""
Heart Curve: Implicit Curve -> Two-Ply Voxel Silhouette

Rasterize the implicit heart curve

    (px² + py² - 1)³ - px² · py³ <= 0

on a fixed 30 x 30 integer grid sampled at 0.1 units per step.

Algorithm:
1. Evaluate the inequality for every grid cell (rows top to bottom)
2. Map matching cells to world space with a uniform scale
3. Commit a foreground voxel at depth cz and a backing voxel at cz - 1

The sampling constant and the grid range are fixed; only the world-space
scale is a parameter. Scales below 1 fold several cells onto one lattice
point, which the store resolves by last write wins.
"""

import numpy as np
from typing import Optional
import logging

from ..common.config import Palette, DEFAULT_PALETTE
from ..common.voxel import VoxelStore

logger = logging.getLogger(__name__)

GRID_HALF_EXTENT = 15
SAMPLE_STEP = 0.1


def heart_mask() -> np.ndarray:
    """
    Evaluate the heart inequality on the sampling grid.

    Returns:
        Boolean array indexed [row, col]; row 0 is grid y = 15 and
        col 0 is grid x = -15
    """
    ys = np.arange(GRID_HALF_EXTENT, -GRID_HALF_EXTENT, -1)
    xs = np.arange(-GRID_HALF_EXTENT, GRID_HALF_EXTENT)
    gy, gx = np.meshgrid(ys, xs, indexing="ij")

    px = gx * SAMPLE_STEP
    py = gy * SAMPLE_STEP
    val = (px * px + py * py - 1) ** 3 - px * px * py ** 3
    return val <= 0


def build_heart(
    store: VoxelStore,
    cx: float,
    cy: float,
    cz: float,
    scale: float = 1.0,
    palette: Optional[Palette] = None
) -> int:
    """
    Rasterize the heart into a store.

    Args:
        store: VoxelStore to write into
        cx, cy, cz: World position of the grid origin
        scale: World units per grid step
        palette: Colors (heart_red front, heart_pink back)

    Returns:
        Number of grid cells inside the curve
    """
    palette = palette or DEFAULT_PALETTE
    mask = heart_mask()

    n_cells = 0
    for row, col in np.argwhere(mask):
        x = int(col) - GRID_HALF_EXTENT
        y = GRID_HALF_EXTENT - int(row)
        wx = cx + x * scale
        wy = cy + y * scale
        store.put(wx, wy, cz, palette.heart_red)
        store.put(wx, wy, cz - 1, palette.heart_pink)
        n_cells += 1

    logger.debug(f"Heart: {n_cells} cells at scale {scale}")
    return n_cells
