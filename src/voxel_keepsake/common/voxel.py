"""
Voxel store and primitive builders for scene generation.

All coordinates are quantized to the integer lattice at store time.
Halves round toward +infinity, so -0.5 -> 0 and 2.5 -> 3.
"""

import math
import numpy as np
from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

Key = Tuple[int, int, int]


def quantize(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Voxel:
    """Unit cube at an integer lattice point with a 24-bit RGB color."""
    x: int
    y: int
    z: int
    color: int

    @property
    def key(self) -> Key:
        return (self.x, self.y, self.z)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "z": self.z, "color": self.color}


class VoxelStore:
    """
    Deduplicating container mapping lattice cells to voxels.

    Writing to an occupied cell replaces the voxel (last write wins) but keeps
    the cell's original insertion position. Builders rely on this to layer
    detail over bulk fills.
    """

    def __init__(self):
        self._voxels: Dict[Key, Voxel] = {}
        self.overwrites = 0

    def __len__(self) -> int:
        return len(self._voxels)

    def __contains__(self, key: Key) -> bool:
        return key in self._voxels

    def __iter__(self) -> Iterator[Voxel]:
        return iter(self._voxels.values())

    def put(self, x: float, y: float, z: float, color: int) -> None:
        rx, ry, rz = quantize(x), quantize(y), quantize(z)
        key = (rx, ry, rz)
        if key in self._voxels:
            self.overwrites += 1
        self._voxels[key] = Voxel(rx, ry, rz, color)

    def get(self, x: float, y: float, z: float) -> Optional[Voxel]:
        return self._voxels.get((quantize(x), quantize(y), quantize(z)))

    def merge(self, other: "VoxelStore") -> int:
        """
        Write every voxel of another store into this one, in its order.

        Returns:
            Number of merged voxels that landed on occupied cells
        """
        collisions = 0
        for voxel in other:
            if voxel.key in self._voxels:
                collisions += 1
            self.put(voxel.x, voxel.y, voxel.z, voxel.color)
        return collisions

    def flatten(self) -> List[Voxel]:
        """Return all voxels in insertion order."""
        return list(self._voxels.values())


def _span(a: float, b: float) -> Iterator[float]:
    """Yield min(a, b), min(a, b) + 1, ... up to and including max(a, b)."""
    value, end = min(a, b), max(a, b)
    while value <= end:
        yield value
        value += 1


def set_block(store: VoxelStore, x: float, y: float, z: float, color: int) -> None:
    store.put(x, y, z, color)


def fill_box(
    store: VoxelStore,
    x1: float, y1: float, z1: float,
    x2: float, y2: float, z2: float,
    color: int
) -> None:
    """
    Fill the axis-aligned box between two opposite corners, inclusive.

    Corners may be given in any order and may be fractional; half-unit
    offsets are used by callers to bias the rounding of the scan.
    """
    for x in _span(x1, x2):
        for y in _span(y1, y2):
            for z in _span(z1, z2):
                store.put(x, y, z, color)


def fill_ellipsoid(
    store: VoxelStore,
    cx: float, cy: float, cz: float,
    radius: float,
    color: int,
    squash: float = 1.0
) -> None:
    """
    Fill a sphere, optionally squashed or stretched along Y.

    A lattice point is inside when dx² + (dy / squash)² + dz² <= radius².

    Args:
        store: VoxelStore to write into
        cx, cy, cz: Center (may be fractional)
        radius: Radius in voxels
        color: 24-bit RGB color
        squash: Vertical scale factor (<1 oblate, >1 prolate)
    """
    r2 = radius * radius
    x_min, x_max = math.floor(cx - radius), math.ceil(cx + radius)
    y_min, y_max = math.floor(cy - radius * squash), math.ceil(cy + radius * squash)
    z_min, z_max = math.floor(cz - radius), math.ceil(cz + radius)

    xx, yy, zz = np.mgrid[x_min:x_max + 1, y_min:y_max + 1, z_min:z_max + 1]
    dx = xx - cx
    dy = (yy - cy) / squash
    dz = zz - cz
    inside = dx * dx + dy * dy + dz * dz <= r2

    # argwhere walks C order: x, then y, then z
    for i, j, k in np.argwhere(inside):
        store.put(int(xx[i, j, k]), int(yy[i, j, k]), int(zz[i, j, k]), color)
