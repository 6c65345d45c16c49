"""
Tests for the heart curve rasterizer.
"""

import pytest
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from voxel_keepsake.common.config import DEFAULT_PALETTE
from voxel_keepsake.common.voxel import VoxelStore
from voxel_keepsake.heart_curve import heart_mask, build_heart, GRID_HALF_EXTENT


# ============== Fixtures ==============

@pytest.fixture
def heart_store():
    store = VoxelStore()
    build_heart(store, 0, 0, 0)
    return store


def front(store):
    return {(v.x, v.y) for v in store.flatten() if v.z == 0}


def back(store):
    return {(v.x, v.y) for v in store.flatten() if v.z == -1}


# ============== Mask Tests ==============

class TestHeartMask:

    def test_grid_shape(self):
        mask = heart_mask()
        assert mask.shape == (2 * GRID_HALF_EXTENT, 2 * GRID_HALF_EXTENT)

    def test_non_empty(self):
        assert heart_mask().any()

    def test_outer_columns_and_rows_empty(self):
        """x = -15 (px = -1.5) and y = 15 (py = 1.5) never satisfy the curve."""
        mask = heart_mask()
        assert not mask[:, 0].any()
        assert not mask[0, :].any()


# ============== Build Tests ==============

class TestBuildHeart:

    def test_non_empty(self, heart_store):
        assert len(heart_store) > 0

    def test_left_right_symmetric(self, heart_store):
        cells = front(heart_store)
        assert cells == {(-x, y) for x, y in cells}

    def test_every_front_voxel_is_backed(self, heart_store):
        assert front(heart_store) == back(heart_store)
        assert len(heart_store) == 2 * len(front(heart_store))

    def test_colors_by_layer(self, heart_store):
        for v in heart_store.flatten():
            if v.z == 0:
                assert v.color == DEFAULT_PALETTE.heart_red
            else:
                assert v.color == DEFAULT_PALETTE.heart_pink

    def test_exact_inequality(self, heart_store):
        """Center axis spans y = -10 .. 10; the lobes rise above the notch."""
        cells = front(heart_store)
        assert (0, 0) in cells
        assert (0, 10) in cells
        assert (0, 11) not in cells
        assert (0, -10) in cells
        assert (0, -11) not in cells
        assert (5, 11) in cells
        assert (-5, 11) in cells

    def test_returns_cell_count(self):
        store = VoxelStore()
        n_cells = build_heart(store, 0, 0, 0)
        assert n_cells == int(heart_mask().sum())
        assert n_cells == len(front(store))

    def test_origin_offset(self):
        store = VoxelStore()
        build_heart(store, 3, 14, -6)
        zs = {v.z for v in store.flatten()}
        assert zs == {-6, -7}
        assert store.get(3, 14, -6).color == DEFAULT_PALETTE.heart_red

    def test_scale_stretches_extent(self):
        small, large = VoxelStore(), VoxelStore()
        build_heart(small, 0, 0, 0, scale=0.9)
        build_heart(large, 0, 0, 0, scale=2.0)

        def width(store):
            xs = [v.x for v in store.flatten()]
            return max(xs) - min(xs)

        assert width(large) > width(small)
        # Folded cells at scale < 1 are deduplicated
        assert len(small) < 2 * int(heart_mask().sum())

    def test_deterministic(self):
        a, b = VoxelStore(), VoxelStore()
        build_heart(a, 0, 14, -6, scale=0.9)
        build_heart(b, 0, 14, -6, scale=0.9)
        assert a.flatten() == b.flatten()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
