"""
Tests for the voxel store and primitive builders.

Tests cover:
- Coordinate quantization
- Overwrite (last write wins) and insertion order
- Layer merging with collision counts
- Box fill and ellipsoid fill
"""

import itertools
import pytest
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from voxel_keepsake.common.voxel import (
    Voxel,
    VoxelStore,
    quantize,
    set_block,
    fill_box,
    fill_ellipsoid,
)


RED = 0xFF0000
BLUE = 0x0000FF


# ============== Fixtures ==============

@pytest.fixture
def store():
    return VoxelStore()


def cells(store):
    return {v.key for v in store.flatten()}


# ============== Quantize Tests ==============

class TestQuantize:
    """Test rounding to the integer lattice."""

    def test_rounds_to_nearest(self):
        assert quantize(1.4) == 1
        assert quantize(2.6) == 3
        assert quantize(-1.4) == -1
        assert quantize(-1.6) == -2

    def test_halves_round_up(self):
        """Halves go toward +infinity on both sides of zero."""
        assert quantize(-0.5) == 0
        assert quantize(0.5) == 1
        assert quantize(2.5) == 3
        assert quantize(-2.5) == -2

    def test_integers_unchanged(self):
        for v in (-7, 0, 12):
            assert quantize(v) == v


# ============== VoxelStore Tests ==============

class TestVoxelStore:
    """Test the deduplicating store."""

    def test_put_rounds_coordinates(self, store):
        store.put(1.4, 2.6, -0.5, RED)
        assert store.flatten() == [Voxel(1, 3, 0, RED)]

    def test_overwrite_last_write_wins(self, store):
        store.put(1, 2, 3, RED)
        store.put(1, 2, 3, BLUE)

        voxels = store.flatten()
        assert voxels == [Voxel(1, 2, 3, BLUE)]
        assert store.overwrites == 1

    def test_overwrite_through_rounding(self, store):
        """Different inputs that round to one cell collide."""
        store.put(0.6, 0, 0, RED)
        store.put(1.4, 0, 0, BLUE)
        assert store.flatten() == [Voxel(1, 0, 0, BLUE)]

    def test_insertion_order_preserved(self, store):
        store.put(5, 0, 0, RED)
        store.put(-3, 0, 0, RED)
        store.put(1, 0, 0, RED)
        # Overwrite keeps the original position
        store.put(5, 0, 0, BLUE)

        assert [v.x for v in store.flatten()] == [5, -3, 1]
        assert store.flatten()[0].color == BLUE

    def test_empty_flatten(self, store):
        assert store.flatten() == []
        assert len(store) == 0

    def test_get_and_contains(self, store):
        store.put(2, 2, 2, RED)
        assert (2, 2, 2) in store
        assert store.get(2.2, 1.8, 2) == Voxel(2, 2, 2, RED)
        assert store.get(0, 0, 0) is None

    def test_flatten_returns_fresh_list(self, store):
        store.put(0, 0, 0, RED)
        first = store.flatten()
        first.clear()
        assert len(store.flatten()) == 1

    def test_voxel_to_dict(self):
        assert Voxel(1, -2, 3, RED).to_dict() == {"x": 1, "y": -2, "z": 3, "color": RED}


class TestMerge:
    """Test merging layers into a scene store."""

    def test_disjoint_merge(self, store):
        layer = VoxelStore()
        layer.put(1, 0, 0, BLUE)
        store.put(0, 0, 0, RED)

        assert store.merge(layer) == 0
        assert store.flatten() == [Voxel(0, 0, 0, RED), Voxel(1, 0, 0, BLUE)]

    def test_collisions_counted_and_overwritten(self, store):
        store.put(0, 0, 0, RED)
        store.put(1, 0, 0, RED)
        layer = VoxelStore()
        layer.put(1, 0, 0, BLUE)
        layer.put(2, 0, 0, BLUE)

        assert store.merge(layer) == 1
        assert store.get(1, 0, 0).color == BLUE
        assert len(store) == 3

    def test_merge_matches_direct_writes(self):
        """Building in a layer then merging gives the same sequence as direct writes."""
        direct = VoxelStore()
        direct.put(0, 0, 0, RED)
        fill_box(direct, 0, 0, 0, 2, 1, 0, BLUE)
        direct.put(1, 1, 0, RED)

        merged = VoxelStore()
        merged.put(0, 0, 0, RED)
        layer = VoxelStore()
        fill_box(layer, 0, 0, 0, 2, 1, 0, BLUE)
        layer.put(1, 1, 0, RED)
        merged.merge(layer)

        assert merged.flatten() == direct.flatten()


# ============== Primitive Tests ==============

class TestSetBlock:

    def test_single_voxel(self, store):
        set_block(store, 3, 4, 5, RED)
        assert store.flatten() == [Voxel(3, 4, 5, RED)]


class TestFillBox:
    """Test inclusive axis-aligned box fill."""

    def test_inclusive_count(self, store):
        fill_box(store, 0, 0, 0, 2, 1, 0, RED)
        assert len(store) == 6

    def test_corner_order_independent(self):
        a, b = VoxelStore(), VoxelStore()
        fill_box(a, 2, 0, 0, 0, 1, 0, RED)
        fill_box(b, 0, 1, 0, 2, 0, 0, RED)

        assert cells(a) == cells(b)
        assert cells(a) == {(x, y, 0) for x in range(3) for y in range(2)}

    def test_degenerate_box_is_one_voxel(self, store):
        fill_box(store, 4, 4, 4, 4, 4, 4, RED)
        assert store.flatten() == [Voxel(4, 4, 4, RED)]

    def test_fractional_corners_step_from_lower_corner(self, store):
        """-1.1 .. 1.1 scans -1.1, -0.1, 0.9 -> cells -1, 0, 1."""
        fill_box(store, 0, 0, -1.1, 0, 0, 1.1, RED)
        assert cells(store) == {(0, 0, -1), (0, 0, 0), (0, 0, 1)}

    def test_half_offsets_bias_rounding(self, store):
        """-2.5 .. -1.5 scans -2.5, -1.5 -> cells -2, -1."""
        fill_box(store, -2.5, 0, 0, -1.5, 0, 0, RED)
        assert cells(store) == {(-2, 0, 0), (-1, 0, 0)}

    def test_all_voxels_share_color(self, store):
        fill_box(store, -1, -1, -1, 1, 1, 1, BLUE)
        assert len(store) == 27
        assert {v.color for v in store.flatten()} == {BLUE}


class TestFillEllipsoid:
    """Test sphere and squashed-sphere fill."""

    def test_sphere_matches_distance_test(self, store):
        r = 2
        fill_ellipsoid(store, 0, 0, 0, r, RED)

        expected = {
            (x, y, z)
            for x, y, z in itertools.product(range(-3, 4), repeat=3)
            if x * x + y * y + z * z <= r * r
        }
        assert cells(store) == expected

    def test_fractional_radius(self, store):
        """Radius 1.5 includes the 3x3x3 block minus its 8 corners."""
        fill_ellipsoid(store, 0, 0, 0, 1.5, RED)
        assert len(store) == 19

    def test_offset_center(self, store):
        fill_ellipsoid(store, 10, -4, 3, 1, RED)
        assert cells(store) == {
            (10, -4, 3),
            (9, -4, 3), (11, -4, 3),
            (10, -5, 3), (10, -3, 3),
            (10, -4, 2), (10, -4, 4),
        }

    def test_squash_stretches_vertical_extent(self):
        plain, tall, flat = VoxelStore(), VoxelStore(), VoxelStore()
        fill_ellipsoid(plain, 0, 0, 0, 2, RED)
        fill_ellipsoid(tall, 0, 0, 0, 2, RED, squash=2.0)
        fill_ellipsoid(flat, 0, 0, 0, 2, RED, squash=0.5)

        def y_extent(s):
            ys = [v.y for v in s.flatten()]
            return min(ys), max(ys)

        assert y_extent(plain) == (-2, 2)
        assert y_extent(tall) == (-4, 4)
        assert y_extent(flat) == (-1, 1)

    def test_squash_keeps_horizontal_extent(self):
        tall = VoxelStore()
        fill_ellipsoid(tall, 0, 0, 0, 2, RED, squash=2.0)
        xs = [v.x for v in tall.flatten()]
        assert (min(xs), max(xs)) == (-2, 2)

    def test_squashed_membership(self, store):
        fill_ellipsoid(store, 0, 0, 0, 3, RED, squash=0.9)

        expected = {
            (x, y, z)
            for x, y, z in itertools.product(range(-4, 5), repeat=3)
            if x * x + (y / 0.9) ** 2 + z * z <= 9
        }
        assert cells(store) == expected

    def test_zero_radius_is_center(self, store):
        fill_ellipsoid(store, 1, 1, 1, 0, RED)
        assert store.flatten() == [Voxel(1, 1, 1, RED)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
