"""
Scenes: Named Generators -> Flattened Voxel Sequences

Every generator takes no arguments, owns a fresh VoxelStore for the
duration of the call and returns the flattened result, so repeated calls
return equal sequences.

Love scene layout (load-bearing offsets, reproduce the published output):
- Heart background at (0, 14, -6), scale 0.9
- Two white text lines at z = 2
- Three figures at z = 6, spaced 11 apart on X

Text lines and figures are built as separate layers and merged into the
scene store. Overlap between layers is not prevented; a layer that lands
on occupied cells is logged with its collision count.
"""

from typing import Callable, Dict, List, Optional, Tuple
import logging

from ..common.config import Palette, DEFAULT_PALETTE
from ..common.voxel import Voxel, VoxelStore, set_block, fill_ellipsoid
from ..heart_curve.build import build_heart
from ..glyph_text.build import render_text
from ..figures.build import build_character

logger = logging.getLogger(__name__)

HEART_ORIGIN = (0, 14, -6)
HEART_SCALE = 0.9

TEXT_LINES: Tuple[Tuple[str, int, int, int], ...] = (
    ("TE AMO", -13, -2, 2),
    ("PAMELITA", -17, -8, 2),
)

# Drawn in this order; the centered figure first
FIGURE_PLACEMENTS: Tuple[Tuple[str, int, int, int], ...] = (
    ("Blossom", 0, 6, 6),
    ("Bubbles", -11, 6, 6),
    ("Buttercup", 11, 6, 6),
)

RABBIT_ORIGIN = (0, -5, 0)


def merge_layer(store: VoxelStore, layer: VoxelStore, name: str) -> int:
    """Merge a layer into the scene store, warning on overlap."""
    collisions = store.merge(layer)
    if collisions:
        logger.warning(
            f"Layer {name!r} overwrote {collisions} of its {len(layer)} voxels"
        )
    return collisions


def love_scene(palette: Optional[Palette] = None) -> List[Voxel]:
    """Heart behind two lines of text, flanked by three figures."""
    palette = palette or DEFAULT_PALETTE
    store = VoxelStore()

    build_heart(store, *HEART_ORIGIN, scale=HEART_SCALE, palette=palette)

    for text, x, y, z in TEXT_LINES:
        layer = VoxelStore()
        render_text(layer, x, y, z, text, palette.white)
        merge_layer(store, layer, f"text {text}")

    for variant, cx, cy, cz in FIGURE_PLACEMENTS:
        layer = VoxelStore()
        build_character(layer, cx, cy, cz, variant, palette)
        merge_layer(store, layer, variant)

    voxels = store.flatten()
    logger.info(f"LoveScene: {len(voxels)} voxels")
    return voxels


def cute_rabbit(palette: Optional[Palette] = None) -> List[Voxel]:
    """Primitive-only bunny: body and head ellipsoids, four stubs, a red accent."""
    palette = palette or DEFAULT_PALETTE
    store = VoxelStore()
    rx, by, rz = RABBIT_ORIGIN

    fill_ellipsoid(store, rx, by + 2, rz, 3, palette.white, squash=0.9)  # Body
    fill_ellipsoid(store, rx, by + 6, rz, 2.5, palette.white)  # Head
    set_block(store, rx - 1, by + 9, rz, palette.white)
    set_block(store, rx - 1, by + 10, rz, palette.white)
    set_block(store, rx + 1, by + 9, rz, palette.white)
    set_block(store, rx + 1, by + 10, rz, palette.white)
    fill_ellipsoid(store, rx, by + 3, rz + 2, 1.5, palette.heart_red)

    voxels = store.flatten()
    logger.info(f"CuteRabbit: {len(voxels)} voxels")
    return voxels


SCENE_GENERATORS: Dict[str, Callable[[], List[Voxel]]] = {
    "LoveScene": love_scene,
    "CuteRabbit": cute_rabbit,
}


def generate_scene(name: str) -> List[Voxel]:
    """Run a registered scene generator by name."""
    try:
        generator = SCENE_GENERATORS[name]
    except KeyError:
        raise KeyError(
            f"Unknown scene {name!r}, available: {sorted(SCENE_GENERATORS)}"
        ) from None
    return generator()
