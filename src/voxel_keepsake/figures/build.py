"""
Figures: Parametrized Chibi Humanoids

Build one humanoid anchored at (cx, cy, cz), where cy is the sole of the
feet and cz the body's center plane. Parts are written strictly bottom to
top so later parts overwrite earlier ones where they touch:

1. Legs and feet (stocking boxes, shoe voxel)
2. Torso (dress box, belt layer, upper body)
3. Arm stubs
4. Head (skin block, cheeks)
5. Eyes (sclera, iris, pupil, highlight)
6. Hair (back volume, top cap) and the variant's accessory

Variants are Archetype records. Each one fixes its dress, hair and eye
colors and carries the function that draws its accessory; adding a variant
means adding one record to ARCHETYPES.

The portrait figure is a hand-authored one-off using the same skeleton with
long straight hair, a sweater and a lips accent.
"""

from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional, Union
import logging

from ..common.config import Palette, DEFAULT_PALETTE
from ..common.voxel import VoxelStore, fill_box, fill_ellipsoid

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    """Anchor heights shared by the part builders."""
    cx: float
    cy: float
    cz: float
    neck_y: float
    top_y: float


AccessoryFn = Callable[[VoxelStore, Frame, int, Palette], None]


@dataclass(frozen=True)
class Archetype:
    name: str
    dress_color: int
    hair_color: int
    eye_color: int
    accessory: AccessoryFn


# ============== Shared Parts ==============

def _draw_eye(store: VoxelStore, ex: float, eye_y: float, eye_z: float,
              iris_color: int, palette: Palette) -> None:
    fill_box(store, ex - 1, eye_y, eye_z + 1, ex + 1, eye_y + 3, eye_z + 1, palette.white)
    fill_box(store, ex - 0.5, eye_y, eye_z + 1.1, ex + 0.5, eye_y + 2, eye_z + 1.1, iris_color)
    fill_box(store, ex, eye_y + 1, eye_z + 1.2, ex, eye_y + 2, eye_z + 1.2, palette.black)
    store.put(ex + 0.5, eye_y + 2, eye_z + 1.3, palette.white)


def _draw_eyes(store: VoxelStore, frame: Frame, iris_color: int, palette: Palette) -> None:
    eye_y = frame.neck_y + 1
    eye_z = frame.cz + 2
    _draw_eye(store, frame.cx - 1.5, eye_y, eye_z, iris_color, palette)
    _draw_eye(store, frame.cx + 1.5, eye_y, eye_z, iris_color, palette)


def _draw_head(store: VoxelStore, frame: Frame, palette: Palette) -> None:
    cx, cz, neck_y = frame.cx, frame.cz, frame.neck_y
    fill_box(store, cx - 3, neck_y, cz - 2, cx + 3, neck_y + 5, cz + 2, palette.skin)
    # Cheeks
    store.put(cx - 3, neck_y, cz + 2, palette.skin)
    store.put(cx + 3, neck_y, cz + 2, palette.skin)


def _draw_hair_base(store: VoxelStore, frame: Frame, hair_color: int) -> None:
    cx, cz, neck_y, top_y = frame.cx, frame.cz, frame.neck_y, frame.top_y
    # Back
    fill_box(store, cx - 3, neck_y, cz - 3, cx + 3, top_y, cz - 2, hair_color)
    # Top
    fill_box(store, cx - 3, top_y, cz - 3, cx + 3, top_y + 1, cz + 2, hair_color)


# ============== Accessories ==============

def bow_and_ribbon(store: VoxelStore, frame: Frame, hair_color: int, palette: Palette) -> None:
    """Fringe, big red bow and long hair down the back."""
    cx, cy, cz, top_y = frame.cx, frame.cy, frame.cz, frame.top_y
    store.put(cx, top_y, cz + 2, hair_color)
    store.put(cx - 1, top_y, cz + 2, hair_color)
    store.put(cx + 1, top_y, cz + 2, hair_color)

    bow_y = top_y + 2
    store.put(cx, bow_y, cz, palette.blossom_red)
    fill_box(store, cx - 3, bow_y, cz, cx - 1, bow_y + 1, cz + 1, palette.blossom_red)
    fill_box(store, cx + 1, bow_y, cz, cx + 3, bow_y + 1, cz + 1, palette.blossom_red)

    fill_box(store, cx - 2, cy + 2, cz - 3, cx + 2, frame.neck_y, cz - 2, hair_color)


def pigtails(store: VoxelStore, frame: Frame, hair_color: int, palette: Palette) -> None:
    """Two spherical pigtails and a split fringe."""
    cx, cz, top_y = frame.cx, frame.cz, frame.top_y
    fill_ellipsoid(store, cx - 4, top_y, cz, 1.5, hair_color)
    fill_ellipsoid(store, cx + 4, top_y, cz, 1.5, hair_color)
    store.put(cx - 2, top_y, cz + 2, hair_color)
    store.put(cx + 2, top_y, cz + 2, hair_color)


def side_spikes(store: VoxelStore, frame: Frame, hair_color: int, palette: Palette) -> None:
    """Flicked-out spikes at the sides and a three-point fringe."""
    cx, cz, top_y = frame.cx, frame.cz, frame.top_y
    store.put(cx - 4, frame.neck_y + 1, cz - 1, hair_color)
    store.put(cx + 4, frame.neck_y + 1, cz - 1, hair_color)
    store.put(cx, top_y, cz + 2, hair_color)
    store.put(cx + 2, top_y, cz + 2, hair_color)
    store.put(cx - 2, top_y, cz + 2, hair_color)


ARCHETYPES: Dict[str, Archetype] = {
    "Blossom": Archetype(
        name="Blossom",
        dress_color=DEFAULT_PALETTE.blossom_pink,
        hair_color=DEFAULT_PALETTE.blossom_orange,
        eye_color=DEFAULT_PALETTE.blossom_pink,
        accessory=bow_and_ribbon,
    ),
    "Bubbles": Archetype(
        name="Bubbles",
        dress_color=DEFAULT_PALETTE.bubbles_blue,
        hair_color=DEFAULT_PALETTE.bubbles_yellow,
        eye_color=DEFAULT_PALETTE.bubbles_blue,
        accessory=pigtails,
    ),
    "Buttercup": Archetype(
        name="Buttercup",
        dress_color=DEFAULT_PALETTE.buttercup_green,
        hair_color=DEFAULT_PALETTE.buttercup_hair,
        eye_color=DEFAULT_PALETTE.buttercup_green,
        accessory=side_spikes,
    ),
}


def get_archetype(variant: Union[str, Archetype]) -> Archetype:
    if isinstance(variant, Archetype):
        return variant
    try:
        return ARCHETYPES[variant]
    except KeyError:
        raise KeyError(
            f"Unknown archetype {variant!r}, expected one of {sorted(ARCHETYPES)}"
        ) from None


# ============== Builders ==============

def build_character(
    store: VoxelStore,
    cx: float,
    cy: float,
    cz: float,
    variant: Union[str, Archetype],
    palette: Optional[Palette] = None
) -> Archetype:
    """
    Build one archetype figure.

    Args:
        store: VoxelStore to write into
        cx, cy, cz: Anchor (feet at cy, centered on cx/cz)
        variant: Archetype record or its name in ARCHETYPES
        palette: Shared colors (skin, white, black, bow red)

    Returns:
        The resolved Archetype
    """
    palette = palette or DEFAULT_PALETTE
    archetype = get_archetype(variant)
    dress = archetype.dress_color
    neck_y = cy + 5
    frame = Frame(cx, cy, cz, neck_y, neck_y + 6)

    # Legs & feet
    fill_box(store, cx - 1, cy, cz, cx - 1, cy + 1, cz, palette.white)
    store.put(cx - 1, cy, cz, palette.black)
    fill_box(store, cx + 1, cy, cz, cx + 1, cy + 1, cz, palette.white)
    store.put(cx + 1, cy, cz, palette.black)

    # Body
    fill_box(store, cx - 1, cy + 2, cz - 1, cx + 1, cy + 3, cz + 1, dress)
    fill_box(store, cx - 1, cy + 3, cz - 1.1, cx + 1, cy + 3, cz + 1.1, palette.black)
    fill_box(store, cx - 1, cy + 4, cz - 1, cx + 1, cy + 4, cz + 1, dress)

    # Arms
    store.put(cx - 2, cy + 3, cz, palette.skin)
    store.put(cx + 2, cy + 3, cz, palette.skin)

    _draw_head(store, frame, palette)
    _draw_eyes(store, frame, archetype.eye_color, palette)
    _draw_hair_base(store, frame, archetype.hair_color)
    archetype.accessory(store, frame, archetype.hair_color, palette)

    logger.debug(f"Built {archetype.name} at ({cx}, {cy}, {cz})")
    return archetype


def build_portrait_figure(
    store: VoxelStore,
    cx: float,
    cy: float,
    cz: float,
    palette: Optional[Palette] = None
) -> None:
    """Build the photo-likeness figure: long dark hair, white sweater, brown eyes."""
    palette = palette or DEFAULT_PALETTE
    hair = palette.portrait_hair
    sweater = palette.portrait_sweater
    neck_y = cy + 4.5
    frame = Frame(cx, cy, cz, neck_y, neck_y + 6)

    # Leggings
    fill_box(store, cx - 1, cy, cz, cx - 1, cy + 2, cz, palette.black)
    fill_box(store, cx + 1, cy, cz, cx + 1, cy + 2, cz, palette.black)

    # Sweater with knit highlights
    fill_box(store, cx - 1.5, cy + 2, cz - 1, cx + 1.5, cy + 4, cz + 1, sweater)
    store.put(cx - 0.5, cy + 3, cz + 1.1, palette.white)
    store.put(cx + 0.5, cy + 2.5, cz + 1.1, palette.white)

    # Sleeves and hands
    store.put(cx - 2, cy + 3, cz, sweater)
    store.put(cx + 2, cy + 3, cz, sweater)
    store.put(cx - 2.5, cy + 2.5, cz + 0.5, palette.skin)
    store.put(cx + 2.5, cy + 2.5, cz + 0.5, palette.skin)

    _draw_head(store, frame, palette)
    _draw_eyes(store, frame, palette.dark, palette)

    # Lips
    store.put(cx, neck_y + 0.5, cz + 3.1, palette.portrait_lips)

    _draw_hair_base(store, frame, hair)
    # Long straight hair down the back
    fill_box(store, cx - 3, cy + 2, cz - 3.5, cx + 3, neck_y, cz - 2, hair)
    # Face framing
    for side in (-3, 3):
        for dy in (4, 3, 2):
            store.put(cx + side, neck_y + dy, cz + 2, hair)

    logger.debug(f"Built portrait figure at ({cx}, {cy}, {cz})")
