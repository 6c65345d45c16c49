"""
Glyph Text: Tiny Vector Font -> Single-Voxel Strokes

Each supported character is a list of (column, row) stroke offsets inside a
3 x 5 cell (5 x 5 for M) plus a horizontal pitch. Text is rendered left to
right on one row and one depth; multi-line text means one call per line.
"""

from typing import Dict, List, Tuple, NamedTuple
import logging

from ..common.voxel import VoxelStore

logger = logging.getLogger(__name__)


class Glyph(NamedTuple):
    strokes: Tuple[Tuple[int, int], ...]
    pitch: int


SPACE_PITCH = 4

FONT: Dict[str, Glyph] = {
    'T': Glyph((
        (0, 4), (1, 4), (2, 4),
        (1, 3), (1, 2), (1, 1), (1, 0),
    ), 4),
    'E': Glyph((
        (0, 0), (0, 1), (0, 2), (0, 3), (0, 4),
        (1, 4), (2, 4),
        (1, 2), (2, 2),
        (1, 0), (2, 0),
    ), 4),
    'A': Glyph((
        (0, 0), (0, 1), (0, 2), (0, 3),
        (1, 4),
        (2, 0), (2, 1), (2, 2), (2, 3),
        (1, 2),
    ), 4),
    'M': Glyph((
        (0, 0), (0, 1), (0, 2), (0, 3), (0, 4),
        (4, 0), (4, 1), (4, 2), (4, 3), (4, 4),
        (1, 3), (2, 2), (3, 3),
    ), 6),
    'O': Glyph((
        (0, 0), (0, 1), (0, 2), (0, 3), (0, 4),
        (2, 0), (2, 1), (2, 2), (2, 3), (2, 4),
        (1, 0), (1, 4),
    ), 4),
    'P': Glyph((
        (0, 0), (0, 1), (0, 2), (0, 3), (0, 4),
        (1, 4), (2, 4),
        (2, 3),
        (1, 2), (2, 2),
    ), 4),
    'L': Glyph((
        (0, 0), (0, 1), (0, 2), (0, 3), (0, 4),
        (1, 0), (2, 0),
    ), 4),
    'I': Glyph((
        (0, 0), (1, 0), (2, 0),
        (1, 1), (1, 2), (1, 3),
        (0, 4), (1, 4), (2, 4),
    ), 4),
    ' ': Glyph((), SPACE_PITCH),
}

SUPPORTED_CHARACTERS = frozenset(FONT)


def glyph_pitch(char: str) -> int:
    """Cursor advance for a character; unsupported characters advance like a space."""
    glyph = FONT.get(char)
    return glyph.pitch if glyph else SPACE_PITCH


def text_width(text: str) -> int:
    """Total cursor advance for a string."""
    return sum(glyph_pitch(c) for c in text)


def render_text(
    store: VoxelStore,
    start_x: float,
    y: float,
    z: float,
    text: str,
    color: int
) -> float:
    """
    Render a string as voxel strokes.

    Args:
        store: VoxelStore to write into
        start_x: Cursor position of the first glyph's left column
        y: Bottom row of the glyph cells
        z: Depth of every stroke
        text: Characters to render
        color: Stroke color

    Returns:
        Cursor position after the last character, so a following call can
        continue the same line
    """
    cursor = start_x
    skipped: List[str] = []

    for char in text:
        glyph = FONT.get(char)
        if glyph is None:
            skipped.append(char)
            cursor += SPACE_PITCH
            continue
        for dx, dy in glyph.strokes:
            store.put(cursor + dx, y + dy, z, color)
        cursor += glyph.pitch

    if skipped:
        logger.warning(f"Skipped unsupported characters {''.join(skipped)!r} in {text!r}")

    return cursor
