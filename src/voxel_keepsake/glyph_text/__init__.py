"""
Glyph Text: built-in vector font rendered as voxel strokes.
"""

__version__ = "1.0.0"

from .build import (
    Glyph,
    FONT,
    SPACE_PITCH,
    SUPPORTED_CHARACTERS,
    glyph_pitch,
    text_width,
    render_text,
)

__all__ = [
    "Glyph",
    "FONT",
    "SPACE_PITCH",
    "SUPPORTED_CHARACTERS",
    "glyph_pitch",
    "text_width",
    "render_text",
]
