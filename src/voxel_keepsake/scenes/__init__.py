"""
Scenes: named zero-argument scene generators.
"""

__version__ = "1.0.0"

from .build import (
    SCENE_GENERATORS,
    love_scene,
    cute_rabbit,
    merge_layer,
    generate_scene,
)

__all__ = [
    "SCENE_GENERATORS",
    "love_scene",
    "cute_rabbit",
    "merge_layer",
    "generate_scene",
]
