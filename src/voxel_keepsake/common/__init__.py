"""
Common modules shared by every scene builder.

Color Model (NON-NEGOTIABLE):
- Colors are 24-bit RGB integers in memory
- Hex strings only at the JSON boundary
- Coordinates are quantized to integers at store time
"""

from .config import Config, ColorFormat, Palette, DEFAULT_PALETTE, SceneMetadata
from .voxel import Voxel, VoxelStore, quantize, set_block, fill_box, fill_ellipsoid
from .io import (
    IngestResult, IngestionError, sanitize_records, parse_voxel_json,
    scene_to_records, scene_to_json, save_scene_json, load_scene_json, unique_colors,
)
from .mesh_ops import compute_scene_stats, voxels_to_mesh, save_scene_mesh, build_scene_metadata

__all__ = [
    'Config', 'ColorFormat', 'Palette', 'DEFAULT_PALETTE', 'SceneMetadata',
    'Voxel', 'VoxelStore', 'quantize', 'set_block', 'fill_box', 'fill_ellipsoid',
    'IngestResult', 'IngestionError', 'sanitize_records', 'parse_voxel_json',
    'scene_to_records', 'scene_to_json', 'save_scene_json', 'load_scene_json', 'unique_colors',
    'compute_scene_stats', 'voxels_to_mesh', 'save_scene_mesh', 'build_scene_metadata',
]
