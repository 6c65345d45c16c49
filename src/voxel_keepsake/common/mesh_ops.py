"""
Mesh export and scene statistics.

Engines that take meshes instead of voxel lists get one colored cube per
voxel. Statistics describe a scene without interpreting it.
"""

import numpy as np
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging

from .config import SceneMetadata
from .io import unique_colors
from .voxel import Voxel

logger = logging.getLogger(__name__)

try:
    import trimesh
    TRIMESH_AVAILABLE = True
except ImportError:
    TRIMESH_AVAILABLE = False

try:
    from scipy.ndimage import label as ndimage_label
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False


def voxel_positions(voxels: List[Voxel]) -> np.ndarray:
    """Return Nx3 integer array of voxel coordinates."""
    if not voxels:
        return np.empty((0, 3), dtype=int)
    return np.array([[v.x, v.y, v.z] for v in voxels], dtype=int)


def get_scene_bounds(voxels: List[Voxel]) -> Dict[str, Any]:
    """Inclusive integer bounds per axis; empty scenes have no bounds."""
    pts = voxel_positions(voxels)
    if len(pts) == 0:
        return {}
    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return {
        'x': (int(mins[0]), int(maxs[0])),
        'y': (int(mins[1]), int(maxs[1])),
        'z': (int(mins[2]), int(maxs[2]))
    }


def count_components(voxels: List[Voxel]) -> int:
    """
    Count face-connected pieces of a scene.

    Floating pieces are legitimate (text, accents); the count is reported,
    never enforced.
    """
    if not SCIPY_AVAILABLE:
        raise ImportError("scipy required for component counting")

    pts = voxel_positions(voxels)
    if len(pts) == 0:
        return 0

    offset = pts.min(axis=0)
    shape = tuple(pts.max(axis=0) - offset + 1)
    occupancy = np.zeros(shape, dtype=bool)
    idx = pts - offset
    occupancy[idx[:, 0], idx[:, 1], idx[:, 2]] = True

    _, n_components = ndimage_label(occupancy)
    return int(n_components)


def compute_scene_stats(voxels: List[Voxel]) -> Dict[str, Any]:
    """
    Compute scene statistics.

    Args:
        voxels: Scene voxels

    Returns:
        Dictionary of scene statistics
    """
    pts = voxel_positions(voxels)
    n_unique = len({tuple(p) for p in pts.tolist()})
    return {
        "n_voxels": len(voxels),
        "n_unique_cells": n_unique,
        "n_colors": len(unique_colors(voxels)),
        "colors": unique_colors(voxels),
        "bounds": get_scene_bounds(voxels),
        "n_components": count_components(voxels) if SCIPY_AVAILABLE else None
    }


def voxels_to_mesh(voxels: List[Voxel], voxel_size: float = 1.0) -> "trimesh.Trimesh":
    """
    Build one mesh of colored cubes, one per voxel.

    Each cube is centered on its lattice point and contributes
    12 triangles.
    """
    if not TRIMESH_AVAILABLE:
        raise ImportError("trimesh required for mesh export")
    if not voxels:
        raise ValueError("Cannot build a mesh from an empty scene")

    cubes = []
    for v in voxels:
        cube = trimesh.creation.box(extents=(voxel_size, voxel_size, voxel_size))
        cube.apply_translation(np.array([v.x, v.y, v.z], dtype=float) * voxel_size)
        rgba = [(v.color >> 16) & 0xFF, (v.color >> 8) & 0xFF, v.color & 0xFF, 255]
        cube.visual.face_colors = np.tile(rgba, (len(cube.faces), 1)).astype(np.uint8)
        cubes.append(cube)

    mesh = trimesh.util.concatenate(cubes)
    logger.info(f"Built voxel mesh: {len(mesh.vertices)} verts, {len(mesh.faces)} tris")
    return mesh


def save_scene_mesh(
    voxels: List[Voxel],
    path: Path,
    metadata: SceneMetadata,
    voxel_size: float = 1.0
) -> Path:
    """
    Save a scene as a GLB cube mesh with a metadata sidecar.

    Args:
        voxels: Scene voxels
        path: Output path (should end in .glb)
        metadata: SceneMetadata saved as <name>.meta.json next to the mesh
        voxel_size: Cube edge length

    Returns:
        Path of the metadata sidecar
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    mesh = voxels_to_mesh(voxels, voxel_size)
    mesh.export(str(path))
    logger.info(f"Saved mesh: {path} ({metadata.n_voxels} voxels)")

    meta_path = path.with_name(f"{path.stem}.meta.json")
    metadata.save(meta_path)
    logger.info(f"Saved metadata: {meta_path}")
    return meta_path


def build_scene_metadata(
    scene: str,
    voxels: List[Voxel],
    generation_params: Optional[Dict[str, Any]] = None,
    color_format: str = "int"
) -> SceneMetadata:
    stats = compute_scene_stats(voxels)
    return SceneMetadata(
        scene=scene,
        n_voxels=stats["n_voxels"],
        n_colors=stats["n_colors"],
        bounds=stats["bounds"],
        n_components=stats["n_components"],
        duplicate_cells=stats["n_voxels"] - stats["n_unique_cells"],
        color_format=color_format,
        generation_params=generation_params or {}
    )
