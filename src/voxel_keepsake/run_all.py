#!/usr/bin/env python3
"""
Voxel Keepsake - Orchestrator

Generate named scenes and sanitize imported voxel files, writing each as a
JSON record array (and optionally a GLB cube mesh) plus a run summary.

Usage:
    voxel-keepsake --scenes LoveScene CuteRabbit --output outputs
    voxel-keepsake --import memory.json --color-format hex --mesh
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime

from .common.config import Config, ColorFormat
from .common.io import save_scene_json, load_scene_json
from .common.mesh_ops import build_scene_metadata, save_scene_mesh
from .common.voxel import Voxel
from .scenes.build import SCENE_GENERATORS, generate_scene

logger = logging.getLogger(__name__)


def export_scene(name: str, voxels: List[Voxel], config: Config, source: str) -> Dict[str, Any]:
    """Write a scene's JSON (and mesh) outputs; return its metadata."""
    json_path = config.get_scene_path(name, ".json")
    save_scene_json(voxels, json_path, config.color_format)

    metadata = build_scene_metadata(
        name,
        voxels,
        generation_params={
            "source": source,
            "floor_y": config.floor_y,
            "background_color": f"#{config.background_color:06X}"
        },
        color_format=config.color_format.value
    )

    outputs = {"json": str(json_path)}
    if config.export_mesh:
        mesh_path = config.get_scene_path(name, ".glb")
        meta_path = save_scene_mesh(voxels, mesh_path, metadata, config.voxel_size)
        outputs["mesh"] = str(mesh_path)
        outputs["metadata"] = str(meta_path)

    return {"metadata": metadata.to_dict(), "outputs": outputs}


def run_all(
    scenes: List[str],
    imports: List[Path],
    config: Config
) -> dict:
    """
    Generate scenes and process imports.

    Args:
        scenes: Scene names from SCENE_GENERATORS
        imports: JSON voxel files to sanitize
        config: Configuration

    Returns:
        Summary dictionary
    """
    summary = {
        "timestamp": datetime.now().isoformat(),
        "config": config.to_dict(),
        "scenes": [],
        "imports": [],
        "errors": []
    }

    for name in scenes:
        logger.info(f"--- Scene {name} ---")
        try:
            voxels = generate_scene(name)
            result = export_scene(name, voxels, config, source="generator")
            summary["scenes"].append({"scene": name, "status": "success", **result})
        except Exception as e:
            logger.error(f"Scene {name} failed: {e}")
            summary["scenes"].append({"scene": name, "status": "error", "error": str(e)})
            summary["errors"].append({"item": name, "stage": "generate", "error": str(e)})

    for path in imports:
        name = path.stem
        logger.info(f"--- Import {path} ---")
        try:
            ingest = load_scene_json(path, config.fallback_color)
            voxels = ingest.unwrap()
            result = export_scene(name, voxels, config, source=str(path))
            result["n_substituted"] = ingest.n_substituted
            summary["imports"].append({"file": str(path), "status": "success", **result})
        except Exception as e:
            logger.error(f"Import {path} failed: {e}")
            summary["imports"].append({"file": str(path), "status": "error", "error": str(e)})
            summary["errors"].append({"item": str(path), "stage": "import", "error": str(e)})

    return summary


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Voxel Keepsake - Generate voxel scenes"
    )
    parser.add_argument(
        "--scenes", "-s",
        nargs="*",
        default=None,
        help=f"Scenes to generate ({', '.join(SCENE_GENERATORS)}); default all"
    )
    parser.add_argument(
        "--import", "-i",
        dest="imports",
        nargs="+",
        type=Path,
        default=[],
        help="JSON voxel files to sanitize and export"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Config JSON file"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output directory"
    )
    parser.add_argument(
        "--color-format", "-f",
        choices=["int", "hex"],
        default=None,
        help="Color representation in exported JSON"
    )
    parser.add_argument(
        "--mesh",
        action="store_true",
        help="Also export GLB cube meshes"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    # Build config
    config = Config.from_json(args.config) if args.config else Config()
    if args.output is not None:
        config.output_dir = args.output
    if args.color_format is not None:
        config.color_format = ColorFormat(args.color_format)
    if args.mesh:
        config.export_mesh = True

    if args.scenes is None:
        scenes = [] if args.imports else list(SCENE_GENERATORS)
    else:
        scenes = args.scenes

    if not scenes and not args.imports:
        logger.error("Nothing to do: no scenes or imports given")
        sys.exit(1)

    logger.info(f"Scenes: {scenes}, imports: {[str(p) for p in args.imports]}")
    logger.info(f"Output: {config.output_dir}")

    summary = run_all(scenes=scenes, imports=args.imports, config=config)

    # Save summary
    summary_path = config.output_dir / "run_summary.json"
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    with open(summary_path, 'w') as f:
        json.dump(summary, f, indent=2)

    logger.info(f"Summary saved to: {summary_path}")

    n_success = sum(
        1 for item in summary["scenes"] + summary["imports"]
        if item["status"] == "success"
    )
    n_errors = len(summary["errors"])
    logger.info(f"COMPLETE: {n_success} successful, {n_errors} errors")

    if n_errors > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
