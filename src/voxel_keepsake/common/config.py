"""
Configuration and constants for voxel scene generation.

Color Model (NON-NEGOTIABLE):
- Every color is a 24-bit RGB integer (0x000000 .. 0xFFFFFF)
- Hex strings ("#RRGGBB") only exist at the JSON boundary
- Palettes are immutable and passed by reference into builders
"""

from enum import Enum
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any
import json
from pathlib import Path


# World constants shared with the rendering engine
VOXEL_SIZE = 1
FLOOR_Y = -15
BACKGROUND_COLOR = 0xFFE4E1  # MistyRose

# Fallback colors for unparseable ingested colors
NEUTRAL_GRAY = 0xCCCCCC  # JSON import
PROMPT_FALLBACK_COLOR = 0xFF69B4  # AI prompt responses

MAX_COLOR = 0xFFFFFF


@dataclass(frozen=True)
class Palette:
    """
    Named colors used by the builders.

    One instance (DEFAULT_PALETTE) is created at import time and handed to
    every builder; nothing mutates it.
    """
    # Basics
    dark: int = 0x4A3728
    white: int = 0xFFFFFF
    black: int = 0x111111

    # Figures
    skin: int = 0xFFE0BD
    blossom_pink: int = 0xFF69B4
    blossom_orange: int = 0xFF8C00
    blossom_red: int = 0xFF0000
    bubbles_blue: int = 0x87CEEB
    bubbles_yellow: int = 0xFFD700
    buttercup_green: int = 0x7CFC00
    buttercup_hair: int = 0x1A1A1A

    # Heart
    heart_red: int = 0xFF1493
    heart_pink: int = 0xFFB6C1

    # Portrait figure (from photo)
    portrait_hair: int = 0x1A1A1A
    portrait_sweater: int = 0xF5F5F5
    portrait_lips: int = 0xE05876

    def to_dict(self) -> Dict[str, str]:
        return {name: f"#{value:06X}" for name, value in asdict(self).items()}


DEFAULT_PALETTE = Palette()


class ColorFormat(Enum):
    """
    Color representation used when exporting scenes to JSON.

    INT (default): 16711680
        - Matches the in-memory Voxel representation
    HEX: "#FF0000"
        - Matches what the AI collaborator produces
    """
    INT = "int"
    HEX = "hex"


@dataclass
class SceneMetadata:
    """
    Metadata sidecar written next to every exported scene.
    """
    scene: str
    n_voxels: int
    n_colors: int
    bounds: Dict[str, Any]
    n_components: Optional[int] = None
    duplicate_cells: Optional[int] = None
    color_format: str = ColorFormat.INT.value
    generation_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scene": self.scene,
            "n_voxels": self.n_voxels,
            "n_colors": self.n_colors,
            "bounds": self.bounds,
            "n_components": self.n_components,
            "duplicate_cells": self.duplicate_cells,
            "color_format": self.color_format,
            "generation_params": self.generation_params
        }

    def save(self, path: Path) -> None:
        """Save metadata to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SceneMetadata":
        return cls(**data)


@dataclass
class Config:
    """
    Run configuration for scene generation and export.
    """

    # JSON export color representation
    color_format: ColorFormat = ColorFormat.INT

    # Edge length of one voxel cube in exported meshes
    voxel_size: float = float(VOXEL_SIZE)

    # Substituted for unparseable colors on import
    fallback_color: int = NEUTRAL_GRAY

    # Engine world settings, recorded in metadata
    floor_y: int = FLOOR_Y
    background_color: int = BACKGROUND_COLOR

    # Also write a GLB cube mesh per scene
    export_mesh: bool = False

    output_dir: Path = field(default_factory=lambda: Path("outputs"))

    def get_scene_path(self, scene: str, suffix: str = ".json") -> Path:
        """Get output path for a scene export."""
        return self.output_dir / "scenes" / f"{scene}{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color_format": self.color_format.value,
            "voxel_size": self.voxel_size,
            "fallback_color": self.fallback_color,
            "floor_y": self.floor_y,
            "background_color": self.background_color,
            "export_mesh": self.export_mesh,
            "output_dir": str(self.output_dir)
        }

    @classmethod
    def from_json(cls, path: Path) -> "Config":
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
        data["color_format"] = ColorFormat(data.get("color_format", "int"))
        data["output_dir"] = Path(data.get("output_dir", "outputs"))
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


# Global default config
DEFAULT_CONFIG = Config()
