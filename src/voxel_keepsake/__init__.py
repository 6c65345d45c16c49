"""
Voxel Keepsake - Procedural voxel scene generation.

Builders for a deduplicated voxel set:
- Primitives: point, box, ellipsoid
- Heart curve: implicit curve rasterization
- Glyph text: tiny vector font
- Figures: parametrized humanoid archetypes

Usage:
    voxel-keepsake --scenes LoveScene CuteRabbit --output outputs
"""

__version__ = "1.0.0"
