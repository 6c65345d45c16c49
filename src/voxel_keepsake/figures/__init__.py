"""
Figures: parametrized humanoid archetypes and the portrait figure.

Three archetypes share one skeleton and differ only in palette and hair
accessory (bow and ribbon, pigtails, side spikes).
"""

__version__ = "1.0.0"

from .build import (
    Archetype,
    ARCHETYPES,
    Frame,
    get_archetype,
    build_character,
    build_portrait_figure,
)

__all__ = [
    "Archetype",
    "ARCHETYPES",
    "Frame",
    "get_archetype",
    "build_character",
    "build_portrait_figure",
]
