"""
Voxel I/O utilities.

Handles untrusted voxel records (AI responses, user JSON imports) and the
inverse JSON export. All records share one shape: {x, y, z, color}, where
color is an integer or a hex string with or without a leading '#'.

Ingestion is two-stage:
1. Top level must be a list of records, otherwise the whole batch is rejected
2. Each record is decoded field by field, substituting documented defaults
   (0 for coordinates, a fallback color) so one bad record never affects
   its siblings
"""

import json
import math
import re
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from dataclasses import dataclass, field

from .config import ColorFormat, NEUTRAL_GRAY, MAX_COLOR
from .voxel import Voxel, quantize

logger = logging.getLogger(__name__)

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]+")
_HEX_LITERAL = re.compile(r"[+-]?0[xX][0-9a-fA-F]+")


class IngestionError(ValueError):
    """Raised when a batch of external voxel records is rejected."""


@dataclass
class IngestResult:
    """
    Outcome of ingesting an external batch.

    Exactly one of voxels/error is meaningful: a rejected batch carries an
    error message and no voxels.
    """
    voxels: List[Voxel] = field(default_factory=list)
    error: Optional[str] = None
    n_substituted: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Voxel]:
        if self.error is not None:
            raise IngestionError(self.error)
        return self.voxels


def coerce_coordinate(value: Any) -> Tuple[float, bool]:
    """
    Coerce a loosely typed coordinate to a number.

    Returns:
        Tuple of (number, substituted); unusable values become 0
    """
    if value is None:
        return 0.0, False
    if isinstance(value, bool):
        return float(value), False
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0, False
        if "_" in text:
            return 0.0, True
        try:
            number = float(text)
        except ValueError:
            if _HEX_LITERAL.fullmatch(text):
                number = float(int(text, 16))
            else:
                return 0.0, True
    else:
        return 0.0, True

    if not math.isfinite(number):
        return 0.0, True
    return number, False


def parse_color(value: Any) -> Optional[int]:
    """
    Parse a hex string or numeric color.

    Strings drop one leading '#' and an optional 0x prefix, then use their
    leading run of hex digits ("ff00ffzz" -> 0xFF00FF). Returns None when
    nothing usable is found or the value is outside 24-bit RGB.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.startswith('#'):
            text = text[1:]
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        match = _HEX_PREFIX.match(text)
        if not match:
            return None
        color = int(match.group(0), 16)
    elif isinstance(value, int):
        color = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        color = int(value)
    else:
        return None

    if not 0 <= color <= MAX_COLOR:
        return None
    return color


def sanitize_record(record: Any, fallback_color: int = NEUTRAL_GRAY) -> Tuple[Voxel, int]:
    """
    Decode one record into a Voxel.

    Returns:
        Tuple of (voxel, number of fields that fell back to defaults)
    """
    if not isinstance(record, dict):
        return Voxel(0, 0, 0, fallback_color), 4

    n_substituted = 0
    coords = []
    for axis in ('x', 'y', 'z'):
        value, substituted = coerce_coordinate(record.get(axis))
        coords.append(quantize(value))
        n_substituted += substituted

    raw_color = record.get('c') or record.get('color')
    color = parse_color(raw_color)
    if color is None:
        color = fallback_color
        n_substituted += 1

    return Voxel(coords[0], coords[1], coords[2], color), n_substituted


def sanitize_records(data: Any, fallback_color: int = NEUTRAL_GRAY) -> IngestResult:
    """
    Normalize an external batch of voxel records.

    Args:
        data: Decoded JSON value; must be a list of records
        fallback_color: Color used when a record's color is unusable

    Returns:
        IngestResult with one voxel per record, or an error for a
        non-list top level
    """
    if not isinstance(data, (list, tuple)):
        return IngestResult(
            error=f"Voxel data must be an array of records, got {type(data).__name__}"
        )

    result = IngestResult()
    for i, record in enumerate(data):
        voxel, n_substituted = sanitize_record(record, fallback_color)
        if n_substituted:
            logger.debug(f"Record {i}: substituted {n_substituted} field(s): {record!r}")
        result.n_substituted += n_substituted
        result.voxels.append(voxel)

    logger.info(f"Ingested {len(result.voxels)} voxels ({result.n_substituted} substitutions)")
    return result


def parse_voxel_json(text: str, fallback_color: int = NEUTRAL_GRAY) -> IngestResult:
    """Decode JSON text and sanitize it; invalid JSON is an error result."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return IngestResult(error=f"Invalid JSON: {e}")
    return sanitize_records(data, fallback_color)


# ============== Export ==============

def format_color(color: int) -> str:
    return f"#{color:06X}"


def unique_colors(voxels: Iterable[Voxel]) -> List[str]:
    """Distinct colors of a scene as sorted '#RRGGBB' strings."""
    return sorted({format_color(v.color) for v in voxels})


def scene_to_records(
    voxels: Iterable[Voxel],
    color_format: ColorFormat = ColorFormat.INT
) -> List[Dict[str, Union[int, str]]]:
    """Serialize voxels to {x, y, z, color} records."""
    records = []
    for v in voxels:
        record: Dict[str, Union[int, str]] = v.to_dict()
        if color_format == ColorFormat.HEX:
            record["color"] = format_color(v.color)
        records.append(record)
    return records


def scene_to_json(
    voxels: Iterable[Voxel],
    color_format: ColorFormat = ColorFormat.INT,
    indent: Optional[int] = None
) -> str:
    return json.dumps(scene_to_records(voxels, color_format), indent=indent)


def save_scene_json(
    voxels: List[Voxel],
    path: Path,
    color_format: ColorFormat = ColorFormat.INT
) -> None:
    """
    Save a scene as a JSON array of records.

    Args:
        voxels: Scene voxels
        path: Output path (should end in .json)
        color_format: Integer or hex string colors
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(scene_to_json(voxels, color_format, indent=2))
    logger.info(f"Saved scene: {path} ({len(voxels)} voxels)")


def load_scene_json(path: Path, fallback_color: int = NEUTRAL_GRAY) -> IngestResult:
    """Load a JSON voxel file through the sanitizer."""
    path = Path(path)
    with open(path) as f:
        text = f.read()
    result = parse_voxel_json(text, fallback_color)
    if not result.ok:
        logger.error(f"Rejected {path}: {result.error}")
    return result
