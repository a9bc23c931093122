# ==============================================================================
# SPRITE METADATA MODULE
# ==============================================================================
# Converts a sprite's frame list to and from the JSON metadata file written
# next to each extracted image:
#
#   {
#     "SpriteIndex": 3,
#     "FrameCount": 2,
#     "Frames": [
#       {"X": 0, "Y": 0, "Width": 32, "Height": 48, "PivotX": -16, "PivotY": -40},
#       ...
#     ]
#   }
#
# Integer fields equal to zero are left out when writing, and any absent
# field reads back as zero. Image bytes are never part of the metadata.
# ==============================================================================

import json
import os
from typing import Any, Dict, Optional, Tuple

from ..core.models import INT16_MAX, INT16_MIN, Frame, Sprite


# JSON key -> Frame attribute, in on-disk order
FRAME_KEYS = (
    ("X", "x"),
    ("Y", "y"),
    ("Width", "width"),
    ("Height", "height"),
    ("PivotX", "pivot_x"),
    ("PivotY", "pivot_y"),
)


class MetadataError(ValueError):
    """Metadata file exists but is not a usable sprite record."""


# ==============================================================================
# RECORD CONVERSION
# ==============================================================================

def frame_to_record(frame: Frame, omit_defaults: bool = True) -> Dict[str, int]:
    record = {}
    for key, attr in FRAME_KEYS:
        value = getattr(frame, attr)
        if value or not omit_defaults:
            record[key] = value
    return record


def sprite_to_record(sprite: Sprite, omit_defaults: bool = True) -> Dict[str, Any]:
    """
    Build the metadata record for a sprite.

    Args:
        sprite: Sprite whose index and frames are described
        omit_defaults: Leave out integer fields that are zero

    Returns:
        Dict ready for json.dump
    """
    record: Dict[str, Any] = {}
    if sprite.index or not omit_defaults:
        record["SpriteIndex"] = sprite.index
    if sprite.frame_count or not omit_defaults:
        record["FrameCount"] = sprite.frame_count
    record["Frames"] = [frame_to_record(f, omit_defaults) for f in sprite.frames]
    return record


def record_to_frames(record: Dict[str, Any]) -> Tuple[Frame, ...]:
    """
    Read the frame list out of a metadata record.

    Missing fields are zero; a missing or null "Frames" means no frames.

    Raises:
        MetadataError: If the record or a frame entry has the wrong shape
    """
    if not isinstance(record, dict):
        raise MetadataError(f"Metadata must be a JSON object, got {type(record).__name__}")

    entries = record.get("Frames")
    if entries is None:
        return ()
    if not isinstance(entries, list):
        raise MetadataError("\"Frames\" must be a list")

    frames = []
    for n, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise MetadataError(f"Frame {n} must be a JSON object")
        values = {}
        for key, attr in FRAME_KEYS:
            value = entry.get(key, 0)
            if value is None:
                value = 0
            if isinstance(value, bool) or not isinstance(value, int):
                raise MetadataError(f"Frame {n} field \"{key}\" is not an integer: {value!r}")
            if not INT16_MIN <= value <= INT16_MAX:
                raise MetadataError(
                    f"Frame {n} field \"{key}\" is out of range "
                    f"[{INT16_MIN}, {INT16_MAX}]: {value}")
            values[attr] = value
        frames.append(Frame(**values))
    return tuple(frames)


def record_to_sprite(record: Optional[Dict[str, Any]], image_data: bytes,
                     index: Optional[int] = None) -> Sprite:
    """
    Rebuild a Sprite from a metadata record and its image bytes.

    Args:
        record: Metadata record, or None when no metadata file exists
        image_data: Image bytes read from the paired image file
        index: Index to assign; defaults to the record's SpriteIndex
    """
    if record is None:
        return Sprite(index=index or 0, frames=(), image_data=image_data)

    frames = record_to_frames(record)
    if index is None:
        index = record.get("SpriteIndex") or 0
        if isinstance(index, bool) or not isinstance(index, int):
            raise MetadataError(f"\"SpriteIndex\" is not an integer: {index!r}")
    return Sprite(index=index, frames=frames, image_data=image_data)


# ==============================================================================
# FILE I/O
# ==============================================================================

def save_metadata(path: str, sprite: Sprite, omit_defaults: bool = True):
    """Write a sprite's metadata record as indented JSON."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sprite_to_record(sprite, omit_defaults), f, indent=2)


def load_metadata(path: str) -> Optional[Dict[str, Any]]:
    """
    Load a metadata record.

    Returns:
        The parsed record, or None if the file does not exist

    Raises:
        MetadataError: If the file is not valid JSON
    """
    if not os.path.isfile(path):
        return None

    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MetadataError(f"Invalid metadata file {path}: {e}")
