# ==============================================================================
# FRAME TABLE MODULE
# ==============================================================================
# Binary codec for sprite frame records and the offset resolver that locates
# a sprite's frame table inside an APK container.
#
# Frame record (12 bytes, little-endian):
#   int16 x, int16 y, int16 width, int16 height, int16 pivot_x, int16 pivot_y
#
# Offset resolution:
#   The frame table of an APK sprite record starts at +100, +104 or +108 from
#   the sprite's base offset depending on the file. Each candidate is tested
#   by decoding the first 12 bytes there as a frame and checking that it
#   looks like real frame data. The first candidate that passes wins; if none
#   passes, +108 is used.
#
# Usage:
#   rel = resolve_table_offset(read_at, sprite_start)
#   frames = decode_frames(read_at(sprite_start + rel, 12 * count), count)
# ==============================================================================

import struct
from typing import Callable, Iterable, Sequence, Tuple

from ..core.models import Frame


# ==============================================================================
# CONSTANTS
# ==============================================================================

FRAME_RECORD = struct.Struct('<6h')
FRAME_RECORD_SIZE = FRAME_RECORD.size  # 12

# Candidate frame table offsets relative to the sprite start, in priority order
CANDIDATE_OFFSETS = (100, 104, 108)

# Used when no candidate passes the plausibility check
FALLBACK_OFFSET = 108

# Pivot magnitudes at or above this are treated as garbage
PIVOT_LIMIT = 2048


# Predicate signature: 12 raw bytes -> accept/reject
FramePredicate = Callable[[bytes], bool]

# Reader signature: (absolute offset, size) -> bytes (may be short at EOF)
ReadAt = Callable[[int, int], bytes]


# ==============================================================================
# FRAME CODEC
# ==============================================================================

def unpack_frame(buf: bytes, offset: int = 0) -> Frame:
    """Decode one 12-byte frame record starting at offset."""
    return Frame(*FRAME_RECORD.unpack_from(buf, offset))


def pack_frame(frame: Frame) -> bytes:
    """Encode one frame as a 12-byte record."""
    return FRAME_RECORD.pack(*frame.as_tuple())


def decode_frames(buf: bytes, count: int) -> Tuple[Frame, ...]:
    """
    Decode count consecutive frame records.

    Args:
        buf: Raw frame table bytes (at least 12 * count long)
        count: Number of records to decode

    Returns:
        Tuple of Frame objects in table order

    Raises:
        ValueError: If buf is too short for count records
    """
    needed = FRAME_RECORD_SIZE * count
    if count < 0 or len(buf) < needed:
        raise ValueError(
            f"Frame table needs {needed} bytes for {count} frames, got {len(buf)}")

    return tuple(unpack_frame(buf, i * FRAME_RECORD_SIZE) for i in range(count))


def encode_frames(frames: Iterable[Frame]) -> bytes:
    """Encode frames back to back in the given order."""
    return b"".join(pack_frame(f) for f in frames)


# ==============================================================================
# OFFSET RESOLVER
# ==============================================================================

def is_plausible_frame(buf: bytes) -> bool:
    """
    Default plausibility predicate for a candidate first frame record.

    Accepts when x >= 0, y >= 0, width > 0, height > 0 and both pivot
    magnitudes are below PIVOT_LIMIT. Buffers shorter than one record
    (candidate runs past end of file) are rejected.
    """
    if len(buf) < FRAME_RECORD_SIZE:
        return False

    x, y, width, height, pivot_x, pivot_y = FRAME_RECORD.unpack_from(buf, 0)
    return (x >= 0 and y >= 0 and width > 0 and height > 0 and
            abs(pivot_x) < PIVOT_LIMIT and abs(pivot_y) < PIVOT_LIMIT)


def resolve_table_offset(read_at: ReadAt, sprite_start: int,
                         candidates: Sequence[int] = CANDIDATE_OFFSETS,
                         predicate: FramePredicate = is_plausible_frame,
                         fallback: int = FALLBACK_OFFSET) -> int:
    """
    Pick the frame table offset for one sprite.

    Args:
        read_at: Callable returning up to `size` bytes at an absolute offset
        sprite_start: Absolute base offset of the sprite record
        candidates: Relative offsets to test, highest priority first
        predicate: Accept/reject test over a 12-byte candidate buffer
        fallback: Relative offset used when every candidate is rejected

    Returns:
        The chosen offset relative to sprite_start
    """
    for candidate in candidates:
        if predicate(read_at(sprite_start + candidate, FRAME_RECORD_SIZE)):
            return candidate
    return fallback
