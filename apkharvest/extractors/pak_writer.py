# ==============================================================================
# PAK WRITER MODULE
# ==============================================================================
# Writer for the PAK sprite container, the repack target for extracted APK
# sprites.
#
# PAK Format (all integers little-endian):
#   0x00 (0):   20 bytes  "<Pak file header>", NUL padded
#   0x14 (20):  int32     sprite count N
#   0x18 (24):  N entries of (int32 record offset, int32 record size)
#   Sprite records, contiguous, in writer order:
#     +0              100 bytes "<Sprite File Header>", NUL padded
#     +100            int32 frame count F
#     +104            F frame records, 12 bytes each (x, y, w, h, pivot x/y)
#     +104 + 12*F     4 bytes zero
#     +108 + 12*F     image data
#
# The sprite record keeps the APK record's +100 count and +108 image anchor,
# so both containers share the same per-sprite geometry.
#
# Usage:
#   writer = PAKWriter(sprites)
#   writer.write("RePacked/monsters.pak")
# ==============================================================================

import os
import struct
from typing import Iterable, List, Optional

from ..core.models import Sprite
from ..parsers.frame_table import encode_frames


# ==============================================================================
# PAK CONSTANTS
# ==============================================================================

PAK_SIGNATURE = b"<Pak file header>"
PAK_HEADER_SIZE = 20
PAK_COUNT_OFFSET = 20
PAK_TABLE_OFFSET = 24
PAK_TABLE_ENTRY = struct.Struct('<ii')

SPRITE_SIGNATURE = b"<Sprite File Header>"
SPRITE_HEADER_SIZE = 100
SPRITE_FRAME_COUNT_OFFSET = 100
SPRITE_FRAME_TABLE_OFFSET = 104
SPRITE_IMAGE_ANCHOR = 108


# ==============================================================================
# PAK WRITER CLASS
# ==============================================================================
class PAKWriter:
    """
    Serializes an ordered list of sprites into a PAK container.

    Sprite indices are not stored; a reader assigns them by position.
    """

    def __init__(self, sprites: Optional[Iterable[Sprite]] = None):
        self.sprites: List[Sprite] = list(sprites) if sprites else []

    def add(self, sprite: Sprite):
        """Append a sprite to the end of the container."""
        self.sprites.append(sprite)

    def __len__(self):
        return len(self.sprites)

    @staticmethod
    def encode_sprite(sprite: Sprite) -> bytes:
        """Encode one sprite record."""
        out = bytearray(SPRITE_SIGNATURE.ljust(SPRITE_HEADER_SIZE, b"\0"))
        out.extend(struct.pack('<i', sprite.frame_count))
        out.extend(encode_frames(sprite.frames))
        out.extend(b"\0" * (SPRITE_IMAGE_ANCHOR - SPRITE_FRAME_TABLE_OFFSET))
        out.extend(sprite.image_data)
        return bytes(out)

    def to_bytes(self) -> bytes:
        """Serialize the whole container."""
        records = [self.encode_sprite(s) for s in self.sprites]

        out = bytearray(PAK_SIGNATURE.ljust(PAK_HEADER_SIZE, b"\0"))
        out.extend(struct.pack('<i', len(records)))

        offset = PAK_TABLE_OFFSET + PAK_TABLE_ENTRY.size * len(records)
        for record in records:
            out.extend(PAK_TABLE_ENTRY.pack(offset, len(record)))
            offset += len(record)

        for record in records:
            out.extend(record)

        return bytes(out)

    def write(self, path: str) -> int:
        """
        Write the container to disk, creating parent directories.

        Returns:
            Number of bytes written
        """
        data = self.to_bytes()
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(data)
        return len(data)
