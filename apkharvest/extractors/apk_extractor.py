# ==============================================================================
# APK EXTRACTOR MODULE
# ==============================================================================
# Reader for the APK sprite container (a game asset container, not an
# Android package).
#
# APK Format Overview (all integers little-endian):
#   - 0x14 (20): int32 encoded sprite count, stored in a packed form:
#                total = (((encoded - 51) / 3 - 17) / 44), truncating each step
#   - 0x18 (24): sprite table, one 77-byte entry per sprite. Only the first
#                4 bytes are used: int32 absolute offset of the sprite record.
#   - Sprite records, contiguous. A record ends where the next one starts
#     (or at end of file for the last record):
#       +100        int32 frame count
#       +100/104/108  frame table, 12 bytes per frame (see frame_table.py)
#       +108 + 12*frame_count   image data (a complete BMP file)
#
# The frame table start varies between files, so it is found by testing the
# three candidate offsets. The image always starts after a table anchored at
# +108, whichever candidate matched.
#
# Usage:
#   result = APKExtractor().load("monsters.apk")
#   for sprite in result.sprites:
#       print(sprite.index, sprite.frame_count, len(sprite.image_data))
# ==============================================================================

import struct
from typing import BinaryIO, List

from ..core.models import ExtractionResult, Sprite
from ..parsers.frame_table import (
    FALLBACK_OFFSET, FRAME_RECORD_SIZE, decode_frames, resolve_table_offset,
)
from .base_extractor import ContainerFormatError, ReaderRegistry, SpriteContainerReader


# ==============================================================================
# APK CONSTANTS
# ==============================================================================

# Offset of the packed sprite count
APK_COUNT_OFFSET = 20

# Sprite table start and entry size
APK_TABLE_OFFSET = 24
APK_TABLE_ENTRY_SIZE = 77

# Frame count field, relative to the sprite start
APK_FRAME_COUNT_OFFSET = 100

# Image data follows a frame table anchored here, relative to the sprite start
APK_IMAGE_ANCHOR = FALLBACK_OFFSET

INT32 = struct.Struct('<i')


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def decode_sprite_count(encoded_total: int) -> int:
    """
    Decode the packed sprite count from the header field at offset 20.

    >>> decode_sprite_count(3458)
    25
    """
    return _trunc_div(_trunc_div(encoded_total - 51, 3) - 17, 44)


# ==============================================================================
# APK EXTRACTOR CLASS
# ==============================================================================
class APKExtractor(SpriteContainerReader):
    """
    Reader for APK sprite containers.

    Reads in two passes: first the sprite offset table, then each sprite's
    frame table and image blob. A sprite that cannot be extracted is reported
    on the result and skipped; the remaining sprites are still read.
    """

    @property
    def format_name(self) -> str:
        return "APK Sprite Container"

    @property
    def supported_extensions(self) -> List[str]:
        return ['.apk']

    @property
    def reader_id(self) -> str:
        return "apk"

    def read(self, stream: BinaryIO, source: str = "") -> ExtractionResult:
        length = self._stream_length(stream)
        result = ExtractionResult(source=source)

        if length < APK_TABLE_OFFSET:
            raise ContainerFormatError(
                f"APK header needs {APK_TABLE_OFFSET} bytes, file has {length}")

        encoded_total = INT32.unpack(self._read_at(stream, APK_COUNT_OFFSET, 4))[0]
        total = decode_sprite_count(encoded_total)
        self._debug(f"Encoded count field: {encoded_total}")

        if total < 0:
            print(f"[WARN] Header decodes to {total} sprites, treating as none")
            total = 0
        result.total_sprites = total

        offsets = self._read_offsets(stream, total, length)

        for i in range(total):
            start = offsets[i]
            end = offsets[i + 1] if i + 1 < total else length
            sprite = self._read_sprite(stream, i, start, end, length, result)
            if sprite is not None:
                result.sprites.append(sprite)

        return result

    # ==========================================================================
    # PRIVATE HELPER METHODS
    # ==========================================================================

    def _read_offsets(self, stream: BinaryIO, total: int, length: int) -> List[int]:
        """Pass 1: base offset of every sprite record."""
        offsets = []
        for i in range(total):
            pos = APK_TABLE_OFFSET + i * APK_TABLE_ENTRY_SIZE
            raw = self._read_at(stream, pos, 4)
            if len(raw) < 4:
                raise ContainerFormatError(
                    f"Sprite table truncated at entry {i} of {total} "
                    f"(offset {pos}, file length {length})")
            offsets.append(INT32.unpack(raw)[0])
        return offsets

    def _read_sprite(self, stream: BinaryIO, index: int, start: int, end: int,
                     length: int, result: ExtractionResult):
        """Pass 2 for one sprite. Returns a Sprite, or None after warning."""
        raw_count = self._read_at(stream, start + APK_FRAME_COUNT_OFFSET, 4)
        if len(raw_count) < 4:
            result.warn(index, f"Sprite {index} frame count lies outside the file.")
            return None

        frame_count = INT32.unpack(raw_count)[0]
        if frame_count < 0:
            result.warn(index, f"Sprite {index} has negative frame count {frame_count}.")
            return None

        table_offset = resolve_table_offset(
            lambda offset, size: self._read_at(stream, offset, size), start)
        result.table_offsets[index] = table_offset
        self._debug(f"Sprite {index}: frame table at +{table_offset}, {frame_count} frames")

        table_size = FRAME_RECORD_SIZE * frame_count
        if start + table_offset + table_size > length:
            result.warn(index, f"Sprite {index} has a truncated frame table: "
                               f"{frame_count} frames need {table_size} bytes past "
                               f"offset {start + table_offset}, file has {length}.")
            return None

        frames = decode_frames(
            self._read_at(stream, start + table_offset, table_size), frame_count)

        image_offset = start + APK_IMAGE_ANCHOR + table_size
        image_size = end - image_offset
        if image_size <= 0 or image_offset >= length:
            result.warn(index, f"Sprite {index} has invalid size or offset.")
            return None

        image_data = self._read_at(stream, image_offset, image_size)
        return Sprite(index=index, frames=frames, image_data=image_data)


ReaderRegistry.register(APKExtractor)
