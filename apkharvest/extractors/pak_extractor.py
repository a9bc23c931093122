# ==============================================================================
# PAK EXTRACTOR MODULE
# ==============================================================================
# Reader for PAK sprite containers produced by PAKWriter (see pak_writer.py
# for the layout). Sprite indices are assigned by table position.
#
# Usage:
#   result = PAKExtractor().load("RePacked/monsters.pak")
# ==============================================================================

import struct
from typing import BinaryIO, List

from ..core.models import ExtractionResult, Sprite
from ..parsers.frame_table import FRAME_RECORD_SIZE, decode_frames
from .base_extractor import ContainerFormatError, ReaderRegistry, SpriteContainerReader
from .pak_writer import (
    PAK_COUNT_OFFSET, PAK_SIGNATURE, PAK_TABLE_ENTRY, PAK_TABLE_OFFSET,
    SPRITE_FRAME_COUNT_OFFSET, SPRITE_FRAME_TABLE_OFFSET, SPRITE_IMAGE_ANCHOR,
)


class PAKExtractor(SpriteContainerReader):
    """Reader for PAK sprite containers."""

    @property
    def format_name(self) -> str:
        return "PAK Sprite Container"

    @property
    def supported_extensions(self) -> List[str]:
        return ['.pak']

    @property
    def reader_id(self) -> str:
        return "pak"

    def detect(self, path: str) -> bool:
        """Check the extension, then the header signature."""
        if not super().detect(path):
            return False
        with open(path, 'rb') as f:
            return f.read(len(PAK_SIGNATURE)) == PAK_SIGNATURE

    def read(self, stream: BinaryIO, source: str = "") -> ExtractionResult:
        length = self._stream_length(stream)
        result = ExtractionResult(source=source)

        if length < PAK_TABLE_OFFSET:
            raise ContainerFormatError(
                f"PAK header needs {PAK_TABLE_OFFSET} bytes, file has {length}")
        if self._read_at(stream, 0, len(PAK_SIGNATURE)) != PAK_SIGNATURE:
            raise ContainerFormatError("Missing PAK signature")

        total = struct.unpack('<i', self._read_at(stream, PAK_COUNT_OFFSET, 4))[0]
        if total < 0:
            raise ContainerFormatError(f"Negative sprite count {total}")
        result.total_sprites = total

        table_size = PAK_TABLE_ENTRY.size * total
        table = self._read_at(stream, PAK_TABLE_OFFSET, table_size)
        if len(table) < table_size:
            raise ContainerFormatError(f"Sprite table truncated ({total} entries)")

        for i in range(total):
            offset, size = PAK_TABLE_ENTRY.unpack_from(table, i * PAK_TABLE_ENTRY.size)
            if offset < 0 or size < 0 or offset + size > length:
                result.warn(i, f"Sprite {i} record lies outside the file.")
                continue
            record = self._read_at(stream, offset, size)
            sprite = self._decode_record(i, record, result)
            if sprite is not None:
                result.sprites.append(sprite)

        return result

    def _decode_record(self, index: int, record: bytes, result: ExtractionResult):
        if len(record) < SPRITE_IMAGE_ANCHOR:
            result.warn(index, f"Sprite {index} record is truncated.")
            return None

        frame_count = struct.unpack_from('<i', record, SPRITE_FRAME_COUNT_OFFSET)[0]
        table_end = SPRITE_FRAME_TABLE_OFFSET + FRAME_RECORD_SIZE * frame_count
        try:
            frames = decode_frames(record[SPRITE_FRAME_TABLE_OFFSET:table_end], frame_count)
        except ValueError as e:
            result.warn(index, f"Sprite {index} has a truncated frame table: {e}")
            return None

        result.table_offsets[index] = SPRITE_FRAME_TABLE_OFFSET
        image_start = SPRITE_IMAGE_ANCHOR + FRAME_RECORD_SIZE * frame_count
        return Sprite(index=index, frames=frames, image_data=record[image_start:])


ReaderRegistry.register(PAKExtractor)
