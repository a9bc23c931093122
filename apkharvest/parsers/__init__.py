# ==============================================================================
# PARSERS MODULE
# ==============================================================================
# Encoders/decoders shared by the container readers and writer.
#
#   - frame_table: 12-byte frame record codec and the frame table offset
#                  resolver used by the APK reader
#   - metadata:    Sprite <-> JSON metadata record (the loose-file format
#                  between extraction and repacking)
# ==============================================================================

from .frame_table import (
    CANDIDATE_OFFSETS, FALLBACK_OFFSET, FRAME_RECORD_SIZE, PIVOT_LIMIT,
    decode_frames, encode_frames, is_plausible_frame, pack_frame,
    resolve_table_offset, unpack_frame,
)
from .metadata import (
    MetadataError, load_metadata, record_to_frames, record_to_sprite,
    save_metadata, sprite_to_record,
)

__all__ = [
    # Frame table
    'CANDIDATE_OFFSETS', 'FALLBACK_OFFSET', 'FRAME_RECORD_SIZE', 'PIVOT_LIMIT',
    'decode_frames', 'encode_frames', 'is_plausible_frame', 'pack_frame',
    'resolve_table_offset', 'unpack_frame',

    # Metadata
    'MetadataError', 'load_metadata', 'record_to_frames', 'record_to_sprite',
    'save_metadata', 'sprite_to_record',
]
