"""Tests for the frame record codec and the frame table offset resolver."""

import struct

import pytest

from apkharvest.core.models import Frame
from apkharvest.parsers.frame_table import (
    CANDIDATE_OFFSETS,
    FALLBACK_OFFSET,
    FRAME_RECORD_SIZE,
    decode_frames,
    encode_frames,
    is_plausible_frame,
    pack_frame,
    resolve_table_offset,
    unpack_frame,
)


def record(x=0, y=0, width=32, height=32, pivot_x=16, pivot_y=16) -> bytes:
    return struct.pack('<6h', x, y, width, height, pivot_x, pivot_y)


def reader_over(buf: bytes):
    """read_at callable over an in-memory buffer."""
    def read_at(offset, size):
        return buf[offset:offset + size]
    return read_at


# =============================================================================
# Frame Codec
# =============================================================================

class TestFrameCodec:
    def test_record_size(self):
        assert FRAME_RECORD_SIZE == 12

    def test_unpack_field_order(self):
        frame = unpack_frame(record(1, 2, 3, 4, -5, -6))
        assert frame == Frame(x=1, y=2, width=3, height=4, pivot_x=-5, pivot_y=-6)

    def test_pack_is_little_endian_signed(self):
        assert pack_frame(Frame(1, -1, 0, 0, 0, 0))[:4] == b'\x01\x00\xff\xff'

    def test_decode_preserves_order(self):
        buf = record(x=0) + record(x=10) + record(x=20)
        frames = decode_frames(buf, 3)
        assert [f.x for f in frames] == [0, 10, 20]

    def test_decode_ignores_trailing_bytes(self):
        frames = decode_frames(record() + b"junk", 1)
        assert len(frames) == 1

    def test_decode_zero_frames(self):
        assert decode_frames(b"", 0) == ()

    def test_decode_short_buffer_raises(self):
        with pytest.raises(ValueError):
            decode_frames(record(), 2)

    def test_decode_negative_count_raises(self):
        with pytest.raises(ValueError):
            decode_frames(record(), -1)

    def test_encode_matches_decode(self):
        frames = (Frame(0, 0, 16, 16, -8, -8), Frame(16, 0, 16, 16, -8, -8))
        assert decode_frames(encode_frames(frames), 2) == frames


# =============================================================================
# Plausibility Predicate
# =============================================================================

class TestPlausibility:
    def test_accepts_typical_frame(self):
        assert is_plausible_frame(record(0, 0, 32, 32, 16, 16))

    @pytest.mark.parametrize("fields", [
        dict(x=-1),
        dict(y=-1),
        dict(width=0),
        dict(height=0),
        dict(width=-4),
        dict(pivot_x=2048),
        dict(pivot_y=-2048),
    ])
    def test_rejects_implausible_fields(self, fields):
        assert not is_plausible_frame(record(**fields))

    def test_pivot_just_inside_limit(self):
        assert is_plausible_frame(record(pivot_x=2047, pivot_y=-2047))

    def test_rejects_short_buffer(self):
        assert not is_plausible_frame(record()[:11])


# =============================================================================
# Offset Resolver
# =============================================================================

class TestResolver:
    def test_candidate_priority_order(self):
        assert CANDIDATE_OFFSETS == (100, 104, 108)
        assert FALLBACK_OFFSET == 108

    def test_first_candidate_wins_when_valid(self):
        buf = bytes(100) + record() + bytes(64)
        assert resolve_table_offset(reader_over(buf), 0) == 100

    def test_skips_invalid_plus_100_for_valid_plus_104(self):
        """x=-1 at +100 fails, a clean 32x32 frame at +104 passes."""
        buf = bytearray(200)
        buf[104:116] = record(0, 0, 32, 32, 16, 16)
        buf[100:102] = struct.pack('<h', -1)
        assert struct.unpack_from('<h', buf, 100)[0] == -1
        assert resolve_table_offset(reader_over(bytes(buf)), 0) == 104

    def test_plus_108_when_earlier_candidates_fail(self):
        buf = bytearray(200)
        buf[100:112] = record(x=-1)
        buf[108:120] = record()
        # +104 now starts inside the +100 record's tail: x = width field (-ish)
        buf[104:106] = struct.pack('<h', -7)
        assert resolve_table_offset(reader_over(bytes(buf)), 0) == 108

    def test_falls_back_to_108_when_nothing_passes(self):
        buf = b'\xff' * 200
        assert resolve_table_offset(reader_over(buf), 0) == 108

    def test_candidates_past_end_of_data_are_rejected(self):
        buf = bytes(100) + record()[:8]
        assert resolve_table_offset(reader_over(buf), 0) == FALLBACK_OFFSET

    def test_offsets_are_relative_to_sprite_start(self):
        buf = bytes(500) + bytes(104) + record() + bytes(32)
        buf = bytearray(buf)
        buf[500 + 100:500 + 102] = struct.pack('<h', -1)
        assert resolve_table_offset(reader_over(bytes(buf)), 500) == 104

    def test_is_deterministic(self):
        buf = bytes(104) + record() + bytes(16)
        results = {resolve_table_offset(reader_over(buf), 0) for _ in range(10)}
        assert len(results) == 1

    def test_custom_predicate_and_candidates(self):
        seen = []

        def predicate(chunk):
            seen.append(chunk)
            return chunk[:1] == b'\x07'

        buf = bytearray(64)
        buf[20] = 7
        chosen = resolve_table_offset(reader_over(bytes(buf)), 0,
                                      candidates=(10, 20, 30),
                                      predicate=predicate, fallback=99)
        assert chosen == 20
        assert len(seen) == 2

    def test_custom_fallback(self):
        chosen = resolve_table_offset(reader_over(bytes(64)), 0,
                                      candidates=(0,), predicate=lambda c: False,
                                      fallback=42)
        assert chosen == 42
