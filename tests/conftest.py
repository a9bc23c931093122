"""Shared pytest fixtures for APK Sprite Harvester tests."""

import struct

import pytest

from apkharvest.core.config import Config
from apkharvest.core.models import Frame


# =============================================================================
# APK Builders
# =============================================================================

APK_TABLE_OFFSET = 24
APK_ENTRY_SIZE = 77


def encode_sprite_count(total: int) -> int:
    """Inverse of the header count packing for non-negative totals."""
    return (total * 44 + 17) * 3 + 51


def frame_bytes(frame: Frame) -> bytes:
    return struct.pack('<6h', frame.x, frame.y, frame.width, frame.height,
                       frame.pivot_x, frame.pivot_y)


def build_sprite_record(frames, image: bytes, table_offset: int = 104,
                        frame_count=None) -> bytes:
    """
    Build one APK sprite record.

    The frame count goes at +100, the frame table at table_offset and the
    image at +108 + 12 * frame_count. With table_offset=108 the four bytes
    at +104 are filled with 0xFF so neither earlier candidate looks valid.
    """
    count = len(frames) if frame_count is None else frame_count
    record = bytearray(108 + 12 * max(count, 0))
    struct.pack_into('<i', record, 100, count)
    if table_offset == 108:
        record[104:108] = b'\xff\xff\xff\xff'

    table = b"".join(frame_bytes(f) for f in frames)
    end = table_offset + len(table)
    if end > len(record):
        record.extend(b"\0" * (end - len(record)))
    record[table_offset:end] = table

    # Image always follows a table anchored at +108
    del record[108 + 12 * max(count, 0):]
    record.extend(image)
    return bytes(record)


def build_apk(records, encoded_total=None, offsets=None) -> bytes:
    """
    Assemble an APK container from sprite records.

    Args:
        records: Sprite record byte strings, laid out contiguously
        encoded_total: Raw header count field (default encodes len(records))
        offsets: Override the offsets written into the table
    """
    total = len(records) if offsets is None else len(offsets)
    if encoded_total is None:
        encoded_total = encode_sprite_count(total)

    header = bytearray(b"APKHEADER".ljust(20, b"\0"))
    header.extend(struct.pack('<i', encoded_total))

    data_start = APK_TABLE_OFFSET + APK_ENTRY_SIZE * total
    if offsets is None:
        offsets = []
        position = data_start
        for record in records:
            offsets.append(position)
            position += len(record)

    table = bytearray()
    for offset in offsets:
        entry = bytearray(APK_ENTRY_SIZE)
        struct.pack_into('<i', entry, 0, offset)
        table.extend(entry)

    return bytes(header) + bytes(table) + b"".join(records)


def fake_bmp(tag: int, size: int = 64) -> bytes:
    """Opaque image payload that starts like a BMP."""
    body = bytes((tag + i) % 256 for i in range(size - 2))
    return b"BM" + body


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_frames():
    return (
        Frame(0, 0, 32, 48, -16, -40),
        Frame(32, 0, 32, 48, -16, -40),
        Frame(64, 0, 30, 46, 0, -38),
    )


@pytest.fixture
def sample_apk_bytes(sample_frames):
    """Three sprites: table at +104, +108 and +104 with no frames."""
    records = [
        build_sprite_record(sample_frames, fake_bmp(1), table_offset=104),
        build_sprite_record(sample_frames[:1], fake_bmp(2, 80), table_offset=108),
        build_sprite_record((), fake_bmp(3, 40), table_offset=104),
    ]
    return build_apk(records)


@pytest.fixture
def sample_apk(tmp_path, sample_apk_bytes):
    path = tmp_path / "monsters.apk"
    path.write_bytes(sample_apk_bytes)
    return path


@pytest.fixture
def config(tmp_path):
    """Default config with output and catalog paths inside tmp_path."""
    cfg = Config(str(tmp_path / "config.json"))
    cfg.repack_dir = str(tmp_path / "RePacked")
    cfg.database_path = str(tmp_path / "catalog.db")
    return cfg
