"""Tests for the PAK writer and the matching PAK reader."""

import struct

import pytest

from apkharvest.core.models import Frame, Sprite
from apkharvest.extractors import ReaderRegistry
from apkharvest.extractors.apk_extractor import APKExtractor
from apkharvest.extractors.base_extractor import ContainerFormatError
from apkharvest.extractors.pak_extractor import PAKExtractor
from apkharvest.extractors.pak_writer import PAK_SIGNATURE, PAKWriter

from conftest import fake_bmp


@pytest.fixture
def sprites(sample_frames):
    return [
        Sprite(index=7, frames=sample_frames, image_data=fake_bmp(1)),
        Sprite(index=9, frames=(), image_data=fake_bmp(2, 10)),
        Sprite(index=12, frames=sample_frames[1:], image_data=fake_bmp(3, 100)),
    ]


# =============================================================================
# Layout
# =============================================================================

class TestLayout:
    def test_header(self, sprites):
        data = PAKWriter(sprites).to_bytes()
        assert data[:20] == PAK_SIGNATURE.ljust(20, b"\0")
        assert struct.unpack_from('<i', data, 20)[0] == 3

    def test_table_points_at_contiguous_records(self, sprites):
        data = PAKWriter(sprites).to_bytes()
        entries = [struct.unpack_from('<ii', data, 24 + 8 * i) for i in range(3)]

        assert entries[0][0] == 24 + 8 * 3
        assert entries[1][0] == entries[0][0] + entries[0][1]
        assert entries[2][0] == entries[1][0] + entries[1][1]
        assert entries[2][0] + entries[2][1] == len(data)

    def test_sprite_record(self, sprites, sample_frames):
        record = PAKWriter.encode_sprite(sprites[0])

        assert record.startswith(b"<Sprite File Header>")
        assert struct.unpack_from('<i', record, 100)[0] == 3
        frame = struct.unpack_from('<6h', record, 104)
        assert frame == (0, 0, 32, 48, -16, -40)
        image_start = 108 + 12 * 3
        assert record[104 + 36:image_start] == b"\0" * 4
        assert record[image_start:] == fake_bmp(1)

    def test_empty_frame_list(self):
        record = PAKWriter.encode_sprite(Sprite(index=0, image_data=b"BMxx"))
        assert struct.unpack_from('<i', record, 100)[0] == 0
        assert record[108:] == b"BMxx"

    def test_empty_container(self):
        data = PAKWriter().to_bytes()
        assert len(data) == 24
        assert PAKExtractor().load_from_bytes(data).sprites == []

    def test_add(self, sprites):
        writer = PAKWriter()
        for sprite in sprites:
            writer.add(sprite)
        assert len(writer) == 3
        assert writer.to_bytes() == PAKWriter(sprites).to_bytes()


# =============================================================================
# Round Trip
# =============================================================================

class TestRoundTrip:
    def test_frames_and_images_survive(self, sprites):
        result = PAKExtractor().load_from_bytes(PAKWriter(sprites).to_bytes())

        assert len(result.sprites) == 3
        for original, decoded in zip(sprites, result.sprites):
            assert decoded.frames == original.frames
            assert decoded.image_data == original.image_data

    def test_indices_follow_writer_position(self, sprites):
        result = PAKExtractor().load_from_bytes(PAKWriter(sprites).to_bytes())
        assert [s.index for s in result.sprites] == [0, 1, 2]

    def test_apk_to_pak(self, sample_apk_bytes):
        extracted = APKExtractor().load_from_bytes(sample_apk_bytes).sprites
        repacked = PAKExtractor().load_from_bytes(PAKWriter(extracted).to_bytes()).sprites

        assert [s.frames for s in repacked] == [s.frames for s in extracted]
        assert [s.image_data for s in repacked] == [s.image_data for s in extracted]

    def test_write_to_disk(self, tmp_path, sprites):
        path = tmp_path / "out" / "monsters.pak"
        written = PAKWriter(sprites).write(str(path))

        assert path.stat().st_size == written
        assert PAKExtractor().load(str(path)).extracted_count == 3


# =============================================================================
# Reader Checks
# =============================================================================

class TestPAKReader:
    def test_rejects_wrong_signature(self):
        with pytest.raises(ContainerFormatError):
            PAKExtractor().load_from_bytes(b"\0" * 64)

    def test_rejects_short_header(self):
        with pytest.raises(ContainerFormatError):
            PAKExtractor().load_from_bytes(PAK_SIGNATURE)

    def test_truncated_record_is_skipped(self, sprites):
        data = bytearray(PAKWriter(sprites[:1]).to_bytes())
        struct.pack_into('<ii', data, 24, 32, 50)
        result = PAKExtractor().load_from_bytes(bytes(data))
        assert result.sprites == []
        assert result.skipped == [0]

    def test_record_past_end_of_file_is_skipped(self, sprites):
        data = bytearray(PAKWriter(sprites[:2]).to_bytes())
        struct.pack_into('<ii', data, 24, 40, 0x7FFFFFFF)
        result = PAKExtractor().load_from_bytes(bytes(data))

        assert result.skipped == [0]
        assert [s.image_data for s in result.sprites] == [sprites[1].image_data]

    def test_detect(self, tmp_path, sprites):
        pak = tmp_path / "a.pak"
        PAKWriter(sprites).write(str(pak))
        other = tmp_path / "b.pak"
        other.write_bytes(b"not a pak file at all, just bytes")

        assert PAKExtractor().detect(str(pak))
        assert not PAKExtractor().detect(str(other))
        assert isinstance(ReaderRegistry.get_reader_for_file(str(pak)), PAKExtractor)
