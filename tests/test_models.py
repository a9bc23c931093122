"""Tests for the sprite data model."""

import dataclasses

import pytest

from apkharvest.core.models import ExtractionResult, Frame, Sprite


def test_frame_defaults_and_order():
    assert Frame().as_tuple() == (0, 0, 0, 0, 0, 0)
    assert Frame(1, 2, 3, 4, 5, 6).as_tuple() == (1, 2, 3, 4, 5, 6)


def test_frame_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Frame().x = 1


def test_sprite_stores_frames_as_tuple():
    sprite = Sprite(index=0, frames=[Frame(width=1), Frame(width=2)])
    assert isinstance(sprite.frames, tuple)
    assert sprite.frame_count == 2


def test_sprite_equality():
    assert Sprite(1, (Frame(),), b"BM") == Sprite(1, [Frame()], b"BM")


def test_sprite_repr():
    assert repr(Sprite(3, (), b"1234")) == "<Sprite(index=3, frames=0, image=4 bytes)>"


class TestExtractionResult:
    def test_warn(self, capsys):
        result = ExtractionResult(total_sprites=2)
        result.warn(1, "Sprite 1 has invalid size or offset.")

        assert result.skipped == [1]
        assert result.warnings == ["Sprite 1 has invalid size or offset."]
        assert "[WARN] Sprite 1 has invalid size or offset." in capsys.readouterr().out

    def test_success(self):
        assert ExtractionResult(total_sprites=0).success
        assert not ExtractionResult(total_sprites=1).success
        assert ExtractionResult(total_sprites=1, sprites=[Sprite(0)]).success
