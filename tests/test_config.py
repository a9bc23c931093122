"""Tests for the JSON configuration layer."""

import json
import os

import pytest

from apkharvest.core.config import DEFAULT_CONFIG, Config
from apkharvest.core.paths import Paths


class TestConfig:
    def test_defaults(self, tmp_path):
        config = Config(str(tmp_path / "config.json"))
        assert config.extract_dir_name == "Extracted"
        assert config.repack_dir == "RePacked"
        assert config.image_extension == ".bmp"
        assert config.metadata_extension == ".json"
        assert config.convert_to_pak is True
        assert config.record_catalog is False

    def test_missing_file_keeps_defaults(self, tmp_path):
        config = Config(str(tmp_path / "absent.json"))
        assert config.load() is False
        assert config.data == DEFAULT_CONFIG

    def test_save_and_load(self, tmp_path):
        path = str(tmp_path / "sub" / "config.json")
        config = Config(path)
        config.convert_to_pak = False
        config.repack_dir = "out"
        assert config.save()

        loaded = Config(path)
        assert loaded.load()
        assert loaded.convert_to_pak is False
        assert loaded.repack_dir == "out"

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"debug_mode": True, "bogus": 1}), encoding="utf-8")

        config = Config(str(path))
        config.load()

        assert config.debug_mode is True
        assert "bogus" not in config.data

    @pytest.mark.parametrize("text", ["{broken", "[1, 2]"])
    def test_bad_file_keeps_defaults(self, tmp_path, text, capsys):
        path = tmp_path / "config.json"
        path.write_text(text, encoding="utf-8")

        config = Config(str(path))

        assert config.load() is False
        assert config.data == DEFAULT_CONFIG
        assert "[ERROR]" in capsys.readouterr().out

    def test_empty_extract_dir_rejected(self, tmp_path):
        config = Config(str(tmp_path / "config.json"))
        with pytest.raises(ValueError):
            config.extract_dir_name = ""

    def test_item_access_and_reset(self, tmp_path):
        config = Config(str(tmp_path / "config.json"))
        config["omit_default_fields"] = False
        assert config.get("omit_default_fields") is False

        config.reset_to_defaults()
        assert config["omit_default_fields"] is True

    def test_resolve_path(self, tmp_path):
        config = Config(str(tmp_path / "config.json"))
        assert config.resolve_path("RePacked", str(tmp_path)) == str(tmp_path / "RePacked")
        assert config.resolve_path(str(tmp_path)) == str(tmp_path)
        assert config.resolve_path("x") == os.path.join(os.getcwd(), "x")


class TestPaths:
    def test_output_layout(self, tmp_path):
        container = str(tmp_path / "monsters.apk")
        extract_dir = Paths.extract_dir_for(container, "Extracted")

        assert extract_dir == str(tmp_path / "Extracted" / "monsters")
        assert Paths.sprite_base_name("monsters", 7) == "monsters_0007"
        assert Paths.repack_path_for(extract_dir + os.sep, "RePacked") == \
               os.path.join("RePacked", "monsters.pak")

    def test_default_config_lives_in_app_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Paths, "_app_dir", str(tmp_path))
        assert Config().config_path == str(tmp_path / "data" / "config.json")

    def test_wide_index(self):
        assert Paths.sprite_base_name("a", 12345) == "a_12345"
