# ==============================================================================
# APK SPRITE HARVESTER - CONFIGURATION MODULE
# ==============================================================================
# Centralized configuration management for the application.
#
# This module handles:
#   - Loading/saving configuration from JSON file
#   - Default values for all settings
#   - Path resolution for the output folders
#
# Configuration is stored in: data/config.json
#
# Usage:
#   from apkharvest.core.config import Config
#   config = Config()
#   config.load()
#   print(config.extract_dir_name)
#   config.convert_to_pak = False
#   config.save()
# ==============================================================================

import os
import json
from typing import Optional, Dict, Any

from .paths import Paths


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================
# These are used when no config file exists or when values are missing.

DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # OUTPUT LAYOUT
    # -------------------------------------------------------------------------
    # Folder created next to each input file; one subfolder per container
    "extract_dir_name": "Extracted",

    # Where repacked .pak files go (relative paths resolve against the
    # current working directory)
    "repack_dir": "RePacked",

    # File extensions of the per-sprite output files
    "image_extension": ".bmp",
    "metadata_extension": ".json",

    # -------------------------------------------------------------------------
    # PIPELINE
    # -------------------------------------------------------------------------
    # Repack every extracted folder into a .pak after extraction
    "convert_to_pak": True,

    # Leave zero-valued fields out of metadata files
    "omit_default_fields": True,

    # -------------------------------------------------------------------------
    # CATALOG
    # -------------------------------------------------------------------------
    # Record every extraction in the SQLite catalog
    "record_catalog": False,

    # Path to SQLite database
    "database_path": "data/harvester.db",

    # -------------------------------------------------------------------------
    # ADVANCED
    # -------------------------------------------------------------------------
    # Print [DEBUG] lines (resolved frame table offsets, header fields)
    "debug_mode": False,
}


# ==============================================================================
# CONFIGURATION CLASS
# ==============================================================================
class Config:
    """
    Configuration manager for APK Sprite Harvester.

    Settings are stored in a JSON file and can be accessed as properties
    on this object.

    Attributes:
        config_path: Path to the configuration file
        data: Dictionary containing all settings
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to config file. If None, uses default location.
        """
        if config_path:
            self.config_path = config_path
        else:
            # Default: data/config.json in the app directory
            self.config_path = Paths.get_default_config_path()

        self.data: Dict[str, Any] = DEFAULT_CONFIG.copy()
        self._modified = False

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load configuration from file.

        If the file doesn't exist, defaults are used. Unknown keys are
        ignored; missing keys keep their defaults.

        Returns:
            True if file was loaded, False if using defaults
        """
        if not os.path.isfile(self.config_path):
            return False

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"[ERROR] Invalid config file: {e}")
            return False
        except OSError as e:
            print(f"[ERROR] Failed to load config: {e}")
            return False

        if not isinstance(loaded, dict):
            print("[ERROR] Invalid config file: expected a JSON object")
            return False

        for key, value in loaded.items():
            if key in self.data:
                self.data[key] = value

        print(f"[INFO] Loaded config from {self.config_path}")
        self._modified = False
        return True

    def save(self) -> bool:
        """
        Save configuration to file, creating its directory.

        Returns:
            True if saved successfully
        """
        try:
            directory = os.path.dirname(self.config_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, sort_keys=True)

            print(f"[INFO] Saved config to {self.config_path}")
            self._modified = False
            return True

        except OSError as e:
            print(f"[ERROR] Failed to save config: {e}")
            return False

    def reset_to_defaults(self):
        """Reset all settings to their default values."""
        self.data = DEFAULT_CONFIG.copy()
        self._modified = True

    # -------------------------------------------------------------------------
    # PROPERTY ACCESS
    # -------------------------------------------------------------------------

    @property
    def extract_dir_name(self) -> str:
        return self.data.get('extract_dir_name', 'Extracted')

    @extract_dir_name.setter
    def extract_dir_name(self, value: str):
        if not value:
            raise ValueError("extract_dir_name cannot be empty")
        self.data['extract_dir_name'] = value
        self._modified = True

    @property
    def repack_dir(self) -> str:
        return self.data.get('repack_dir', 'RePacked')

    @repack_dir.setter
    def repack_dir(self, value: str):
        self.data['repack_dir'] = value
        self._modified = True

    @property
    def image_extension(self) -> str:
        return self.data.get('image_extension', '.bmp')

    @property
    def metadata_extension(self) -> str:
        return self.data.get('metadata_extension', '.json')

    @property
    def convert_to_pak(self) -> bool:
        """Check if the repack pass runs after extraction."""
        return self.data.get('convert_to_pak', True)

    @convert_to_pak.setter
    def convert_to_pak(self, value: bool):
        self.data['convert_to_pak'] = bool(value)
        self._modified = True

    @property
    def omit_default_fields(self) -> bool:
        return self.data.get('omit_default_fields', True)

    @omit_default_fields.setter
    def omit_default_fields(self, value: bool):
        self.data['omit_default_fields'] = bool(value)
        self._modified = True

    @property
    def record_catalog(self) -> bool:
        return self.data.get('record_catalog', False)

    @record_catalog.setter
    def record_catalog(self, value: bool):
        self.data['record_catalog'] = bool(value)
        self._modified = True

    @property
    def database_path(self) -> str:
        """Get the database path."""
        return self.data.get('database_path', 'data/harvester.db')

    @database_path.setter
    def database_path(self, value: str):
        self.data['database_path'] = value
        self._modified = True

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.data.get('debug_mode', False)

    @debug_mode.setter
    def debug_mode(self, value: bool):
        self.data['debug_mode'] = bool(value)
        self._modified = True

    # -------------------------------------------------------------------------
    # GENERIC ACCESS
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any):
        self.data[key] = value
        self._modified = True

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access: config['key']"""
        return self.data[key]

    def __setitem__(self, key: str, value: Any):
        """Allow dictionary-style setting: config['key'] = value"""
        self.data[key] = value
        self._modified = True

    # -------------------------------------------------------------------------
    # PATH RESOLUTION
    # -------------------------------------------------------------------------

    def resolve_path(self, path: str, base: Optional[str] = None) -> str:
        """
        Resolve a configured path.

        Absolute paths are returned as-is; relative paths are joined to
        base (default: the current working directory).
        """
        if os.path.isabs(path):
            return path
        return os.path.join(base or os.getcwd(), path)


# ==============================================================================
# GLOBAL CONFIG INSTANCE
# ==============================================================================

_global_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Creates and loads config on first call.
    """
    global _global_config

    if _global_config is None:
        _global_config = Config()
        _global_config.load()

    return _global_config
