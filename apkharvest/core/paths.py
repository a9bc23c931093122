# ==============================================================================
# APK SPRITE HARVESTER - PATH UTILITIES
# ==============================================================================
# Centralized path handling for application data and for the output layout:
#
#   <input dir>/monsters.apk
#   <input dir>/Extracted/monsters/monsters_0000.bmp
#   <input dir>/Extracted/monsters/monsters_0000.json
#   ...
#   <repack dir>/monsters.pak
#
# Works for both development and frozen (PyInstaller) builds.
# ==============================================================================

import os
import sys
from typing import Optional


class Paths:
    """
    Centralized path management for APK Sprite Harvester.

    The default config file lives in <app dir>/data/config.json, where the
    app dir is the project root when running from source and the folder
    holding the executable when frozen.
    """

    APP_NAME = "APKSpriteHarvester"

    _app_dir: Optional[str] = None

    # ==========================================================================
    # APPLICATION PATHS
    # ==========================================================================

    @classmethod
    def is_frozen(cls) -> bool:
        """True if running as a PyInstaller executable."""
        return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')

    @classmethod
    def get_app_dir(cls) -> str:
        """
        Get the application directory.

        For script: The project root directory
        For exe: The directory containing the executable
        """
        if cls._app_dir is None:
            if cls.is_frozen():
                cls._app_dir = os.path.dirname(sys.executable)
            else:
                # This file is in apkharvest/core/, so go up 3 levels
                cls._app_dir = os.path.dirname(
                    os.path.dirname(
                        os.path.dirname(os.path.abspath(__file__))
                    )
                )
        return cls._app_dir

    @classmethod
    def get_default_config_path(cls) -> str:
        return os.path.join(cls.get_app_dir(), 'data', 'config.json')

    # ==========================================================================
    # OUTPUT LAYOUT
    # ==========================================================================

    @staticmethod
    def container_stem(container_path: str) -> str:
        """File name without directory or extension ("a/b/monsters.apk" -> "monsters")."""
        return os.path.splitext(os.path.basename(container_path))[0]

    @classmethod
    def extract_dir_for(cls, container_path: str, extract_dir_name: str = "Extracted") -> str:
        """Output folder for one container: <input dir>/<extract_dir_name>/<stem>."""
        source_dir = os.path.dirname(os.path.abspath(container_path))
        return os.path.join(source_dir, extract_dir_name, cls.container_stem(container_path))

    @staticmethod
    def sprite_base_name(stem: str, index: int) -> str:
        """Base file name of one sprite's outputs: <stem>_NNNN."""
        return f"{stem}_{index:04d}"

    @staticmethod
    def repack_path_for(sprite_dir: str, repack_dir: str) -> str:
        """Target .pak for an extracted folder: <repack_dir>/<folder name>.pak."""
        name = os.path.basename(os.path.normpath(sprite_dir))
        return os.path.join(repack_dir, name + '.pak')
