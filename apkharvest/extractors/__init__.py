# ==============================================================================
# EXTRACTORS MODULE INIT
# ==============================================================================
# Sprite container readers and the PAK writer.
#
#   - SpriteContainerReader: Abstract base class defining the reader interface
#   - ReaderRegistry: Registry for picking a reader by file
#   - APKExtractor: APK sprite containers (extraction source)
#   - PAKExtractor: PAK sprite containers (repack target, read back)
#   - PAKWriter: Serializes sprites into a PAK container
#
# Usage:
#   from apkharvest.extractors import ReaderRegistry
#   reader = ReaderRegistry.get_reader_for_file("monsters.apk")
#   if reader:
#       result = reader.load("monsters.apk")
# ==============================================================================

# Import base classes first (required by the readers)
from .base_extractor import ContainerFormatError, ReaderRegistry, SpriteContainerReader

# Import specific readers (each one registers itself)
from .apk_extractor import APKExtractor, decode_sprite_count
from .pak_extractor import PAKExtractor
from .pak_writer import PAKWriter

__all__ = [
    # Base classes
    'ContainerFormatError',
    'ReaderRegistry',
    'SpriteContainerReader',

    # Containers
    'APKExtractor',
    'PAKExtractor',
    'PAKWriter',
    'decode_sprite_count',
]


def get_reader(container_path: str, debug: bool = False) -> SpriteContainerReader:
    """
    Get a reader for the given container, or None if no reader handles it.

    Example:
        >>> reader = get_reader("monsters.apk")
        >>> result = reader.load("monsters.apk")
    """
    return ReaderRegistry.get_reader_for_file(container_path, debug=debug)
