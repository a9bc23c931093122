# ==============================================================================
# APK SPRITE HARVESTER - SOURCE PACKAGE
# ==============================================================================
# Extracts sprite images and frame tables from APK sprite containers and
# repacks them into PAK containers.
#
# Subpackages:
#   - core: Data model, configuration, paths, catalog, pipeline
#   - parsers: Frame table codec/offset resolver, JSON metadata
#   - extractors: APK/PAK readers and the PAK writer
#
# Entry points:
#   - main.py: Launcher
#   - apkharvest/cli.py: Command-line interface
# ==============================================================================

__version__ = "1.0.0"
__description__ = "APK sprite container extraction and PAK repacking"

# Convenience imports
from .core import Frame, Sprite, ExtractionResult, Config, get_config
from .extractors import APKExtractor, PAKExtractor, PAKWriter, ReaderRegistry
from .core.pipeline import extract_to_directory, repack_directory, process_inputs

__all__ = [
    '__version__',
    '__description__',

    # Model
    'Frame',
    'Sprite',
    'ExtractionResult',

    # Configuration
    'Config',
    'get_config',

    # Containers
    'APKExtractor',
    'PAKExtractor',
    'PAKWriter',
    'ReaderRegistry',

    # Pipeline
    'extract_to_directory',
    'repack_directory',
    'process_inputs',
]
