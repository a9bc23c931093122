# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# Core building blocks for APK Sprite Harvester:
#   - Models: Frame, Sprite, ExtractionResult (shared by reader and writer)
#   - Config: Application configuration management
#   - Paths: Application data paths and output layout
#   - Hasher: MD5 hashing for the catalog
#   - Database: SQLite extraction catalog with SQLAlchemy ORM
#
# The extract/repack pipeline lives in apkharvest.core.pipeline and is not
# imported here, since it depends on the extractors package.
#
# Usage:
#   from apkharvest.core import Sprite, Frame, get_config
#   from apkharvest.core.pipeline import process_inputs
# ==============================================================================

from .models import Frame, Sprite, ExtractionResult
from .config import Config, get_config
from .paths import Paths
from .hasher import FileHasher
from .database import Database, Container, SpriteRecord

__all__ = [
    # Models
    'Frame',
    'Sprite',
    'ExtractionResult',

    # Configuration
    'Config',
    'get_config',

    # Paths
    'Paths',

    # Hashing
    'FileHasher',

    # Database
    'Database',
    'Container',
    'SpriteRecord',
]
