# ==============================================================================
# BASE EXTRACTOR MODULE
# ==============================================================================
# Abstract base class that all sprite container readers implement, plus a
# ReaderRegistry for picking the right reader for a file.
#
# To add support for a new container format:
#   1. Create a reader class that inherits from SpriteContainerReader
#   2. Implement the abstract properties and read()
#   3. Register the reader with ReaderRegistry
#
# Example:
#   class MyReader(SpriteContainerReader):
#       @property
#       def format_name(self): return "My Container"
#       ...
#
#   ReaderRegistry.register(MyReader)
# ==============================================================================

import io
import os
from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, Iterator, List, Optional

from ..core.models import ExtractionResult, Sprite


# ==============================================================================
# ERRORS
# ==============================================================================

class ContainerFormatError(ValueError):
    """Container-level structural failure (short header, truncated table)."""


# ==============================================================================
# BASE READER ABSTRACT CLASS
# ==============================================================================
class SpriteContainerReader(ABC):
    """
    Abstract base class for sprite container readers.

    A reader turns a binary container into an ExtractionResult holding the
    container's Sprite records. Per-sprite problems are recorded on the
    result as warnings; only container-level problems raise.

    The typical workflow is:
        reader = APKExtractor()
        result = reader.load("sprites.apk")
        for sprite in result.sprites:
            ...
    """

    def __init__(self, debug: bool = False):
        """
        Initialize the reader.

        Args:
            debug: Print [DEBUG] lines while reading
        """
        self.debug = debug

    # ==========================================================================
    # ABSTRACT PROPERTIES - Must be implemented by subclasses
    # ==========================================================================

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable name of the container format."""
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> List[str]:
        """File extensions including the dot (e.g., ['.apk'])."""
        pass

    @property
    @abstractmethod
    def reader_id(self) -> str:
        """Short unique identifier (e.g., "apk", "pak")."""
        pass

    # ==========================================================================
    # ABSTRACT METHODS - Must be implemented by subclasses
    # ==========================================================================

    @abstractmethod
    def read(self, stream: BinaryIO, source: str = "") -> ExtractionResult:
        """
        Read every sprite from a seekable binary stream.

        Args:
            stream: Seekable binary stream positioned anywhere
            source: Label for messages (usually the file path)

        Returns:
            ExtractionResult with sprites and per-sprite warnings

        Raises:
            ContainerFormatError: If the container header/table is unusable
        """
        pass

    # ==========================================================================
    # COMMON METHODS
    # ==========================================================================

    def detect(self, path: str) -> bool:
        """Check if this reader handles the file, by extension."""
        ext = os.path.splitext(path)[1].lower()
        return ext in self.supported_extensions and os.path.isfile(path)

    def load(self, path: str) -> ExtractionResult:
        """
        Read a container from disk.

        Raises:
            OSError: If the file cannot be opened
            ContainerFormatError: If the container is structurally unusable
        """
        with open(path, 'rb') as f:
            return self.read(f, source=path)

    def load_from_bytes(self, data: bytes, source: str = "<bytes>") -> ExtractionResult:
        """Read a container held in memory."""
        return self.read(io.BytesIO(data), source=source)

    def iter_sprites(self, path: str) -> Iterator[Sprite]:
        """Yield the extracted sprites of a container file in order."""
        for sprite in self.load(path).sprites:
            yield sprite

    def _debug(self, message: str):
        if self.debug:
            print(f"[DEBUG] {message}")

    # ==========================================================================
    # STREAM HELPERS
    # ==========================================================================

    @staticmethod
    def _stream_length(stream: BinaryIO) -> int:
        stream.seek(0, os.SEEK_END)
        return stream.tell()

    @staticmethod
    def _read_at(stream: BinaryIO, offset: int, size: int) -> bytes:
        """Read up to size bytes at offset; short or empty past end of stream."""
        if offset < 0 or size <= 0:
            return b""
        stream.seek(offset)
        return stream.read(size)


# ==============================================================================
# READER REGISTRY
# ==============================================================================
class ReaderRegistry:
    """
    Registry of available container readers.

    Usage:
        ReaderRegistry.register(APKExtractor)
        reader = ReaderRegistry.get_reader_for_file("monsters.apk")
    """

    _readers: Dict[str, type] = {}

    @classmethod
    def register(cls, reader_class: type):
        """Register a reader class under its reader_id."""
        cls._readers[reader_class().reader_id] = reader_class
        return reader_class

    @classmethod
    def get_reader_for_file(cls, file_path: str, debug: bool = False) -> Optional[SpriteContainerReader]:
        """
        Find and instantiate a reader that handles the file.

        Returns:
            A reader instance, or None if no reader matches
        """
        for reader_class in cls._readers.values():
            reader = reader_class(debug=debug)
            if reader.detect(file_path):
                return reader
        return None

    @classmethod
    def get_reader_by_id(cls, reader_id: str) -> Optional[type]:
        """Get a reader class by its ID (e.g., "apk")."""
        return cls._readers.get(reader_id)

    @classmethod
    def get_all(cls) -> Dict[str, type]:
        """Get all registered readers keyed by ID."""
        return cls._readers.copy()

    @classmethod
    def list_supported_extensions(cls) -> List[str]:
        """All extensions handled by registered readers, sorted."""
        extensions = set()
        for reader_class in cls._readers.values():
            extensions.update(reader_class().supported_extensions)
        return sorted(extensions)
