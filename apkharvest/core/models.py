# ==============================================================================
# SPRITE DATA MODEL
# ==============================================================================
# Shared in-memory representation used by both directions of the pipeline:
#
#   APK container --(APKExtractor)--> Sprite/Frame --(PAKWriter)--> PAK container
#                                         |
#                                   metadata bridge
#                                         |
#                                 <stem>_NNNN.bmp + .json
#
# Frame and Sprite are frozen value types with no behavior. Binary encoding
# lives in parsers/frame_table.py, JSON encoding in parsers/metadata.py.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


# Signed 16-bit range of every Frame field
INT16_MIN = -32768
INT16_MAX = 32767


# ==============================================================================
# FRAME
# ==============================================================================

@dataclass(frozen=True)
class Frame:
    """
    One animation cell within a sprite sheet.

    Attributes:
        x (int):        Left edge of the cell inside the sprite image
        y (int):        Top edge of the cell inside the sprite image
        width (int):    Cell width (> 0 for a valid frame)
        height (int):   Cell height (> 0 for a valid frame)
        pivot_x (int):  Horizontal anchor offset
        pivot_y (int):  Vertical anchor offset

    All fields are signed 16-bit values on disk.
    """
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    pivot_x: int = 0
    pivot_y: int = 0

    def as_tuple(self) -> Tuple[int, int, int, int, int, int]:
        """Fields in on-disk order."""
        return (self.x, self.y, self.width, self.height, self.pivot_x, self.pivot_y)


# ==============================================================================
# SPRITE
# ==============================================================================

@dataclass(frozen=True)
class Sprite:
    """
    One extracted asset unit: an opaque image blob plus its frame table.

    Attributes:
        index (int):        0-based position within the source container
        frames (tuple):     Frame records in on-disk/animation order
        image_data (bytes): Raw image payload (a BMP file, never decoded here)
    """
    index: int
    frames: Tuple[Frame, ...] = ()
    image_data: bytes = b""

    def __post_init__(self):
        # Accept any iterable of frames but always store a tuple
        if not isinstance(self.frames, tuple):
            object.__setattr__(self, 'frames', tuple(self.frames))

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def __repr__(self):
        return (f"<Sprite(index={self.index}, frames={self.frame_count}, "
                f"image={len(self.image_data)} bytes)>")


# ==============================================================================
# EXTRACTION RESULT
# ==============================================================================

@dataclass
class ExtractionResult:
    """
    Outcome of reading one sprite container.

    Attributes:
        source (str):          Path or label of the container that was read
        total_sprites (int):   Sprite count declared by the container header
        sprites (list):        Successfully extracted Sprite records, in order
        warnings (list):       Human-readable warnings for skipped sprites
        skipped (list):        Indices of sprites that could not be extracted
        table_offsets (dict):  Sprite index -> frame table offset relative to
                               the sprite start, as chosen by the resolver
    """
    source: str = ""
    total_sprites: int = 0
    sprites: List[Sprite] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    table_offsets: Dict[int, int] = field(default_factory=dict)

    @property
    def extracted_count(self) -> int:
        return len(self.sprites)

    @property
    def success(self) -> bool:
        """True if anything was extracted, or there was nothing to extract."""
        return bool(self.sprites) or self.total_sprites == 0

    def warn(self, index: int, message: str):
        """Record a per-sprite failure and print it."""
        self.warnings.append(message)
        self.skipped.append(index)
        print(f"[WARN] {message}")
