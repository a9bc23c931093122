# ==============================================================================
# EXTRACT / REPACK PIPELINE
# ==============================================================================
# Drives the two directions of the tool over files on disk:
#
#   extract_to_directory:  monsters.apk -> Extracted/monsters/monsters_NNNN.{bmp,json}
#   repack_directory:      Extracted/monsters/ -> RePacked/monsters.pak
#   process_inputs:        both, for a list of input paths
#
# Failures are handled where they happen: a bad sprite is skipped by the
# reader, a bad container skips that input, a bad metadata file repacks that
# sprite without frames. Nothing aborts the run.
# ==============================================================================

import os
import re
import struct
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from .config import Config, get_config
from .models import ExtractionResult, Sprite
from .paths import Paths
from ..extractors.apk_extractor import APKExtractor
from ..extractors.base_extractor import ContainerFormatError
from ..extractors.pak_writer import PAKWriter
from ..parsers.metadata import MetadataError, load_metadata, record_to_sprite, save_metadata


# ==============================================================================
# EXTRACTION
# ==============================================================================

def extract_to_directory(container_path: str, output_dir: str,
                         config: Optional[Config] = None) -> ExtractionResult:
    """
    Extract every sprite of an APK container into a folder.

    Writes <stem>_NNNN<image_extension> and <stem>_NNNN<metadata_extension>
    for each extracted sprite.

    Raises:
        OSError: If the container cannot be read
        ContainerFormatError: If the container header/table is unusable
    """
    config = config or get_config()
    stem = Paths.container_stem(container_path)

    result = APKExtractor(debug=config.debug_mode).load(container_path)

    print(f"[INFO] File: {os.path.basename(container_path)}")
    print(f"[INFO] Decoded Total Sprites: {result.total_sprites}")

    os.makedirs(output_dir, exist_ok=True)

    for sprite in result.sprites:
        base_name = Paths.sprite_base_name(stem, sprite.index)
        base_path = os.path.join(output_dir, base_name)

        with open(base_path + config.image_extension, 'wb') as f:
            f.write(sprite.image_data)
        save_metadata(base_path + config.metadata_extension, sprite,
                      omit_defaults=config.omit_default_fields)

        print(f"[EXTRACTED] Sprite {sprite.index + 1}/{result.total_sprites} -> "
              f"{base_name}{config.image_extension} + {config.metadata_extension}")

    print(f"[DONE] Extraction complete: {output_dir}")
    return result


# ==============================================================================
# REPACKING
# ==============================================================================

# Trailing _NNNN index of an extracted file name
_INDEX_SUFFIX = re.compile(r'_(\d+)$')


def _sprite_sort_key(name: str):
    """Order by the numeric _NNNN suffix, then by name; unsuffixed files go last."""
    stem = os.path.splitext(name)[0]
    match = _INDEX_SUFFIX.search(stem)
    if match:
        return (0, stem[:match.start()], int(match.group(1)), name)
    return (1, stem, 0, name)


def load_sprite_directory(directory: str, config: Optional[Config] = None) -> List[Sprite]:
    """
    Load the loose sprite files of one extracted folder.

    Image files are taken in _NNNN index order and re-indexed from 0. A
    missing metadata file means the sprite has no frames; an unreadable one
    is reported and treated the same way.
    """
    config = config or get_config()
    image_ext = config.image_extension.lower()

    names = sorted((n for n in os.listdir(directory)
                    if n.lower().endswith(image_ext)
                    and os.path.isfile(os.path.join(directory, n))),
                   key=_sprite_sort_key)

    sprites = []
    for index, name in enumerate(names):
        image_path = os.path.join(directory, name)
        meta_path = os.path.splitext(image_path)[0] + config.metadata_extension

        with open(image_path, 'rb') as f:
            image_data = f.read()

        try:
            record = load_metadata(meta_path)
            sprite = record_to_sprite(record, image_data, index=index)
        except MetadataError as e:
            print(f"[WARN] {e}; repacking {name} without frames")
            sprite = record_to_sprite(None, image_data, index=index)

        sprites.append(sprite)

    return sprites


def repack_directory(directory: str, output_path: str,
                     config: Optional[Config] = None) -> int:
    """
    Repack one extracted folder into a PAK container.

    Returns:
        Number of sprites written
    """
    sprites = load_sprite_directory(directory, config)
    PAKWriter(sprites).write(output_path)
    print(f"[INFO] Repacked {len(sprites)} sprites -> {output_path}")
    return len(sprites)


# ==============================================================================
# MULTI-FILE RUN
# ==============================================================================

def process_inputs(paths: Sequence[str], config: Optional[Config] = None,
                   repack: Optional[bool] = None, database=None) -> Dict[str, list]:
    """
    Extract every input container, then optionally repack the results.

    Args:
        paths: Input container paths
        config: Settings (global config if None)
        repack: Override config.convert_to_pak
        database: Optional Database to record each extraction in

    Returns:
        Dict with 'extracted' (list of (path, ExtractionResult)),
        'failed' (list of (path, reason)) and 'repacked' (list of .pak paths)
    """
    config = config or get_config()
    if repack is None:
        repack = config.convert_to_pak

    summary: Dict[str, list] = {'extracted': [], 'failed': [], 'repacked': []}
    output_dirs = []

    for path in paths:
        if not path or not path.strip():
            continue

        if not os.path.isfile(path):
            print(f"[ERROR] File not found: {path}")
            summary['failed'].append((path, "not found"))
            continue

        output_dir = Paths.extract_dir_for(path, config.extract_dir_name)
        try:
            result = extract_to_directory(path, output_dir, config)
        except (OSError, ContainerFormatError) as e:
            print(f"[ERROR] Failed to extract {path}: {e}")
            summary['failed'].append((path, str(e)))
            continue

        summary['extracted'].append((path, result))
        if output_dir not in output_dirs:
            output_dirs.append(output_dir)

        if database is not None:
            try:
                database.record_extraction(path, result)
            except (SQLAlchemyError, OSError) as e:
                print(f"[ERROR] Failed to record {path} in the catalog: {e}")

    if not repack:
        return summary

    repack_root = config.resolve_path(config.repack_dir)
    for output_dir in output_dirs:
        target = Paths.repack_path_for(output_dir, repack_root)
        try:
            repack_directory(output_dir, target, config)
        except (OSError, ValueError, struct.error) as e:
            print(f"[ERROR] Failed to repack {output_dir}: {e}")
            summary['failed'].append((output_dir, str(e)))
            continue
        summary['repacked'].append(target)

    return summary
