# ==============================================================================
# FILE HASHER MODULE
# ==============================================================================
# MD5 hashing for the extraction catalog: one hash per source container and
# one per extracted image blob, so repeated extractions can be compared.
#
# Usage:
#   hasher = FileHasher()
#   container_md5 = hasher.hash_file_md5("monsters.apk")
#   image_md5 = hasher.hash_bytes(sprite.image_data)
# ==============================================================================

import os
import hashlib
from typing import Optional


class FileHasher:
    """
    File hashing utility.

    Attributes:
        chunk_size (int): Size of chunks to read when hashing files
    """

    # 256KB chunks
    DEFAULT_CHUNK_SIZE = 262144

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def hash_file_md5(self, file_path: str) -> Optional[str]:
        """
        Compute MD5 hash of a file.

        Returns:
            32-character hexadecimal MD5 hash string, or None if the file
            does not exist or cannot be read
        """
        if not os.path.isfile(file_path):
            return None

        try:
            md5_hash = hashlib.md5()
            with open(file_path, 'rb') as f:
                buffer = bytearray(self.chunk_size)
                mv = memoryview(buffer)
                while True:
                    n = f.readinto(mv)
                    if not n:
                        break
                    md5_hash.update(mv[:n])
            return md5_hash.hexdigest()

        except OSError as e:
            print(f"[ERROR] Could not hash file {file_path}: {e}")
            return None

    @staticmethod
    def hash_bytes(data: bytes) -> str:
        """MD5 of an in-memory blob."""
        return hashlib.md5(data).hexdigest()
