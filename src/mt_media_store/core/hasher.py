"""Content hashing for media files.

A content identifier is the SHA-1 digest of a file's exact bytes. Files are
streamed in fixed-size chunks so large media never has to fit in memory, and
the identifier does not depend on path, mtime or permissions.
"""

import hashlib
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import BinaryIO

from .errors import AssetIOError
from .types import ContentId

logger = logging.getLogger(__name__)

# Size of each read (8KB)
CHUNK_SIZE = 8 * 1024


def hash_stream(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> ContentId:
    """Compute the content identifier of a binary stream.

    Args:
        stream: A file-like object opened in binary mode
        chunk_size: Number of bytes to read per iteration

    Returns:
        20-byte SHA-1 digest of everything remaining in the stream
    """
    sha1 = hashlib.sha1()
    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    while True:
        n = stream.readinto(view)  # type: ignore[attr-defined]
        if not n:
            break
        sha1.update(view[:n])
    return sha1.digest()


def hash_file(path: Path, chunk_size: int = CHUNK_SIZE) -> ContentId:
    """Compute the content identifier of a file.

    Args:
        path: Path to the file
        chunk_size: Number of bytes to read per iteration

    Returns:
        20-byte SHA-1 digest of the file's bytes

    Raises:
        AssetIOError: If the file cannot be opened or becomes unreadable
    """
    try:
        with open(path, "rb") as f:
            return hash_stream(f, chunk_size)
    except OSError as e:
        raise AssetIOError(f"Could not hash {path}: {e}") from e


class FileHasher:
    """Hash files sequentially or on a thread pool.

    Hashing is a pure function of file bytes, so batches can be spread across
    workers. Results always come back in input order.

    Attributes:
        chunk_size: Bytes read per iteration
        workers: Thread count for batch hashing (1 = sequential)
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE, workers: int = 1) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.chunk_size = chunk_size
        self.workers = workers

    def hash_file(self, path: Path) -> ContentId:
        """Hash a single file (see module-level hash_file)."""
        digest = hash_file(path, self.chunk_size)
        logger.debug("%s %s", digest.hex(), path)
        return digest

    def hash_files(self, paths: Iterable[Path]) -> list[ContentId]:
        """Hash many files, preserving the order of ``paths``.

        The first failure in input order is raised;
        no partial result is returned.

        Raises:
            AssetIOError: If any file cannot be hashed
        """
        paths = list(paths)
        if self.workers == 1 or len(paths) < 2:
            return [self.hash_file(path) for path in paths]

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            # map() yields in submission order
            return list(executor.map(self.hash_file, paths))
