"""Binary index (manifest) encoding.

Layout::

    offset 0   : 4 bytes  ASCII magic "MTHS"
    offset 4   : 1 byte   format major version (0x00)
    offset 5   : 1 byte   format minor version (0x01)
    offset 6.. : N * 20 bytes, content identifiers in ascending order

There is no entry count and no path information; readers recover the count
as ``(len - 6) / 20``.
"""

import struct
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from .errors import AssetIOError, IndexFormatError
from .types import CONTENT_ID_SIZE, Asset, ContentId

MAGIC = b"MTHS"
VERSION_MAJOR = 0
VERSION_MINOR = 1

HEADER = struct.Struct("<4sBB")
HEADER_SIZE = HEADER.size  # 6

DEFAULT_INDEX_NAME = "index.mth"


def index_size(count: int) -> int:
    """Byte length of an index holding ``count`` identifiers."""
    return HEADER_SIZE + CONTENT_ID_SIZE * count


def encode_header() -> bytes:
    return HEADER.pack(MAGIC, VERSION_MAJOR, VERSION_MINOR)


def encode_index(assets: Iterable[Asset]) -> bytes:
    """Serialize a canonical set to index bytes."""
    return encode_header() + b"".join(asset.content_id for asset in assets)


def write_index_stream(assets: Iterable[Asset], stream: BinaryIO) -> int:
    """Write the index to an open binary stream.

    Returns:
        Number of identifiers written
    """
    stream.write(encode_header())
    count = 0
    for asset in assets:
        stream.write(asset.content_id)
        count += 1
    return count


def write_index(assets: Iterable[Asset], path: Path) -> int:
    """Write the index file at ``path``.

    A failed write may leave a partial file behind. Removing it is up to
    the caller.

    Args:
        assets: Canonical set, in ascending identifier order
        path: Destination file

    Returns:
        Number of identifiers written

    Raises:
        AssetIOError: If the file cannot be created or written
    """
    try:
        with open(path, "wb") as f:
            return write_index_stream(assets, f)
    except OSError as e:
        raise AssetIOError(f"Could not write index {path}: {e}") from e


def decode_index(data: bytes) -> list[ContentId]:
    """Parse index bytes back into the list of identifiers.

    Raises:
        IndexFormatError: On a bad magic tag, an unsupported version or a
            length that is not 6 + 20 * N
    """
    if len(data) < HEADER_SIZE:
        raise IndexFormatError(f"Index too short: {len(data)} bytes")

    magic, major, minor = HEADER.unpack_from(data)
    if magic != MAGIC:
        raise IndexFormatError(f"Bad index magic: {magic!r}")
    if (major, minor) != (VERSION_MAJOR, VERSION_MINOR):
        raise IndexFormatError(f"Unsupported index version: {major}.{minor}")

    body = memoryview(data)[HEADER_SIZE:]
    if len(body) % CONTENT_ID_SIZE:
        raise IndexFormatError(
            f"Index body of {len(body)} bytes is not a multiple of {CONTENT_ID_SIZE}"
        )

    return [
        bytes(body[offset:offset + CONTENT_ID_SIZE])
        for offset in range(0, len(body), CONTENT_ID_SIZE)
    ]


def read_index(path: Path) -> list[ContentId]:
    """Read and decode an index file.

    Raises:
        AssetIOError: If the file cannot be read
        IndexFormatError: If the contents are not a valid index
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise AssetIOError(f"Could not read index {path}: {e}") from e
    return decode_index(data)
