"""Core building blocks for media store builds.

This package contains the data types, error hierarchy, content hashing,
deduplication, binary index encoding and configuration validation used by
every search root and by the pipeline.
"""

from .dedup import deduplicate, is_canonical
from .errors import (
    AssetIOError,
    ConfigError,
    IndexFormatError,
    InvalidArgumentError,
    MediaStoreError,
    PlatformUnsupportedError,
)
from .hasher import CHUNK_SIZE, FileHasher, hash_file, hash_stream
from .index import decode_index, encode_index, read_index, write_index
from .types import Asset, CanonicalSet, ContentId, EnabledModSet, ModDirectory, RootKind
from .validator import validate_config, validate_config_with_error_details

__all__ = [
    "Asset",
    "CanonicalSet",
    "ContentId",
    "EnabledModSet",
    "ModDirectory",
    "RootKind",
    "MediaStoreError",
    "AssetIOError",
    "ConfigError",
    "IndexFormatError",
    "InvalidArgumentError",
    "PlatformUnsupportedError",
    "CHUNK_SIZE",
    "FileHasher",
    "hash_file",
    "hash_stream",
    "deduplicate",
    "is_canonical",
    "decode_index",
    "encode_index",
    "read_index",
    "write_index",
    "validate_config",
    "validate_config_with_error_details",
]
