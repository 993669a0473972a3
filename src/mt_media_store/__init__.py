"""Content-addressed media store builder.

This package discovers the media files of a world's enabled mods, names
each by the SHA-1 of its bytes, deduplicates them, writes the binary index
served alongside them and materializes the files into an output store.
"""

__version__ = "0.1.0"

# Core library interface
from .pipeline import BuildResult, MediaStorePipeline
from .registry import SourceRegistry
from .sources.base import ModMedia, Source

# Building blocks
from .core import (
    Asset,
    AssetIOError,
    CanonicalSet,
    ConfigError,
    IndexFormatError,
    InvalidArgumentError,
    MediaStoreError,
    PlatformUnsupportedError,
    decode_index,
    deduplicate,
    encode_index,
    hash_file,
    read_index,
    write_index,
)
from .config import StoreConfig, find_config, load_config
from .materializer import Materializer, MaterializeReport, PlacementMode, create_placement
from .world import read_enabled_mods

# Filesystem platform
from .platforms.filesystem import ModTreeSource, collect_media

# CLI
from .cli import main

# Auto-discover and register all platforms
SourceRegistry.discover_platforms()

__all__ = [
    "__version__",
    # Primary library interface
    "MediaStorePipeline",
    "BuildResult",
    "SourceRegistry",
    "Source",
    "ModMedia",
    # Building blocks
    "Asset",
    "CanonicalSet",
    "MediaStoreError",
    "AssetIOError",
    "ConfigError",
    "IndexFormatError",
    "InvalidArgumentError",
    "PlatformUnsupportedError",
    "hash_file",
    "deduplicate",
    "encode_index",
    "decode_index",
    "write_index",
    "read_index",
    "read_enabled_mods",
    "StoreConfig",
    "find_config",
    "load_config",
    "Materializer",
    "MaterializeReport",
    "PlacementMode",
    "create_placement",
    "ModTreeSource",
    "collect_media",
    "main",
]
