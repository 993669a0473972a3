"""Filesystem platform for the build pipeline.

This platform provides the mod tree walker for local directories and
registers the three search roots of a build: the world's own mods, the
game's mods and any extra mod paths.
"""

from pathlib import Path

from ...core.types import EnabledModSet, RootKind
from .source import (
    MEDIA_DIRS,
    MOD_MARKER,
    MODPACK_MARKER,
    ModTreeSource,
    collect_media,
    list_media_files,
)

# Auto-register with the registry
from ...registry import SourceRegistry

WORLDMODS_DIR = "worldmods"
GAME_MODS_DIR = "mods"


def _create_world_source(world: Path, enabled: EnabledModSet, **kwargs) -> ModTreeSource:
    """Factory for a world's own mods (``<world>/worldmods``).

    The directory is optional; most worlds don't have one.
    """
    return ModTreeSource(world / WORLDMODS_DIR, enabled, RootKind.WORLD, optional=True, **kwargs)


def _create_game_source(game: Path, **kwargs) -> ModTreeSource:
    """Factory for a game's mods (``<game>/mods``).

    Game mods can not be disabled, so no filter is applied.
    """
    return ModTreeSource(game / GAME_MODS_DIR, None, RootKind.GAME, **kwargs)


def _create_path_source(path: Path, enabled: EnabledModSet, **kwargs) -> ModTreeSource:
    """Factory for an extra mod search path."""
    return ModTreeSource(path, enabled, RootKind.EXTRA, **kwargs)


# Auto-register at module import
SourceRegistry.register_factory(RootKind.WORLD.value, _create_world_source)
SourceRegistry.register_factory(RootKind.GAME.value, _create_game_source)
SourceRegistry.register_factory(RootKind.EXTRA.value, _create_path_source)

__all__ = [
    "MEDIA_DIRS",
    "MOD_MARKER",
    "MODPACK_MARKER",
    "GAME_MODS_DIR",
    "WORLDMODS_DIR",
    "ModTreeSource",
    "collect_media",
    "list_media_files",
]
