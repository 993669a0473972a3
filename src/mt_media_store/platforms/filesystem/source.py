"""Filesystem search root.

This module walks a directory of mods and modpacks and lists the media
files of each enabled mod.

A directory holding ``modpack.txt`` groups further mods and is descended
into. A directory holding ``init.lua`` is a mod. Anything else (version
control metadata, stray folders) is skipped without complaint.
"""

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from ...core.errors import AssetIOError
from ...core.hasher import FileHasher
from ...core.types import Asset, EnabledModSet, ModDirectory, RootKind
from ...sources.base import ModMedia, Source

logger = logging.getLogger(__name__)

MODPACK_MARKER = "modpack.txt"
MOD_MARKER = "init.lua"

# Searched in this order directly under each mod
MEDIA_DIRS: tuple[str, ...] = ("textures", "models", "sounds")


def _exists(path: Path) -> bool:
    """Check for a path, turning errors other than absence into AssetIOError."""
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise AssetIOError(f"Could not inspect {path}: {e}") from e
    return True


def is_modpack(path: Path) -> bool:
    return _exists(path / MODPACK_MARKER)


def is_mod(path: Path) -> bool:
    return _exists(path / MOD_MARKER)


def _scan(path: Path) -> list[os.DirEntry[str]]:
    """List a directory, turning OS failures into AssetIOError."""
    try:
        with os.scandir(path) as it:
            return list(it)
    except OSError as e:
        raise AssetIOError(f"Could not read directory {path}: {e}") from e


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError as e:
        raise AssetIOError(f"Could not inspect {entry.path}: {e}") from e


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError as e:
        raise AssetIOError(f"Could not inspect {entry.path}: {e}") from e


def list_media_files(mod_path: Path, media_dirs: Sequence[str] = MEDIA_DIRS) -> list[Path]:
    """List the media files of a mod in discovery order.

    Only direct file entries of each media folder are returned; nested
    folders inside a media folder are not descended into.

    Args:
        mod_path: Mod directory
        media_dirs: Media subfolder names, searched in order

    Returns:
        File paths, grouped by media folder, in enumeration order

    Raises:
        AssetIOError: If a media folder cannot be read
    """
    files: list[Path] = []
    for media_dir in media_dirs:
        media_path = mod_path / media_dir
        if not _exists(media_path) or not media_path.is_dir():
            continue
        for entry in _scan(media_path):
            if _is_file(entry):
                files.append(Path(entry.path))
    return files


def collect_media(
    mod_path: Path,
    hasher: FileHasher | None = None,
    media_dirs: Sequence[str] = MEDIA_DIRS,
) -> list[Asset]:
    """Hash every media file of a mod into Asset records.

    Args:
        mod_path: Mod directory
        hasher: Hasher to use (sequential default if omitted)
        media_dirs: Media subfolder names, searched in order

    Returns:
        Assets in discovery order

    Raises:
        AssetIOError: If a folder cannot be listed or a file cannot be hashed
    """
    hasher = hasher or FileHasher()
    files = list_media_files(mod_path, media_dirs)
    return [Asset(path, digest) for path, digest in zip(files, hasher.hash_files(files))]


class ModTreeSource(Source):
    """Search root backed by a directory of mods and modpacks.

    Example:
        >>> source = ModTreeSource(Path('/games/minetest_game/mods'), kind=RootKind.GAME)
        >>> for mod in source.walk():
        ...     print(mod.name)
    """

    def __init__(
        self,
        root: Path,
        enabled: EnabledModSet | None = None,
        kind: RootKind = RootKind.EXTRA,
        optional: bool = False,
        media_dirs: Sequence[str] = MEDIA_DIRS,
    ):
        """Initialize the search root.

        Args:
            root: Directory to walk
            enabled: Names of enabled mods; None includes every mod
            kind: Which kind of root this is (affects precedence only)
            optional: Treat a missing root as empty instead of an error
            media_dirs: Media subfolder names collected from each mod
        """
        self.root = root
        self.enabled = enabled
        self.kind = kind
        self.optional = optional
        self.media_dirs = tuple(media_dirs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r}, kind={self.kind.value})"

    def walk(self) -> Iterator[ModDirectory]:
        """Yield enabled mods under the root, depth-first.

        Raises:
            AssetIOError: If the root is missing (and not optional) or any
                directory in the tree cannot be read
        """
        if not _exists(self.root):
            if self.optional:
                logger.debug("Skipping missing %s root %s", self.kind.value, self.root)
                return
            raise AssetIOError(f"Mod directory does not exist: {self.root}")

        yield from self._walk(self.root)

    def _walk(self, path: Path) -> Iterator[ModDirectory]:
        for entry in _scan(path):
            if not _is_dir(entry):
                continue

            entry_path = Path(entry.path)
            if is_modpack(entry_path):
                # Modpacks are never filtered, only the mods inside them
                yield from self._walk(entry_path)
            elif is_mod(entry_path):
                if self.enabled is not None and entry.name not in self.enabled:
                    logger.debug("Skipping disabled mod %s", entry_path)
                    continue
                yield ModDirectory(name=entry.name, path=entry_path, root_kind=self.kind)
            # Otherwise it's probably a VCS directory or something similar

    def list_media(self, mod: ModDirectory) -> ModMedia:
        return ModMedia(mod=mod, files=list_media_files(mod.path, self.media_dirs))
