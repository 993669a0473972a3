"""Base abstractions for mod search roots.

This module defines the interface every search root implements so the
pipeline can walk world mods, game mods and extra mod paths uniformly.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..core.types import Asset, ModDirectory, RootKind


@dataclass
class ModMedia:
    """Media discovered in one mod.

    Attributes:
        mod: The mod the files belong to
        files: Media file paths in discovery order
        assets: Hashed assets, filled in once the files have been hashed
    """

    mod: ModDirectory
    files: list[Path] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)


class Source(ABC):
    """Abstract base class for all mod search roots.

    Implementations decide which directories count as mods and which of
    those are enabled; the pipeline only sees the resulting mods and their
    media files, in discovery order.
    """

    kind: RootKind = RootKind.EXTRA

    @abstractmethod
    def walk(self) -> Iterator[ModDirectory]:
        """Yield every enabled mod under this root in discovery order.

        Raises:
            AssetIOError: If the tree cannot be traversed
        """

    @abstractmethod
    def list_media(self, mod: ModDirectory) -> ModMedia:
        """List the media files of one mod, without hashing them.

        Raises:
            AssetIOError: If a media folder cannot be read
        """

    def get_mod(self, name: str) -> ModDirectory:
        """Retrieve an enabled mod by directory name.

        Raises:
            KeyError: If no enabled mod has that name
        """
        for mod in self.walk():
            if mod.name == name:
                return mod
        raise KeyError(f"No enabled mod named {name!r} under {self}")
