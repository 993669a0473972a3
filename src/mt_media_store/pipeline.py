"""Build pipeline for content-addressed media stores.

This module ties the pieces together: it resolves the world's enabled mods,
walks every search root in precedence order, hashes the media it finds,
deduplicates the result and hands the canonical set to the index writer and
the materializer.
"""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import StoreConfig
from .core.dedup import deduplicate
from .core.errors import AssetIOError
from .core.hasher import FileHasher
from .core.index import write_index
from .core.types import Asset, CanonicalSet, EnabledModSet, RootKind
from .materializer import Materializer, MaterializeReport, PlacementMode, create_placement
from .platforms.filesystem.source import MEDIA_DIRS
from .registry import SourceRegistry
from .sources.base import ModMedia, Source
from .world import read_enabled_mods

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Structured outcome of a build.

    Attributes:
        canonical: The deduplicated, identifier-ordered asset set
        discovered: Number of media files found before deduplication
        index_path: Where the index was written
        report: Materialization outcome
    """

    canonical: CanonicalSet
    discovered: int
    index_path: Path
    report: MaterializeReport = field(default_factory=MaterializeReport)

    @property
    def ok(self) -> bool:
        return self.report.ok


class MediaStorePipeline:
    """Builds a media store from a world, a game and extra mod paths.

    The placement strategy is created up front, so a mode that is not
    supported here fails before anything is read or written.

    Example:
        >>> pipeline = MediaStorePipeline.for_output_dir(
        ...     world=Path('worlds/myworld'),
        ...     game=Path('games/minetest_game'),
        ...     out_dir=Path('media'),
        ...     placement_mode='hardlink',
        ... )
        >>> result = pipeline.run()
        >>> print(len(result.canonical))
    """

    def __init__(
        self,
        world: Path,
        game: Path,
        index_path: Path,
        media_dir: Path,
        extra_paths: Sequence[Path] = (),
        placement_mode: PlacementMode | str = PlacementMode.NONE,
        workers: int = 1,
        media_dirs: Sequence[str] = MEDIA_DIRS,
    ):
        """Initialize the pipeline.

        Args:
            world: World directory (holds world.mt and optional worldmods/)
            game: Game directory (holds mods/)
            index_path: Destination of the binary index
            media_dir: Output store directory for materialized assets
            extra_paths: Extra mod search directories, searched last, in order
            placement_mode: copy, hardlink, symlink or none
            workers: Threads for hashing and placement
            media_dirs: Media subfolders collected from each mod

        Raises:
            PlatformUnsupportedError: If placement_mode is unavailable here
        """
        self.world = world
        self.game = game
        self.index_path = index_path
        self.media_dir = media_dir
        self.extra_paths = list(extra_paths)
        self.placement = create_placement(placement_mode)
        self.hasher = FileHasher(workers=workers)
        self.workers = workers
        self.media_dirs = tuple(media_dirs)

    @classmethod
    def for_output_dir(
        cls,
        world: Path,
        game: Path,
        out_dir: Path,
        config: StoreConfig | None = None,
        **kwargs,
    ) -> "MediaStorePipeline":
        """Create a pipeline writing the index and assets into one directory.

        Values from ``config`` are used unless overridden by ``kwargs``;
        the configured extra mod paths come before any passed explicitly.
        """
        config = config or StoreConfig()
        extra_paths = list(config.extra_mod_paths) + list(kwargs.pop("extra_paths", []))
        kwargs.setdefault("placement_mode", config.placement_mode)
        kwargs.setdefault("workers", config.workers)
        kwargs.setdefault("media_dirs", config.media_dirs)
        return cls(
            world=world,
            game=game,
            index_path=out_dir / config.index_name,
            media_dir=out_dir,
            extra_paths=extra_paths,
            **kwargs,
        )

    def create_sources(self, enabled: EnabledModSet) -> list[Source]:
        """Create the search roots in precedence order: world, game, extra paths."""
        common = {"media_dirs": self.media_dirs}
        sources = [
            SourceRegistry.create_source(RootKind.WORLD.value, world=self.world, enabled=enabled, **common),
            SourceRegistry.create_source(RootKind.GAME.value, game=self.game, **common),
        ]
        for path in self.extra_paths:
            sources.append(
                SourceRegistry.create_source(RootKind.EXTRA.value, path=path, enabled=enabled, **common)
            )
        return sources

    def collect(self) -> list[Asset]:
        """Discover and hash every media file, in discovery order.

        Raises:
            ConfigError: If the world configuration is missing or malformed
            AssetIOError: If any directory or file cannot be read
        """
        enabled = read_enabled_mods(self.world)

        found: list[ModMedia] = []
        for source in self.create_sources(enabled):
            logger.info("Scanning %s", source)
            for mod in source.walk():
                media = source.list_media(mod)
                logger.debug("Mod %s: %d media file(s)", mod.name, len(media.files))
                found.append(media)

        files = [path for media in found for path in media.files]
        digests = iter(self.hasher.hash_files(files))
        for media in found:
            media.assets = [Asset(path, next(digests)) for path in media.files]

        assets = [asset for media in found for asset in media.assets]
        logger.info("Found %d media file(s) in %d mod(s)", len(assets), len(found))
        return assets

    def build_canonical_set(self) -> tuple[CanonicalSet, int]:
        """Collect and deduplicate.

        Returns:
            Tuple of (canonical set, number of files discovered)
        """
        assets = self.collect()
        canonical = deduplicate(assets)
        logger.info("%d unique asset(s) after deduplication", len(canonical))
        return canonical, len(assets)

    def write_index(self, canonical: CanonicalSet) -> Path:
        """Write the index so that it only appears once complete.

        The index is written next to its destination and renamed into place;
        on failure the temporary file is removed.

        Raises:
            AssetIOError: If the index cannot be written
        """
        try:
            self.index_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssetIOError(f"Could not create {self.index_path.parent}: {e}") from e

        tmp_path = self.index_path.with_name(self.index_path.name + ".tmp")
        try:
            write_index(canonical, tmp_path)
            os.replace(tmp_path, self.index_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise AssetIOError(f"Could not write index {self.index_path}: {e}") from e
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info("Wrote index %s", self.index_path)
        return self.index_path

    def materialize(self, canonical: CanonicalSet) -> MaterializeReport:
        materializer = Materializer(self.media_dir, self.placement, workers=self.workers)
        return materializer.materialize(canonical)

    def run(self) -> BuildResult:
        """Run a full build.

        Discovery, hashing and index writing are all-or-nothing and raise on
        the first failure. Placement failures are collected in the result
        instead, and make ``result.ok`` false.

        Raises:
            ConfigError: If the world configuration is missing or malformed
            AssetIOError: If discovery, hashing or index writing fails
        """
        canonical, discovered = self.build_canonical_set()
        index_path = self.write_index(canonical)
        report = self.materialize(canonical)
        return BuildResult(
            canonical=canonical,
            discovered=discovered,
            index_path=index_path,
            report=report,
        )
