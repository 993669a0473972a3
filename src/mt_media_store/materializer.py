"""Asset materialization into a content-addressed output store.

Each unique asset is made available as ``<out_dir>/<hex content id>`` using
one placement strategy:

  COPY      shutil.copyfile()  Full independent copy of the bytes.
  HARDLINK  os.link()          No extra disk space; same filesystem required.
  SYMLINK   os.symlink()       Works across filesystems; dest is a pointer.
  NONE      Nothing is placed (index-only build).

A destination that already exists is left untouched, so re-running a build
against the same store only places new content. A failure to place one
asset is recorded and the remaining assets are still attempted.
"""

import errno
import logging
import os
import shutil
from abc import ABC, abstractmethod
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .core.errors import AssetIOError, MediaStoreError, PlatformUnsupportedError
from .core.types import Asset

logger = logging.getLogger(__name__)


class PlacementMode(str, Enum):
    COPY = "copy"
    HARDLINK = "hardlink"
    SYMLINK = "symlink"
    NONE = "none"


def symlinks_supported() -> bool:
    """Whether this platform offers a symbolic link primitive."""
    return hasattr(os, "symlink")


class Placement(ABC):
    """Strategy for putting an asset's bytes at its store location."""

    mode: PlacementMode

    @abstractmethod
    def place(self, src: Path, dst: Path) -> None:
        """Make ``src``'s bytes available at ``dst`` (which does not exist yet).

        Raises:
            OSError: If placement fails
        """


class CopyPlacement(Placement):
    mode = PlacementMode.COPY

    def place(self, src: Path, dst: Path) -> None:
        try:
            shutil.copyfile(src, dst)
        except BaseException:
            # A truncated copy would be mistaken for a finished one next run
            if os.path.lexists(dst):
                os.unlink(dst)
            raise


class HardlinkPlacement(Placement):
    mode = PlacementMode.HARDLINK

    def place(self, src: Path, dst: Path) -> None:
        try:
            os.link(src, dst)
        except OSError as e:
            if e.errno == errno.EXDEV:
                raise OSError(
                    e.errno, "Cannot hard link across volumes", str(src)
                ) from e
            raise


class SymlinkPlacement(Placement):
    """Symbolic link placement.

    Construction fails on platforms without symlinks, so an unsupported
    build is rejected before anything is written.
    """

    mode = PlacementMode.SYMLINK

    def __init__(self) -> None:
        if not symlinks_supported():
            raise PlatformUnsupportedError("Symlinking not supported on this platform")

    def place(self, src: Path, dst: Path) -> None:
        # Links must not depend on the directory the build was run from
        os.symlink(os.path.abspath(src), dst)


class NoPlacement(Placement):
    mode = PlacementMode.NONE

    def place(self, src: Path, dst: Path) -> None:
        pass


_PLACEMENTS: dict[PlacementMode, type[Placement]] = {
    PlacementMode.COPY: CopyPlacement,
    PlacementMode.HARDLINK: HardlinkPlacement,
    PlacementMode.SYMLINK: SymlinkPlacement,
    PlacementMode.NONE: NoPlacement,
}


def create_placement(mode: PlacementMode | str) -> Placement:
    """Build the placement strategy for a mode.

    Raises:
        PlatformUnsupportedError: If the mode is unavailable here
        ValueError: If ``mode`` is not a known placement mode
    """
    return _PLACEMENTS[PlacementMode(mode)]()


@dataclass
class MaterializeReport:
    """Outcome of one materialization pass."""

    placed: list[Asset] = field(default_factory=list)
    skipped: list[Asset] = field(default_factory=list)  # Already in the store
    failures: list[tuple[Asset, MediaStoreError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def first_error(self) -> MediaStoreError | None:
        return self.failures[0][1] if self.failures else None


class Materializer:
    """Places a canonical set of assets into an output directory.

    Example:
        >>> materializer = Materializer(Path('out'), create_placement('hardlink'))
        >>> report = materializer.materialize(canonical)
        >>> print(f"{len(report.placed)} placed, {len(report.skipped)} present")
    """

    def __init__(self, out_dir: Path, placement: Placement, workers: int = 1):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.out_dir = out_dir
        self.placement = placement
        self.workers = workers

    def destination(self, asset: Asset) -> Path:
        return self.out_dir / asset.hex_id

    def place_asset(self, asset: Asset) -> bool:
        """Place one asset unless its destination already exists.

        Returns:
            True if the asset was placed, False if it was already present

        Raises:
            AssetIOError: If placement fails
        """
        dst = self.destination(asset)
        # lexists: a dangling symlink still occupies the name
        if os.path.lexists(dst):
            logger.debug("Already present: %s", dst.name)
            return False

        try:
            self.placement.place(asset.path, dst)
        except OSError as e:
            raise AssetIOError(
                f"Could not {self.placement.mode.value} {asset.path} to {dst}: {e}"
            ) from e
        logger.debug("Placed %s <- %s", dst.name, asset.path)
        return True

    def _attempt(self, asset: Asset) -> bool | MediaStoreError:
        try:
            return self.place_asset(asset)
        except MediaStoreError as e:
            return e

    def materialize(self, assets: Iterable[Asset]) -> MaterializeReport:
        """Place every asset, isolating per-asset failures.

        Args:
            assets: Canonical set (one asset per content identifier)

        Returns:
            Report of placed, already present and failed assets

        Raises:
            AssetIOError: If the output directory itself cannot be created
        """
        report = MaterializeReport()
        if isinstance(self.placement, NoPlacement):
            return report

        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssetIOError(f"Could not create output directory {self.out_dir}: {e}") from e

        assets = list(assets)
        if self.workers > 1 and len(assets) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                outcomes = list(executor.map(self._attempt, assets))
        else:
            outcomes = [self._attempt(asset) for asset in assets]

        for asset, outcome in zip(assets, outcomes):
            if isinstance(outcome, MediaStoreError):
                logger.warning("%s", outcome)
                report.failures.append((asset, outcome))
            elif outcome:
                report.placed.append(asset)
            else:
                report.skipped.append(asset)

        logger.info(
            "Materialized %d asset(s), %d already present, %d failed",
            len(report.placed), len(report.skipped), len(report.failures),
        )
        return report
