"""Source registry for factory-based search root creation.

This module provides a central registry of search root factories,
keeping the pipeline independent of how each root is laid out on disk.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .sources.base import Source

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Central registry for source factories.

    Platforms register their factories when imported, and the registry
    can discover every available platform automatically.
    """

    _factories: dict[str, Callable[..., "Source"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "Source"]) -> None:
        """Register a factory function for creating sources.

        Args:
            name: Name of the source kind (e.g., 'world', 'game', 'extra')
            factory: Callable that creates a Source instance

        Example:
            >>> def create_game_source(game: Path) -> ModTreeSource:
            ...     return ModTreeSource(game / 'mods', None, RootKind.GAME)
            >>> SourceRegistry.register_factory('game', create_game_source)
        """
        cls._factories[name] = factory

    @classmethod
    def create_source(cls, source_name: str, **kwargs) -> "Source":
        """Create a search root from a registered factory.

        Args:
            source_name: Name of the registered source kind
            **kwargs: Arguments passed to the source factory

        Raises:
            ValueError: If source_name is not registered

        Example:
            >>> source = SourceRegistry.create_source('game', game=Path('/games/mtg'))
        """
        if source_name not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ValueError(
                f"Unknown source: '{source_name}'. Available sources: {available}"
            )

        return cls._factories[source_name](**kwargs)

    @classmethod
    def list_sources(cls) -> list[str]:
        """List all registered source names.

        Example:
            >>> SourceRegistry.list_sources()
            ['world', 'game', 'extra']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Import every platform package so it can register itself.

        Platforms with missing dependencies are skipped.
        """
        platforms_dir = Path(__file__).parent / "platforms"

        if not platforms_dir.exists():
            return

        for platform_path in platforms_dir.iterdir():
            if not platform_path.is_dir():
                continue

            if not (platform_path / "__init__.py").exists():
                continue

            try:
                # Registration happens in the platform's __init__.py
                importlib.import_module(
                    f".platforms.{platform_path.name}",
                    package="mt_media_store",
                )
            except ImportError as e:
                logger.debug("Skipping platform %s: %s", platform_path.name, e)
