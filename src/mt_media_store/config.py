"""Tool configuration.

Build defaults can be kept in a JSON file so they don't have to be passed on
every run. The file is validated against the packaged JSON Schema, and
command-line arguments always take precedence over it.

Example ``mt-media-store.json``::

    {
        "placement_mode": "hardlink",
        "extra_mod_paths": ["../shared_mods"],
        "workers": 4
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .core.errors import ConfigError
from .core.index import DEFAULT_INDEX_NAME
from .core.validator import require_valid_config
from .materializer import PlacementMode
from .platforms.filesystem.source import MEDIA_DIRS

logger = logging.getLogger(__name__)

# Looked up in the working directory when no --config is given
DEFAULT_CONFIG_NAME = "mt-media-store.json"


@dataclass
class StoreConfig:
    """Resolved build defaults.

    Attributes:
        placement_mode: How assets are placed in the output store
        index_name: Index file name inside a combined output directory
        extra_mod_paths: Extra mod search directories, in search order
        workers: Threads used for hashing and placement
        media_dirs: Media subfolders collected from each mod
        source: Config file these values came from, if any
    """

    placement_mode: PlacementMode = PlacementMode.NONE
    index_name: str = DEFAULT_INDEX_NAME
    extra_mod_paths: list[Path] = field(default_factory=list)
    workers: int = 1
    media_dirs: tuple[str, ...] = MEDIA_DIRS
    source: Path | None = None

    @classmethod
    def from_dict(cls, document: dict[str, Any], base_dir: Path | None = None) -> "StoreConfig":
        """Build a config from a parsed document.

        Relative extra mod paths are resolved against ``base_dir``.

        Raises:
            ConfigError: If the document fails schema validation
        """
        require_valid_config(document)

        config = cls()
        if "placement_mode" in document:
            config.placement_mode = PlacementMode(document["placement_mode"])
        if "index_name" in document:
            config.index_name = document["index_name"]
        if "workers" in document:
            config.workers = document["workers"]
        if "media_dirs" in document:
            config.media_dirs = tuple(document["media_dirs"])
        for raw in document.get("extra_mod_paths", []):
            path = Path(raw).expanduser()
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            config.extra_mod_paths.append(path)
        return config


def load_config(path: Path) -> StoreConfig:
    """Load and validate a configuration file.

    Raises:
        ConfigError: If the file is missing, not JSON or fails validation
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError(f"Invalid config file {path}: top level must be an object")

    try:
        config = StoreConfig.from_dict(document, base_dir=path.parent)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e
    config.source = path
    logger.info("Loaded config from %s", path)
    return config


def find_config(explicit: Path | None = None, search_dir: Path | None = None) -> StoreConfig:
    """Resolve the configuration for a run.

    An explicit path must exist. Otherwise ``mt-media-store.json`` in
    ``search_dir`` (default: the working directory) is used if present,
    and built-in defaults if not.
    """
    if explicit is not None:
        return load_config(explicit)

    candidate = (search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return load_config(candidate)

    logger.debug("No config file found, using defaults")
    return StoreConfig()
