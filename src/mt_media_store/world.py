"""World configuration parsing.

A world's ``world.mt`` is a flat ``key = value`` document. Mods are enabled
per world with ``load_mod_<name> = true``; any other value, or no key at
all, leaves the mod disabled.
"""

import configparser
import logging
from pathlib import Path

from .core.errors import ConfigError
from .core.types import EnabledModSet

logger = logging.getLogger(__name__)

WORLD_CONFIG_NAME = "world.mt"
LOAD_MOD_PREFIX = "load_mod_"
ENABLED_VALUE = "true"

# world.mt has no section headers; parse it under a synthetic one
_SECTION = "world"


def parse_world_config(text: str, source: str = WORLD_CONFIG_NAME) -> dict[str, str]:
    """Parse world.mt text into a key/value mapping.

    Keys keep their case and values are not interpolated. A repeated key
    keeps its last value. Lines are trimmed first, so an indented line is a
    setting of its own rather than a continuation of the previous value.

    Raises:
        ConfigError: If the text is not a valid key/value document
    """
    text = "\n".join(line.strip() for line in text.splitlines())
    parser = configparser.ConfigParser(
        delimiters=("=",),
        interpolation=None,
        strict=False,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    try:
        parser.read_string(f"[{_SECTION}]\n{text}", source=source)
    except configparser.Error as e:
        raise ConfigError(f"Malformed world configuration {source}: {e}") from e

    return dict(parser.items(_SECTION))


def enabled_mods_from_config(settings: dict[str, str]) -> EnabledModSet:
    """Select the names of mods switched on in a parsed world configuration."""
    enabled = set()
    for key, value in settings.items():
        if not key.startswith(LOAD_MOD_PREFIX) or value != ENABLED_VALUE:
            continue
        name = key[len(LOAD_MOD_PREFIX):]
        if name:
            enabled.add(name)
    return frozenset(enabled)


def read_enabled_mods(world_dir: Path) -> EnabledModSet:
    """Read the set of mods enabled for a world.

    Args:
        world_dir: World directory containing world.mt

    Returns:
        Frozen set of enabled mod names

    Raises:
        ConfigError: If world.mt is missing, unreadable or malformed
    """
    config_path = world_dir / WORLD_CONFIG_NAME
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"World configuration not found: {config_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read world configuration {config_path}: {e}") from e

    enabled = enabled_mods_from_config(parse_world_config(text, source=str(config_path)))
    logger.info("World enables %d mod(s)", len(enabled))
    return enabled
