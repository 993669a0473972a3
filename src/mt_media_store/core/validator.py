"""JSON Schema validation for tool configuration files.

This module loads the packaged JSON Schema and validates configuration
documents before they are applied.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .errors import ConfigError

# mt_media_store/core/validator.py -> mt_media_store/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "config.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the configuration JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_config(document: dict[str, Any]) -> None:
    """Validate a configuration document against the JSON Schema.

    Args:
        document: Parsed configuration

    Raises:
        ValidationError: If the document doesn't conform to the schema
    """
    jsonschema.validate(instance=document, schema=load_schema())


def validate_config_with_error_details(document: dict[str, Any]) -> tuple[bool, str | None]:
    """Validate a configuration document and describe the first problem.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_config(document)
        return True, None
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        return False, f"Validation error at {error_path}: {e.message}"
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"


def require_valid_config(document: dict[str, Any], source: str = "configuration") -> None:
    """Validate a configuration document, raising ConfigError on failure."""
    is_valid, error_msg = validate_config_with_error_details(document)
    if not is_valid:
        raise ConfigError(f"Invalid {source}: {error_msg}")
