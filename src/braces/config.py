"""Configuration for the braces engine.

Schema (braces.yaml):
- root: directory template and partial paths are relative to
- imports: global attributes merged under every render's data
- max_include_depth: partial passes allowed before a cycle is reported
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from braces.errors import ConfigError
from braces.loader import DEFAULT_MAX_INCLUDE_DEPTH


class EngineOptions(BaseModel):
    """Engine options."""

    root: Path = Field(
        default=Path("."), description="Base directory for template files"
    )
    imports: dict[str, Any] = Field(
        default_factory=dict, description="Global attributes for every render"
    )
    max_include_depth: int = Field(
        default=DEFAULT_MAX_INCLUDE_DEPTH,
        ge=1,
        description="Partial inclusion passes before a cycle is reported",
    )


def load_options(path: Path) -> EngineOptions:
    """Load engine options from a YAML file.

    Relative `root` values are taken relative to the file's directory.

    Raises:
        ConfigError: If the file is missing, not YAML, or fails validation.
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        options = EngineOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    if not options.root.is_absolute():
        options.root = path.parent / options.root
    return options
