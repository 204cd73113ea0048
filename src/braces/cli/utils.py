"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

import msgspec
from rich.console import Console
from rich.logging import RichHandler

from braces.config import EngineOptions, load_options
from braces.errors import ConfigError

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the braces CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - shows template root changes
    - Debug (BRACES_DEBUG=1): DEBUG level - cache hits, partial passes, variables
    """
    debug = bool(os.environ.get("BRACES_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("braces")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def load_data(path: Optional[Path]) -> dict[str, Any]:
    """Decode a JSON or YAML data file into the data record.

    Raises:
        ConfigError: If the file cannot be read, decoded, or is not a mapping.
    """
    if path is None:
        return {}
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read data file {path}: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = msgspec.yaml.decode(raw)
        else:
            data = msgspec.json.decode(raw)
    except msgspec.DecodeError as e:
        raise ConfigError(f"Invalid data file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Data file {path} must contain a mapping")
    return data


def build_options(
    config_path: Optional[Path], root: Optional[Path]
) -> EngineOptions:
    """Engine options from an optional config file, with --root taking priority."""
    options = load_options(config_path) if config_path else EngineOptions()
    if root is not None:
        options.root = root
    return options
