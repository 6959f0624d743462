"""
Configuration loader — reads sysinstall.yml into a typed config.

The file is optional.  When present it supplies per-tool defaults that
sit between the built-in defaults and explicit CLI flags.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from sysinstall.core.models.config import InstallerConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "sysinstall.yml"


class ConfigError(Exception):
    """Raised when sysinstall.yml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for sysinstall.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to sysinstall.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> InstallerConfig:
    """Load and validate sysinstall.yml.

    Args:
        path: Explicit config path.  If None, searches upward from cwd and
            falls back to an empty config when nothing is found.

    Returns:
        Validated InstallerConfig.

    Raises:
        ConfigError: If an explicit path is missing, or the file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using built-in defaults", CONFIG_FILE)
            return InstallerConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return InstallerConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = InstallerConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config
