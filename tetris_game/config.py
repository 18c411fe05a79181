"""
Configuration loading for the pygame front-end.

Settings live in a YAML file (``config/settings.yaml`` by default) and are
merged over DEFAULT_CONFIG. Board dimensions are fixed and not configurable.
"""

from __future__ import annotations

import pathlib
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "cell_size": 30,
    "fps": 60,
    "seed": None,
}


class ConfigError(ValueError):
    """Raised when a configuration file is malformed or has invalid values."""


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Check keys and value types of a merged config dict.

    Args:
        config: Config dict (defaults already applied).

    Returns:
        The same dict, for chaining.

    Raises:
        ConfigError: On unknown keys or values of the wrong type/range.
    """
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    for key in ("cell_size", "fps"):
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"'{key}' must be a positive integer, got {value!r}")

    seed = config["seed"]
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError(f"'seed' must be an integer or null, got {seed!r}")
    return config


def load_config(config_path: str | pathlib.Path) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs, defaults filled in.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigError: If the file is not a YAML mapping or has bad values.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    config = dict(DEFAULT_CONFIG)
    config.update(loaded)
    return validate_config(config)
