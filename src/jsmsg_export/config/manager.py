"""Configuration loading for jsmsg-export.

Settings come from an optional YAML file validated against ExportConfig,
with command-line values layered on top.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.core.exceptions import ConfigurationError
from .schema import ExportConfig

logger = logging.getLogger(__name__)


def load_config_data(config_path: Path) -> dict[str, object]:
    """
    Read the raw mapping from a YAML configuration file.

    Relative ``output`` and ``base_dir`` values are resolved against the
    directory containing the configuration file.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or not a mapping
    """
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {e}") from e

    if raw_config_data is None:
        config_data: dict[str, object] = {}
    elif isinstance(raw_config_data, dict):
        config_data = dict(raw_config_data)  # pyright: ignore[reportUnknownArgumentType]
    else:
        raise ConfigurationError(
            f"Configuration file must contain a YAML mapping, got {type(raw_config_data).__name__}"
        )

    config_dir = config_path.parent
    for key in ("output", "base_dir"):
        value = config_data.get(key)
        if isinstance(value, str) and not Path(value).expanduser().is_absolute():
            config_data[key] = str(config_dir / value)

    logger.debug(f"Loaded configuration keys from {config_path}: {sorted(config_data)}")
    return config_data


def build_config(config_data: dict[str, object]) -> ExportConfig:
    """
    Validate a configuration mapping.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        return ExportConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config(config_path: Path) -> ExportConfig:
    """Load and validate configuration from a YAML file."""
    return build_config(load_config_data(config_path))


def merge_cli_overrides(
    config_data: dict[str, object], overrides: dict[str, object | None]
) -> ExportConfig:
    """
    Layer command-line values over file values and validate the result.

    ``None`` overrides are ignored, and a non-empty ``js`` list from the
    command line replaces the file's list instead of extending it.

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    merged = dict(config_data)
    for key, value in overrides.items():
        match value:
            case None:
                continue
            case list() if not value:
                continue
            case False if key in merged:
                continue
            case _:
                merged[key] = value
    return build_config(merged)
