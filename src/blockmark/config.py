"""Configuration loader with YAML and environment variable support.

This module reads ~/.config/blockmark/config.yaml (or an explicit path) and
allows environment variable overrides using the BLOCKMARK_ prefix.

Environment variables:
- BLOCKMARK_FLAVOR: Override the output flavor (html, markdown)
- BLOCKMARK_FRONT_MATTER: Override the front matter format (json, yaml, none)
- BLOCKMARK_SKIP_UNSUPPORTED: Omit blocks without a renderer (true/false)
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from blockmark.models.config import RenderConfig
from blockmark.utils.logging import get_logger


logger = get_logger(__name__)

ENV_OVERRIDES = {
    "BLOCKMARK_FLAVOR": "flavor",
    "BLOCKMARK_FRONT_MATTER": "front_matter",
    "BLOCKMARK_SKIP_UNSUPPORTED": "skip_unsupported",
}


def default_config_path() -> Path:
    """Location of the default configuration file."""
    return Path.home() / ".config" / "blockmark" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> RenderConfig:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. If None, uses
            ~/.config/blockmark/config.yaml when it exists, defaults otherwise

    Returns:
        Validated RenderConfig object

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValueError: If the config file or an override is invalid
    """
    if config_path is None:
        path = default_config_path()
        explicit = False
    else:
        path = config_path
        explicit = True

    logger.info("config_loading", path=str(path), explicit=explicit)

    if path.exists() or explicit:
        try:
            config = RenderConfig.load(path)
        except FileNotFoundError as e:
            logger.error("config_not_found", path=str(path), error=str(e))
            raise
    else:
        config = RenderConfig()

    data = _apply_env_overrides(config.model_dump())

    try:
        config = RenderConfig(**data)
    except ValidationError as e:
        logger.error("config_validation_error", path=str(path), error=str(e))
        raise ValueError(f"Configuration validation failed: {e}") from e

    logger.info("config_loaded", path=str(path), flavor=config.flavor)
    return config


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Args:
        data: Base configuration dictionary

    Returns:
        Configuration dictionary with environment overrides applied
    """
    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value is not None and value != "":
            data[key] = value

    return data
