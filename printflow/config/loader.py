"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from printflow.config.schema import Config

ENV_DATA_DIR = "PRINTFLOW_DATA_DIR"


def get_config_path() -> Path:
    """Get the path to the config file (~/.printflow/config.yaml)."""
    return Path.home() / ".printflow" / "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping, returning an empty dict when missing or unreadable."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: top level is not a mapping")
        return {}
    return data


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Values are resolved in this order (highest first):
    1. PRINTFLOW_DATA_DIR environment variable (data_dir only)
    2. YAML config file
    3. Defaults

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()
    data = _load_yaml(path)

    env_dir = os.environ.get(ENV_DATA_DIR)
    if env_dir:
        data["data_dir"] = env_dir

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid config in {path}, using defaults: {e}")
        config = Config()
        if env_dir:
            config.data_dir = env_dir
        return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(config.model_dump(), allow_unicode=True, default_flow_style=False),
        encoding="utf-8",
    )
