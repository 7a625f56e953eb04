"""Configuration module for printflow."""

from printflow.config.loader import load_config, get_config_path, save_config
from printflow.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path", "save_config"]
