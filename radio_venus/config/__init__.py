"""Configuration module - exports Settings and the YAML loaders."""

from radio_venus.config.loader import load_config, settings_from_config
from radio_venus.config.settings import Settings

__all__ = ["Settings", "load_config", "settings_from_config"]
