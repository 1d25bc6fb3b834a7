"""YAML configuration loader with environment variable overrides.

Configuration is layered, later layers win:

  1. ``config/config.yaml`` - static defaults checked into the repo
  2. ``.env`` file          - local overrides (not committed)
  3. environment variables  - set per machine / CI job

``load_config`` reads the YAML first, then deep-merges the env-derived
values from :class:`Settings` on top.  ``settings_from_config`` goes the
other way and builds a :class:`Settings` whose unset fields fall back to
the YAML ``curation`` section (and ``logging.level``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from radio_venus.config.settings import Settings


def load_config(path: str = "config/config.yaml") -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = Settings()
    env_overrides: dict[str, Any] = {
        "app": {
            "env": settings.app_env,
        },
        "judge": {
            "available_providers": settings.get_available_llm_providers(),
        },
        "media": {
            "youtube_configured": bool(settings.youtube_api_key),
        },
        "musicbrainz": {
            "app_name": settings.musicbrainz_app_name,
            "app_version": settings.musicbrainz_app_version,
            "contact": settings.musicbrainz_contact,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def settings_from_config(path: str = "config/config.yaml") -> Settings:
    """Build Settings using the YAML ``curation`` section as defaults.

    Process environment variables still take precedence over YAML: only
    fields with no env value are filled from the file.  Values that exist
    only in ``.env`` lose to the YAML file.
    """
    config_path = Path(path)
    if not config_path.exists():
        return Settings()

    with open(config_path, encoding="utf-8") as f:
        yaml_config = yaml.safe_load(f) or {}

    curation = dict(yaml_config.get("curation") or {})
    level = (yaml_config.get("logging") or {}).get("level")
    if level:
        curation.setdefault("log_level", level)
    defaults = {
        key: value
        for key, value in curation.items()
        if key in Settings.model_fields and key.upper() not in os.environ
    }
    return Settings(**defaults)


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
