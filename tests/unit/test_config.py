"""Unit tests for the YAML config loaders and Settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from radio_venus.config import Settings, load_config, settings_from_config


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No stray .env file or API keys from the machine running the tests."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
        "YOUTUBE_API_KEY",
        "LOG_LEVEL",
        "CHECKPOINT_INTERVAL",
        "APP_ENV",
    ):
        monkeypatch.delenv(var, raising=False)


def _write(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestSettingsFromConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        app_settings = settings_from_config(str(tmp_path / "nope.yaml"))
        assert app_settings.checkpoint_interval == 10
        assert app_settings.discovery_min_year == 1940

    def test_curation_section_fills_fields(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {
                "curation": {"checkpoint_interval": 3, "unknown_key": "ignored"},
                "logging": {"level": "DEBUG"},
            },
        )
        app_settings = settings_from_config(str(path))
        assert app_settings.checkpoint_interval == 3
        assert app_settings.log_level == "DEBUG"

    def test_environment_wins_over_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CHECKPOINT_INTERVAL", "7")
        path = _write(tmp_path, {"curation": {"checkpoint_interval": 3}})
        assert settings_from_config(str(path)).checkpoint_interval == 7

    def test_repository_config_is_valid(self) -> None:
        repo_config = Path(__file__).resolve().parents[2] / "config" / "config.yaml"
        app_settings = settings_from_config(str(repo_config))
        assert app_settings.judge_batch_size == 10


class TestLoadConfig:
    def test_env_values_merged_into_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
        path = _write(tmp_path, {"app": {"name": "radio-venus"}, "logging": {"level": "INFO"}})

        config = load_config(str(path))
        assert config["app"] == {"name": "radio-venus", "env": "development"}
        assert config["judge"]["available_providers"] == ["anthropic"]
        assert config["media"]["youtube_configured"] is False

    def test_missing_file(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "nope.yaml"))
        assert config["judge"]["available_providers"] == []


class TestSettings:
    def test_llm_providers_in_priority_order(self) -> None:
        app_settings = Settings(_env_file=None, anthropic_api_key="a", openai_api_key="o")
        assert app_settings.get_available_llm_providers() == ["anthropic", "openai"]
