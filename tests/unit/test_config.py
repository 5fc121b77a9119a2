# tests/unit/test_config.py
"""
Unit tests for configuration loading.

Tests YAML layering and environment overrides, PORT in particular.
"""

import pytest

from tracker.config import ConfigLoader, TrackerConfig


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("PORT", "TRACKER_HOST", "TRACKER_LOG_LEVEL", "TRACKER_SEED_DATA",
                 "TRACKER_CORS_ORIGINS", "TRACKER_PUBLIC_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TRACKER_ENV", "test")
    return monkeypatch


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_defaults_without_files(self, clean_env, tmp_path):
        """Missing config directory should yield defaults."""
        config = ConfigLoader(str(tmp_path / "missing")).get()

        assert config.api_port == 3000
        assert config.environment == "test"
        assert config.seed_data is True

    def test_yaml_layering(self, clean_env, tmp_path):
        """Environment file should override the default file."""
        (tmp_path / "default.yaml").write_text("api_port: 4000\nlog_level: DEBUG\n")
        (tmp_path / "test.yaml").write_text("api_port: 5000\n")

        config = ConfigLoader(str(tmp_path)).get()

        assert config.api_port == 5000
        assert config.log_level == "DEBUG"

    def test_port_env_wins(self, clean_env, tmp_path):
        """PORT should override every file."""
        (tmp_path / "default.yaml").write_text("api_port: 4000\n")
        clean_env.setenv("PORT", "8080")

        config = ConfigLoader(str(tmp_path)).get()

        assert config.api_port == 8080

    def test_env_overrides(self, clean_env, tmp_path):
        clean_env.setenv("TRACKER_SEED_DATA", "false")
        clean_env.setenv("TRACKER_CORS_ORIGINS", "http://a.test, http://b.test")
        clean_env.setenv("TRACKER_LOG_LEVEL", "warning")

        config = ConfigLoader(str(tmp_path)).get()

        assert config.seed_data is False
        assert config.cors_origins == ["http://a.test", "http://b.test"]
        assert config.log_level == "WARNING"

    def test_invalid_yaml_falls_back(self, clean_env, tmp_path):
        """A broken YAML file is logged and ignored."""
        (tmp_path / "default.yaml").write_text("api_port: [unclosed\n")

        config = ConfigLoader(str(tmp_path)).get()

        assert config.api_port == 3000


def test_base_url_prefers_public_url():
    assert TrackerConfig(api_port=3000).base_url == "http://localhost:3000"
    assert TrackerConfig(public_url="https://tracker.example.com").base_url == "https://tracker.example.com"
