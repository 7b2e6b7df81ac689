"""Tests for CLI settings loading."""

from pathlib import Path

import pytest

from gitpod_cli.config.settings import DEFAULT_CONFIG_PATH, CLISettings, normalize_host
from gitpod_cli.exceptions import ConfigurationError


class TestCLISettings:
    """Test CLISettings defaults, environment and overrides."""

    def test_defaults(self):
        """Defaults match the documented values."""
        settings = CLISettings.load()

        assert settings.config_path == DEFAULT_CONFIG_PATH
        assert settings.host == "gitpod.io"
        assert settings.auth_timeout == 10.0
        assert settings.list_timeout == 5.0
        assert settings.log_level == "WARNING"

    def test_environment_variables(self, monkeypatch, tmp_path):
        """GITPOD_* variables override defaults."""
        monkeypatch.setenv("GITPOD_CONFIG_PATH", str(tmp_path / "cfg.yaml"))
        monkeypatch.setenv("GITPOD_HOST", "https://gitpod.example.com/")
        monkeypatch.setenv("GITPOD_LIST_TIMEOUT", "8")

        settings = CLISettings.load()

        assert settings.config_path == tmp_path / "cfg.yaml"
        assert settings.host == "gitpod.example.com"
        assert settings.list_timeout == 8.0

    def test_overrides_win_over_environment(self, monkeypatch):
        """Explicit values beat the environment."""
        monkeypatch.setenv("GITPOD_LOG_LEVEL", "ERROR")

        settings = CLISettings.load(log_level="debug", config_path=Path("/tmp/x.yaml"))

        assert settings.log_level == "DEBUG"
        assert settings.config_path == Path("/tmp/x.yaml")

    def test_none_overrides_are_ignored(self):
        """Unset CLI options fall through to defaults."""
        settings = CLISettings.load(config_path=None, log_level=None)

        assert settings.config_path == DEFAULT_CONFIG_PATH
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize("timeout", [1.0, 30.0])
    def test_timeouts_are_bounded(self, timeout):
        """Network timeouts must stay within 5-10 seconds."""
        with pytest.raises(ConfigurationError):
            CLISettings.load(auth_timeout=timeout)

    def test_invalid_log_level(self):
        """Unknown levels are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            CLISettings.load(log_level="chatty")

        assert "Invalid settings" in exc_info.value.message

    def test_empty_host_rejected(self):
        """A blank host is a configuration error."""
        with pytest.raises(ConfigurationError):
            CLISettings.load(host="  ")


class TestNormalizeHost:
    """Test normalize_host helper."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("gitpod.io", "gitpod.io"),
            ("https://gitpod.io", "gitpod.io"),
            ("http://gitpod.example.com/", "gitpod.example.com"),
            ("  gitpod.io  ", "gitpod.io"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_host(raw) == expected
