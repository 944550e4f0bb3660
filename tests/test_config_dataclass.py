"""Tests for the typed RobotConfig dataclass and environment parsing."""

import pytest

import workrobot.config as config
from workrobot.config import DEFAULT_TIMEOUT_SECONDS, DEFAULT_UPLOAD_GATEWAY, RobotConfig


class TestRobotConfig:
    def test_defaults(self):
        c = RobotConfig()
        assert c.key == ""
        assert c.webhook == ""
        assert c.upload_gateway == DEFAULT_UPLOAD_GATEWAY
        assert c.timeout == DEFAULT_TIMEOUT_SECONDS
        assert c.verbose is False

    def test_is_configured(self):
        assert RobotConfig().is_configured is False
        assert RobotConfig(key="k").is_configured is True
        assert RobotConfig(webhook="https://work.example.com/hook").is_configured is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setitem(config.CONFIG, "key", "env-key")
        monkeypatch.setitem(config.CONFIG, "verbose", True)
        c = RobotConfig.from_env()
        assert c.key == "env-key"
        assert c.verbose is True

    def test_custom(self):
        c = RobotConfig(key="k", timeout=None)
        assert c.key == "k"
        assert c.timeout is None


class TestEnvParsing:
    def test_timeout_number(self, monkeypatch):
        monkeypatch.setenv("WORKROBOT_TIMEOUT", "2.5")
        assert config._env_timeout("WORKROBOT_TIMEOUT") == 2.5

    def test_timeout_zero_disables(self, monkeypatch):
        monkeypatch.setenv("WORKROBOT_TIMEOUT", "0")
        assert config._env_timeout("WORKROBOT_TIMEOUT") is None

    def test_timeout_unset(self, monkeypatch):
        monkeypatch.delenv("WORKROBOT_TIMEOUT", raising=False)
        assert config._env_timeout("WORKROBOT_TIMEOUT") == DEFAULT_TIMEOUT_SECONDS

    def test_timeout_invalid_falls_back(self, monkeypatch, capsys):
        monkeypatch.setenv("WORKROBOT_TIMEOUT", "soon")
        assert config._env_timeout("WORKROBOT_TIMEOUT") == DEFAULT_TIMEOUT_SECONDS
        assert "falling back" in capsys.readouterr().err

    @pytest.mark.parametrize("raw,expected", [("1", True), ("on", True), ("TRUE", True), ("no", False), ("", False)])
    def test_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("WORKROBOT_VERBOSE", raw)
        assert config._env_flag("WORKROBOT_VERBOSE") is expected
