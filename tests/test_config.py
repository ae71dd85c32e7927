"""Tests for configuration loading and logging setup."""

from __future__ import annotations

import logging

import pytest

from simplehealth import config as config_module
from simplehealth.config import Config, get_config, load_config
from simplehealth.logging_utils import setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in Config.ENV_MAPPINGS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("SIMPLEHEALTH_CONFIG_PATH", raising=False)


class TestConfig:
    def test_missing_file_uses_defaults(self, tmp_path) -> None:
        config = Config(str(tmp_path / "nope.yaml"))
        assert config.get("server", "port") == 8080
        assert config.get("endpoints", "health") == "/health"

    def test_yaml_merged_over_defaults(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("server:\n  port: 9090\nchecks:\n  disk:\n    enabled: false\n")
        config = Config(str(path))
        assert config.get("server", "port") == 9090
        assert config.get("server", "host") == "0.0.0.0"
        assert config.get("checks", "disk", "enabled") is False
        assert config.get("checks", "load", "enabled") is True

    def test_invalid_yaml_uses_defaults(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("server: [unclosed\n")
        assert Config(str(path)).get("server", "port") == 8080

    def test_env_overrides(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("SERVER_PORT", "7070")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        config = Config(str(tmp_path / "nope.yaml"))
        assert config.get("server", "port") == 7070
        assert config.get("logging", "console", "level") == "DEBUG"

    def test_bad_port_ignored(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("SERVER_PORT", "eighty")
        assert Config(str(tmp_path / "nope.yaml")).get("server", "port") == 8080

    def test_get_default(self) -> None:
        config = Config.from_dict({})
        assert config.get("nope", "deeper", default="x") == "x"
        assert config.get("server", "port", "deeper", default=1) == 1

    def test_load_config_from_env_path(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("application:\n  name: probe\n")
        monkeypatch.setenv("SIMPLEHEALTH_CONFIG_PATH", str(path))
        monkeypatch.setattr(config_module, "_config", None)
        with pytest.raises(RuntimeError):
            get_config()
        loaded = load_config()
        assert loaded.get("application", "name") == "probe"
        assert get_config() is loaded


class TestSetupLogging:
    def test_console_and_file(self, tmp_path) -> None:
        root = logging.getLogger()
        saved = list(root.handlers)
        try:
            handlers = setup_logging({
                "console": {"enabled": True, "level": "WARN", "format": "json"},
                "file": {"enabled": True, "path": str(tmp_path / "logs" / "h.log")},
            })
            assert len(handlers) == 2
            assert handlers[0].level == logging.WARNING
            assert (tmp_path / "logs").is_dir()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved
