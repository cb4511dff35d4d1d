# tests/test_config.py

"""Tests for cliopts/config/settings.py and cliopts/config/logging_config.py"""

import logging
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from cliopts.config.logging_config import build_logging_config, configure_logging
from cliopts.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("CLIOPTS_DEBUG", "CLIOPTS_LOGS_DIR", "CLIOPTS_USAGE_WIDTH", "CLIOPTS_USAGE_INDENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_settings():
    """Settings stand-in with default values."""
    settings = MagicMock()
    settings.debug = False
    settings.logs_dir = None
    return settings


# =============================================================================
# Settings
# =============================================================================
class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.debug is False
        assert settings.logs_dir is None
        assert settings.usage_width == 80
        assert settings.usage_indent == 4

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CLIOPTS_DEBUG", "1")
        monkeypatch.setenv("CLIOPTS_USAGE_WIDTH", "100")

        settings = Settings()

        assert settings.debug is True
        assert settings.usage_width == 100

    def test_from_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("CLIOPTS_LOGS_DIR=/var/log/cli\n", encoding="utf-8")

        assert Settings().logs_dir == "/var/log/cli"

    def test_width_out_of_range(self, monkeypatch):
        monkeypatch.setenv("CLIOPTS_USAGE_WIDTH", "5")

        with pytest.raises(ValidationError):
            Settings()


# =============================================================================
# Logging
# =============================================================================
class TestLoggingConfig:
    def test_console_only_by_default(self, mock_settings):
        config = build_logging_config(mock_settings)

        assert list(config["handlers"]) == ["console"]
        assert config["handlers"]["console"]["stream"] == "ext://sys.stderr"
        assert config["root"]["level"] == logging.WARNING

    def test_debug_level(self, mock_settings):
        mock_settings.debug = True

        config = build_logging_config(mock_settings)

        assert config["root"]["level"] == logging.DEBUG

    def test_file_handler_when_logs_dir(self, mock_settings, tmp_path):
        mock_settings.logs_dir = str(tmp_path / "logs")

        config = build_logging_config(mock_settings)

        assert config["root"]["handlers"] == ["console", "app_file"]
        assert config["handlers"]["app_file"]["filename"].endswith("cliopts.log")
        assert (tmp_path / "logs" / "app").is_dir()

    def test_configure_logging_writes_file(self, mock_settings, tmp_path):
        mock_settings.debug = True
        mock_settings.logs_dir = str(tmp_path)
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level

        try:
            configure_logging(mock_settings)
            logging.getLogger("cliopts.test").debug("hello from the test")
            for handler in root.handlers:
                handler.flush()

            log_file = tmp_path / "app" / "cliopts.log"
            assert "hello from the test" in log_file.read_text(encoding="utf-8")
        finally:
            for handler in root.handlers:
                if handler not in handlers:
                    handler.close()
            root.handlers[:] = handlers
            root.setLevel(level)
