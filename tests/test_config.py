"""Tests for postprint.config and postprint.logging_setup."""

import logging

import pytest

from postprint.config import Settings
from postprint.logging_setup import configure_logging


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env()
        assert settings.browser_executable is None
        assert settings.headless is True
        assert settings.navigation_timeout_ms == 30000
        assert settings.selector_timeout_ms == 20000
        assert settings.settle_ms == 3000
        assert settings.http_timeout == 30.0
        assert settings.debug_screenshot is None
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("PUPPETEER_EXECUTABLE_PATH", "/usr/bin/chromium")
        monkeypatch.setenv("POSTPRINT_HEADLESS", "false")
        monkeypatch.setenv("POSTPRINT_SETTLE_MS", "500")
        monkeypatch.setenv("POSTPRINT_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("POSTPRINT_DEBUG_SCREENSHOT", "/tmp/debug.png")

        settings = Settings.from_env()

        assert settings.browser_executable == "/usr/bin/chromium"
        assert settings.headless is False
        assert settings.settle_ms == 500
        assert settings.http_timeout == 2.5
        assert settings.debug_screenshot == "/tmp/debug.png"

    def test_own_executable_variable_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("PUPPETEER_EXECUTABLE_PATH", "/usr/bin/chromium")
        monkeypatch.setenv("POSTPRINT_BROWSER_EXECUTABLE", "/opt/chrome")
        assert Settings.from_env().browser_executable == "/opt/chrome"

    def test_invalid_number_names_variable(self, monkeypatch) -> None:
        monkeypatch.setenv("POSTPRINT_NAVIGATION_TIMEOUT_MS", "soon")
        with pytest.raises(ValueError, match="POSTPRINT_NAVIGATION_TIMEOUT_MS"):
            Settings.from_env()


class TestConfigureLogging:
    def test_level_names_and_numbers(self) -> None:
        assert configure_logging("debug", rich_console=False) == logging.DEBUG
        assert configure_logging("30", rich_console=False) == logging.WARNING
        assert configure_logging(None, rich_console=False) == logging.INFO
        assert configure_logging("nonsense") == logging.INFO

    def test_quiets_weasyprint(self) -> None:
        configure_logging("DEBUG", rich_console=False)
        assert logging.getLogger("weasyprint").level == logging.ERROR
        assert logging.getLogger("fontTools").level == logging.ERROR
