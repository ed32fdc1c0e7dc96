"""Tests for environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from buildcost.config import Settings, configure_logging
from buildcost.exceptions import BuildCostError

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("BUILDCOST_"):
            monkeypatch.delenv(name)


def _load(**overrides: object) -> Settings:
    return Settings.from_env(_env_file=None, **overrides)


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        settings = _load()
        assert settings.environment == "development"
        assert settings.calculation_max_requests == 10
        assert settings.calculation_window_seconds == 60
        assert settings.rate_limit_max_requests == 100
        assert settings.cors_origins == ["http://localhost:3000"]

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUILDCOST_ENVIRONMENT", "production")
        monkeypatch.setenv("BUILDCOST_CALCULATION_MAX_REQUESTS", "25")
        monkeypatch.setenv("BUILDCOST_RATE_LIMIT_ENABLED", "false")
        monkeypatch.setenv("BUILDCOST_LOG_LEVEL", "debug")
        monkeypatch.setenv(
            "BUILDCOST_CORS_ORIGINS", "https://example.com, https://www.example.com",
        )

        settings = _load()

        assert settings.environment == "production"
        assert settings.calculation_max_requests == 25
        assert settings.rate_limit_enabled is False
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ["https://example.com", "https://www.example.com"]

    def test_ignores_unrelated_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "9999")
        monkeypatch.setenv("BUILDCOST_UNKNOWN_KEY", "x")
        assert _load().port == 8000

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUILDCOST_PORT", "9000")
        assert _load(port=9100).port == 9100

    def test_reads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "BUILDCOST_ENVIRONMENT=staging\nBUILDCOST_CALCULATION_WINDOW_SECONDS=30\n",
        )
        monkeypatch.setenv("BUILDCOST_ENVIRONMENT", "production")

        settings = Settings.from_env(_env_file=env_file)

        # Real environment variables beat the file.
        assert settings.environment == "production"
        assert settings.calculation_window_seconds == 30

    def test_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUILDCOST_CALCULATION_MAX_REQUESTS", "0")
        with pytest.raises(BuildCostError, match="Invalid BuildCost configuration"):
            _load()

    def test_unknown_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUILDCOST_LOG_LEVEL", "chatty")
        with pytest.raises(BuildCostError):
            _load()


class TestConfigureLogging:
    def test_installs_single_handler(self) -> None:
        configure_logging("WARNING")
        configure_logging("INFO")
        package_logger = logging.getLogger("buildcost")
        handlers = [h for h in package_logger.handlers if h.get_name() == "buildcost"]
        assert len(handlers) == 1
        assert package_logger.level == logging.INFO
