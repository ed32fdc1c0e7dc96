"""Service configuration loaded from the environment.

Settings are read from ``BUILDCOST_*`` environment variables and from
``.env`` files in the project root and in ``backend/``. Real environment
variables take precedence over both files; ``backend/.env`` wins over the
project root one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict, SettingsError

from buildcost.exceptions import BuildCostError

_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "buildcost"


class Settings(BaseSettings):
    """Runtime settings for the BuildCost API."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDCOST_",
        env_file=(_PROJECT_ROOT / ".env", _BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    # Comma-separated in the environment, e.g. "https://a.com,https://b.com".
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )

    # General allowance per client across /api routes.
    rate_limit_window_seconds: int = Field(default=15 * 60, gt=0)
    rate_limit_max_requests: int = Field(default=100, gt=0)
    # Stricter allowance for full cost calculations.
    calculation_window_seconds: int = Field(default=60, gt=0)
    calculation_max_requests: int = Field(default=10, gt=0)
    rate_limit_enabled: bool = True

    health_degraded_ms: float = Field(default=500.0, gt=0)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v: object) -> object:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown log level '{v}'"
            raise ValueError(msg)
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from the environment and ``.env`` files.

        Keyword arguments take precedence over the environment and accept
        pydantic-settings init options such as ``_env_file=None``.

        Raises:
            BuildCostError: If a variable holds an invalid value.
        """
        try:
            return cls(**overrides)
        except (ValidationError, SettingsError) as exc:
            msg = f"Invalid BuildCost configuration: {exc}"
            raise BuildCostError(msg) from exc


def configure_logging(level: str = "INFO") -> None:
    """Send ``buildcost`` log records to stderr at ``level``.

    Safe to call more than once; the handler is only installed the first
    time.
    """
    package_logger = logging.getLogger("buildcost")
    package_logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(handler)
