"""Dependency injection for FastAPI endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from buildcost.api.rate_limit import FixedWindowRateLimiter
from buildcost.config import Settings  # noqa: TCH001 (FastAPI resolves at runtime)
from buildcost.engine import CostEngine  # noqa: TCH001
from buildcost.factory import create_default_engine
from buildcost.metrics import ServiceMetrics  # noqa: TCH001

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimiters:
    """Limiters applied at the HTTP boundary."""

    general: FixedWindowRateLimiter
    calculation: FixedWindowRateLimiter


def create_rate_limiters(settings: Settings) -> RateLimiters:
    """Build the general and calculation limiters from settings."""
    return RateLimiters(
        general=FixedWindowRateLimiter(
            name="general",
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            message="Too many requests from this IP, please try again later",
            error_code="RATE_LIMIT_EXCEEDED",
        ),
        calculation=FixedWindowRateLimiter(
            name="calculation",
            max_requests=settings.calculation_max_requests,
            window_seconds=settings.calculation_window_seconds,
            message="Too many calculations, please wait before trying again",
        ),
    )


def get_cost_engine(request: Request) -> CostEngine:
    """Return the app's CostEngine, creating the default one on first use."""
    engine: CostEngine | None = request.app.state.cost_engine
    if engine is None:
        logger.info("Creating default cost engine")
        engine = create_default_engine()
        request.app.state.cost_engine = engine
    return engine


def get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def get_metrics(request: Request) -> ServiceMetrics:
    metrics: ServiceMetrics = request.app.state.metrics
    return metrics
