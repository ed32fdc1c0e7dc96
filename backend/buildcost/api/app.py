"""FastAPI application — create_app factory with /api endpoints."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from buildcost.api.calculator import router as calculator_router
from buildcost.api.deps import create_rate_limiters
from buildcost.config import Settings, configure_logging
from buildcost.engine import ENGINE_VERSION
from buildcost.exceptions import (
    BuildCostError,
    EstimateValidationError,
    RateLimitExceededError,
)
from buildcost.metrics import ServiceMetrics
from buildcost.models.request import describe_validation_errors

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.responses import Response

    from buildcost.api.deps import RateLimiters
    from buildcost.engine import CostEngine

logger = logging.getLogger(__name__)

_CALCULATE_PATH = "/api/calculator/calculate"


def _error_response(
    status_code: int,
    error: str,
    **extra: Any,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, **extra},
    )


def _rate_limit_response(exc: RateLimitExceededError) -> JSONResponse:
    response = _error_response(429, exc.message, errorCode=exc.error_code)
    response.headers["Retry-After"] = str(exc.retry_after)
    return response


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def create_app(
    *,
    cost_engine: CostEngine | None = None,
    settings: Settings | None = None,
    metrics: ServiceMetrics | None = None,
    rate_limiters: RateLimiters | None = None,
    database_check: Callable[[], bool] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    cost_engine
        Optional pre-built cost engine for dependency injection (e.g. tests).
        If not provided, one is created via create_default_engine on first
        request.
    settings
        Optional settings. Read from the environment when omitted.
    metrics
        Optional process metrics source.
    rate_limiters
        Optional pre-built limiters. Built from ``settings`` when omitted.
    database_check
        Optional probe reported by /api/health. The estimator itself keeps
        no database, so without a probe the database reads as not connected.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="BuildCost", version=ENGINE_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject mocks
    app.state.settings = settings
    app.state.cost_engine = cost_engine
    app.state.metrics = metrics or ServiceMetrics(environment=settings.environment)
    app.state.rate_limiters = rate_limiters or create_rate_limiters(settings)

    # ------------------------------------------------------------------
    # Boundary middleware: rate limiting and request timing
    # ------------------------------------------------------------------

    @app.middleware("http")
    async def rate_limit_and_log(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        path = request.url.path
        limiters: RateLimiters = app.state.rate_limiters
        key = _client_key(request)
        state = None

        if settings.rate_limit_enabled and path.startswith("/api"):
            applicable = [limiters.general]
            if request.method == "POST" and path == _CALCULATE_PATH:
                applicable.append(limiters.calculation)
            try:
                # A request only counts once every applicable limit allows it.
                for limiter in applicable:
                    limiter.check(key)
                for limiter in applicable:
                    state = limiter.hit(key)
            except RateLimitExceededError as exc:
                return _rate_limit_response(exc)

        started = time.perf_counter()
        response = await call_next(request)
        logger.debug(
            "%s %s -> %d (%.1fms) client=%s",
            request.method,
            path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            key,
        )
        if state is not None:
            response.headers["RateLimit-Limit"] = str(state.limit)
            response.headers["RateLimit-Remaining"] = str(state.remaining)
            response.headers["RateLimit-Reset"] = str(state.reset_after)
        return response

    # ------------------------------------------------------------------
    # Error handlers
    # ------------------------------------------------------------------

    @app.exception_handler(EstimateValidationError)
    async def handle_estimate_validation(
        request: Request, exc: EstimateValidationError,
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(400, exc.message, errors=exc.errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        errors = describe_validation_errors(
            list(exc.errors()), skip_locations=("body", "path", "query"),
        )
        first = errors[0] if errors else {"field": None, "message": "Invalid request"}
        message = (
            f"{first['field']}: {first['message']}" if first["field"] else first["message"]
        )
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return _error_response(400, message, errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException,
    ) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(BuildCostError)
    async def handle_buildcost_error(
        request: Request, exc: BuildCostError,
    ) -> JSONResponse:
        logger.error(
            "Estimator error during %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error during %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(500, "Internal server error")

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        connected = False
        if database_check is not None:
            try:
                connected = bool(database_check())
            except Exception:  # noqa: BLE001 (reported as disconnected)
                logger.exception("Database health probe failed")
        return {
            "status": "OK",
            "version": ENGINE_VERSION,
            "timestamp": datetime.now(UTC).isoformat(),
            "database": {"connected": connected},
        }

    app.include_router(calculator_router)

    return app
