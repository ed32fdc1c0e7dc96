"""Calculator endpoints under /api/calculator.

Every successful response is wrapped as ``{"success": true, ...}``; errors
are shaped by the handlers registered in ``buildcost.api.app``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends

# FastAPI resolves these annotations at runtime.
from buildcost.api.deps import get_cost_engine, get_metrics, get_settings
from buildcost.config import Settings  # noqa: TCH001
from buildcost.engine import CostEngine  # noqa: TCH001
from buildcost.metrics import ServiceMetrics  # noqa: TCH001
from buildcost.models.enums import ProjectType, QualityTier
from buildcost.models.request import EstimateRequest, OptionsRequest  # noqa: TCH001


router = APIRouter(prefix="/api/calculator")

EngineDep = Annotated[CostEngine, Depends(get_cost_engine)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
MetricsDep = Annotated[ServiceMetrics, Depends(get_metrics)]


@router.post("/calculate")
def calculate(payload: EstimateRequest, engine: EngineDep) -> dict[str, Any]:
    result = engine.calculate(payload)
    data = result.to_api_dict()
    data["summary"] = result.cost_estimation.to_summary_dict()
    return {
        "success": True,
        "message": "Cost calculation completed successfully",
        "data": data,
    }


@router.get("/quick-estimate/{area}")
def quick_estimate(area: float, engine: EngineDep) -> dict[str, Any]:
    estimate = engine.quick_estimate(area)
    data = estimate.to_api_dict()
    # Headline figures for widgets that show a single number.
    standard = estimate.estimates[QualityTier.STANDARD]
    data["estimatedCost"] = standard.total_cost
    data["ratePerSqFt"] = standard.rate_per_sq_ft
    return {"success": True, "data": data}


@router.post("/compare-options")
def compare_options(payload: OptionsRequest, engine: EngineDep) -> dict[str, Any]:
    comparison = engine.compare_options(payload)
    return {"success": True, "data": comparison.to_api_dict()}


@router.get("/phase-cost/{area}/{phase}")
def phase_cost(area: float, phase: str, engine: EngineDep) -> dict[str, Any]:
    return {"success": True, "data": engine.phase_cost(area, phase).to_api_dict()}


@router.get("/timeline/{area}")
def timeline(
    area: float,
    engine: EngineDep,
    project_type: str = ProjectType.RESIDENTIAL.value,
    floors: int = 1,
    quality: str = QualityTier.STANDARD.value,
) -> dict[str, Any]:
    result = engine.timeline(
        area, project_type=project_type, floors=floors, quality=quality,
    )
    return {"success": True, "data": result.to_api_dict()}


@router.get("/rates")
def rates(engine: EngineDep) -> dict[str, Any]:
    return {"success": True, "data": engine.rates().to_api_dict()}


@router.get("/health")
def calculator_health(engine: EngineDep, settings: SettingsDep) -> dict[str, Any]:
    report = engine.health(degraded_threshold_ms=settings.health_degraded_ms)
    payload: dict[str, Any] = {
        "success": True,
        "service": "Calculator API",
        "status": report.status.value,
        "timestamp": datetime.now(UTC).isoformat(),
        "responseTime": report.response_time,
        "responseTimeMs": report.response_time_ms,
        "capabilities": report.capabilities,
        "supportedQualities": [q.value for q in report.supported_qualities],
        "supportedProjectTypes": [p.value for p in report.supported_project_types],
    }
    if report.error is not None:
        payload["error"] = "Calculation probe failed"
    return payload


@router.get("/metrics")
def metrics(service_metrics: MetricsDep) -> dict[str, Any]:
    return {"success": True, "metrics": service_metrics.snapshot().to_api_dict()}
