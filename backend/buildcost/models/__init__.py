"""Domain models for the BuildCost estimator."""

from buildcost.models.enums import (
    ConstructionPhase,
    HealthStatus,
    PhaseCategory,
    ProjectType,
    QualityTier,
)
from buildcost.models.estimate import (
    CalculationResult,
    CostBreakdown,
    CostEstimation,
    PhaseCost,
    QualityComparison,
    QuickEstimate,
    RateCard,
    RequestDetails,
)
from buildcost.models.request import EstimateRequest, OptionsRequest
from buildcost.models.service import HealthReport, MemoryUsage, MetricsSnapshot
from buildcost.models.timeline import Timeline, TimelinePhase

__all__ = [
    "CalculationResult",
    "ConstructionPhase",
    "CostBreakdown",
    "CostEstimation",
    "EstimateRequest",
    "HealthReport",
    "HealthStatus",
    "MemoryUsage",
    "MetricsSnapshot",
    "OptionsRequest",
    "PhaseCategory",
    "PhaseCost",
    "ProjectType",
    "QualityComparison",
    "QualityTier",
    "QuickEstimate",
    "RateCard",
    "RequestDetails",
    "Timeline",
    "TimelinePhase",
]
