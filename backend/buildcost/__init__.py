"""BuildCost construction cost estimator.

Usage::

    from buildcost import create_default_engine

    engine = create_default_engine()
    result = engine.calculate({"plinth_area": 2000, "floors": 2})
"""

from buildcost.engine import CostEngine
from buildcost.exceptions import (
    BuildCostError,
    CostEstimationError,
    EstimateValidationError,
    RateLimitExceededError,
)
from buildcost.factory import create_default_engine
from buildcost.models.enums import ConstructionPhase, ProjectType, QualityTier
from buildcost.models.estimate import (
    CalculationResult,
    CostBreakdown,
    CostEstimation,
    PhaseCost,
    QualityComparison,
    QuickEstimate,
    RateCard,
)
from buildcost.models.request import EstimateRequest, OptionsRequest
from buildcost.models.timeline import Timeline, TimelinePhase

__all__ = [
    "BuildCostError",
    "CalculationResult",
    "ConstructionPhase",
    "CostBreakdown",
    "CostEngine",
    "CostEstimation",
    "CostEstimationError",
    "EstimateRequest",
    "EstimateValidationError",
    "OptionsRequest",
    "PhaseCost",
    "ProjectType",
    "QualityComparison",
    "QualityTier",
    "QuickEstimate",
    "RateCard",
    "RateLimitExceededError",
    "Timeline",
    "TimelinePhase",
    "create_default_engine",
]
