"""Cost estimate output models for the BuildCost estimator."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from buildcost.models.base import CamelModel
from buildcost.models.enums import ConstructionPhase, ProjectType, QualityTier
from buildcost.models.timeline import Timeline

DEFAULT_CURRENCY = "NPR"


class CostBreakdown(CamelModel):
    """Split of a total cost into materials, labor and other costs.

    "Other" covers design, supervision, permits and contingency.
    """

    materials: int = Field(ge=0)
    labor: int = Field(ge=0)
    other: int = Field(ge=0)

    @property
    def total(self) -> int:
        return self.materials + self.labor + self.other

    def percentages(self) -> dict[str, float]:
        """Share of each component in percent, rounded to one decimal."""
        total = self.total
        if total == 0:
            return {"materials": 0.0, "labor": 0.0, "other": 0.0}
        return {
            "materials": round(self.materials / total * 100, 1),
            "labor": round(self.labor / total * 100, 1),
            "other": round(self.other / total * 100, 1),
        }


class CostEstimation(CamelModel):
    """Cost of building one configuration at one quality tier.

    ``rate_per_sq_ft`` is the looked-up rate for the tier and project type.
    ``total_cost`` applies it to the plinth area scaled by the floor
    multiplier, so upper floors cost less than the ground floor.
    """

    quality: QualityTier
    project_type: ProjectType
    plinth_area: float
    floors: int
    total_area: float
    rate_per_sq_ft: int = Field(gt=0)
    floor_multiplier: float = Field(gt=0)
    effective_rate_per_sq_ft: float = Field(gt=0)
    total_cost: int = Field(gt=0)
    breakdown: CostBreakdown
    currency: str = DEFAULT_CURRENCY

    @model_validator(mode="after")
    def breakdown_matches_total(self) -> CostEstimation:
        if self.breakdown.total != self.total_cost:
            msg = (
                f"Breakdown total {self.breakdown.total} does not match "
                f"total cost {self.total_cost}"
            )
            raise ValueError(msg)
        return self

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat dict of display strings for the calculator widget."""
        from buildcost.formatting import (
            format_area,
            format_compact,
            format_currency,
            format_rate,
        )

        shares = self.breakdown.percentages()
        return {
            "quality": self.quality.value,
            "projectType": self.project_type.value,
            "totalArea": format_area(self.total_area),
            "totalCost": format_currency(self.total_cost, self.currency),
            "totalCostCompact": format_compact(self.total_cost, self.currency),
            "ratePerSqFt": format_rate(self.rate_per_sq_ft, self.currency),
            "pieChart": [
                {
                    "name": "Materials",
                    "value": shares["materials"],
                    "amount": self.breakdown.materials,
                },
                {
                    "name": "Labor",
                    "value": shares["labor"],
                    "amount": self.breakdown.labor,
                },
                {
                    "name": "Design & Others",
                    "value": shares["other"],
                    "amount": self.breakdown.other,
                },
            ],
        }


class QualityComparison(CamelModel):
    """Side-by-side estimates for every quality tier."""

    plinth_area: float
    floors: int
    project_type: ProjectType
    comparisons: dict[QualityTier, CostEstimation]
    currency: str = DEFAULT_CURRENCY


class QuickEstimate(CamelModel):
    """Single-floor residential preview of every tier for one area."""

    area: float
    estimates: dict[QualityTier, CostEstimation]
    currency: str = DEFAULT_CURRENCY


class PhaseCost(CamelModel):
    """Cost of one construction phase for a given area."""

    phase: ConstructionPhase
    plinth_area: float
    rate_per_sq_ft: int
    cost: int
    currency: str = DEFAULT_CURRENCY


class RateCard(CamelModel):
    """Published rate table for the calculator."""

    base_rates: dict[QualityTier, int]
    project_type_factors: dict[ProjectType, float]
    rates: dict[ProjectType, dict[QualityTier, int]]
    additional_floor_factor: float
    currency: str = DEFAULT_CURRENCY
    unit: str = "per sq ft"
    last_updated: str
    note: str


class RequestDetails(CamelModel):
    """Normalized echo of the calculation input."""

    plinth_area: float
    floors: int
    total_area: float
    quality: QualityTier
    project_type: ProjectType


class CalculationResult(CamelModel):
    """Full result of a cost calculation."""

    cost_estimation: CostEstimation
    timeline: Timeline
    quality_comparison: QualityComparison
    request_details: RequestDetails
