"""Rate repository for looking up pricing and scheduling parameters."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from buildcost.data.phases import PHASE_RESOURCES, PHASE_TEMPLATES
from buildcost.data.rates import (
    ADDITIONAL_FLOOR_FACTOR,
    BASE_RATES,
    BREAKDOWN_SHARES,
    FINISHING_DURATION_FACTORS,
    FLOOR_TIMELINE_MULTIPLIERS,
    PHASE_RATES,
    PROJECT_TYPE_FACTORS,
    PROJECT_TYPE_TIMELINE_FACTORS,
    TIMELINE_AREA_BANDS,
)
from buildcost.exceptions import CostEstimationError
from buildcost.models.enums import ProjectType, QualityTier

if TYPE_CHECKING:
    from buildcost.data.phases import PhaseTemplate
    from buildcost.models.enums import ConstructionPhase, PhaseCategory


class RateRepository:
    """Repository for looking up rates and schedule parameters.

    Wraps the in-memory rate tables. Every table can be overridden at
    construction, which is how tests and alternative price lists plug in.
    The repository is read-only after construction and safe to share.
    """

    def __init__(
        self,
        base_rates: dict[QualityTier, int] | None = None,
        project_type_factors: dict[ProjectType, float] | None = None,
        breakdown_shares: dict[QualityTier, tuple[float, float, float]] | None = None,
        additional_floor_factor: float = ADDITIONAL_FLOOR_FACTOR,
        phase_templates: list[PhaseTemplate] | None = None,
    ) -> None:
        self._base_rates = dict(base_rates or BASE_RATES)
        self._project_type_factors = dict(project_type_factors or PROJECT_TYPE_FACTORS)
        self._breakdown_shares = dict(breakdown_shares or BREAKDOWN_SHARES)
        self._additional_floor_factor = additional_floor_factor
        self._phase_templates = list(phase_templates or PHASE_TEMPLATES)

        missing = [q.value for q in QualityTier if q not in self._base_rates]
        if missing:
            msg = f"Base rates missing for quality tiers: {', '.join(missing)}"
            raise CostEstimationError(msg)

    @property
    def additional_floor_factor(self) -> float:
        return self._additional_floor_factor

    def supported_qualities(self) -> list[QualityTier]:
        """Tiers in declaration order (cheapest first)."""
        return [q for q in QualityTier if q in self._base_rates]

    def supported_project_types(self) -> list[ProjectType]:
        return [p for p in ProjectType if p in self._project_type_factors]

    def get_base_rate(self, quality: QualityTier) -> int:
        return self._base_rates[quality]

    def get_project_type_factor(self, project_type: ProjectType) -> float:
        factor = self._project_type_factors.get(project_type)
        if factor is None:
            msg = f"No rate factor configured for project type '{project_type}'"
            raise CostEstimationError(msg)
        return factor

    def get_rate(self, quality: QualityTier, project_type: ProjectType) -> int:
        """Rate per sq ft for a tier and project type, rounded to whole NPR."""
        base = self._base_rates.get(quality)
        if base is None:
            msg = f"No base rate configured for quality '{quality}'"
            raise CostEstimationError(msg)
        return round(base * self.get_project_type_factor(project_type))

    def get_breakdown_shares(self, quality: QualityTier) -> tuple[float, float, float]:
        """(materials, labor, other) fractions for a tier."""
        return self._breakdown_shares.get(
            quality, BREAKDOWN_SHARES[QualityTier.STANDARD]
        )

    def get_phase_rate(self, phase: ConstructionPhase) -> int:
        return PHASE_RATES[phase]

    def get_phase_templates(self, project_type: ProjectType) -> list[PhaseTemplate]:
        """Phase templates that apply to a project type.

        Renovations skip site preparation and foundation work.
        """
        if project_type == ProjectType.RENOVATION:
            return [t for t in self._phase_templates if not t.new_build_only]
        return list(self._phase_templates)

    def get_phase_resources(self, category: PhaseCategory) -> list[str]:
        return list(PHASE_RESOURCES.get(category, ["General Worker"]))

    def get_base_working_days(self, plinth_area: float) -> int:
        """Working days for a single-floor residential build of this area."""
        for upper_bound, days in TIMELINE_AREA_BANDS:
            if plinth_area <= upper_bound:
                return days
        return TIMELINE_AREA_BANDS[-1][1]

    def get_timeline_factor(self, project_type: ProjectType) -> float:
        return PROJECT_TYPE_TIMELINE_FACTORS.get(project_type, 1.0)

    def get_floor_timeline_multiplier(self, floors: int) -> float:
        """Schedule stretch for a floor count; counts past the table use the last entry."""
        index = min(max(floors, 1), len(FLOOR_TIMELINE_MULTIPLIERS)) - 1
        return FLOOR_TIMELINE_MULTIPLIERS[index]

    def get_finishing_factor(self, quality: QualityTier) -> float:
        return FINISHING_DURATION_FACTORS.get(quality, 1.0)

    def get_project_working_days(
        self,
        plinth_area: float,
        project_type: ProjectType,
        floors: int,
    ) -> int:
        """Total working days before per-phase quality scaling."""
        days = (
            self.get_base_working_days(plinth_area)
            * self.get_timeline_factor(project_type)
            * self.get_floor_timeline_multiplier(floors)
        )
        # Round away float noise (180 * 1.3 is 234.00000000000003).
        return math.ceil(round(days, 6))
