"""Core cost estimation engine for the BuildCost estimator.

The CostEngine implements a rate-per-square-foot estimation methodology:

1. **Rate lookup** — Find the NPR/sq ft rate for the quality tier and project
   type (tier base rate × project type factor).
2. **Floor scaling** — The ground floor counts in full; each additional floor
   adds ``additional_floor_factor`` of a floor, since upper floors share the
   foundation, site work and roof.
3. **Breakdown** — Split the total into materials, labor and other costs using
   the tier's shares. "Other" absorbs rounding so the parts always sum to the
   total.
4. **Timeline** — Schedule the construction phases for the same inputs (see
   ``buildcost.timeline``).

The engine holds no mutable state. Identical requests always produce
identical results, and one instance can serve concurrent requests.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from buildcost.data.rates import RATES_LAST_UPDATED
from buildcost.exceptions import EstimateValidationError
from buildcost.models.enums import ConstructionPhase, HealthStatus, ProjectType, QualityTier
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
from buildcost.models.request import (
    EstimateRequest,
    OptionsRequest,
    parse_estimate_request,
    parse_options_request,
)
from buildcost.models.service import HealthReport
from buildcost.timeline import TimelineBuilder

if TYPE_CHECKING:
    from collections.abc import Mapping

    from buildcost.data.repository import RateRepository
    from buildcost.models.timeline import Timeline

logger = logging.getLogger(__name__)

ENGINE_VERSION = "0.1.0"

# Input used by the health probe.
_PROBE_REQUEST = EstimateRequest(plinth_area=1000.0)

_CAPABILITIES = (
    "costCalculation",
    "timelineGeneration",
    "qualityComparison",
    "quickEstimate",
    "phaseCost",
)


class CostEngine:
    """Estimation engine that converts building parameters into costs.

    Args:
        repository: The rate repository providing rates, breakdown shares
            and schedule parameters.
        timeline_builder: Optional pre-built timeline builder. Defaults to one
            backed by the same repository.

    Example::

        from buildcost.data.repository import RateRepository

        engine = CostEngine(RateRepository())
        result = engine.calculate({"plinth_area": 2000, "floors": 2})
    """

    def __init__(
        self,
        repository: RateRepository,
        timeline_builder: TimelineBuilder | None = None,
    ) -> None:
        self._repository = repository
        self._timeline_builder = timeline_builder or TimelineBuilder(repository)

    @property
    def repository(self) -> RateRepository:
        return self._repository

    def supported_qualities(self) -> list[QualityTier]:
        return self._repository.supported_qualities()

    def supported_project_types(self) -> list[ProjectType]:
        return self._repository.supported_project_types()

    def floor_multiplier(self, floors: int) -> float:
        """Ground-floor equivalents for a building of ``floors`` floors."""
        if floors < 1:
            msg = f"floors must be at least 1, got {floors}"
            raise EstimateValidationError(msg)
        return round(1 + self._repository.additional_floor_factor * (floors - 1), 4)

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------

    def estimate_cost(self, request: EstimateRequest | Mapping[str, Any]) -> CostEstimation:
        """Price one configuration at one quality tier.

        Raises:
            EstimateValidationError: If the request is invalid.
        """
        request = parse_estimate_request(request)

        rate = self._repository.get_rate(request.quality, request.project_type)
        multiplier = self.floor_multiplier(request.floors)
        total_cost = max(1, round(rate * request.plinth_area * multiplier))

        materials_share, labor_share, _ = self._repository.get_breakdown_shares(
            request.quality,
        )
        materials = round(total_cost * materials_share)
        labor = round(total_cost * labor_share)
        breakdown = CostBreakdown(
            materials=materials,
            labor=labor,
            other=total_cost - materials - labor,
        )

        return CostEstimation(
            quality=request.quality,
            project_type=request.project_type,
            plinth_area=request.plinth_area,
            floors=request.floors,
            total_area=request.total_area,
            rate_per_sq_ft=rate,
            floor_multiplier=multiplier,
            effective_rate_per_sq_ft=round(total_cost / request.total_area, 2),
            total_cost=total_cost,
            breakdown=breakdown,
        )

    def calculate(self, request: EstimateRequest | Mapping[str, Any]) -> CalculationResult:
        """Produce the cost estimate and timeline for a building.

        Args:
            request: An EstimateRequest, or a mapping with the keys
                ``plinth_area``, ``floors``, ``quality`` and ``project_type``.

        Returns:
            The estimate for the requested tier, the construction timeline,
            a comparison across all tiers and an echo of the normalized input.

        Raises:
            EstimateValidationError: If plinth_area is not positive, floors is
                below 1, or quality / project_type is not recognised.
        """
        started = time.perf_counter()
        request = parse_estimate_request(request)

        cost_estimation = self.estimate_cost(request)
        timeline = self.timeline(
            request.plinth_area,
            project_type=request.project_type,
            floors=request.floors,
            quality=request.quality,
        )
        comparison = self.compare_options(request)

        logger.info(
            "Cost calculation: %.1f sq ft x %d floors, %s/%s -> %d %s (%.1fms)",
            request.plinth_area,
            request.floors,
            request.quality,
            request.project_type,
            cost_estimation.total_cost,
            cost_estimation.currency,
            (time.perf_counter() - started) * 1000,
        )

        return CalculationResult(
            cost_estimation=cost_estimation,
            timeline=timeline,
            quality_comparison=comparison,
            request_details=RequestDetails(
                plinth_area=request.plinth_area,
                floors=request.floors,
                total_area=request.total_area,
                quality=request.quality,
                project_type=request.project_type,
            ),
        )

    def compare_options(
        self, request: OptionsRequest | Mapping[str, Any],
    ) -> QualityComparison:
        """Estimate every quality tier with all other inputs held fixed."""
        options = parse_options_request(request)
        comparisons = {
            quality: self.estimate_cost(options.with_quality(quality))
            for quality in self.supported_qualities()
        }
        return QualityComparison(
            plinth_area=options.plinth_area,
            floors=options.floors,
            project_type=options.project_type,
            comparisons=comparisons,
        )

    def quick_estimate(self, area: float) -> QuickEstimate:
        """Preview every tier for a single-floor residential build of ``area``."""
        comparison = self.compare_options({"plinth_area": area})
        return QuickEstimate(area=comparison.plinth_area, estimates=comparison.comparisons)

    def phase_cost(self, area: float, phase: str | ConstructionPhase) -> PhaseCost:
        """Cost of a single construction phase over ``area`` sq ft.

        Raises:
            EstimateValidationError: If the area is invalid or the phase is
                unknown.
        """
        options = parse_options_request({"plinth_area": area})
        try:
            construction_phase = ConstructionPhase(str(phase).strip().lower())
        except ValueError as exc:
            valid = ", ".join(p.value for p in ConstructionPhase)
            msg = f"Invalid construction phase '{phase}'. Valid phases: {valid}"
            raise EstimateValidationError(
                msg, [{"field": "phase", "message": msg}],
            ) from exc

        rate = self._repository.get_phase_rate(construction_phase)
        return PhaseCost(
            phase=construction_phase,
            plinth_area=options.plinth_area,
            rate_per_sq_ft=rate,
            cost=round(rate * options.plinth_area),
        )

    def timeline(
        self,
        plinth_area: float,
        project_type: ProjectType | str = ProjectType.RESIDENTIAL,
        floors: int = 1,
        quality: QualityTier | str = QualityTier.STANDARD,
    ) -> Timeline:
        """Schedule the construction phases for a building."""
        request = parse_estimate_request({
            "plinth_area": plinth_area,
            "floors": floors,
            "quality": quality,
            "project_type": project_type,
        })
        return self._timeline_builder.build(
            plinth_area=request.plinth_area,
            floors=request.floors,
            project_type=request.project_type,
            quality=request.quality,
        )

    def rates(self) -> RateCard:
        """The published rate table for every tier and project type."""
        qualities = self.supported_qualities()
        project_types = self.supported_project_types()
        return RateCard(
            base_rates={q: self._repository.get_base_rate(q) for q in qualities},
            project_type_factors={
                p: self._repository.get_project_type_factor(p) for p in project_types
            },
            rates={
                p: {q: self._repository.get_rate(q, p) for q in qualities}
                for p in project_types
            },
            additional_floor_factor=self._repository.additional_floor_factor,
            last_updated=RATES_LAST_UPDATED,
            note="Rates may vary based on location, materials, and market conditions",
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def health(self, degraded_threshold_ms: float = 500.0) -> HealthReport:
        """Run a probe calculation and report how the engine is doing.

        The probe touches no shared state. The report is ``degraded`` when
        the probe fails or takes longer than ``degraded_threshold_ms``.
        """
        started = time.perf_counter()
        error: str | None = None
        try:
            self.estimate_cost(_PROBE_REQUEST)
            self._timeline_builder.build(
                plinth_area=_PROBE_REQUEST.plinth_area,
                floors=_PROBE_REQUEST.floors,
                project_type=_PROBE_REQUEST.project_type,
                quality=_PROBE_REQUEST.quality,
            )
        except Exception as exc:  # noqa: BLE001 (reported as degraded)
            logger.exception("Calculator health probe failed")
            error = str(exc)
        elapsed_ms = (time.perf_counter() - started) * 1000

        healthy = error is None and elapsed_ms <= degraded_threshold_ms
        if error is None and not healthy:
            logger.warning(
                "Calculator health probe slow: %.1fms > %.1fms",
                elapsed_ms,
                degraded_threshold_ms,
            )
        return HealthReport(
            status=HealthStatus.HEALTHY if healthy else HealthStatus.DEGRADED,
            response_time_ms=round(elapsed_ms, 3),
            capabilities={name: error is None for name in _CAPABILITIES},
            supported_qualities=self.supported_qualities(),
            supported_project_types=self.supported_project_types(),
            error=error,
        )
