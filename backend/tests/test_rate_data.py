"""Tests for the rate data layer."""

from __future__ import annotations

import pytest

from buildcost.data.phases import PHASE_RESOURCES, PHASE_TEMPLATES
from buildcost.data.rates import (
    BASE_RATES,
    BREAKDOWN_SHARES,
    FINISHING_DURATION_FACTORS,
    PHASE_RATES,
    PROJECT_TYPE_FACTORS,
    TIMELINE_AREA_BANDS,
)
from buildcost.data.repository import RateRepository
from buildcost.exceptions import CostEstimationError
from buildcost.models.enums import (
    ConstructionPhase,
    PhaseCategory,
    ProjectType,
    QualityTier,
)

# ---------------------------------------------------------------------------
# Rate table integrity
# ---------------------------------------------------------------------------


class TestRateTables:
    def test_every_tier_has_a_rate(self) -> None:
        assert set(BASE_RATES) == set(QualityTier)

    def test_rates_rise_with_tier(self) -> None:
        rates = [BASE_RATES[q] for q in QualityTier]
        assert rates == sorted(rates)
        assert len(set(rates)) == len(rates)

    def test_every_project_type_has_a_factor(self) -> None:
        assert set(PROJECT_TYPE_FACTORS) == set(ProjectType)
        assert all(f > 0 for f in PROJECT_TYPE_FACTORS.values())

    @pytest.mark.parametrize("quality", list(QualityTier))
    def test_breakdown_shares_sum_to_one(self, quality: QualityTier) -> None:
        assert sum(BREAKDOWN_SHARES[quality]) == pytest.approx(1.0)

    def test_every_phase_has_a_rate(self) -> None:
        assert set(PHASE_RATES) == set(ConstructionPhase)

    def test_area_bands_ascending(self) -> None:
        bounds = [bound for bound, _ in TIMELINE_AREA_BANDS]
        days = [d for _, d in TIMELINE_AREA_BANDS]
        assert bounds == sorted(bounds)
        assert days == sorted(days)
        assert bounds[-1] == float("inf")

    def test_finishing_factors_rise_with_tier(self) -> None:
        factors = [FINISHING_DURATION_FACTORS[q] for q in QualityTier]
        assert factors == sorted(factors)


class TestPhaseTemplates:
    def test_shares_sum_to_100(self) -> None:
        assert sum(t.share_percent for t in PHASE_TEMPLATES) == pytest.approx(100)

    def test_unique_ids(self) -> None:
        ids = [t.id for t in PHASE_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_dependencies_point_backwards(self) -> None:
        for template in PHASE_TEMPLATES:
            assert all(dep < template.id for dep in template.dependencies)

    def test_every_category_has_resources(self) -> None:
        assert set(PHASE_RESOURCES) == set(PhaseCategory)


# ---------------------------------------------------------------------------
# Repository lookups
# ---------------------------------------------------------------------------


@pytest.fixture()
def repo() -> RateRepository:
    return RateRepository()


class TestRateLookup:
    def test_rate_applies_project_factor(self, repo: RateRepository) -> None:
        assert repo.get_rate(QualityTier.STANDARD, ProjectType.RESIDENTIAL) == 2200
        assert repo.get_rate(QualityTier.PREMIUM, ProjectType.RENOVATION) == 1680

    def test_custom_tables(self) -> None:
        repo = RateRepository(
            base_rates={q: 1000 for q in QualityTier},
            project_type_factors={ProjectType.RESIDENTIAL: 1.5},
        )
        assert repo.get_rate(QualityTier.ECONOMY, ProjectType.RESIDENTIAL) == 1500
        assert repo.supported_project_types() == [ProjectType.RESIDENTIAL]
        with pytest.raises(CostEstimationError, match="commercial"):
            repo.get_rate(QualityTier.ECONOMY, ProjectType.COMMERCIAL)

    def test_missing_tier_rejected(self) -> None:
        with pytest.raises(CostEstimationError, match="premium"):
            RateRepository(base_rates={
                QualityTier.ECONOMY: 1800,
                QualityTier.STANDARD: 2200,
            })

    def test_supported_qualities_in_tier_order(self, repo: RateRepository) -> None:
        assert repo.supported_qualities() == [
            QualityTier.ECONOMY,
            QualityTier.STANDARD,
            QualityTier.PREMIUM,
        ]

    def test_phase_rate(self, repo: RateRepository) -> None:
        assert repo.get_phase_rate(ConstructionPhase.STRUCTURE) == 600


class TestScheduleLookup:
    @pytest.mark.parametrize(
        ("area", "days"),
        [(500, 120), (1000, 120), (1000.1, 180), (5000, 270), (9999, 365), (45_000, 480)],
    )
    def test_base_working_days(self, repo: RateRepository, area: float, days: int) -> None:
        assert repo.get_base_working_days(area) == days

    @pytest.mark.parametrize(
        ("floors", "multiplier"),
        [(1, 1.0), (2, 1.3), (3, 1.6), (4, 1.8), (5, 2.0), (9, 2.0)],
    )
    def test_floor_timeline_multiplier(
        self, repo: RateRepository, floors: int, multiplier: float,
    ) -> None:
        assert repo.get_floor_timeline_multiplier(floors) == multiplier

    def test_project_working_days_avoids_float_noise(self, repo: RateRepository) -> None:
        # 180 * 1.0 * 1.3 must be 234, not 235.
        assert repo.get_project_working_days(2000, ProjectType.RESIDENTIAL, 2) == 234

    def test_renovation_templates(self, repo: RateRepository) -> None:
        names = [t.name for t in repo.get_phase_templates(ProjectType.RENOVATION)]
        assert "Foundation Work" not in names
        assert len(names) == len(PHASE_TEMPLATES) - 2

    def test_resources_are_copies(self) -> None:
        repo = RateRepository()
        resources = repo.get_phase_resources(PhaseCategory.MEP)
        resources.append("Mutated")
        assert "Mutated" not in repo.get_phase_resources(PhaseCategory.MEP)
