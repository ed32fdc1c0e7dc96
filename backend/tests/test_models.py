"""Tests for request validation and estimate output models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from buildcost.exceptions import EstimateValidationError
from buildcost.models import (
    CostBreakdown,
    CostEstimation,
    EstimateRequest,
    OptionsRequest,
    ProjectType,
    QualityTier,
    Timeline,
)
from buildcost.models.request import (
    describe_validation_errors,
    parse_estimate_request,
    parse_options_request,
)

# ---------- EstimateRequest ----------


class TestEstimateRequest:
    def test_defaults(self) -> None:
        request = EstimateRequest(plinth_area=1200)
        assert request.floors == 1
        assert request.quality == QualityTier.STANDARD
        assert request.project_type == ProjectType.RESIDENTIAL

    def test_total_area(self) -> None:
        request = EstimateRequest(plinth_area=1200, floors=3)
        assert request.total_area == 3600

    def test_choices_normalized(self) -> None:
        request = EstimateRequest(
            plinth_area=1200, quality="  PREMIUM ", project_type="Commercial",
        )
        assert request.quality == QualityTier.PREMIUM
        assert request.project_type == ProjectType.COMMERCIAL

    def test_numeric_strings_accepted(self) -> None:
        request = EstimateRequest.model_validate({"plinth_area": "1500", "floors": "2"})
        assert request.plinth_area == 1500.0
        assert request.floors == 2

    def test_frozen(self) -> None:
        request = EstimateRequest(plinth_area=1200)
        with pytest.raises(ValidationError):
            request.floors = 2  # type: ignore[misc]

    @pytest.mark.parametrize("area", [0, -5, 50_000.5])
    def test_area_bounds(self, area: float) -> None:
        with pytest.raises(ValidationError):
            EstimateRequest(plinth_area=area)

    def test_area_upper_bound_inclusive(self) -> None:
        assert EstimateRequest(plinth_area=50_000).plinth_area == 50_000


class TestOptionsRequest:
    def test_with_quality(self) -> None:
        options = OptionsRequest(plinth_area=900, floors=2, project_type="villa")
        request = options.with_quality(QualityTier.ECONOMY)
        assert isinstance(request, EstimateRequest)
        assert request.quality == QualityTier.ECONOMY
        assert request.project_type == ProjectType.VILLA
        assert request.floors == 2

    def test_parse_strips_quality(self) -> None:
        request = EstimateRequest(plinth_area=900, quality=QualityTier.PREMIUM)
        options = parse_options_request(request)
        assert type(options) is OptionsRequest
        assert not hasattr(options, "quality")


class TestParsing:
    def test_passes_models_through(self) -> None:
        request = EstimateRequest(plinth_area=1000)
        assert parse_estimate_request(request) is request

    def test_wraps_pydantic_errors(self) -> None:
        with pytest.raises(EstimateValidationError) as exc_info:
            parse_estimate_request({"plinth_area": 0})
        err = exc_info.value
        assert err.message.startswith("plinth_area:")
        assert err.errors[0]["field"] == "plinth_area"
        assert isinstance(err.__cause__, ValidationError)

    def test_describe_skips_body_location(self) -> None:
        described = describe_validation_errors([
            {"loc": ("body", "floors"), "msg": "Input should be greater than 0"},
            {"loc": (), "msg": "Bad request"},
        ])
        assert described == [
            {"field": "floors", "message": "Input should be greater than 0"},
            {"field": None, "message": "Bad request"},
        ]


# ---------- Output models ----------


def _estimation(**overrides: object) -> CostEstimation:
    values: dict[str, object] = {
        "quality": QualityTier.STANDARD,
        "project_type": ProjectType.RESIDENTIAL,
        "plinth_area": 1000.0,
        "floors": 1,
        "total_area": 1000.0,
        "rate_per_sq_ft": 2200,
        "floor_multiplier": 1.0,
        "effective_rate_per_sq_ft": 2200.0,
        "total_cost": 2_200_000,
        "breakdown": CostBreakdown(materials=1_276_000, labor=660_000, other=264_000),
    }
    values.update(overrides)
    return CostEstimation(**values)  # type: ignore[arg-type]


class TestCostEstimation:
    def test_camel_case_payload(self) -> None:
        payload = _estimation().to_api_dict()
        assert payload["totalCost"] == 2_200_000
        assert payload["ratePerSqFt"] == 2200
        assert payload["effectiveRatePerSqFt"] == 2200.0
        assert payload["projectType"] == "residential"
        assert payload["breakdown"] == {
            "materials": 1_276_000,
            "labor": 660_000,
            "other": 264_000,
        }
        assert payload["currency"] == "NPR"

    def test_populate_by_alias(self) -> None:
        payload = _estimation().to_api_dict()
        assert CostEstimation.model_validate(payload) == _estimation()

    def test_breakdown_must_match_total(self) -> None:
        with pytest.raises(ValidationError, match="does not match"):
            _estimation(total_cost=2_000_000)

    def test_total_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _estimation(
                total_cost=0,
                breakdown=CostBreakdown(materials=0, labor=0, other=0),
            )

    def test_summary_dict(self) -> None:
        summary = _estimation().to_summary_dict()
        assert summary["totalCost"] == "NPR 2,200,000"
        assert summary["totalCostCompact"] == "NPR 22.00 L"
        assert summary["ratePerSqFt"] == "NPR 2,200 / sq ft"
        assert summary["totalArea"] == "1,000 sq ft"
        assert [s["name"] for s in summary["pieChart"]] == [
            "Materials", "Labor", "Design & Others",
        ]
        assert summary["pieChart"][0]["value"] == 58.0


class TestCostBreakdown:
    def test_percentages(self) -> None:
        breakdown = CostBreakdown(materials=500, labor=300, other=200)
        assert breakdown.total == 1000
        assert breakdown.percentages() == {"materials": 50.0, "labor": 30.0, "other": 20.0}

    def test_empty_percentages(self) -> None:
        breakdown = CostBreakdown(materials=0, labor=0, other=0)
        assert breakdown.percentages() == {"materials": 0.0, "labor": 0.0, "other": 0.0}

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CostBreakdown(materials=-1, labor=0, other=0)


class TestTimelineModel:
    def test_requires_phases(self) -> None:
        with pytest.raises(ValidationError, match="at least one phase"):
            Timeline(
                project_name="Empty",
                project_type=ProjectType.RESIDENTIAL,
                quality=QualityTier.STANDARD,
                plinth_area=1000,
                floors=1,
                total_area=1000,
                working_days=120,
                total_duration_days=0,
                total_duration_weeks=0,
                phases=[],
                critical_path=[],
            )
