"""Request models for the BuildCost estimator.

Field names match the JSON keys the calculator form posts
(``plinth_area``, ``project_type``), so FastAPI can bind request bodies
directly to these models.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from buildcost.exceptions import EstimateValidationError
from buildcost.models.enums import ProjectType, QualityTier

MAX_PLINTH_AREA_SQFT = 50_000.0
MAX_FLOORS = 5

# Tier names accepted from older calculator clients.
_LEGACY_QUALITY_NAMES: dict[str, str] = {
    "basic": QualityTier.ECONOMY.value,
}


def _normalize_choice(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class OptionsRequest(BaseModel):
    """Building parameters with the quality tier left open.

    Used by the tier comparison, which fills in each tier in turn.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    plinth_area: float = Field(gt=0, le=MAX_PLINTH_AREA_SQFT)
    floors: int = Field(default=1, ge=1, le=MAX_FLOORS)
    project_type: ProjectType = ProjectType.RESIDENTIAL

    @field_validator("project_type", mode="before")
    @classmethod
    def normalize_project_type(cls, v: Any) -> Any:
        return _normalize_choice(v)

    def with_quality(self, quality: QualityTier) -> EstimateRequest:
        """Complete this request with a quality tier."""
        return EstimateRequest(
            plinth_area=self.plinth_area,
            floors=self.floors,
            quality=quality,
            project_type=self.project_type,
        )


class EstimateRequest(OptionsRequest):
    """Full input to a cost calculation."""

    quality: QualityTier = QualityTier.STANDARD

    @field_validator("quality", mode="before")
    @classmethod
    def normalize_quality(cls, v: Any) -> Any:
        v = _normalize_choice(v)
        if isinstance(v, str):
            return _LEGACY_QUALITY_NAMES.get(v, v)
        return v

    @property
    def total_area(self) -> float:
        """Built-up area across all floors, in square feet."""
        return self.plinth_area * self.floors


def describe_validation_errors(
    errors: list[Any],
    skip_locations: tuple[str, ...] = ("body",),
) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into ``{field, message}`` entries."""
    described: list[dict[str, Any]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in skip_locations]
        described.append({
            "field": ".".join(loc) or None,
            "message": err.get("msg", "Invalid value"),
        })
    return described


def _validate(model: type[OptionsRequest], data: Any) -> Any:
    if isinstance(data, model):
        return data
    if not isinstance(data, Mapping):
        msg = f"Expected a mapping of building parameters, got {type(data).__name__}"
        raise EstimateValidationError(msg)
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        errors = describe_validation_errors(exc.errors())
        first = errors[0]
        msg = (
            f"{first['field']}: {first['message']}"
            if first["field"]
            else first["message"]
        )
        raise EstimateValidationError(msg, errors) from exc


def parse_estimate_request(data: EstimateRequest | Mapping[str, Any]) -> EstimateRequest:
    """Validate raw input into an EstimateRequest.

    Raises:
        EstimateValidationError: If any field is missing, out of range, or
            not a recognised choice.
    """
    return _validate(EstimateRequest, data)  # type: ignore[no-any-return]


def parse_options_request(data: OptionsRequest | Mapping[str, Any]) -> OptionsRequest:
    """Validate raw input into an OptionsRequest (quality is ignored)."""
    if isinstance(data, OptionsRequest):
        return OptionsRequest(
            plinth_area=data.plinth_area,
            floors=data.floors,
            project_type=data.project_type,
        )
    return _validate(OptionsRequest, data)  # type: ignore[no-any-return]
