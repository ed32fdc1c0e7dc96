"""Construction timeline models."""

from __future__ import annotations

from pydantic import Field, model_validator

from buildcost.models.base import CamelModel
from buildcost.models.enums import PhaseCategory, ProjectType, QualityTier


class TimelinePhase(CamelModel):
    """One scheduled construction phase.

    Days are working-day offsets from the project start, so a phase with
    ``start_day=0`` and ``end_day=12`` occupies the first twelve working days.
    """

    id: int
    name: str
    description: str
    category: PhaseCategory
    duration_days: int = Field(gt=0)
    duration_weeks: float
    start_day: int = Field(ge=0)
    end_day: int
    dependencies: list[int] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    milestones: list[str] = Field(default_factory=list)


class Timeline(CamelModel):
    """Full construction schedule for an estimate."""

    project_name: str
    project_type: ProjectType
    quality: QualityTier
    plinth_area: float
    floors: int
    total_area: float
    working_days: int
    total_duration_days: int
    total_duration_weeks: float
    phases: list[TimelinePhase]
    critical_path: list[int]

    @model_validator(mode="after")
    def phases_not_empty(self) -> Timeline:
        if not self.phases:
            msg = "Timeline must contain at least one phase"
            raise ValueError(msg)
        return self
