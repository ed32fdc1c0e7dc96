"""Construction timeline generation.

Turns the phase templates into a schedule for one project:

1. **Working days** — band the plinth area, then stretch by project type and
   floor count (see ``RateRepository.get_project_working_days``).
2. **Phase durations** — each phase takes its share of the working days;
   finishing phases are further scaled by the quality tier.
3. **Scheduling** — a phase starts when the last of its dependencies ends,
   so independent phases (roofing and MEP rough-in) run in parallel.
4. **Critical path** — walk back from the last phase to finish through the
   dependency that gates each start.

All offsets are working days from the project start. Nothing here reads
the clock, so identical inputs always produce identical timelines.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from buildcost.exceptions import CostEstimationError
from buildcost.models.enums import PhaseCategory, ProjectType
from buildcost.models.timeline import Timeline, TimelinePhase

if TYPE_CHECKING:
    from buildcost.data.phases import PhaseTemplate
    from buildcost.data.repository import RateRepository
    from buildcost.models.enums import QualityTier

_PROJECT_NAMES: dict[ProjectType, str] = {
    ProjectType.RESIDENTIAL: "Residential Construction Project",
    ProjectType.COMMERCIAL: "Commercial Construction Project",
    ProjectType.VILLA: "Villa Construction Project",
    ProjectType.RENOVATION: "Renovation Project",
}


def _ceil_days(value: float) -> int:
    return max(1, math.ceil(round(value, 6)))


def _to_weeks(days: int) -> float:
    return round(days / 7, 1)


class TimelineBuilder:
    """Builds dependency-scheduled construction timelines.

    Args:
        repository: Source of phase templates and duration parameters.
    """

    def __init__(self, repository: RateRepository) -> None:
        self._repository = repository

    def build(
        self,
        plinth_area: float,
        floors: int,
        project_type: ProjectType,
        quality: QualityTier,
    ) -> Timeline:
        working_days = self._repository.get_project_working_days(
            plinth_area, project_type, floors,
        )
        templates = sorted(
            self._repository.get_phase_templates(project_type),
            key=lambda t: t.id,
        )
        if not templates:
            msg = f"No construction phases configured for '{project_type}'"
            raise CostEstimationError(msg)

        finishing_factor = self._repository.get_finishing_factor(quality)
        included = {t.id for t in templates}
        end_days: dict[int, int] = {}
        phases: list[TimelinePhase] = []

        for template in templates:
            duration = self._phase_duration(template, working_days, finishing_factor)
            dependencies = [d for d in template.dependencies if d in included]
            for dep in dependencies:
                if dep not in end_days:
                    msg = (
                        f"Phase {template.id} depends on phase {dep}, "
                        f"which is not scheduled before it"
                    )
                    raise CostEstimationError(msg)
            start_day = max((end_days[d] for d in dependencies), default=0)
            end_day = start_day + duration
            end_days[template.id] = end_day

            phases.append(TimelinePhase(
                id=template.id,
                name=self._phase_name(template, project_type),
                description=template.description,
                category=template.category,
                duration_days=duration,
                duration_weeks=_to_weeks(duration),
                start_day=start_day,
                end_day=end_day,
                dependencies=dependencies,
                resources=self._repository.get_phase_resources(template.category),
                milestones=list(template.milestones) or ["Phase complete"],
            ))

        phases.sort(key=lambda p: (p.start_day, p.id))
        total_days = max(p.end_day for p in phases)

        return Timeline(
            project_name=_PROJECT_NAMES.get(project_type, "Construction Project"),
            project_type=project_type,
            quality=quality,
            plinth_area=plinth_area,
            floors=floors,
            total_area=plinth_area * floors,
            working_days=working_days,
            total_duration_days=total_days,
            total_duration_weeks=_to_weeks(total_days),
            phases=phases,
            critical_path=self._critical_path(phases),
        )

    @staticmethod
    def _phase_duration(
        template: PhaseTemplate,
        working_days: int,
        finishing_factor: float,
    ) -> int:
        duration = _ceil_days(template.share_percent / 100 * working_days)
        if template.category == PhaseCategory.FINISHING:
            duration = _ceil_days(duration * finishing_factor)
        return duration

    @staticmethod
    def _phase_name(template: PhaseTemplate, project_type: ProjectType) -> str:
        if project_type == ProjectType.RENOVATION:
            return template.name.replace("Construction", "Renovation")
        return template.name

    @staticmethod
    def _critical_path(phases: list[TimelinePhase]) -> list[int]:
        """Ids of the phases that determine the total duration, in order."""
        by_id = {p.id: p for p in phases}
        # Latest finish; on ties prefer the lowest id for a stable answer.
        current = min(phases, key=lambda p: (-p.end_day, p.id))
        path = [current.id]
        while current.dependencies:
            gating = [
                by_id[d] for d in current.dependencies
                if by_id[d].end_day == current.start_day
            ]
            if not gating:
                break
            current = min(gating, key=lambda p: p.id)
            path.append(current.id)
        path.reverse()
        return path
