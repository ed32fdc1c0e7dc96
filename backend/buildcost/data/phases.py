"""Construction phase templates used to build timelines.

Shares are percentages of the project's working days and sum to 100.
Dependencies refer to template ids.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from buildcost.models.enums import PhaseCategory


class PhaseTemplate(BaseModel):
    """Static description of one construction phase."""

    id: int
    name: str
    description: str
    category: PhaseCategory
    share_percent: float = Field(gt=0, le=100)
    dependencies: list[int] = Field(default_factory=list)
    milestones: list[str] = Field(default_factory=list)
    new_build_only: bool = False


PHASE_RESOURCES: dict[PhaseCategory, list[str]] = {
    PhaseCategory.FOUNDATION: ["Excavator", "Concrete Mixer", "Mason", "Helper"],
    PhaseCategory.STRUCTURE: ["Crane", "Mason", "Steel Fixer", "Carpenter"],
    PhaseCategory.ROOFING: ["Crane", "Carpenter", "Waterproofing Specialist"],
    PhaseCategory.MEP: ["Electrician", "Plumber", "Helper"],
    PhaseCategory.FINISHING: ["Painter", "Tiler", "Carpenter", "Helper"],
}

PHASE_TEMPLATES: list[PhaseTemplate] = [
    PhaseTemplate(
        id=1,
        name="Site Preparation & Excavation",
        description="Land clearing, excavation, and site setup",
        category=PhaseCategory.FOUNDATION,
        share_percent=8,
        milestones=["Site clearance complete", "Excavation complete"],
        new_build_only=True,
    ),
    PhaseTemplate(
        id=2,
        name="Foundation Work",
        description="Foundation laying, concrete work, and curing",
        category=PhaseCategory.FOUNDATION,
        share_percent=15,
        dependencies=[1],
        milestones=["Foundation laid", "Concrete cured"],
        new_build_only=True,
    ),
    PhaseTemplate(
        id=3,
        name="Plinth & Column Construction",
        description="Plinth beam and column construction",
        category=PhaseCategory.STRUCTURE,
        share_percent=12,
        dependencies=[2],
        milestones=["Plinth complete", "Columns erected"],
    ),
    PhaseTemplate(
        id=4,
        name="Wall Construction",
        description="Brick/block masonry and structural walls",
        category=PhaseCategory.STRUCTURE,
        share_percent=18,
        dependencies=[3],
        milestones=["Wall masonry complete"],
    ),
    PhaseTemplate(
        id=5,
        name="Roof Structure",
        description="Roof beam, slab, and waterproofing",
        category=PhaseCategory.ROOFING,
        share_percent=12,
        dependencies=[4],
        milestones=["Roof slab complete", "Waterproofing done"],
    ),
    PhaseTemplate(
        id=6,
        name="Electrical & Plumbing Rough-in",
        description="Electrical wiring and plumbing installation",
        category=PhaseCategory.MEP,
        share_percent=10,
        dependencies=[4],
        milestones=["Wiring complete", "Plumbing rough-in done"],
    ),
    PhaseTemplate(
        id=7,
        name="Plastering & Rendering",
        description="Internal and external plastering",
        category=PhaseCategory.FINISHING,
        share_percent=8,
        dependencies=[5, 6],
        milestones=["Internal plastering done", "External rendering complete"],
    ),
    PhaseTemplate(
        id=8,
        name="Flooring & Tiling",
        description="Floor installation and bathroom tiling",
        category=PhaseCategory.FINISHING,
        share_percent=7,
        dependencies=[7],
        milestones=["Flooring complete", "Bathroom tiling done"],
    ),
    PhaseTemplate(
        id=9,
        name="Door & Window Installation",
        description="Installing doors, windows, and fixtures",
        category=PhaseCategory.FINISHING,
        share_percent=5,
        dependencies=[7],
        milestones=["All fixtures installed"],
    ),
    PhaseTemplate(
        id=10,
        name="Painting & Final Finishing",
        description="Interior/exterior painting and final touches",
        category=PhaseCategory.FINISHING,
        share_percent=5,
        dependencies=[8, 9],
        milestones=["Painting complete", "Final inspection"],
    ),
]
