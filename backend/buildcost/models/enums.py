"""Enums for the BuildCost domain models."""

from enum import StrEnum


class QualityTier(StrEnum):
    """Finish level that scales the rate per square foot and finishing time.

    Tiers are declared cheapest first; comparisons keep this order.
    """

    ECONOMY = "economy"
    STANDARD = "standard"
    PREMIUM = "premium"


class ProjectType(StrEnum):
    """Kind of construction project being priced."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    VILLA = "villa"
    RENOVATION = "renovation"


class PhaseCategory(StrEnum):
    """Grouping of construction phases, used for resources and scaling."""

    FOUNDATION = "foundation"
    STRUCTURE = "structure"
    ROOFING = "roofing"
    MEP = "mep"
    FINISHING = "finishing"


class ConstructionPhase(StrEnum):
    """Phases that can be priced on their own via the phase-cost lookup."""

    FOUNDATION = "foundation"
    STRUCTURE = "structure"
    ROOFING = "roofing"
    MASONRY = "masonry"
    FINISHING = "finishing"


class HealthStatus(StrEnum):
    """Outcome of the calculator self-check."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
