"""Construction rate data for the BuildCost estimator.

Rates are NPR per square foot of built-up area, based on Nepalese
construction market rates (2024). Every figure here is a business
parameter: update it in one place and the engine, the rate card and the
timeline follow.
"""

from __future__ import annotations

from buildcost.models.enums import ConstructionPhase, ProjectType, QualityTier

RATES_LAST_UPDATED = "2024-07-26"

# Base rate per sq ft for residential construction at each tier.
BASE_RATES: dict[QualityTier, int] = {
    QualityTier.ECONOMY: 1800,
    QualityTier.STANDARD: 2200,
    QualityTier.PREMIUM: 2800,
}

# Multiplier on the base rate for each project type.
PROJECT_TYPE_FACTORS: dict[ProjectType, float] = {
    ProjectType.RESIDENTIAL: 1.00,
    ProjectType.COMMERCIAL: 1.15,
    ProjectType.VILLA: 1.25,
    ProjectType.RENOVATION: 0.60,
}

# Share of each upper floor's cost relative to the ground floor. Upper
# floors reuse the foundation, site work and roof.
ADDITIONAL_FLOOR_FACTOR = 0.90

# (materials, labor, other) shares of the total cost. Design, supervision
# and permit costs do not scale with finish quality, so their share shrinks
# as the tier rises.
BREAKDOWN_SHARES: dict[QualityTier, tuple[float, float, float]] = {
    QualityTier.ECONOMY: (0.56, 0.30, 0.14),
    QualityTier.STANDARD: (0.58, 0.30, 0.12),
    QualityTier.PREMIUM: (0.60, 0.31, 0.09),
}

# Standalone rate per sq ft for pricing a single phase.
PHASE_RATES: dict[ConstructionPhase, int] = {
    ConstructionPhase.FOUNDATION: 400,
    ConstructionPhase.STRUCTURE: 600,
    ConstructionPhase.ROOFING: 300,
    ConstructionPhase.MASONRY: 350,
    ConstructionPhase.FINISHING: 450,
}

# ---------------------------------------------------------------------------
# Timeline parameters
# ---------------------------------------------------------------------------

# (upper bound of plinth area in sq ft, working days). First match wins;
# the final band has no upper bound.
TIMELINE_AREA_BANDS: list[tuple[float, int]] = [
    (1_000.0, 120),
    (2_500.0, 180),
    (5_000.0, 270),
    (10_000.0, 365),
    (float("inf"), 480),
]

PROJECT_TYPE_TIMELINE_FACTORS: dict[ProjectType, float] = {
    ProjectType.RESIDENTIAL: 1.0,
    ProjectType.COMMERCIAL: 1.2,
    ProjectType.VILLA: 1.3,
    ProjectType.RENOVATION: 0.6,
}

# Schedule stretch by floor count; index 0 is a single floor.
FLOOR_TIMELINE_MULTIPLIERS: list[float] = [1.0, 1.3, 1.6, 1.8, 2.0]

# Scale applied to finishing-category phases only.
FINISHING_DURATION_FACTORS: dict[QualityTier, float] = {
    QualityTier.ECONOMY: 0.85,
    QualityTier.STANDARD: 1.00,
    QualityTier.PREMIUM: 1.35,
}
