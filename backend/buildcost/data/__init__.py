"""Rate data layer for the BuildCost estimator."""

from buildcost.data.phases import PhaseTemplate
from buildcost.data.repository import RateRepository

__all__ = [
    "PhaseTemplate",
    "RateRepository",
]
