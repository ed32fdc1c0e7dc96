"""Factory functions for creating pre-configured CostEngine instances."""

from __future__ import annotations

from buildcost.data.repository import RateRepository
from buildcost.engine import CostEngine


def create_default_engine() -> CostEngine:
    """Create a CostEngine wired up with the default rate tables.

    This is the recommended way to create a CostEngine for typical usage.
    It wires up a RateRepository with the built-in 2024 rates so callers
    don't need to understand the internal wiring.

    Example::

        from buildcost import create_default_engine

        engine = create_default_engine()
        result = engine.calculate({"plinth_area": 1500})
    """
    return CostEngine(RateRepository())
