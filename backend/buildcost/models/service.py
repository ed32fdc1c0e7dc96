"""Service introspection models: calculator health and process metrics."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from buildcost.models.base import CamelModel
from buildcost.models.enums import HealthStatus, ProjectType, QualityTier


class HealthReport(CamelModel):
    """Result of the calculator self-check."""

    status: HealthStatus
    response_time_ms: float = Field(ge=0)
    capabilities: dict[str, bool]
    supported_qualities: list[QualityTier]
    supported_project_types: list[ProjectType]
    error: str | None = None

    @property
    def response_time(self) -> str:
        """Response time formatted the way the website dashboard shows it."""
        return f"{self.response_time_ms:.2f}ms"


class MemoryUsage(CamelModel):
    """Process memory readings in bytes."""

    rss: int = Field(ge=0)
    max_rss: int = Field(ge=0)
    heap_used: int = Field(ge=0)
    allocated_blocks: int = Field(ge=0)
    gc_objects: int = Field(ge=0)


class MetricsSnapshot(CamelModel):
    """Point-in-time view of process-wide service metrics."""

    uptime: float = Field(ge=0)
    started_at: datetime
    memory_usage: MemoryUsage
    python_version: str
    environment: str
    timestamp: datetime
