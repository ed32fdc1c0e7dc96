"""Process-wide service metrics.

Uptime counts from the first import of this module, which happens at
service startup. Nothing here is reset except by restarting the process.
"""

from __future__ import annotations

import gc
import os
import platform
import sys
import time
import tracemalloc
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from buildcost.models.service import MemoryUsage, MetricsSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

_PROCESS_STARTED_MONOTONIC = time.monotonic()
_STATM_PATH = Path("/proc/self/statm")


def _max_rss_bytes() -> int:
    try:
        import resource
    except ImportError:
        # Not available on Windows.
        return 0
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux reports kilobytes.
    if sys.platform == "darwin":
        return int(max_rss)
    return int(max_rss) * 1024


def _current_rss_bytes() -> int | None:
    try:
        fields = _STATM_PATH.read_text().split()
    except OSError:
        return None
    return int(fields[1]) * os.sysconf("SC_PAGE_SIZE")


def read_memory_usage() -> MemoryUsage:
    """Sample the process's memory footprint.

    ``heap_used`` is the tracemalloc total when tracing is enabled and the
    resident set size otherwise.
    """
    max_rss = _max_rss_bytes()
    rss = _current_rss_bytes()
    if rss is None:
        rss = max_rss
    heap_used = tracemalloc.get_traced_memory()[0] if tracemalloc.is_tracing() else rss
    return MemoryUsage(
        rss=rss,
        max_rss=max(max_rss, rss),
        heap_used=heap_used,
        allocated_blocks=sys.getallocatedblocks(),
        gc_objects=len(gc.get_objects()),
    )


class ServiceMetrics:
    """Read-only view of process uptime and memory.

    Args:
        environment: Deployment environment name reported with each snapshot.
        clock: Monotonic clock, injectable for tests.
        started: Monotonic timestamp the uptime counts from. Defaults to the
            process start.
    """

    def __init__(
        self,
        environment: str = "development",
        clock: Callable[[], float] = time.monotonic,
        started: float | None = None,
    ) -> None:
        self._environment = environment
        self._clock = clock
        self._started = _PROCESS_STARTED_MONOTONIC if started is None else started

    def uptime(self) -> float:
        """Seconds since the service started."""
        return max(0.0, self._clock() - self._started)

    def snapshot(self) -> MetricsSnapshot:
        now = datetime.now(UTC)
        uptime = self.uptime()
        return MetricsSnapshot(
            uptime=round(uptime, 3),
            started_at=now - timedelta(seconds=uptime),
            memory_usage=read_memory_usage(),
            python_version=platform.python_version(),
            environment=self._environment,
            timestamp=now,
        )
