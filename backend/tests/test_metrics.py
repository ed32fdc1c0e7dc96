"""Tests for process metrics."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pytest

from buildcost import metrics as metrics_module
from buildcost.metrics import ServiceMetrics, read_memory_usage

if TYPE_CHECKING:
    from pathlib import Path


class TestServiceMetrics:
    def test_uptime_from_start(self) -> None:
        now = [100.0]
        metrics = ServiceMetrics(clock=lambda: now[0], started=40.0)
        assert metrics.uptime() == pytest.approx(60.0)
        now[0] = 130.5
        assert metrics.uptime() == pytest.approx(90.5)

    def test_uptime_never_negative(self) -> None:
        metrics = ServiceMetrics(clock=lambda: 10.0, started=20.0)
        assert metrics.uptime() == 0.0

    def test_default_start_is_process_wide(self) -> None:
        first = ServiceMetrics()
        second = ServiceMetrics()
        assert abs(first.uptime() - second.uptime()) < 1.0
        assert first.uptime() > 0

    def test_snapshot_payload(self) -> None:
        metrics = ServiceMetrics(environment="test", clock=lambda: 75.0, started=15.0)
        payload = metrics.snapshot().to_api_dict()
        assert payload["uptime"] == pytest.approx(60.0)
        assert payload["environment"] == "test"
        assert payload["memoryUsage"]["heapUsed"] > 0
        assert payload["memoryUsage"]["rss"] > 0
        assert "pythonVersion" in payload
        assert "startedAt" in payload


class TestMemoryUsage:
    def test_readings_positive(self) -> None:
        usage = read_memory_usage()
        assert usage.rss > 0
        assert usage.max_rss >= usage.rss
        assert usage.allocated_blocks > 0
        assert usage.gc_objects > 0


class TestPortableMemoryReadings:
    def test_without_resource_module(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "resource", None)
        usage = read_memory_usage()
        assert usage.rss > 0
        assert usage.max_rss >= usage.rss

    def test_without_proc_or_resource(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
    ) -> None:
        monkeypatch.setitem(sys.modules, "resource", None)
        monkeypatch.setattr(metrics_module, "_STATM_PATH", tmp_path / "missing")
        usage = read_memory_usage()
        assert usage.rss == 0
        assert usage.max_rss == 0
        assert usage.gc_objects > 0
