"""
Defines Prometheus metrics for the audit engine.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram
from prometheus_client import generate_latest

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# The module may be reloaded by the test suite; reusing an already registered
# collector avoids duplicate registration errors.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    return {
        "fetch_requests_total": Counter(
            "axaudit_fetch_requests_total",
            "Resource fetches that reached the network, by outcome",
            ["outcome"],
        ),
        "fetch_cache_hits_total": Counter(
            "axaudit_fetch_cache_hits_total",
            "Fetches served from the per-audit response cache",
        ),
        "fetch_latency_seconds": Histogram(
            "axaudit_fetch_latency_seconds",
            "Time taken to fetch a resource",
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
        ),
        "check_duration_seconds": Histogram(
            "axaudit_check_duration_seconds",
            "Time taken by a single check",
            ["check"],
        ),
        "check_crashes_total": Counter(
            "axaudit_check_crashes_total",
            "Checks that raised instead of returning a result",
            ["check"],
        ),
        "audit_score": Histogram(
            "axaudit_audit_score",
            "Distribution of overall audit scores",
            buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()


def export_prometheus() -> str:
    """Export metrics in Prometheus text format."""
    return generate_latest(_PROM_REGISTRY).decode("utf-8")
