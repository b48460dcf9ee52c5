"""
Defines Prometheus metrics for scrapes and fetch strategies.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Reloading this module (as the test suite does) must not register the same
# collector twice.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            # Registration lost the race - fall back to the now-existing collector.
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    return {
        "scrapes_total": Counter(
            "pricequarry_scrapes_total",
            "Total number of product scrapes by outcome",
            ["outcome"],
        ),
        "strategy_attempts_total": Counter(
            "pricequarry_strategy_attempts_total",
            "Fetch strategy attempts by strategy and result",
            ["strategy", "result"],
        ),
        "strategy_duration_seconds": Histogram(
            "pricequarry_strategy_duration_seconds",
            "Time taken by a single fetch strategy attempt",
            ["strategy"],
            buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 15.0, 30.0, 60.0],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()
