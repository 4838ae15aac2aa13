from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter
from prometheus_client import Histogram

# Named counters (custom)
_NAMED = Counter()

SIMULATIONS_TOTAL = PromCounter(
    "precedence_simulations_total",
    "Simulation runs by rule and outcome",
    ["rule", "outcome"],
)

REDUCTION_REMOVED_EDGES = Histogram(
    "precedence_reduction_removed_edges",
    "Edges removed by one transitive reduction",
    buckets=(0, 1, 2, 5, 10, 20, 50, 100, 200),
)


def reset_metrics() -> None:
    """
    Test helper: clears the named counters to avoid cross-test leakage.
    Prometheus collectors are process-wide and are not reset.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def record_simulation(rule: str, outcome: str, removed_edges: int) -> None:
    SIMULATIONS_TOTAL.labels(rule=rule, outcome=outcome).inc()
    REDUCTION_REMOVED_EDGES.observe(removed_edges)
    inc_named("simulations_total")
    inc_named(f"simulations_{outcome}")
    inc_named(f"rule_{rule}")


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
