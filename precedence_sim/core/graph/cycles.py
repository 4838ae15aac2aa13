from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Dict, List, Sequence, TypeVar

import networkx as nx

from precedence_sim.core.advice.models import Advice
from precedence_sim.core.graph.precedence_graph import PrecedenceGraph

DEFAULT_MAX_CYCLES = 1000

T = TypeVar("T")


def _advice_key(advice: Advice):
    return (advice.index, advice.type.value)


def canonical_rotation(cycle: Sequence[T], key=None) -> List[T]:
    """Rotate a cycle so that its smallest element comes first."""
    if not cycle:
        return []
    items = list(cycle)
    start = items.index(min(items, key=key))
    return items[start:] + items[:start]


@dataclass(frozen=True)
class CycleReport:
    has_cycles: bool
    cyclic_vertices: List[Advice] = field(default_factory=list)
    simple_cycles: List[List[Advice]] = field(default_factory=list)
    truncated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_cycles": self.has_cycles,
            "cyclic_vertices": [str(a) for a in self.cyclic_vertices],
            "simple_cycles": [[str(a) for a in c] for c in self.simple_cycles],
            "truncated": self.truncated,
        }


def has_cycles(graph: PrecedenceGraph) -> bool:
    return not nx.is_directed_acyclic_graph(graph.to_networkx())


def detect_cycles(graph: PrecedenceGraph, *, max_cycles: int = DEFAULT_MAX_CYCLES) -> CycleReport:
    """
    Diagnostics for a possibly cyclic graph: the advices lying on some cycle
    and the simple cycles themselves (at most ``max_cycles`` of them).
    """
    g = graph.to_networkx()
    if nx.is_directed_acyclic_graph(g):
        return CycleReport(has_cycles=False)

    cyclic = [
        graph.vertex(vid)
        for component in nx.strongly_connected_components(g)
        if len(component) > 1
        for vid in component
    ]
    cyclic.sort(key=_advice_key)

    found = list(islice(nx.simple_cycles(g), max_cycles + 1))
    truncated = len(found) > max_cycles
    cycles = [
        canonical_rotation([graph.vertex(vid) for vid in c], key=_advice_key)
        for c in found[:max_cycles]
    ]
    cycles.sort(key=lambda c: (len(c), [_advice_key(a) for a in c]))

    return CycleReport(
        has_cycles=True,
        cyclic_vertices=cyclic,
        simple_cycles=cycles,
        truncated=truncated,
    )
