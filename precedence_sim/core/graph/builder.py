from __future__ import annotations

import logging
from typing import Iterable

from precedence_sim.core.advice.models import Advice, PrecedenceRule
from precedence_sim.core.advice.rules import precedes
from precedence_sim.core.graph.precedence_graph import PrecedenceGraph

log = logging.getLogger("precedence.graph")


def build_precedence_graph(advices: Iterable[Advice], rule: PrecedenceRule) -> PrecedenceGraph:
    """
    Build the precedence tournament: one vertex per advice and exactly one
    edge per pair, oriented by ``rule``.
    """
    ordered = list(advices)
    graph = PrecedenceGraph()
    for advice in ordered:
        if graph.has_vertex(advice):
            raise ValueError(f"duplicate advice: {advice}")
        graph.add_vertex(advice)

    for i, first in enumerate(ordered):
        for second in ordered[i + 1:]:
            if precedes(first, second, rule):
                graph.add_edge(first, second)
            else:
                graph.add_edge(second, first)

    log.debug("graph.build rule=%s vertices=%s edges=%s", rule.value, graph.vertex_count, graph.edge_count)
    return graph
