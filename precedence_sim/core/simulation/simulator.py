from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from precedence_sim.core.advice.models import Advice, AdviceType, PrecedenceRule, create_advices
from precedence_sim.core.config import SimulationConfig
from precedence_sim.core.graph.builder import build_precedence_graph
from precedence_sim.core.graph.cycles import CycleReport, detect_cycles
from precedence_sim.core.graph.precedence_graph import Edge, PrecedenceGraph
from precedence_sim.core.graph.reduction import reduce_transitively
from precedence_sim.core.observability.metrics import record_simulation
from precedence_sim.core.simulation.trace import TraceEntry, derive_execution_trace, render_trace

log = logging.getLogger("precedence.simulation")

OUTCOME_SIMULATED = "simulated"
OUTCOME_CYCLIC = "cyclic"

CYCLIC_MESSAGE = "Precedence graph contains cycles, cannot simulate advice execution"


def _format_edges(vertices: List[Advice], edges: List[Edge]) -> str:
    vs = ", ".join(str(v) for v in vertices)
    es = ", ".join(f"({s}, {t})" for s, t in edges)
    return f"([{vs}], [{es}])"


@dataclass
class SimulationResult:
    rule: PrecedenceRule
    advices: List[Advice]
    graph: PrecedenceGraph  # reduced
    original_edges: List[Edge]
    reduced_edges: List[Edge]
    cycles: CycleReport
    trace: Optional[List[TraceEntry]]
    outcome: str

    @property
    def simulated(self) -> bool:
        return self.outcome == OUTCOME_SIMULATED

    def log_lines(self) -> List[str]:
        lines = [
            f"Advice precedence mode = {self.rule.value}",
            f"Original graph = {_format_edges(self.advices, self.original_edges)}",
            f"Transitively reduced graph = {_format_edges(self.advices, self.reduced_edges)}",
        ]
        if self.trace is None:
            lines.append(CYCLIC_MESSAGE)
        else:
            lines.append("")
            lines.extend(render_trace(self.trace))
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule.value,
            "outcome": self.outcome,
            "advices": [str(a) for a in self.advices],
            "original_edges": [[str(s), str(t)] for s, t in self.original_edges],
            "reduced_edges": [[str(s), str(t)] for s, t in self.reduced_edges],
            "cycles": self.cycles.to_dict(),
            "trace": [e.to_dict() for e in self.trace] if self.trace is not None else None,
            "lines": self.log_lines(),
        }


def simulate(
    advices: Iterable[Union[Advice, AdviceType, str]],
    rule: Union[PrecedenceRule, str, None] = None,
    *,
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """
    One simulation run: build the precedence tournament, reduce it, and derive
    the execution trace if no cycle is left. Plain type tags are numbered
    1..n in order.
    """
    cfg = config or SimulationConfig()
    rule = cfg.resolve_rule(rule)

    items = list(advices)
    if all(isinstance(a, Advice) for a in items):
        advice_list: List[Advice] = items
    else:
        advice_list = create_advices(items)
    cfg.check_advice_count(len(advice_list))

    t0 = time.perf_counter()
    graph = build_precedence_graph(advice_list, rule)
    original_edges = graph.edges()

    removed = reduce_transitively(graph, max_cycles=cfg.max_cycles)
    reduced_edges = graph.edges()

    cycles = detect_cycles(graph, max_cycles=cfg.max_cycles)
    if cycles.has_cycles:
        trace = None
        outcome = OUTCOME_CYCLIC
        log.info(
            "simulation.cyclic rule=%s advices=%s cyclic_vertices=%s",
            rule.value,
            [str(a) for a in advice_list],
            [str(a) for a in cycles.cyclic_vertices],
        )
    else:
        trace = derive_execution_trace(graph)
        outcome = OUTCOME_SIMULATED

    record_simulation(rule.value, outcome, removed)
    log.debug(
        "simulation.done rule=%s vertices=%s edges=%s reduced_edges=%s outcome=%s ms=%s",
        rule.value,
        graph.vertex_count,
        len(original_edges),
        len(reduced_edges),
        outcome,
        int(round((time.perf_counter() - t0) * 1000)),
    )

    return SimulationResult(
        rule=rule,
        advices=advice_list,
        graph=graph,
        original_edges=original_edges,
        reduced_edges=reduced_edges,
        cycles=cycles,
        trace=trace,
        outcome=outcome,
    )


def simulate_all(
    catalogue: Dict[str, List[AdviceType]],
    rules: Optional[Iterable[PrecedenceRule]] = None,
    *,
    config: Optional[SimulationConfig] = None,
) -> List[Dict[str, Any]]:
    """Every rule x aspect combination, rule-major like the demo driver."""
    out: List[Dict[str, Any]] = []
    for rule in list(rules or PrecedenceRule):
        for name, types in catalogue.items():
            res = simulate(types, rule, config=config)
            out.append({"aspect": name, **res.to_dict()})
    return out
