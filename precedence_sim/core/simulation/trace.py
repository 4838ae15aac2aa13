from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from precedence_sim.core.advice.models import Advice, AdviceType
from precedence_sim.core.errors import PrecedenceStructureError
from precedence_sim.core.graph.precedence_graph import PrecedenceGraph

JOINPOINT = "JOINPOINT"
INDENT = "· "

# (pre-action, post-action) per advice type; None => nothing emitted
_ACTIONS: Dict[AdviceType, Tuple[Optional[str], Optional[str]]] = {
    AdviceType.BEFORE: ("pre-action", None),
    AdviceType.AFTER: (None, "post-action"),
    AdviceType.AROUND: ("pre-action (can change arguments)", "post-action (can change return value)"),
}


@dataclass(frozen=True)
class TraceEntry:
    depth: int
    advice: Optional[Advice]  # None => joinpoint
    pre_message: Optional[str]
    post_message: Optional[str]

    @property
    def is_joinpoint(self) -> bool:
        return self.advice is None

    def to_dict(self) -> dict:
        return {
            "depth": self.depth,
            "advice": str(self.advice) if self.advice is not None else None,
            "pre_message": self.pre_message,
            "post_message": self.post_message,
        }


def _entry(advice: Advice, depth: int) -> TraceEntry:
    pre, post = _ACTIONS[advice.type]
    return TraceEntry(
        depth=depth,
        advice=advice,
        pre_message=f"{advice} → {pre}" if pre else None,
        post_message=f"{advice} → {post}" if post else None,
    )


def find_highest_precedence(graph: PrecedenceGraph) -> Advice:
    """The first advice (by index) that nothing has precedence over."""
    for advice in sorted(graph.vertices(), key=lambda a: (a.index, a.type.value)):
        if graph.in_degree(advice) == 0:
            return advice
    raise PrecedenceStructureError("no highest precedence advice found")


def derive_execution_trace(graph: PrecedenceGraph) -> List[TraceEntry]:
    """
    Walk the reduced, acyclic graph from its highest-precedence advice down
    to the joinpoint. Where a vertex has several successors, the one with the
    lowest index is followed.
    """
    trace: List[TraceEntry] = []
    if graph.vertex_count == 0:
        return [TraceEntry(depth=0, advice=None, pre_message=JOINPOINT, post_message=None)]

    current: Optional[Advice] = find_highest_precedence(graph)
    visited = set()
    depth = 0
    while current is not None:
        if current in visited:
            raise PrecedenceStructureError(f"cycle reached at {current}, cannot derive execution order")
        visited.add(current)
        trace.append(_entry(current, depth))

        successors = sorted(graph.successors(current), key=lambda a: (a.index, a.type.value))
        current = successors[0] if successors else None
        depth += 1

    trace.append(TraceEntry(depth=depth, advice=None, pre_message=JOINPOINT, post_message=None))
    return trace


def render_trace(trace: List[TraceEntry], indent: str = INDENT) -> List[str]:
    """Nested log lines: pre-actions inward, joinpoint, post-actions outward."""
    lines = [indent * e.depth + e.pre_message for e in trace if e.pre_message]
    lines += [indent * e.depth + e.post_message for e in reversed(trace) if e.post_message]
    return lines
