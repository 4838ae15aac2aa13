from .precedence_graph import PrecedenceGraph
from .builder import build_precedence_graph
from .cycles import CycleReport, detect_cycles, has_cycles
from .reduction import condense, expand_condensation, prune_condensation, reduce_transitively

__all__ = [
    "PrecedenceGraph",
    "build_precedence_graph",
    "CycleReport",
    "detect_cycles",
    "has_cycles",
    "condense",
    "prune_condensation",
    "expand_condensation",
    "reduce_transitively",
]
