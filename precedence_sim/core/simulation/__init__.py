from .trace import JOINPOINT, TraceEntry, derive_execution_trace, find_highest_precedence, render_trace
from .simulator import SimulationResult, simulate, simulate_all

__all__ = [
    "JOINPOINT",
    "TraceEntry",
    "derive_execution_trace",
    "find_highest_precedence",
    "render_trace",
    "SimulationResult",
    "simulate",
    "simulate_all",
]
