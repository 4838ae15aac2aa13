from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from precedence_sim.api.schemas.precedence import (
    DemoResponse,
    ExportRequest,
    ReduceRequest,
    ReduceResponse,
    RulesResponse,
    SimulateRequest,
    SimulationResponse,
)
from precedence_sim.core.advice.models import Advice, PrecedenceRule, create_advices
from precedence_sim.core.config import SimulationConfig
from precedence_sim.core.demo_catalogue import load_demo_aspects
from precedence_sim.core.errors import PrecedenceError
from precedence_sim.core.graph.builder import build_precedence_graph
from precedence_sim.core.graph.cycles import detect_cycles
from precedence_sim.core.graph.precedence_graph import PrecedenceGraph
from precedence_sim.core.graph.reduction import reduce_transitively
from precedence_sim.core.observability.metrics import inc_named
from precedence_sim.core.simulation.export import export_adjacency_csv_text, export_file_name
from precedence_sim.core.simulation.simulator import simulate, simulate_all

router = APIRouter(prefix="/precedence", tags=["Precedence"])


def _config() -> SimulationConfig:
    return SimulationConfig.from_env()


@router.get("/rules", response_model=RulesResponse)
def list_rules():
    cfg = _config()
    return RulesResponse(rules=[r.value for r in PrecedenceRule], default_rule=cfg.default_rule.value)


@router.post("/simulate", response_model=SimulationResponse)
def simulate_advices(req: SimulateRequest):
    cfg = _config()
    try:
        result = simulate(req.advices, req.rule, config=cfg)
    except (PrecedenceError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    inc_named("api_simulate")
    return result.to_dict()


@router.get("/demo", response_model=DemoResponse)
def run_demo():
    cfg = _config()
    catalogue = load_demo_aspects(cfg.demo_file)
    try:
        results = simulate_all(catalogue, config=cfg)
    except (PrecedenceError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"results": results}


@router.post("/reduce", response_model=ReduceResponse)
def reduce_graph(req: ReduceRequest):
    cfg = _config()
    try:
        graph = PrecedenceGraph(Advice.parse(v) for v in req.vertices)
        for pair in req.edges:
            if len(pair) != 2:
                raise ValueError(f"edge must be a [source, target] pair: {pair!r}")
            source, target = Advice.parse(pair[0]), Advice.parse(pair[1])
            graph.add_vertex(source)
            graph.add_vertex(target)
            graph.add_edge(source, target)
        cfg.check_advice_count(graph.vertex_count)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    removed = reduce_transitively(graph, max_cycles=cfg.max_cycles)
    cycles = detect_cycles(graph, max_cycles=cfg.max_cycles)
    inc_named("api_reduce")
    return ReduceResponse(
        vertices=[str(v) for v in graph.vertices()],
        edges=[[str(s), str(t)] for s, t in graph.edges()],
        removed_edges=removed,
        cycles=cycles.to_dict(),
    )


@router.post("/export")
def export_tournament(req: ExportRequest):
    """Adjacency-list CSV of the unreduced precedence tournament."""
    cfg = _config()
    try:
        rule = cfg.resolve_rule(req.rule)
        advices = create_advices(req.advices)
        cfg.check_advice_count(len(advices))
        graph = build_precedence_graph(advices, rule)
    except (PrecedenceError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    name = export_file_name(rule, int(time.time() * 1000))
    return Response(
        content=export_adjacency_csv_text(graph, delimiter=req.delimiter),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )
