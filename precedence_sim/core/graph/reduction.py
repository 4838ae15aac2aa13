"""
Transitive reduction for directed graphs that may contain cycles.

Textbook transitive reduction is only well defined for DAGs. Here the graph
is first condensed into its strongly connected components (SCCs), the
condensation (a DAG) is reduced the usual way, every SCC is replaced by one
simple cycle through all of its members, and the result is expanded back
into the original graph:

    condense(graph) -> prune_condensation(dag) -> expand_condensation(dag, graph)

The reduced graph has the same vertices and the same reachability as the
input. Edge identity is not preserved: an edge between two SCCs always
connects their representatives (smallest vertex id), which need not be an
edge of the input. Likewise, if an SCC has no cycle through all of its
members, the missing members are spliced into the longest cycle found, which
can introduce edges the input did not have. The search for that cycle looks
at no more than ``max_cycles`` simple cycles per component.
"""
from __future__ import annotations

import logging
import time
from itertools import islice
from typing import Iterable, List, Set, Tuple

import networkx as nx

from precedence_sim.core.graph.cycles import DEFAULT_MAX_CYCLES, canonical_rotation
from precedence_sim.core.graph.precedence_graph import PrecedenceGraph

log = logging.getLogger("precedence.reduction")

IdEdge = Tuple[int, int]


def condense(graph: PrecedenceGraph) -> nx.DiGraph:
    """
    Condensation of ``graph``; the input is left untouched.

    Nodes are component ids numbered by their smallest member. Node
    attributes:
      members         set of vertex ids
      representative  smallest member id
      internal_edges  sorted edges with both endpoints inside the component
    Inter-component edges are deduplicated.
    """
    g = graph.to_networkx()
    components = sorted(
        (set(c) for c in nx.strongly_connected_components(g)),
        key=min,
    )
    dag = nx.condensation(g, scc=components)
    mapping = dag.graph.get("mapping", {})

    internal = {cid: [] for cid in dag.nodes}
    for s, t in graph.edge_ids():
        if mapping[s] == mapping[t]:
            internal[mapping[s]].append((s, t))

    for cid, data in dag.nodes(data=True):
        data["representative"] = min(data["members"])
        data["internal_edges"] = sorted(internal[cid])
    return dag


def spanning_cycle(
    members: Iterable[int],
    edges: Iterable[IdEdge],
    *,
    max_cycles: int = DEFAULT_MAX_CYCLES,
) -> List[int]:
    """
    A single cycle through all ``members``.

    Picks the first cycle covering every member, otherwise the longest simple
    cycle (smallest in canonical rotation among equals) with the remaining
    members appended in id order. Only the first ``max_cycles`` simple cycles
    are considered; without a spanning one the count is exponential in the
    component size.
    """
    nodes = sorted(members)
    sub = nx.DiGraph()
    sub.add_nodes_from(nodes)
    sub.add_edges_from(sorted(edges))

    best: List[int] = []
    for found in islice(nx.simple_cycles(sub), max_cycles):
        cycle = canonical_rotation(found)
        if len(cycle) > len(best) or (len(cycle) == len(best) and cycle < best):
            best = cycle
        # strongly connected tournaments always have one (Camion)
        if len(best) == len(nodes):
            break

    on_cycle = set(best)
    return best + [v for v in nodes if v not in on_cycle]


def cycle_edges(cycle: List[int]) -> List[IdEdge]:
    n = len(cycle)
    if n < 2:
        return []
    return [(cycle[i], cycle[(i + 1) % n]) for i in range(n)]


def prune_condensation(dag: nx.DiGraph, *, max_cycles: int = DEFAULT_MAX_CYCLES) -> nx.DiGraph:
    """
    Transitively reduce the condensation in place and replace the internal
    edges of every component having at least two of them by one spanning
    cycle. Returns ``dag`` for chaining.
    """
    reduced = nx.transitive_reduction(dag)
    redundant = [(a, b) for a, b in dag.edges if not reduced.has_edge(a, b)]
    dag.remove_edges_from(redundant)

    for cid, data in dag.nodes(data=True):
        edges = data["internal_edges"]
        if len(edges) < 2:
            continue
        cycle = spanning_cycle(data["members"], edges, max_cycles=max_cycles)
        data["internal_edges"] = cycle_edges(cycle)
        log.debug(
            "reduction.scc component=%s members=%s edges_before=%s edges_after=%s",
            cid,
            len(cycle),
            len(edges),
            len(data["internal_edges"]),
        )
    return dag


def expand_condensation(dag: nx.DiGraph, graph: PrecedenceGraph) -> PrecedenceGraph:
    """
    Replace all edges of ``graph`` by the edges described by ``dag``: one
    edge between the representatives of each pair of adjacent components,
    plus each component's internal edges.
    """
    graph.clear_edges()
    for a, b in sorted(dag.edges):
        graph.add_edge_by_id(dag.nodes[a]["representative"], dag.nodes[b]["representative"])
    for cid in sorted(dag.nodes):
        for s, t in dag.nodes[cid]["internal_edges"]:
            graph.add_edge_by_id(s, t)
    return graph


def reduce_transitively(graph: PrecedenceGraph, *, max_cycles: int = DEFAULT_MAX_CYCLES) -> int:
    """
    Reduce ``graph`` in place, keeping its reachability. Works for cyclic
    graphs. Returns the number of edges removed.
    """
    t0 = time.perf_counter()
    edges_before = graph.edge_count

    dag = condense(graph)
    prune_condensation(dag, max_cycles=max_cycles)
    expand_condensation(dag, graph)

    removed = edges_before - graph.edge_count
    log.debug(
        "reduction.done vertices=%s components=%s edges_before=%s edges_after=%s ms=%s",
        graph.vertex_count,
        dag.number_of_nodes(),
        edges_before,
        graph.edge_count,
        int(round((time.perf_counter() - t0) * 1000)),
    )
    return removed


def component_edge_sets(graph: PrecedenceGraph) -> List[Tuple[Set[int], List[IdEdge]]]:
    """(members, internal edges) per component with more than one member."""
    dag = condense(graph)
    return [
        (set(data["members"]), list(data["internal_edges"]))
        for _, data in sorted(dag.nodes(data=True), key=lambda kv: kv[0])
        if len(data["members"]) > 1
    ]
