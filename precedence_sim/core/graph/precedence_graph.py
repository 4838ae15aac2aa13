from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple

import networkx as nx

from precedence_sim.core.advice.models import Advice

Edge = Tuple[Advice, Advice]


class PrecedenceGraph:
    """
    Directed graph over advices.

    Vertices live in an arena and are addressed by their arena position
    (``vid``); adjacency is kept as explicit outgoing/incoming id sets.
    An edge ``u -> v`` means "u has precedence over v".
    """

    def __init__(self, advices: Iterable[Advice] = ()):
        self._vertices: List[Advice] = []
        self._ids: Dict[Advice, int] = {}
        self._out: Dict[int, Set[int]] = {}
        self._in: Dict[int, Set[int]] = {}
        for advice in advices:
            self.add_vertex(advice)

    # --- vertices ---

    def add_vertex(self, advice: Advice) -> int:
        vid = self._ids.get(advice)
        if vid is not None:
            return vid
        vid = len(self._vertices)
        self._vertices.append(advice)
        self._ids[advice] = vid
        self._out[vid] = set()
        self._in[vid] = set()
        return vid

    def has_vertex(self, advice: Advice) -> bool:
        return advice in self._ids

    def vertex_id(self, advice: Advice) -> int:
        try:
            return self._ids[advice]
        except KeyError:
            raise KeyError(f"advice not in graph: {advice}") from None

    def vertex(self, vid: int) -> Advice:
        return self._vertices[vid]

    def vertices(self) -> List[Advice]:
        return list(self._vertices)

    def vertex_ids(self) -> range:
        return range(len(self._vertices))

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    def __len__(self) -> int:
        return len(self._vertices)

    # --- edges ---

    def add_edge(self, source: Advice, target: Advice) -> bool:
        return self.add_edge_by_id(self.vertex_id(source), self.vertex_id(target))

    def add_edge_by_id(self, source: int, target: int) -> bool:
        """Returns False if the edge already existed."""
        if source == target:
            raise ValueError(f"self-loop not allowed: {self._vertices[source]}")
        if target in self._out[source]:
            return False
        self._out[source].add(target)
        self._in[target].add(source)
        return True

    def remove_edge(self, source: Advice, target: Advice) -> bool:
        s, t = self.vertex_id(source), self.vertex_id(target)
        if t not in self._out[s]:
            return False
        self._out[s].discard(t)
        self._in[t].discard(s)
        return True

    def has_edge(self, source: Advice, target: Advice) -> bool:
        if source not in self._ids or target not in self._ids:
            return False
        return self._ids[target] in self._out[self._ids[source]]

    def clear_edges(self) -> None:
        for vid in self.vertex_ids():
            self._out[vid].clear()
            self._in[vid].clear()

    def edge_ids(self) -> List[Tuple[int, int]]:
        return [(s, t) for s in self.vertex_ids() for t in sorted(self._out[s])]

    def edges(self) -> List[Edge]:
        return [(self._vertices[s], self._vertices[t]) for s, t in self.edge_ids()]

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._out.values())

    # --- neighbourhood queries ---

    def successors(self, advice: Advice) -> List[Advice]:
        return [self._vertices[t] for t in sorted(self._out[self.vertex_id(advice)])]

    def predecessors(self, advice: Advice) -> List[Advice]:
        return [self._vertices[s] for s in sorted(self._in[self.vertex_id(advice)])]

    def out_degree(self, advice: Advice) -> int:
        return len(self._out[self.vertex_id(advice)])

    def in_degree(self, advice: Advice) -> int:
        return len(self._in[self.vertex_id(advice)])

    # --- conversions ---

    def to_networkx(self) -> nx.DiGraph:
        """Snapshot keyed by vertex id, with the advice stored as node attribute."""
        g = nx.DiGraph()
        for vid, advice in enumerate(self._vertices):
            g.add_node(vid, advice=advice)
        g.add_edges_from(self.edge_ids())
        return g

    def copy(self) -> "PrecedenceGraph":
        other = PrecedenceGraph(self._vertices)
        for s, t in self.edge_ids():
            other.add_edge_by_id(s, t)
        return other

    def reachability(self) -> Set[Tuple[Advice, Advice]]:
        """All pairs (u, v), u != v, such that v can be reached from u."""
        g = self.to_networkx()
        pairs: Set[Tuple[Advice, Advice]] = set()
        for vid in g.nodes:
            for other in nx.descendants(g, vid):
                if other != vid:
                    pairs.add((self._vertices[vid], self._vertices[other]))
        return pairs

    def __str__(self) -> str:
        vertices = ", ".join(str(v) for v in self._vertices)
        edges = ", ".join(f"({s}, {t})" for s, t in self.edges())
        return f"([{vertices}], [{edges}])"

    def __repr__(self) -> str:
        return f"PrecedenceGraph(vertices={self.vertex_count}, edges={self.edge_count})"
