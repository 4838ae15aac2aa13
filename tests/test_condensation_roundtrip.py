from precedence_sim.core.advice.models import PrecedenceRule, create_advices
from precedence_sim.core.graph.builder import build_precedence_graph
from precedence_sim.core.graph.reduction import condense, expand_condensation, prune_condensation


def _mixed_graph():
    return build_precedence_graph(
        create_advices(["around", "after", "around", "before", "before", "after"]),
        PrecedenceRule.CLASSICAL,
    )


def test_condense_leaves_input_untouched():
    g = _mixed_graph()
    edges = g.edges()
    dag = condense(g)
    assert g.edges() == edges

    assert dag.number_of_nodes() == 2
    members = [dag.nodes[c]["members"] for c in sorted(dag.nodes)]
    assert members == [{0, 1, 2, 3, 4}, {5}]
    assert dag.nodes[0]["representative"] == 0
    assert dag.nodes[1]["representative"] == 5
    assert len(dag.nodes[0]["internal_edges"]) == 10
    assert dag.nodes[1]["internal_edges"] == []
    # five tournament edges from after-6 collapse to one
    assert list(dag.edges) == [(1, 0)]


def test_expand_without_pruning_keeps_reachability():
    g = _mixed_graph()
    reach = g.reachability()
    dag = condense(g)
    expand_condensation(dag, g)
    assert g.reachability() == reach
    # only the deduplicated cross edge is replaced, internal edges survive
    assert g.edge_count == 10 + 1


def test_prune_reduces_condensation_and_components():
    g = build_precedence_graph(create_advices(["before", "before", "before", "before"]), PrecedenceRule.CLASSICAL)
    dag = prune_condensation(condense(g))
    assert dag.number_of_nodes() == 4
    assert sorted(dag.edges) == [(0, 1), (1, 2), (2, 3)]

    g2 = _mixed_graph()
    dag2 = prune_condensation(condense(g2))
    assert len(dag2.nodes[0]["internal_edges"]) == 5


def test_condense_empty_graph():
    g = build_precedence_graph([], PrecedenceRule.CHRONOLOGICAL)
    dag = condense(g)
    assert dag.number_of_nodes() == 0
    expand_condensation(prune_condensation(dag), g)
    assert g.edge_count == 0
