import pytest

from precedence_sim.core.advice.models import PrecedenceRule
from precedence_sim.core.config import SimulationConfig
from precedence_sim.core.errors import UnknownRuleError


def test_defaults():
    cfg = SimulationConfig.from_env({})
    assert cfg.default_rule is PrecedenceRule.CLASSICAL
    assert cfg.max_advices == 24
    assert cfg.max_cycles == 1000
    assert cfg.export_graph is False
    assert cfg.demo_file is None


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("PRECEDENCE_DEFAULT_RULE", "aspectj_classic")
    monkeypatch.setenv("PRECEDENCE_MAX_ADVICES", "8")
    monkeypatch.setenv("PRECEDENCE_MAX_CYCLES", "50")
    monkeypatch.setenv("PRECEDENCE_EXPORT_GRAPH", "yes")
    monkeypatch.setenv("PRECEDENCE_DEMO_FILE", " demo.yaml ")

    cfg = SimulationConfig.from_env()
    assert cfg.default_rule is PrecedenceRule.CLASSICAL
    assert cfg.max_advices == 8
    assert cfg.max_cycles == 50
    assert cfg.export_graph is True
    assert cfg.demo_file == "demo.yaml"


def test_from_env_rejects_unknown_rule():
    with pytest.raises(UnknownRuleError):
        SimulationConfig.from_env({"PRECEDENCE_DEFAULT_RULE": "whatever"})


def test_from_payload_shapes():
    base = SimulationConfig()
    assert SimulationConfig.from_payload(None) == base
    assert SimulationConfig.from_payload("chronological").default_rule is PrecedenceRule.CHRONOLOGICAL
    assert SimulationConfig.from_payload([1, 2]) == base

    cfg = SimulationConfig.from_payload(
        {"rule": "BEFORE_ALWAYS_WINS", "max_cycles": 5, "max_advices": True, "export_graph": 1, "bogus": 1}
    )
    assert cfg.default_rule is PrecedenceRule.BEFORE_ALWAYS_WINS
    assert cfg.max_cycles == 5
    assert cfg.max_advices == 24  # bools are not counts
    assert cfg.export_graph is True


def test_from_payload_keeps_base_values():
    base = SimulationConfig(max_advices=4)
    assert SimulationConfig.from_payload({"rule": "chronological"}, base=base).max_advices == 4


def test_resolve_rule_and_limits():
    cfg = SimulationConfig(default_rule=PrecedenceRule.CHRONOLOGICAL, max_advices=2)
    assert cfg.resolve_rule(None) is PrecedenceRule.CHRONOLOGICAL
    assert cfg.resolve_rule("  ") is PrecedenceRule.CHRONOLOGICAL
    assert cfg.resolve_rule("classical") is PrecedenceRule.CLASSICAL

    cfg.check_advice_count(2)
    with pytest.raises(ValueError):
        cfg.check_advice_count(3)

    with pytest.raises(ValueError):
        SimulationConfig(max_advices=0)
    with pytest.raises(ValueError):
        SimulationConfig(max_cycles=0)
