from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from precedence_sim.core.advice.models import PrecedenceRule

DEFAULT_MAX_ADVICES = 24
DEFAULT_MAX_CYCLES = 1000

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(env: Mapping[str, str], name: str, default: str = "0") -> bool:
    return (env.get(name) or default).strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    return int(raw) if raw else default


@dataclass(frozen=True)
class SimulationConfig:
    # IMPORTANT: keep these names; the API and the demo tool use them
    default_rule: PrecedenceRule = PrecedenceRule.CLASSICAL
    max_advices: int = DEFAULT_MAX_ADVICES
    max_cycles: int = DEFAULT_MAX_CYCLES
    export_graph: bool = False
    demo_file: Optional[str] = None

    def __post_init__(self):
        if self.max_advices < 1:
            raise ValueError("max_advices must be >= 1")
        if self.max_cycles < 1:
            raise ValueError("max_cycles must be >= 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SimulationConfig":
        """
        Reads:
          PRECEDENCE_DEFAULT_RULE   (CLASSICAL)
          PRECEDENCE_MAX_ADVICES    (24)
          PRECEDENCE_MAX_CYCLES     (1000)
          PRECEDENCE_EXPORT_GRAPH   (0)
          PRECEDENCE_DEMO_FILE      (unset)
        """
        env = os.environ if environ is None else environ
        demo_file = (env.get("PRECEDENCE_DEMO_FILE") or "").strip() or None
        return cls(
            default_rule=PrecedenceRule.parse(env.get("PRECEDENCE_DEFAULT_RULE") or "CLASSICAL"),
            max_advices=_env_int(env, "PRECEDENCE_MAX_ADVICES", DEFAULT_MAX_ADVICES),
            max_cycles=_env_int(env, "PRECEDENCE_MAX_CYCLES", DEFAULT_MAX_CYCLES),
            export_graph=_env_flag(env, "PRECEDENCE_EXPORT_GRAPH"),
            demo_file=demo_file,
        )

    @classmethod
    def from_payload(cls, payload: Any, base: Optional["SimulationConfig"] = None) -> "SimulationConfig":
        """
        Accepts:
          - None                      -> base (or defaults)
          - "CHRONOLOGICAL"           -> default rule only
          - {"rule": ..., "max_cycles": ..., "export_graph": ...}
        Unknown keys are ignored.
        """
        cfg = base or cls()
        if payload is None:
            return cfg

        if isinstance(payload, (str, PrecedenceRule)):
            return replace(cfg, default_rule=PrecedenceRule.parse(payload))

        if isinstance(payload, dict):
            changes = {}
            rule = payload.get("rule", payload.get("default_rule"))
            if rule is not None:
                changes["default_rule"] = PrecedenceRule.parse(rule)
            for key in ("max_advices", "max_cycles"):
                if isinstance(payload.get(key), int) and not isinstance(payload.get(key), bool):
                    changes[key] = payload[key]
            if "export_graph" in payload:
                changes["export_graph"] = bool(payload["export_graph"])
            if isinstance(payload.get("demo_file"), str):
                changes["demo_file"] = payload["demo_file"]
            return replace(cfg, **changes)

        return cfg

    def resolve_rule(self, rule: Any = None) -> PrecedenceRule:
        if rule is None or (isinstance(rule, str) and not rule.strip()):
            return self.default_rule
        return PrecedenceRule.parse(rule)

    def check_advice_count(self, count: int) -> None:
        if count > self.max_advices:
            raise ValueError(f"too many advices: {count} > {self.max_advices}")
