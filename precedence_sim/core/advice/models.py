from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union

from precedence_sim.core.errors import UnknownRuleError


class AdviceType(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"

    @classmethod
    def parse(cls, value: Union[str, "AdviceType"]) -> "AdviceType":
        if isinstance(value, AdviceType):
            return value
        tag = str(value or "").strip().lower()
        for t in cls:
            if t.value == tag:
                return t
        raise ValueError(f"unknown advice type: {value!r}")


class PrecedenceRule(str, Enum):
    """
    How two advices of the same aspect are ordered.

    CLASSICAL:
        The advice declared first has precedence, unless one of the two is an
        AFTER advice, in which case the one declared later wins.
        Can produce cycles.
    BEFORE_ALWAYS_WINS:
        A BEFORE advice always has precedence over an AFTER advice, otherwise
        CLASSICAL applies. Can produce cycles too, sometimes where CLASSICAL
        does not.
    CHRONOLOGICAL:
        Declaration order only. Always yields a linear chain.
    """

    CLASSICAL = "CLASSICAL"
    BEFORE_ALWAYS_WINS = "BEFORE_ALWAYS_WINS"
    CHRONOLOGICAL = "CHRONOLOGICAL"

    @classmethod
    def parse(cls, value: Union[str, "PrecedenceRule"]) -> "PrecedenceRule":
        if isinstance(value, PrecedenceRule):
            return value
        name = str(value or "").strip().upper().replace("-", "_")
        name = _RULE_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            raise UnknownRuleError(f"unknown precedence rule: {value!r}") from None


# Names used by the AspectJ documentation and older configs
_RULE_ALIASES = {
    "ASPECTJ_CLASSIC": "CLASSICAL",
    "CLASSIC": "CLASSICAL",
    "ASPECTJ_WITH_BEFORE_ALWAYS_PRECEDING_AFTER": "BEFORE_ALWAYS_WINS",
}


@dataclass(frozen=True)
class Advice:
    index: int
    type: AdviceType

    def __str__(self) -> str:
        return f"{self.type.value}-{self.index}"

    @classmethod
    def parse(cls, label: str) -> "Advice":
        """Inverse of ``str(advice)``: ``"around-3"`` -> ``Advice(3, AROUND)``."""
        tag, sep, idx = str(label).strip().rpartition("-")
        if not sep or not idx.isdigit() or int(idx) < 1:
            raise ValueError(f"invalid advice label: {label!r}")
        return cls(index=int(idx), type=AdviceType.parse(tag))


def create_advices(types: Iterable[Union[str, AdviceType]]) -> List[Advice]:
    """Number advice types 1..n in declaration order."""
    return [Advice(index=i, type=AdviceType.parse(t)) for i, t in enumerate(types, start=1)]
