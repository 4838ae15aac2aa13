from __future__ import annotations

from precedence_sim.core.advice.models import Advice, AdviceType, PrecedenceRule
from precedence_sim.core.errors import InvalidComparisonError, UnknownRuleError


def precedes(first: Advice, second: Advice, rule: PrecedenceRule) -> bool:
    """True if ``first`` has precedence over (wraps around) ``second``."""
    if first == second:
        raise InvalidComparisonError(f"cannot compare advice to itself: {first}")
    # Same index with different types would make both directions false
    if first.index == second.index:
        raise InvalidComparisonError(f"advices share index {first.index}: {first}, {second}")
    if not isinstance(rule, PrecedenceRule):
        rule = PrecedenceRule.parse(rule)

    if rule is PrecedenceRule.CLASSICAL:
        if first.type is AdviceType.AFTER or second.type is AdviceType.AFTER:
            return first.index > second.index
        return first.index < second.index

    if rule is PrecedenceRule.BEFORE_ALWAYS_WINS:
        if first.type is AdviceType.BEFORE and second.type is AdviceType.AFTER:
            return True
        if first.type is AdviceType.AFTER and second.type is AdviceType.BEFORE:
            return False
        return precedes(first, second, PrecedenceRule.CLASSICAL)

    if rule is PrecedenceRule.CHRONOLOGICAL:
        return first.index < second.index

    raise UnknownRuleError(f"unknown precedence rule: {rule!r}")
