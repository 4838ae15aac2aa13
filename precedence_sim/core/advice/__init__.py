from .models import Advice, AdviceType, PrecedenceRule, create_advices
from .rules import precedes

__all__ = [
    "Advice",
    "AdviceType",
    "PrecedenceRule",
    "create_advices",
    "precedes",
]
