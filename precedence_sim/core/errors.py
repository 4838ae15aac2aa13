from __future__ import annotations


class PrecedenceError(Exception):
    """Base class for all precedence simulation failures."""


class InvalidComparisonError(PrecedenceError, ValueError):
    """Raised when precedence is requested between an advice and itself."""


class UnknownRuleError(PrecedenceError, ValueError):
    pass


class PrecedenceStructureError(PrecedenceError, RuntimeError):
    """
    The reduced graph does not have the shape the execution trace needs,
    e.g. no vertex with in-degree zero or a cycle met while walking it.
    """
