"""Exception hierarchy of the evaluation engine."""


class CalculatorError(Exception):
    """Base exception for all calculator errors."""


class ExpressionSyntaxError(CalculatorError, ValueError):
    """Raised when an expression is malformed or holds an unknown operator."""


class WindowStateError(CalculatorError, RuntimeError):
    """Raised when the window is asked to do something its invariants forbid."""
