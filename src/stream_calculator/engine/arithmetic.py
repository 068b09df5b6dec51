"""Apply one binary operator to two floats with IEEE-754 results instead of exceptions."""
import math
import operator
from typing import Callable, Dict

from stream_calculator.engine.errors import ExpressionSyntaxError

# Type alias for operator functions (taking two floats, returning a float)
OperatorFn = Callable[[float, float], float]


def _divide(a: float, b: float) -> float:
    """Float division where a zero divisor gives inf or nan, as in C."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        # The sign of a zero divisor matters: 1 / -0.0 is -inf
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def _power(a: float, b: float) -> float:
    """Raise a to the power b with C pow() semantics for domain and range errors."""
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power is a pole, anything else is outside the real domain
        if a == 0:
            if math.copysign(1.0, a) < 0 and _odd_integer(b):
                return -math.inf
            return math.inf
        return math.nan


# Mapping of operator symbols to their functions
OPERATIONS: Dict[str, OperatorFn] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "^": _power,
}


def apply_operator(symbol: str, a: float, b: float) -> float:
    """
    Apply one arithmetic operator.

    Division by zero is not an error: it yields inf or nan like any float
    platform would.

    :param str symbol: One of + - * / ^
    :param float a: Left operand
    :param float b: Right operand

    :return: The result of a symbol b
    :rtype: float
    :raises ExpressionSyntaxError: If symbol is not a supported operator
    """
    try:
        fn: OperatorFn = OPERATIONS[symbol]
    except KeyError:
        raise ExpressionSyntaxError(f"Unexpected operator {symbol!r}") from None
    return fn(a, b)
