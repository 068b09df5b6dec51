"""
Evaluate one arithmetic expression read character by character.

No token list or syntax tree is built. Each nesting level owns a 3-slot window
of pending (operand, operator) pairs. The driver alternates between filling
the window and reducing it, and recurses once per open parenthesis, so the
Python call stack stands in for a stack of windows. A power landing in the
last slot has its exponent chain read ahead before anything is folded.

Deeply nested parentheses are bounded by the interpreter's recursion limit
(sys.getrecursionlimit()); past it, a RecursionError propagates.
"""
import io
from typing import NamedTuple, TextIO, Union

from stream_calculator.common.logger import logger
from stream_calculator.engine.arithmetic import apply_operator
from stream_calculator.engine.errors import ExpressionSyntaxError
from stream_calculator.engine.operand import scan_operand
from stream_calculator.engine.reader import CharReader
from stream_calculator.engine.reducer import reduce_window
from stream_calculator.engine.scanner import fill_window
from stream_calculator.engine.status import (
    GROUP_MARKER,
    IMPLICIT_OPERATOR,
    NEUTRAL_OPERATOR,
    POWER,
    WHITESPACE,
    Status,
)
from stream_calculator.engine.window import LAST_SLOT, Window


class Evaluation(NamedTuple):
    """Scalar result and terminal status of one evaluation; value is meaningless on SYNTAX_ERROR."""

    value: float
    status: Status


def evaluate(stream: Union[CharReader, TextIO]) -> Evaluation:
    """
    Evaluate one expression line from a stream.

    Exactly one line is consumed, up to its end-of-line marker, or up to an
    unbalanced closing parenthesis. On SYNTAX_ERROR reading stops at the
    offending character and the rest of the line is left in the stream.

    :param stream: A CharReader, or any text stream supporting read(1)

    :return: The value and terminal status (END_OF_LINE, CLOSE_PAREN or SYNTAX_ERROR)
    :rtype: Evaluation
    """
    reader: CharReader = stream if isinstance(stream, CharReader) else CharReader(stream)
    return _evaluate_group(reader, depth=0)


def _evaluate_group(reader: CharReader, depth: int) -> Evaluation:
    """Run one driver activation: the top level, or one parenthesised group."""
    window = Window()
    resume: bool = False
    logger.debug(f"Entering evaluation level {depth}")

    try:
        while True:
            status: Status = fill_window(window, reader, resume=resume)
            resume = False

            if status is Status.SYNTAX_ERROR:
                logger.warning(f"Syntax error at nesting level {depth}")
                return Evaluation(window.result, status)

            if status is Status.CONTINUING:
                if window.operators[LAST_SLOT] != POWER:
                    reduce_window(window)
                    continue
                # Nothing may bind to the base of a pending power, e.g. the 3 in 1-2*3^2
                exponent: Evaluation = _evaluate_power(reader, depth + 1)
                window.operands[LAST_SLOT] = apply_operator(POWER, window.operands[LAST_SLOT], exponent.value)
                window.operators[LAST_SLOT] = NEUTRAL_OPERATOR
                if exponent.status is Status.SYNTAX_ERROR:
                    return Evaluation(window.result, exponent.status)
                if exponent.status is Status.END_OF_LINE:
                    reduce_window(window)
                    return Evaluation(window.result, Status.END_OF_LINE)
                # The chain pushed back the operator that ended it
                resume = True
                continue

            if status is not Status.OPEN_PAREN:
                # END_OF_LINE or CLOSE_PAREN: a single fold empties the window
                reduce_window(window)
                logger.debug(f"Leaving evaluation level {depth} with {window.result}")
                return Evaluation(window.result, status)

            if window.operators[window.cursor] == GROUP_MARKER:
                # The group multiplies the operand written right before it
                window.operators[window.cursor] = IMPLICIT_OPERATOR
                if window.cursor < LAST_SLOT:
                    window.cursor += 1
                else:
                    reduce_window(window)
                coefficient: float = 1.0
            else:
                # The scanner left the group's sign in the slot
                coefficient = window.operands[window.cursor]

            inner: Evaluation = _evaluate_group(reader, depth + 1)
            window.operands[window.cursor] = coefficient * inner.value

            if inner.status is Status.SYNTAX_ERROR:
                return Evaluation(window.result, inner.status)

            if inner.status is Status.END_OF_LINE:
                # The line ended inside the group, so it ends this level too
                reduce_window(window)
                return Evaluation(window.result, Status.END_OF_LINE)

            # The group closed: read the operator that follows it
            resume = True

    except ExpressionSyntaxError as exc:
        logger.warning(f"Syntax error at nesting level {depth}: {exc}")
        return Evaluation(window.result, Status.SYNTAX_ERROR)


def _evaluate_power(reader: CharReader, depth: int) -> Evaluation:
    """
    Evaluate the exponent of a '^' together with every '^' chained after it.

    The chain folds right to left (2^3^2 is 2^9). It ends at the first
    character that is not '^', which is pushed back for the caller to read.

    :param CharReader reader: Reader positioned right after the '^'
    :param int depth: Nesting level of the chain

    :return: The exponent, with CONTINUING when the chain ended normally
    :rtype: Evaluation
    """
    literal = scan_operand(reader.read(), reader)
    if literal.terminator is Status.SYNTAX_ERROR:
        return Evaluation(literal.value, Status.SYNTAX_ERROR)

    if literal.terminator is Status.OPEN_PAREN:
        inner: Evaluation = _evaluate_group(reader, depth + 1)
        value: float = literal.value * inner.value
        if inner.status is not Status.CLOSE_PAREN:
            return Evaluation(value, inner.status)
        terminator: str = reader.read()
    else:
        value, terminator = literal

    while terminator in WHITESPACE:
        terminator = reader.read()

    if terminator != POWER:
        reader.unread(terminator)
        return Evaluation(value, Status.CONTINUING)

    exponent: Evaluation = _evaluate_power(reader, depth + 1)
    return Evaluation(apply_operator(POWER, value, exponent.value), exponent.status)


def calculate(expression: str) -> float:
    """
    Evaluate a single-line expression string and return its value.

    :param str expression: Arithmetic expression, with or without a trailing newline

    :return: Computed result as float
    :rtype: float
    :raises ExpressionSyntaxError: If the expression is empty, malformed, has an
        unbalanced closing parenthesis, or spans more than one line
    """
    if not expression.strip():
        raise ExpressionSyntaxError("Empty expression")

    reader = CharReader(io.StringIO(expression))
    value, status = evaluate(reader)

    if status is Status.SYNTAX_ERROR:
        raise ExpressionSyntaxError(f"Invalid arithmetic expression: {expression!r}")
    if status is Status.CLOSE_PAREN:
        raise ExpressionSyntaxError(f"Unbalanced closing parenthesis: {expression!r}")
    if not reader.at_end():
        raise ExpressionSyntaxError(f"Expected a single expression line: {expression!r}")

    return value
