"""Precedence-correct reduction of the 3-slot window."""
from typing import Sequence

from stream_calculator.engine.arithmetic import apply_operator
from stream_calculator.engine.errors import ExpressionSyntaxError
from stream_calculator.engine.status import ADDITIVE, MULTIPLICATIVE, OPERATORS, POWER
from stream_calculator.engine.window import LAST_SLOT, ShiftMode, Window


def select_precedence(operators: Sequence[str]) -> int:
    """
    Pick which of the first two pending operators must be applied first.

    '^' beats '*' and '/', which beat '+' and '-'. For '^', slot 1 is checked
    before slot 0, so two powers in one window fold right to left
    (2^3^2 is 2^9). Otherwise the leftmost multiplicative operator wins, and
    with additive operators only the leftmost one does.

    :param Sequence[str] operators: The window's 3 operators

    :return: 0 or 1
    :rtype: int
    """
    if operators[1] == POWER:
        return 1
    if operators[0] == POWER:
        return 0
    if operators[0] in MULTIPLICATIVE:
        return 0
    if operators[1] in MULTIPLICATIVE:
        return 1
    return 0


def reduce_window(window: Window) -> None:
    """
    Perform one reduction step and compact the window.

    The policy is keyed on the newest operator (slot 2):
        - additive: everything left of it is resolved, so slots 0-2 fold completely
        - multiplicative or '^': only what precedence already allows is folded,
          the rest stays pending

    :param Window window: Window to reduce in place

    :return: None
    :raises ExpressionSyntaxError: If a slot holds something other than an operator
    """
    operands, operators = window.operands, window.operators
    newest: str = operators[LAST_SLOT]
    if newest not in OPERATORS:
        raise ExpressionSyntaxError(f"Unexpected operator {newest!r}")

    index: int = select_precedence(operators)

    if newest in ADDITIVE:
        if index == 0:
            operands[0] = apply_operator(operators[0], operands[0], operands[1])
            operands[0] = apply_operator(operators[1], operands[0], operands[2])
        else:
            operands[1] = apply_operator(operators[1], operands[1], operands[2])
            operands[0] = apply_operator(operators[0], operands[0], operands[1])
        window.shift(ShiftMode.FOLD)

    elif index == 0 and operators[0] in MULTIPLICATIVE:
        operands[0] = apply_operator(operators[0], operands[0], operands[1])
        if operators[1] in MULTIPLICATIVE:
            # Left-to-right chain such as a * b / c
            operands[0] = apply_operator(operators[1], operands[0], operands[2])
            window.shift(ShiftMode.FOLD)
        else:
            window.shift(ShiftMode.ABSORB)

    elif index == 1:
        operands[1] = apply_operator(operators[1], operands[1], operands[2])
        window.shift(ShiftMode.KEEP_HEAD)

    else:
        # '^' in slot 0, or additive slots 0-1 ahead of a multiplicative operator
        operands[0] = apply_operator(operators[0], operands[0], operands[1])
        window.shift(ShiftMode.ABSORB)
