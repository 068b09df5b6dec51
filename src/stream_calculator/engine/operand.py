"""Scan one signed decimal operand from the character stream."""
from typing import NamedTuple, Union

from stream_calculator.common.logger import logger
from stream_calculator.engine.reader import CharReader
from stream_calculator.engine.status import (
    MULTIPLICATIVE,
    NEUTRAL_OPERAND,
    OPEN_GROUP,
    POWER,
    SIGNS,
    WHITESPACE,
    Status,
    is_digit,
)


class Literal(NamedTuple):
    """
    A scanned operand and whatever ended it.

    The terminator is either the raw character that stopped the literal, left
    for the caller to classify, or a Status:
        - OPEN_PAREN: a group starts where an operand was expected, and value is
          the coefficient (1.0 or -1.0) the group result must be multiplied by
        - SYNTAX_ERROR: the literal is malformed
    """

    value: float
    terminator: Union[str, Status]


def scan_operand(char: str, reader: CharReader) -> Literal:
    """
    Build one signed decimal number starting from an already read character.

    Integer digits accumulate as acc * 10 + digit, the k-th fractional digit
    adds digit / 10 ** k. Reading stops at the first character that is neither
    a digit nor a dot, and that character is returned as the terminator.

    :param str char: First character of the operand, already consumed from the reader
    :param CharReader reader: Reader positioned right after char

    :return: The operand value and its terminator
    :rtype: Literal
    """
    # Whitespace ahead of an operand carries no meaning
    while char in WHITESPACE:
        char = reader.read()

    sign: float = 1.0
    value: float = 0.0
    fractional: bool = False

    if char in SIGNS:
        if char == "-":
            sign = -1.0
    elif is_digit(char):
        value = float(char)
    elif char == ".":
        # Bare fraction such as .5
        fractional = True
    elif char in MULTIPLICATIVE or char == POWER:
        logger.debug(f"Operator {char!r} where an operand was expected")
        return Literal(NEUTRAL_OPERAND, Status.SYNTAX_ERROR)
    elif char == OPEN_GROUP:
        # The operator is already in place, e.g. 89 * (90+10)
        return Literal(1.0, Status.OPEN_PAREN)
    else:
        return Literal(NEUTRAL_OPERAND, char)

    signed_only: bool = char in SIGNS
    exponent: int = 0
    char = reader.read()

    while is_digit(char) or char == ".":
        if char == ".":
            if fractional:
                logger.debug("Second decimal point inside one operand")
                return Literal(sign * value, Status.SYNTAX_ERROR)
            fractional = True
        elif fractional:
            exponent += 1
            value += int(char) / 10 ** exponent
        else:
            value = value * 10 + int(char)
        signed_only = False
        char = reader.read()

    if signed_only:
        if char == OPEN_GROUP:
            # Signed group such as -(2+3)
            return Literal(sign, Status.OPEN_PAREN)
        logger.debug(f"Sign followed by {char!r} instead of a number")
        return Literal(NEUTRAL_OPERAND, Status.SYNTAX_ERROR)

    return Literal(sign * value, char)
