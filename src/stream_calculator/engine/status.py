"""Status codes and symbol tables shared by the scanners and the reducer."""
from enum import Enum
from typing import FrozenSet


class Status(Enum):
    """
    Outcome of one scanning step.

    The driver reads it after every scan to pick its next action:
        - CONTINUING: the window is full and must be reduced before reading on
        - OPEN_PAREN: a parenthesised group starts, recurse into it
        - CLOSE_PAREN: the current group ends
        - END_OF_LINE: the whole expression ends
        - SYNTAX_ERROR: stop reading, the expression is malformed
    """

    CONTINUING = "continuing"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    END_OF_LINE = "end_of_line"
    SYNTAX_ERROR = "syntax_error"


END_OF_LINE: str = "\n"
OPEN_GROUP: str = "("
CLOSE_GROUP: str = ")"
POWER: str = "^"

# Neutral slot contents: adding 0 leaves any fold unchanged
NEUTRAL_OPERAND: float = 0.0
NEUTRAL_OPERATOR: str = "+"
# Operator slot marker for an operand written right before a group, e.g. 89(90+10)
GROUP_MARKER: str = OPEN_GROUP
# Operator the group marker stands for
IMPLICIT_OPERATOR: str = "*"

ADDITIVE: FrozenSet[str] = frozenset("+-")
MULTIPLICATIVE: FrozenSet[str] = frozenset("*/")
OPERATORS: FrozenSet[str] = ADDITIVE | MULTIPLICATIVE | {POWER}
SIGNS: FrozenSet[str] = ADDITIVE
WHITESPACE: FrozenSet[str] = frozenset(" \t")


def is_digit(char: str) -> bool:
    """Return True for an ASCII decimal digit only (no superscripts or other scripts)."""
    return len(char) == 1 and "0" <= char <= "9"
