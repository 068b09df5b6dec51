"""Fill the window with (operand, operator) pairs read from the stream."""
from stream_calculator.common.logger import logger
from stream_calculator.engine.operand import Literal, scan_operand
from stream_calculator.engine.reader import CharReader
from stream_calculator.engine.status import (
    CLOSE_GROUP,
    END_OF_LINE,
    GROUP_MARKER,
    OPEN_GROUP,
    OPERATORS,
    WHITESPACE,
    Status,
)
from stream_calculator.engine.window import LAST_SLOT, Window


def fill_window(window: Window, reader: CharReader, resume: bool = False) -> Status:
    """
    Fill window slots from the cursor onwards until a structural terminator shows up.

    Each iteration scans one operand and classifies the character that ended
    it. Operators are stored and filling goes on; parentheses, end of line and
    invalid characters stop it.

    :param Window window: Window to fill in place
    :param CharReader reader: Shared character reader
    :param bool resume: The operand at the cursor is already known (a group just closed into it),
        so only its terminator is read

    :return: CONTINUING when all 3 slots hold a complete pair, otherwise the terminator's status
    :rtype: Status
    """
    while True:
        if resume:
            terminator = reader.read()
            resume = False
        else:
            literal: Literal = scan_operand(reader.read(), reader)
            window.operands[window.cursor] = literal.value
            if isinstance(literal.terminator, Status):
                # OPEN_PAREN before an operand or SYNTAX_ERROR, nothing to classify
                return literal.terminator
            terminator = literal.terminator

        # Discard whitespace between the operand and its operator
        while terminator in WHITESPACE:
            terminator = reader.read()

        if terminator in OPERATORS:
            window.operators[window.cursor] = terminator
            if window.cursor == LAST_SLOT:
                return Status.CONTINUING
            window.cursor += 1
        elif terminator == OPEN_GROUP:
            # Operand right before a group, e.g. 89(90+10)
            window.operators[window.cursor] = GROUP_MARKER
            return Status.OPEN_PAREN
        elif terminator == CLOSE_GROUP:
            return Status.CLOSE_PAREN
        elif terminator == END_OF_LINE:
            return Status.END_OF_LINE
        else:
            logger.debug(f"Invalid character {terminator!r} after an operand")
            return Status.SYNTAX_ERROR
