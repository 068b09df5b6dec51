"""Fixed 3-slot window of pending (operand, operator) pairs."""
from enum import IntEnum
from typing import List

from pydantic import BaseModel, Field

from stream_calculator.engine.errors import WindowStateError
from stream_calculator.engine.status import NEUTRAL_OPERAND, NEUTRAL_OPERATOR

WINDOW_SIZE: int = 3
LAST_SLOT: int = WINDOW_SIZE - 1


class ShiftMode(IntEnum):
    """Canonical shapes the window is compacted into after a reduction."""

    # Slots 0-2 folded into operand 0, the newest operator becomes pending
    FOLD = 1
    # Slots 0-1 folded into operand 0, operand 2 and both later operators stay pending
    ABSORB = 2
    # Slots 1-2 folded into operand 1, slot 0 untouched
    KEEP_HEAD = 3


class Window(BaseModel):
    """
    Pending state of one evaluation level.

    Holds exactly 3 operands and 3 operators. Slots past the cursor hold the
    neutral pair (0, '+'). A new window is created for every driver activation,
    so nested groups never share one.
    """

    operands: List[float] = Field(
        default_factory=lambda: [NEUTRAL_OPERAND] * WINDOW_SIZE,
        min_length=WINDOW_SIZE,
        max_length=WINDOW_SIZE,
        description="Pending operands",
    )
    operators: List[str] = Field(
        default_factory=lambda: [NEUTRAL_OPERATOR] * WINDOW_SIZE,
        min_length=WINDOW_SIZE,
        max_length=WINDOW_SIZE,
        description="Operator following each pending operand",
    )
    cursor: int = Field(default=0, ge=0, le=LAST_SLOT, description="Slot currently being filled")

    @property
    def result(self) -> float:
        """Operand slot 0, which holds the value once the window is fully folded."""
        return self.operands[0]

    def shift(self, mode: ShiftMode) -> None:
        """
        Compact the window after a reduction and move the cursor to the next free slot.

        The top slot is always reset to the neutral pair.

        :param ShiftMode mode: Shape to compact into

        :return: None
        :raises WindowStateError: If mode is not a known ShiftMode
        """
        operands, operators = self.operands, self.operators

        if mode == ShiftMode.FOLD:
            operands[1] = NEUTRAL_OPERAND
            operators[0] = operators[2]
            operators[1] = NEUTRAL_OPERATOR
            self.cursor = 1
        elif mode == ShiftMode.ABSORB:
            operands[1] = operands[2]
            operators[0] = operators[1]
            operators[1] = operators[2]
            self.cursor = 2
        elif mode == ShiftMode.KEEP_HEAD:
            operators[1] = operators[2]
            self.cursor = 2
        else:
            raise WindowStateError(f"Window shift mode {mode!r} is not defined")

        operands[LAST_SLOT] = NEUTRAL_OPERAND
        operators[LAST_SLOT] = NEUTRAL_OPERATOR
