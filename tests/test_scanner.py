"""Test function fill_window."""
import io

import pytest

from stream_calculator.engine.reader import CharReader
from stream_calculator.engine.scanner import fill_window
from stream_calculator.engine.status import Status
from stream_calculator.engine.window import Window


def reader_for(text: str) -> CharReader:
    return CharReader(io.StringIO(text))


def test_fill_until_end_of_line() -> None:
    """Pairs are stored slot by slot and the end-of-line operator slot stays neutral."""
    window = Window()
    status = fill_window(window, reader_for("1+2*3\n"))
    assert status is Status.END_OF_LINE
    assert window.operands == [1.0, 2.0, 3.0]
    assert window.operators == ["+", "*", "+"]
    assert window.cursor == 2


def test_fill_full_window_continues() -> None:
    """Three complete pairs fill the window and stop reading."""
    window = Window()
    reader = reader_for("1+2*3-4\n")
    status = fill_window(window, reader)
    assert status is Status.CONTINUING
    assert window.operands == [1.0, 2.0, 3.0]
    assert window.operators == ["+", "*", "-"]
    assert window.cursor == 2
    assert reader.read() == "4"


def test_fill_skips_whitespace() -> None:
    """Spaces and tabs around operands and operators are ignored."""
    window = Window()
    status = fill_window(window, reader_for(" 7 +\t3 \n"))
    assert status is Status.END_OF_LINE
    assert window.operands == [7.0, 3.0, 0.0]
    assert window.operators == ["+", "+", "+"]


def test_fill_group_after_operand_marks_slot() -> None:
    """An operand written right before a group leaves the group marker in its slot."""
    window = Window()
    status = fill_window(window, reader_for("89(90+10)\n"))
    assert status is Status.OPEN_PAREN
    assert window.operands[0] == 89.0
    assert window.operators[0] == "("
    assert window.cursor == 0


def test_fill_group_after_operator() -> None:
    """A group after an explicit operator stores the group's coefficient."""
    window = Window()
    status = fill_window(window, reader_for("89 * -(90)\n"))
    assert status is Status.OPEN_PAREN
    assert window.cursor == 1
    assert window.operators == ["*", "+", "+"]
    assert window.operands[1] == -1.0


def test_fill_close_paren() -> None:
    """A closing parenthesis ends the fill."""
    window = Window()
    assert fill_window(window, reader_for("5)")) is Status.CLOSE_PAREN
    assert window.operands[0] == 5.0


@pytest.mark.parametrize("text", [
    "5 % 2\n",
    "5 5\n",
    "2**3\n",
    "1.2.3\n",
    "4a\n",
])
def test_fill_syntax_error(text: str) -> None:
    """Invalid characters and malformed operands stop the fill."""
    assert fill_window(Window(), reader_for(text)) is Status.SYNTAX_ERROR


def test_fill_resume_reads_terminator_only() -> None:
    """Resuming keeps the operand already in the slot and reads its operator."""
    window = Window()
    window.operands[0] = 5.0
    status = fill_window(window, reader_for(" *4\n"), resume=True)
    assert status is Status.END_OF_LINE
    assert window.operands == [5.0, 4.0, 0.0]
    assert window.operators == ["*", "+", "+"]


def test_fill_resume_rejects_digit_after_group() -> None:
    """A number right after a closed group is not an operator."""
    window = Window()
    assert fill_window(window, reader_for("4\n"), resume=True) is Status.SYNTAX_ERROR
