"""Test class CharReader."""
import io

from stream_calculator.engine.reader import CharReader


def test_read_returns_characters_in_order() -> None:
    """read consumes the stream one character at a time."""
    reader = CharReader(io.StringIO("1+2\n"))
    assert [reader.read() for _ in range(4)] == ["1", "+", "2", "\n"]
    assert not reader.exhausted


def test_exhausted_stream_reads_as_end_of_line() -> None:
    """An exhausted stream keeps returning the end-of-line marker."""
    reader = CharReader(io.StringIO("7"))
    assert reader.read() == "7"
    assert reader.read() == "\n"
    assert reader.read() == "\n"
    assert reader.exhausted
    assert reader.at_end()


def test_peek_does_not_consume() -> None:
    """peek shows the next character and read still returns it."""
    reader = CharReader(io.StringIO("ab"))
    assert reader.peek() == "a"
    assert reader.peek() == "a"
    assert reader.read() == "a"
    assert reader.read() == "b"
    assert reader.peek() == ""
    assert reader.at_end()


def test_line_tracking() -> None:
    """begin_line and line_text capture the characters of each line."""
    reader = CharReader(io.StringIO("1+1\n2*2\n"))

    reader.begin_line()
    while reader.read() != "\n":
        pass
    assert reader.line_number == 1
    assert reader.line_text == "1+1"

    reader.begin_line()
    reader.read()
    assert reader.line_number == 2
    assert reader.line_text == "2"


def test_skip_line_discards_remainder() -> None:
    """skip_line consumes up to and including the end-of-line marker."""
    reader = CharReader(io.StringIO("2**3\nnext\n"))
    reader.begin_line()
    reader.read()
    reader.skip_line()
    assert reader.line_text == "2**3"
    assert reader.read() == "n"


def test_skip_line_is_noop_after_end_of_line() -> None:
    """A line that already ended is not skipped a second time."""
    reader = CharReader(io.StringIO("1\n2\n"))
    reader.begin_line()
    reader.read()
    reader.read()
    reader.skip_line()
    assert reader.read() == "2"


def test_unread_returns_character_again() -> None:
    """A pushed back character is read again and recorded in the line once."""
    reader = CharReader(io.StringIO("2+1\n"))
    reader.begin_line()
    assert reader.read() == "2"
    assert reader.read() == "+"
    reader.unread("+")
    assert reader.line_text == "2"
    assert reader.read() == "+"
    assert reader.line_text == "2+"


def test_unread_end_of_stream() -> None:
    """Pushing back the end-of-line of an exhausted stream keeps the recorded line intact."""
    reader = CharReader(io.StringIO("7"))
    reader.begin_line()
    assert reader.read() == "7"
    assert reader.read() == "\n"
    reader.unread("\n")
    assert reader.line_text == "7"
    assert reader.read() == "\n"
    assert reader.at_end()
