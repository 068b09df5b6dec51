"""Character-at-a-time reader over a text stream."""
from typing import List, Optional, TextIO

from stream_calculator.engine.status import END_OF_LINE


class CharReader:
    """
    Read a text stream one character at a time.

    Every evaluator activation of one expression reads through the same reader,
    so characters are consumed strictly in stream order. An exhausted stream
    reads as an end-of-line marker, which lets a last line without a trailing
    newline still terminate.

    The reader also remembers the characters of the current line, so the front
    end can report which expression a result belongs to.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream: TextIO = stream
        self._pending: Optional[str] = None
        self._line: List[str] = []
        self.line_number: int = 0
        self.exhausted: bool = False

    def read(self) -> str:
        """
        Consume and return the next character.

        :return: The next character, or the end-of-line marker once the stream is exhausted
        :rtype: str
        """
        if self._pending is not None:
            char, self._pending = self._pending, None
        else:
            char = self._stream.read(1)

        if not char:
            self.exhausted = True
            return END_OF_LINE

        self._line.append(char)
        return char

    def peek(self) -> str:
        """
        Return the next character without consuming it.

        :return: The next character, or an empty string at end of stream
        :rtype: str
        """
        if self._pending is None:
            self._pending = self._stream.read(1)
        return self._pending

    def unread(self, char: str) -> None:
        """
        Push back the character returned by the last read, so the next read returns it again.

        :param str char: The character last returned by read
        """
        # An end-of-line returned for an exhausted stream was never recorded
        if self._line and self._line[-1] == char:
            self._line.pop()
        self._pending = char

    def at_end(self) -> bool:
        """Return True when no character is left in the stream."""
        return self.exhausted or self.peek() == ""

    def begin_line(self) -> None:
        """Start recording a new line."""
        self._line = []
        self.line_number += 1

    @property
    def line_text(self) -> str:
        """Characters consumed since begin_line, without the end-of-line marker."""
        return "".join(self._line).rstrip(END_OF_LINE)

    def skip_line(self) -> None:
        """Discard the rest of the current line, up to and including its end-of-line marker."""
        if self._line and self._line[-1] == END_OF_LINE:
            return
        while self.read() != END_OF_LINE:
            pass
